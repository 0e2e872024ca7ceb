"""
Configuration management for atmosphere scenes.

This module provides:
- SceneConfig: Data classes for scene parameters
- ConfigurationManager: Loading and validation of configurations
"""

from atmo_scatter.config.settings import (
    SceneConfig,
    AtmosphereConfig,
    CameraConfig,
    SunConfig,
    RenderConfig,
)
from atmo_scatter.config.manager import ConfigurationManager, load_config

__all__ = [
    "SceneConfig",
    "AtmosphereConfig",
    "CameraConfig",
    "SunConfig",
    "RenderConfig",
    "ConfigurationManager",
    "load_config",
]
