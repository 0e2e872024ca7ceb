"""
atmo-scatter: Single-scattering planetary atmosphere renderer.

Renders a glowing atmosphere shell around a spherical planet by integrating
Rayleigh and Mie single scattering along view rays and sun-ward light rays.

Modules
-------
core
    Ray-sphere intersection, optical depth sampling, phase functions and the
    per-sample scattering kernel (numba)
surface
    The atmosphere surface object: sphere geometry, material, per-frame state
    and inside/outside orientation with hysteresis
render
    Pinhole camera and software renderer; optional moderngl program in
    render.gl
config
    Scene configuration from dict, YAML or JSON
visualization
    Saving and plotting frames and phase functions (matplotlib)
"""

__version__ = "0.1.0"
__author__ = "atmo-scatter Contributors"

from atmo_scatter.core import ScatteringParameters, ConfigurationError, scatter
from atmo_scatter.surface import (
    AtmosphereSurface,
    Orientation,
    SurfaceDisposedError,
    create,
    clamp_above_surface,
)

__all__ = [
    "ScatteringParameters",
    "ConfigurationError",
    "scatter",
    "AtmosphereSurface",
    "Orientation",
    "SurfaceDisposedError",
    "create",
    "clamp_above_surface",
]
