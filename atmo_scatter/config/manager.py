"""
Configuration manager for atmosphere scenes.

Handles loading and validation of scene configurations from dictionaries,
JSON files and YAML files.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from atmo_scatter.config.settings import SceneConfig
from atmo_scatter.core.parameters import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigurationManager:
    """Loads scene configurations.

    Example:
        >>> manager = ConfigurationManager()
        >>> config = manager.load_config({"render": {"width": 64, "height": 48}})
        >>> config.render.width
        64
    """

    def __init__(self, base_path: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            base_path: Base path for relative file references.
                      Defaults to current working directory.
        """
        self.base_path = Path(base_path) if base_path else Path.cwd()

    def load_config(self, config_source: Union[Dict[str, Any], str, Path]) -> SceneConfig:
        """Load and validate a scene configuration.

        Args:
            config_source: Configuration dictionary, JSON path, or YAML path

        Returns:
            Validated SceneConfig

        Raises:
            ValueError: If the file suffix is not .json, .yaml or .yml
            TypeError: If config_source is not a dict or path
            ConfigurationError: If validation fails
        """
        if isinstance(config_source, dict):
            config = SceneConfig.from_dict(config_source)
            origin = "dictionary"
        elif isinstance(config_source, (str, Path)):
            path = self.resolve_path(str(config_source))
            if path.suffix.lower() == '.json':
                config = SceneConfig.from_json(str(path))
            elif path.suffix.lower() in ('.yaml', '.yml'):
                config = SceneConfig.from_yaml(str(path))
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")
            origin = str(path)
        else:
            raise TypeError(f"Invalid config source type: {type(config_source)}")

        validation_errors = config.validate()
        if validation_errors:
            for error in validation_errors:
                logger.warning(f"Configuration validation error: {error}")
            raise ConfigurationError(validation_errors)

        logger.info(f"Loaded scene configuration from {origin}")
        return config

    def resolve_path(self, path: str) -> Path:
        """Resolve a path relative to base_path.

        Args:
            path: Relative or absolute path string

        Returns:
            Resolved absolute Path
        """
        p = Path(path)
        if p.is_absolute():
            return p
        return (self.base_path / p).resolve()

    @staticmethod
    def create_example_config() -> Dict[str, Any]:
        """Create an example configuration dictionary.

        Returns:
            The reference scene: planet 60, shell 75, sun along +X
        """
        return SceneConfig().to_dict()

    def save_example_config(self, output_path: str) -> None:
        """Save an example configuration file.

        Args:
            output_path: Path to save the example JSON
        """
        example = self.create_example_config()
        with open(output_path, 'w') as f:
            json.dump(example, f, indent=2)
        logger.info(f"Saved example configuration to {output_path}")


def load_config(config_source: Union[Dict[str, Any], str, Path]) -> SceneConfig:
    """Load and validate a configuration relative to the working directory."""
    return ConfigurationManager().load_config(config_source)
