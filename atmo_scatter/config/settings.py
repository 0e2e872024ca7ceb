"""
Scene configuration data structures.

Defines the configuration schema for rendering an atmosphere frame: the
physical parameter set, the camera, the sun and the output settings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
import json
import math
import yaml

from atmo_scatter.core.constants import (
    PLANET_RADIUS,
    ATMOSPHERE_RADIUS,
    RAYLEIGH_COEFFICIENT,
    MIE_COEFFICIENT,
    MIE_ASYMMETRY,
    SUN_INTENSITY,
    RAYLEIGH_SCALE_HEIGHT,
    MIE_SCALE_HEIGHT,
    VIEW_SAMPLES,
    LIGHT_SAMPLES,
)
from atmo_scatter.core.parameters import ScatteringParameters
from atmo_scatter.render.camera import PinholeCamera


@dataclass
class AtmosphereConfig:
    """Physical parameters of the atmosphere shell.

    Attributes:
        planet_radius: Radius of the opaque planet core
        atmosphere_radius: Radius of the outer shell
        rayleigh_coefficient: Rayleigh coefficient per RGB channel
        mie_coefficient: Mie coefficient
        mie_asymmetry: Henyey-Greenstein g
        sun_intensity: Sun radiance multiplier
        rayleigh_scale_height: Rayleigh density scale height
        mie_scale_height: Mie density scale height
        view_samples: Integration steps along the view ray
        light_samples: Integration steps along the sun-ward ray
    """
    planet_radius: float = PLANET_RADIUS
    atmosphere_radius: float = ATMOSPHERE_RADIUS
    rayleigh_coefficient: List[float] = field(default_factory=lambda: list(RAYLEIGH_COEFFICIENT))
    mie_coefficient: float = MIE_COEFFICIENT
    mie_asymmetry: float = MIE_ASYMMETRY
    sun_intensity: float = SUN_INTENSITY
    rayleigh_scale_height: float = RAYLEIGH_SCALE_HEIGHT
    mie_scale_height: float = MIE_SCALE_HEIGHT
    view_samples: int = VIEW_SAMPLES
    light_samples: int = LIGHT_SAMPLES

    def to_parameters(self) -> ScatteringParameters:
        """Convert to the immutable parameter set used by the surface."""
        return ScatteringParameters(
            planet_radius=self.planet_radius,
            atmosphere_radius=self.atmosphere_radius,
            rayleigh_coefficient=tuple(self.rayleigh_coefficient),
            mie_coefficient=self.mie_coefficient,
            mie_asymmetry=self.mie_asymmetry,
            sun_intensity=self.sun_intensity,
            rayleigh_scale_height=self.rayleigh_scale_height,
            mie_scale_height=self.mie_scale_height,
            view_samples=self.view_samples,
            light_samples=self.light_samples,
        )


@dataclass
class CameraConfig:
    """Camera placement.

    Attributes:
        position: Eye position in world units
        target: Look-at point
        up: Approximate up direction
        fov_deg: Vertical field of view in degrees
        near: Near clip distance
        far: Far clip distance
    """
    position: List[float] = field(default_factory=lambda: [0.0, 0.0, 200.0])
    target: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    up: List[float] = field(default_factory=lambda: [0.0, 1.0, 0.0])
    fov_deg: float = 60.0
    near: float = 0.1
    far: float = 1000.0


@dataclass
class SunConfig:
    """Sun light placement.

    Attributes:
        position: Sun world position; only its direction from the origin is used
    """
    position: List[float] = field(default_factory=lambda: [400.0, 0.0, 0.0])


@dataclass
class RenderConfig:
    """Output frame settings.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        dither: Apply the 1/255 screen-space dither
        num_threads: numba worker threads (None for numba's default)
        background: RGB colour the frame is composited over
        output_path: PNG file written by the CLI
    """
    width: int = 320
    height: int = 240
    dither: bool = True
    num_threads: Optional[int] = None
    background: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    output_path: str = "atmosphere.png"


def _vector_errors(name: str, value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return [f"{name} must be a list of 3 numbers"]
    try:
        if not all(math.isfinite(float(v)) for v in value):
            return [f"{name} components must be finite"]
    except (TypeError, ValueError):
        return [f"{name} components must be numbers"]
    return []


@dataclass
class SceneConfig:
    """Complete scene configuration.

    Example YAML input:
        atmosphere:
          planet_radius: 60
          atmosphere_radius: 75
        camera:
          position: [0, 20, 180]
        sun:
          position: [400, 0, 0]
        render:
          width: 640
          height: 480
    """
    atmosphere: AtmosphereConfig = field(default_factory=AtmosphereConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    sun: SunConfig = field(default_factory=SunConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> "SceneConfig":
        """Create SceneConfig from a dictionary.

        Missing sections and keys take their defaults; unknown keys are ignored.

        Args:
            config_dict: Configuration dictionary (None is treated as empty)

        Returns:
            SceneConfig instance
        """
        config_dict = config_dict or {}

        def section(name, section_cls):
            values = config_dict.get(name) or {}
            known = section_cls.__dataclass_fields__
            return section_cls(**{k: v for k, v in values.items() if k in known})

        return cls(
            atmosphere=section("atmosphere", AtmosphereConfig),
            camera=section("camera", CameraConfig),
            sun=section("sun", SunConfig),
            render=section("render", RenderConfig),
        )

    @classmethod
    def from_json(cls, json_path: str) -> "SceneConfig":
        """Load configuration from a JSON file."""
        with open(json_path, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "SceneConfig":
        """Load configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f)
        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as nested dictionary
        """
        return {
            "atmosphere": {
                "planet_radius": self.atmosphere.planet_radius,
                "atmosphere_radius": self.atmosphere.atmosphere_radius,
                "rayleigh_coefficient": list(self.atmosphere.rayleigh_coefficient),
                "mie_coefficient": self.atmosphere.mie_coefficient,
                "mie_asymmetry": self.atmosphere.mie_asymmetry,
                "sun_intensity": self.atmosphere.sun_intensity,
                "rayleigh_scale_height": self.atmosphere.rayleigh_scale_height,
                "mie_scale_height": self.atmosphere.mie_scale_height,
                "view_samples": self.atmosphere.view_samples,
                "light_samples": self.atmosphere.light_samples,
            },
            "camera": {
                "position": list(self.camera.position),
                "target": list(self.camera.target),
                "up": list(self.camera.up),
                "fov_deg": self.camera.fov_deg,
                "near": self.camera.near,
                "far": self.camera.far,
            },
            "sun": {
                "position": list(self.sun.position),
            },
            "render": {
                "width": self.render.width,
                "height": self.render.height,
                "dither": self.render.dither,
                "num_threads": self.render.num_threads,
                "background": list(self.render.background),
                "output_path": self.render.output_path,
            },
        }

    def to_json(self, json_path: str, indent: int = 2) -> None:
        """Save configuration to JSON file."""
        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

    def to_yaml(self, yaml_path: str) -> None:
        """Save configuration to YAML file."""
        with open(yaml_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)

    def build_camera(self) -> PinholeCamera:
        """Camera for the configured view and frame size."""
        return PinholeCamera(
            position=self.camera.position,
            target=self.camera.target,
            up=self.camera.up,
            fov_deg=self.camera.fov_deg,
            width=self.render.width,
            height=self.render.height,
            near=self.camera.near,
            far=self.camera.far,
        )

    def validate(self) -> list:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Physical parameters
        try:
            errors.extend(self.atmosphere.to_parameters().validate())
        except (TypeError, ValueError) as e:
            errors.append(f"Invalid atmosphere section: {e}")

        # Camera
        camera_errors = (
            _vector_errors("camera.position", self.camera.position)
            + _vector_errors("camera.target", self.camera.target)
            + _vector_errors("camera.up", self.camera.up)
        )
        errors.extend(camera_errors)
        if not camera_errors and list(map(float, self.camera.position)) == list(map(float, self.camera.target)):
            errors.append("camera position and target must differ")
        if not 0 < self.camera.fov_deg < 180:
            errors.append("fov_deg must be between 0 and 180 degrees")
        if not 0 < self.camera.near < self.camera.far:
            errors.append("camera clip planes must satisfy 0 < near < far")

        # Sun
        errors.extend(_vector_errors("sun.position", self.sun.position))

        # Render
        if not isinstance(self.render.width, int) or self.render.width <= 0:
            errors.append("render width must be a positive integer")
        if not isinstance(self.render.height, int) or self.render.height <= 0:
            errors.append("render height must be a positive integer")
        if self.render.num_threads is not None and (
            not isinstance(self.render.num_threads, int) or self.render.num_threads <= 0
        ):
            errors.append("num_threads must be a positive integer")
        background_errors = _vector_errors("render.background", self.render.background)
        errors.extend(background_errors)
        if not background_errors and not all(0.0 <= float(c) <= 1.0 for c in self.render.background):
            errors.append("render.background components must lie in [0, 1]")

        return errors
