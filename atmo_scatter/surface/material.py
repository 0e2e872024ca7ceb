"""
Atmosphere material: uniforms plus the render state the host pipeline needs.

The uniform arrays for camera position and sun direction are the surface's
frame state storage itself, so a frame update is visible to every consumer of
the material without copying.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

import numpy as np

from atmo_scatter.core.parameters import ScatteringParameters

logger = logging.getLogger(__name__)


class Side(Enum):
    """Which face of the enclosing sphere is rasterized."""
    FRONT = "front"
    BACK = "back"


class Blending(Enum):
    """How the atmosphere colour combines with the frame behind it."""
    ADDITIVE = "additive"
    NORMAL = "normal"


@dataclass
class ScatteringMaterial:
    """Uniform values and render state for the atmosphere sphere.

    Attributes:
        uniforms: Uniform name -> value (floats or float64 arrays)
        side: Rasterized face
        blending: Additive so stars stay visible through the glow
        transparent: Sorted with transparent objects
        depth_write: The shell never occludes anything
        depth_test: The shell is hidden by opaque geometry in front of it
    """
    uniforms: Dict[str, Any] = field(default_factory=dict)
    side: Side = Side.BACK
    blending: Blending = Blending.ADDITIVE
    transparent: bool = True
    depth_write: bool = False
    depth_test: bool = True
    disposed: bool = False

    @classmethod
    def for_parameters(
        cls,
        params: ScatteringParameters,
        camera_position: np.ndarray,
        sun_direction: np.ndarray,
    ) -> "ScatteringMaterial":
        """Bind a parameter set and the frame state arrays as uniforms."""
        uniforms = {
            "camera_position": camera_position,
            "sun_direction": sun_direction,
            "planet_radius": float(params.planet_radius),
            "atmosphere_radius": float(params.atmosphere_radius),
            "rayleigh_coefficient": params.rayleigh_array,
            "mie_coefficient": float(params.mie_coefficient),
            "mie_asymmetry": float(params.mie_asymmetry),
            "sun_intensity": float(params.sun_intensity),
            "rayleigh_scale_height": float(params.rayleigh_scale_height),
            "mie_scale_height": float(params.mie_scale_height),
            "view_samples": int(params.view_samples),
            "light_samples": int(params.light_samples),
        }
        return cls(uniforms=uniforms)

    def dispose(self) -> None:
        """Drop the uniform bindings."""
        self.uniforms.clear()
        self.disposed = True
        logger.debug("Disposed scattering material")
