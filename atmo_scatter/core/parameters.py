"""
Scattering parameter set.

The parameter set is immutable once a surface is built from it. Validation
returns a list of messages in the same way as the configuration layer; the
surface factory turns a non-empty list into a ConfigurationError.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Tuple

import numpy as np

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


class ConfigurationError(ValueError):
    """Raised when a scattering parameter set or scene config is invalid.

    Attributes:
        errors: Every validation message that was collected
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _is_count(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True)
class ScatteringParameters:
    """Physical parameters of one atmosphere shell.

    Attributes:
        planet_radius: Radius of the opaque planet core
        atmosphere_radius: Radius of the outer atmosphere shell
        rayleigh_coefficient: Rayleigh scattering coefficient per RGB channel
        mie_coefficient: Mie scattering coefficient (all channels)
        mie_asymmetry: Henyey-Greenstein g, in (-1, 1)
        sun_intensity: Incoming sun radiance multiplier
        rayleigh_scale_height: Altitude of 1/e Rayleigh density falloff
        mie_scale_height: Altitude of 1/e Mie density falloff
        view_samples: Integration steps along the view ray
        light_samples: Integration steps along each sun-ward ray
    """
    planet_radius: float = PLANET_RADIUS
    atmosphere_radius: float = ATMOSPHERE_RADIUS
    rayleigh_coefficient: Tuple[float, float, float] = RAYLEIGH_COEFFICIENT
    mie_coefficient: float = MIE_COEFFICIENT
    mie_asymmetry: float = MIE_ASYMMETRY
    sun_intensity: float = SUN_INTENSITY
    rayleigh_scale_height: float = RAYLEIGH_SCALE_HEIGHT
    mie_scale_height: float = MIE_SCALE_HEIGHT
    view_samples: int = VIEW_SAMPLES
    light_samples: int = LIGHT_SAMPLES

    def __post_init__(self):
        # Lists from YAML/JSON become tuples so the instance stays hashable
        object.__setattr__(
            self, "rayleigh_coefficient", tuple(float(c) for c in self.rayleigh_coefficient)
        )

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "ScatteringParameters":
        """Build from a mapping, ignoring keys that are not parameters."""
        known = cls.__dataclass_fields__
        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        values = asdict(self)
        values["rayleigh_coefficient"] = list(self.rayleigh_coefficient)
        return values

    @property
    def rayleigh_array(self) -> np.ndarray:
        """Rayleigh coefficient as a float64 array of shape (3,)."""
        return np.array(self.rayleigh_coefficient, dtype=np.float64)

    def kernel_args(self) -> tuple:
        """Positional arguments shared by every kernel entry point.

        Order: planet_radius, atmosphere_radius, rayleigh_coefficient,
        mie_coefficient, mie_asymmetry, sun_intensity, rayleigh_scale_height,
        mie_scale_height, view_samples, light_samples.
        """
        return (
            float(self.planet_radius),
            float(self.atmosphere_radius),
            self.rayleigh_array,
            float(self.mie_coefficient),
            float(self.mie_asymmetry),
            float(self.sun_intensity),
            float(self.rayleigh_scale_height),
            float(self.mie_scale_height),
            int(self.view_samples),
            int(self.light_samples),
        )

    def validate(self) -> List[str]:
        """Validate the parameter set.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        scalars = {
            "planet_radius": self.planet_radius,
            "atmosphere_radius": self.atmosphere_radius,
            "mie_coefficient": self.mie_coefficient,
            "mie_asymmetry": self.mie_asymmetry,
            "sun_intensity": self.sun_intensity,
            "rayleigh_scale_height": self.rayleigh_scale_height,
            "mie_scale_height": self.mie_scale_height,
        }
        for name, value in scalars.items():
            if not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value}")
        if errors:
            return errors

        if self.planet_radius <= 0:
            errors.append("planet_radius must be positive")
        if self.atmosphere_radius <= self.planet_radius:
            errors.append(
                f"atmosphere_radius ({self.atmosphere_radius}) must exceed "
                f"planet_radius ({self.planet_radius})"
            )

        if len(self.rayleigh_coefficient) != 3:
            errors.append("rayleigh_coefficient must have exactly 3 components (RGB)")
        elif not all(math.isfinite(c) and c > 0 for c in self.rayleigh_coefficient):
            errors.append("rayleigh_coefficient components must be positive")

        if self.mie_coefficient < 0:
            errors.append("mie_coefficient must be non-negative")
        if not -1.0 < self.mie_asymmetry < 1.0:
            errors.append("mie_asymmetry must lie strictly between -1 and 1")
        if self.sun_intensity < 0:
            errors.append("sun_intensity must be non-negative")

        if self.rayleigh_scale_height <= 0:
            errors.append("rayleigh_scale_height must be positive")
        if self.mie_scale_height <= 0:
            errors.append("mie_scale_height must be positive")

        for name in ("view_samples", "light_samples"):
            value = getattr(self, name)
            if not _is_count(value):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive")

        return errors
