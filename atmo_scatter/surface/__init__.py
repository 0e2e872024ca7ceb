"""
Atmosphere surface object.

Classes
-------
AtmosphereSurface
    Owns sphere geometry, scattering material and per-frame state
SphereGeometry
    UV sphere vertex and index buffers
ScatteringMaterial
    Uniforms and render state
Orientation
    Inside/outside state with hysteresis

Functions
---------
create
    Validated construction of an AtmosphereSurface
next_orientation
    Hysteresis transition rule
clamp_above_surface
    Keep host cameras above the planet core
"""

from atmo_scatter.surface.geometry import SphereGeometry
from atmo_scatter.surface.material import ScatteringMaterial, Side, Blending
from atmo_scatter.surface.orientation import Orientation, next_orientation
from atmo_scatter.surface.atmosphere import (
    AtmosphereSurface,
    FrameState,
    SurfaceDisposedError,
    create,
    clamp_above_surface,
)

__all__ = [
    "SphereGeometry",
    "ScatteringMaterial",
    "Side",
    "Blending",
    "Orientation",
    "next_orientation",
    "AtmosphereSurface",
    "FrameState",
    "SurfaceDisposedError",
    "create",
    "clamp_above_surface",
]
