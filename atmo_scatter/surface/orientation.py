"""
Camera-relative orientation of the atmosphere shell.

Two states with a 2% dead band around the shell radius. The state only
changes when the camera distance leaves the band on the far side, so a camera
hovering at the boundary never flips the rasterized face every frame.
"""

from enum import Enum

from atmo_scatter.core.constants import HYSTERESIS_EXIT, HYSTERESIS_ENTER
from atmo_scatter.surface.material import Side


class Orientation(Enum):
    """Where the camera is relative to the atmosphere shell."""
    INSIDE = "inside"
    OUTSIDE = "outside"

    @property
    def side(self) -> Side:
        """Inside sees the shell's interior (back face); outside its exterior."""
        return Side.BACK if self is Orientation.INSIDE else Side.FRONT


def next_orientation(
    current: Orientation,
    camera_distance: float,
    atmosphere_radius: float,
) -> Orientation:
    """Apply the hysteresis transition rule.

    Args:
        current: State after the previous frame
        camera_distance: Distance from the camera to the planet centre
        atmosphere_radius: Shell radius

    Returns:
        INSIDE -> OUTSIDE above 1.01 x radius, OUTSIDE -> INSIDE below
        0.99 x radius, otherwise the current state.
    """
    if current is Orientation.INSIDE and camera_distance > atmosphere_radius * HYSTERESIS_EXIT:
        return Orientation.OUTSIDE
    if current is Orientation.OUTSIDE and camera_distance < atmosphere_radius * HYSTERESIS_ENTER:
        return Orientation.INSIDE
    return current
