"""
Atmosphere surface object.

Owns the enclosing sphere geometry, the scattering material and the frame
state the kernel reads. The host engine calls update() once per frame with
its camera and sun light, then draws the geometry with the material.

The surface does not extend any engine type. A host scene-node handle can be
attached and is only held, never inspected.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Union

import numpy as np

from atmo_scatter.core.constants import RENDER_ORDER, MIN_CAMERA_ALTITUDE
from atmo_scatter.core.parameters import ScatteringParameters, ConfigurationError
from atmo_scatter.surface.geometry import SphereGeometry
from atmo_scatter.surface.material import ScatteringMaterial, Side
from atmo_scatter.surface.orientation import Orientation, next_orientation

logger = logging.getLogger(__name__)


class SurfaceDisposedError(RuntimeError):
    """Raised when a disposed surface is updated or rendered."""
    pass


@dataclass(frozen=True)
class FrameState:
    """Copy of the frame-varying kernel inputs at one point in time.

    Attributes:
        camera_position: World-space camera position, shape (3,)
        sun_direction: Unit direction from the scene origin to the sun
        orientation: Camera-relative orientation after the last update
    """
    camera_position: np.ndarray
    sun_direction: np.ndarray
    orientation: Orientation

    @property
    def side(self) -> Side:
        return self.orientation.side


def _position_of(source: Any):
    """Accept a raw 3-vector or a host object exposing .position."""
    position = getattr(source, "position", source)
    return float(position[0]), float(position[1]), float(position[2])


class AtmosphereSurface:
    """Atmosphere shell around a planet centred at the world origin.

    Example:
        >>> surface = create(60.0, 75.0)
        >>> surface.update((0.0, 0.0, 200.0), (400.0, 0.0, 0.0))
        >>> surface.orientation
        <Orientation.OUTSIDE: 'outside'>
        >>> surface.dispose()
    """

    def __init__(self, params: ScatteringParameters, node: Any = None):
        """Validate the parameters and allocate geometry and material.

        Args:
            params: Physical parameter set
            node: Optional host scene-node handle

        Raises:
            ConfigurationError: If the parameter set is invalid
        """
        errors = params.validate()
        if errors:
            raise ConfigurationError(errors)

        self.params = params
        self.node = node
        self.render_order = RENDER_ORDER
        self.frustum_culled = False

        self._camera_position = np.zeros(3)
        self._sun_direction = np.array([1.0, 0.0, 0.0])
        self._orientation = Orientation.INSIDE

        self.geometry = SphereGeometry(params.atmosphere_radius)
        self.material = ScatteringMaterial.for_parameters(
            params, self._camera_position, self._sun_direction
        )
        self.material.side = self._orientation.side
        self._disposed = False

        logger.info(
            f"Created atmosphere surface (planet={params.planet_radius}, "
            f"atmosphere={params.atmosphere_radius}, "
            f"samples={params.view_samples}x{params.light_samples})"
        )

    @property
    def planet_radius(self) -> float:
        return self.params.planet_radius

    @property
    def atmosphere_radius(self) -> float:
        return self.params.atmosphere_radius

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def inside(self) -> bool:
        """Whether the camera was inside the shell after the last update."""
        return self._orientation is Orientation.INSIDE

    @property
    def camera_position(self) -> np.ndarray:
        """Read-only view of the cached camera position."""
        view = self._camera_position.view()
        view.flags.writeable = False
        return view

    @property
    def sun_direction(self) -> np.ndarray:
        """Read-only view of the cached unit sun direction."""
        view = self._sun_direction.view()
        view.flags.writeable = False
        return view

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _check_alive(self) -> None:
        if self._disposed:
            raise SurfaceDisposedError("atmosphere surface has been disposed")

    def update(self, camera: Any, sun: Any) -> None:
        """Per-frame hook.

        Updates the orientation state, stores the camera position and stores
        the normalized direction from the origin toward the sun. Writes into
        the existing uniform arrays, so repeated calls with the same inputs
        leave the state unchanged.

        Args:
            camera: Camera position, or an object exposing .position
            sun: Sun world position, or an object exposing .position

        Raises:
            SurfaceDisposedError: If called after dispose()
        """
        self._check_alive()

        cx, cy, cz = _position_of(camera)
        sx, sy, sz = _position_of(sun)

        distance = math.sqrt(cx * cx + cy * cy + cz * cz)
        orientation = next_orientation(self._orientation, distance, self.params.atmosphere_radius)
        if orientation is not self._orientation:
            logger.info(
                f"Camera crossed atmosphere boundary at distance {distance:.3f}: "
                f"{self._orientation.value} -> {orientation.value}"
            )
            self._orientation = orientation
            self.material.side = orientation.side

        self._camera_position[0] = cx
        self._camera_position[1] = cy
        self._camera_position[2] = cz

        norm = math.sqrt(sx * sx + sy * sy + sz * sz)
        if norm > 0.0:
            self._sun_direction[0] = sx / norm
            self._sun_direction[1] = sy / norm
            self._sun_direction[2] = sz / norm
        else:
            logger.warning("Sun position is at the scene origin; keeping previous sun direction")

    def snapshot(self) -> FrameState:
        """Copy the current frame state for consumers that run after update."""
        self._check_alive()
        return FrameState(
            camera_position=self._camera_position.copy(),
            sun_direction=self._sun_direction.copy(),
            orientation=self._orientation,
        )

    def dispose(self) -> None:
        """Release the geometry, the material and the host node reference."""
        if self._disposed:
            logger.debug("Atmosphere surface already disposed")
            return
        self.geometry.dispose()
        self.material.dispose()
        self.node = None
        self._disposed = True
        logger.info("Disposed atmosphere surface")


def create(
    planet_radius: float,
    atmosphere_radius: float,
    params: Optional[Union[ScatteringParameters, Mapping[str, Any]]] = None,
    node: Any = None,
) -> AtmosphereSurface:
    """
    Build an atmosphere surface.

    Parameters
    ----------
    planet_radius : float
        Radius of the opaque planet core
    atmosphere_radius : float
        Radius of the atmosphere shell; must exceed planet_radius
    params : ScatteringParameters or mapping, optional
        Remaining parameters; reference values when omitted. The radii
        arguments take precedence over radii in params.
    node : object, optional
        Host scene-node handle held by the surface

    Returns
    -------
    surface : AtmosphereSurface

    Raises
    ------
    ConfigurationError
        If the radii are misordered, a scale height or sample count is not
        positive, or another parameter is out of range
    """
    if params is None:
        params = ScatteringParameters()
    elif not isinstance(params, ScatteringParameters):
        params = ScatteringParameters.from_dict(params)

    params = replace(
        params,
        planet_radius=float(planet_radius),
        atmosphere_radius=float(atmosphere_radius),
    )
    return AtmosphereSurface(params, node=node)


def clamp_above_surface(
    position,
    planet_radius: float,
    min_altitude: float = MIN_CAMERA_ALTITUDE,
) -> np.ndarray:
    """
    Keep a camera position above the planet surface.

    The kernel is undefined for cameras inside the planet core; hosts pass
    camera positions through this before calling update().

    Parameters
    ----------
    position : array_like
        Requested camera position, shape (3,)
    planet_radius : float
        Planet core radius
    min_altitude : float, optional
        Minimum altitude above the surface

    Returns
    -------
    position : ndarray
        The same position, or the point at the minimum altitude along the
        same radial line (the +Z axis for the origin itself)
    """
    p = np.asarray(position, dtype=np.float64)
    floor = planet_radius + min_altitude
    distance = np.linalg.norm(p)
    if distance >= floor:
        return p.copy()
    if distance == 0.0:
        return np.array([0.0, 0.0, floor])
    return p * (floor / distance)
