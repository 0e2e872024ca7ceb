"""
Ray-sphere intersection for spheres centred at the origin.

The scalar form is the building block of the scattering kernel; the batch
form serves the software renderer when it locates the rasterized face of the
enclosing sphere for a whole frame of camera rays.
"""

from typing import Tuple

import numpy as np
from numba import jit

from atmo_scatter.core.constants import NO_HIT


@jit(nopython=True, cache=True)
def intersect_sphere(
    ox: float, oy: float, oz: float,
    dx: float, dy: float, dz: float,
    radius: float,
) -> Tuple[float, float]:
    """Ray parameters where a ray crosses a sphere at the origin.

    Solves t = -b +/- sqrt(b^2 - c) with b = dot(o, d) and
    c = dot(o, o) - r^2. The direction must be unit length.

    Args:
        ox, oy, oz: Ray origin
        dx, dy, dz: Unit ray direction
        radius: Sphere radius

    Returns:
        Tuple of (t_near, t_far); both NO_HIT when the ray misses
    """
    b = ox * dx + oy * dy + oz * dz
    c = ox * ox + oy * oy + oz * oz - radius * radius
    d = b * b - c
    if d < 0.0:
        return NO_HIT, NO_HIT
    d = np.sqrt(d)
    return -b - d, -b + d


def ray_sphere_intersect(origin, direction, radius: float) -> Tuple[float, float]:
    """
    Intersect a single ray with a sphere centred at the origin.

    Parameters
    ----------
    origin : array_like
        Ray origin, shape (3,)
    direction : array_like
        Unit ray direction, shape (3,)
    radius : float
        Sphere radius

    Returns
    -------
    t_near, t_far : float
        Entry and exit ray parameters (both NO_HIT on a miss)
    """
    o = np.asarray(origin, dtype=np.float64)
    d = np.asarray(direction, dtype=np.float64)
    t_near, t_far = intersect_sphere(o[0], o[1], o[2], d[0], d[1], d[2], float(radius))
    return float(t_near), float(t_far)


def ray_sphere_intersect_batch(
    origin: np.ndarray,
    directions: np.ndarray,
    radius: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Intersect many rays sharing one origin with a sphere at the origin.

    Parameters
    ----------
    origin : ndarray
        Shared ray origin, shape (3,)
    directions : ndarray
        Unit ray directions, shape (..., 3)
    radius : float
        Sphere radius

    Returns
    -------
    t_near, t_far : ndarray
        Ray parameters with shape directions.shape[:-1]; NO_HIT where missed
    """
    origin = np.asarray(origin, dtype=np.float64)
    directions = np.asarray(directions, dtype=np.float64)

    b = directions @ origin
    c = origin @ origin - radius * radius
    disc = b * b - c

    hit = disc >= 0.0
    root = np.sqrt(np.where(hit, disc, 0.0))

    t_near = np.where(hit, -b - root, NO_HIT)
    t_far = np.where(hit, -b + root, NO_HIT)
    return t_near, t_far
