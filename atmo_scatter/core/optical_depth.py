"""
Optical depth sampling along view and sun-ward rays.

Densities fall off exponentially with altitude above the planet core. Each
function returns density integrated over a step, so the caller only sums.
"""

from typing import Tuple

import numpy as np
from numba import jit

from atmo_scatter.core.intersect import intersect_sphere


@jit(nopython=True, cache=True)
def density_step(
    altitude: float,
    rayleigh_scale_height: float,
    mie_scale_height: float,
    step: float,
) -> Tuple[float, float]:
    """Rayleigh and Mie density at an altitude, times the step length."""
    hr = np.exp(-altitude / rayleigh_scale_height) * step
    hm = np.exp(-altitude / mie_scale_height) * step
    return hr, hm


@jit(nopython=True, cache=True)
def light_optical_depth(
    px: float, py: float, pz: float,
    sx: float, sy: float, sz: float,
    planet_radius: float,
    atmosphere_radius: float,
    rayleigh_scale_height: float,
    mie_scale_height: float,
    light_samples: int,
) -> Tuple[bool, float, float]:
    """Optical depth from a point toward the sun, up to the shell exit.

    Args:
        px, py, pz: Sample point inside the shell
        sx, sy, sz: Unit sun direction
        planet_radius: Core radius (shadow test)
        atmosphere_radius: Shell radius (integration bound)
        rayleigh_scale_height: Rayleigh falloff height
        mie_scale_height: Mie falloff height
        light_samples: Number of sub-intervals

    Returns:
        Tuple of (lit, depth_r, depth_m). lit is False when the sun-ward
        ray enters the planet core; both depths are then zero.
    """
    core_entry, _ = intersect_sphere(px, py, pz, sx, sy, sz, planet_radius)
    if core_entry > 0.0:
        return False, 0.0, 0.0

    _, shell_exit = intersect_sphere(px, py, pz, sx, sy, sz, atmosphere_radius)
    light_step = max(shell_exit, 0.0) / light_samples

    depth_r = 0.0
    depth_m = 0.0
    for j in range(light_samples):
        t = light_step * (j + 0.5)
        lx = px + sx * t
        ly = py + sy * t
        lz = pz + sz * t
        altitude = np.sqrt(lx * lx + ly * ly + lz * lz) - planet_radius
        hr, hm = density_step(altitude, rayleigh_scale_height, mie_scale_height, light_step)
        depth_r += hr
        depth_m += hm

    return True, depth_r, depth_m


@jit(nopython=True, cache=True)
def integrate_view_ray(
    cx: float, cy: float, cz: float,
    dx: float, dy: float, dz: float,
    t_start: float,
    t_end: float,
    sx: float, sy: float, sz: float,
    planet_radius: float,
    atmosphere_radius: float,
    rayleigh_coefficient: np.ndarray,
    mie_coefficient: float,
    rayleigh_scale_height: float,
    mie_scale_height: float,
    view_samples: int,
    light_samples: int,
):
    """March a view ray segment and accumulate attenuated in-scatter.

    The segment [t_start, t_end] is split into view_samples equal steps and
    evaluated at the midpoints. A shadowed sample still adds to the view-ray
    optical depth but contributes no in-scattered light.

    Returns:
        Tuple of (total_r, total_m, depth_r, depth_m) where total_r and
        total_m are per-channel arrays of shape (3,) and the depths are the
        view-ray optical depths over the whole segment.
    """
    step = (t_end - t_start) / view_samples

    total_r = np.zeros(3)
    total_m = np.zeros(3)
    depth_r = 0.0
    depth_m = 0.0

    for i in range(view_samples):
        t = t_start + step * (i + 0.5)
        px = cx + dx * t
        py = cy + dy * t
        pz = cz + dz * t
        altitude = np.sqrt(px * px + py * py + pz * pz) - planet_radius

        hr, hm = density_step(altitude, rayleigh_scale_height, mie_scale_height, step)
        depth_r += hr
        depth_m += hm

        lit, light_r, light_m = light_optical_depth(
            px, py, pz, sx, sy, sz,
            planet_radius, atmosphere_radius,
            rayleigh_scale_height, mie_scale_height,
            light_samples,
        )
        if not lit:
            continue

        for k in range(3):
            tau = (
                rayleigh_coefficient[k] * (depth_r + light_r)
                + mie_coefficient * (depth_m + light_m)
            )
            atten = np.exp(-tau)
            total_r[k] += hr * atten
            total_m[k] += hm * atten

    return total_r, total_m, depth_r, depth_m
