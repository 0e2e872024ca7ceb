"""
Scattering kernel.

Computes single-scattered Rayleigh + Mie radiance for one view ray through a
spherical atmosphere shell. The kernel is a pure function of its arguments:
it holds no state, so samples may be evaluated in any order and on any
number of threads.

shade_samples maps the kernel over a batch of covered samples with a numba
prange loop. It is the software counterpart of the fragment shader in
atmo_scatter/render/shaders/atmosphere_fs.glsl.
"""

from typing import Sequence

import numpy as np
from numba import jit, prange

from atmo_scatter.core.constants import DITHER_AMPLITUDE
from atmo_scatter.core.dither import finish_sample
from atmo_scatter.core.intersect import intersect_sphere
from atmo_scatter.core.optical_depth import integrate_view_ray
from atmo_scatter.core.parameters import ScatteringParameters
from atmo_scatter.core.phase import rayleigh_phase, mie_phase


@jit(nopython=True, cache=True)
def view_segment(
    cx: float, cy: float, cz: float,
    dx: float, dy: float, dz: float,
    planet_radius: float,
    atmosphere_radius: float,
):
    """Part of a view ray that lies inside the shell and in front of the core.

    Returns:
        Tuple of (t_start, t_end). The segment is empty (t_start >= t_end)
        when the ray misses the shell or the core hides all of it.
    """
    shell_near, shell_far = intersect_sphere(cx, cy, cz, dx, dy, dz, atmosphere_radius)
    if shell_far < 0.0:
        return 0.0, 0.0

    t_start = max(shell_near, 0.0)
    t_end = shell_far

    core_near, _ = intersect_sphere(cx, cy, cz, dx, dy, dz, planet_radius)
    if core_near > 0.0:
        t_end = min(t_end, core_near)

    return t_start, t_end


@jit(nopython=True, cache=True)
def scatter_ray(
    cx: float, cy: float, cz: float,
    dx: float, dy: float, dz: float,
    sx: float, sy: float, sz: float,
    planet_radius: float,
    atmosphere_radius: float,
    rayleigh_coefficient: np.ndarray,
    mie_coefficient: float,
    mie_asymmetry: float,
    sun_intensity: float,
    rayleigh_scale_height: float,
    mie_scale_height: float,
    view_samples: int,
    light_samples: int,
):
    """In-scattered radiance along one view ray, before dithering.

    Args:
        cx, cy, cz: Camera position (planet centre at the origin)
        dx, dy, dz: Unit view direction
        sx, sy, sz: Unit direction toward the sun
        Remaining arguments: see ScatteringParameters.kernel_args

    Returns:
        Tuple of (covered, r, g, b). covered is False when the ray misses
        the shell or the segment is empty; the colour is then zero.
    """
    t_start, t_end = view_segment(cx, cy, cz, dx, dy, dz, planet_radius, atmosphere_radius)
    if t_start >= t_end:
        return False, 0.0, 0.0, 0.0

    total_r, total_m, _, _ = integrate_view_ray(
        cx, cy, cz, dx, dy, dz, t_start, t_end, sx, sy, sz,
        planet_radius, atmosphere_radius,
        rayleigh_coefficient, mie_coefficient,
        rayleigh_scale_height, mie_scale_height,
        view_samples, light_samples,
    )

    cos_theta = dx * sx + dy * sy + dz * sz
    phase_r = rayleigh_phase(cos_theta)
    phase_m = mie_phase(cos_theta, mie_asymmetry)

    r = sun_intensity * (
        total_r[0] * rayleigh_coefficient[0] * phase_r + total_m[0] * mie_coefficient * phase_m
    )
    g = sun_intensity * (
        total_r[1] * rayleigh_coefficient[1] * phase_r + total_m[1] * mie_coefficient * phase_m
    )
    b = sun_intensity * (
        total_r[2] * rayleigh_coefficient[2] * phase_r + total_m[2] * mie_coefficient * phase_m
    )
    return True, r, g, b


@jit(nopython=True, cache=True, parallel=True)
def shade_samples(
    camera_position: np.ndarray,  # Shape: (3,)
    world_positions: np.ndarray,  # Shape: (n_samples, 3)
    pixel_coords: np.ndarray,  # Shape: (n_samples, 2), int64
    sun_direction: np.ndarray,  # Shape: (3,), unit length
    planet_radius: float,
    atmosphere_radius: float,
    rayleigh_coefficient: np.ndarray,
    mie_coefficient: float,
    mie_asymmetry: float,
    sun_intensity: float,
    rayleigh_scale_height: float,
    mie_scale_height: float,
    view_samples: int,
    light_samples: int,
    dither_amplitude: float,
) -> np.ndarray:
    """Evaluate the kernel for every covered sample.

    The view ray of sample i runs from the camera through world_positions[i],
    the point where the enclosing sphere was rasterized.

    Returns:
        RGBA array of shape (n_samples, 4). Alpha is 1 for samples with an
        atmosphere contribution and 0 (fully transparent) otherwise.
    """
    n_samples = world_positions.shape[0]
    out = np.zeros((n_samples, 4))

    cx = camera_position[0]
    cy = camera_position[1]
    cz = camera_position[2]
    sx = sun_direction[0]
    sy = sun_direction[1]
    sz = sun_direction[2]

    for i in prange(n_samples):
        dx = world_positions[i, 0] - cx
        dy = world_positions[i, 1] - cy
        dz = world_positions[i, 2] - cz
        length = np.sqrt(dx * dx + dy * dy + dz * dz)
        if length <= 0.0:
            continue

        covered, r, g, b = scatter_ray(
            cx, cy, cz, dx / length, dy / length, dz / length, sx, sy, sz,
            planet_radius, atmosphere_radius,
            rayleigh_coefficient, mie_coefficient, mie_asymmetry, sun_intensity,
            rayleigh_scale_height, mie_scale_height,
            view_samples, light_samples,
        )
        if not covered:
            continue

        r, g, b = finish_sample(
            r, g, b, pixel_coords[i, 0], pixel_coords[i, 1], dither_amplitude
        )
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b
        out[i, 3] = 1.0

    return out


def _unit(vector: Sequence[float], name: str) -> np.ndarray:
    v = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm == 0.0:
        raise ValueError(f"{name} must be non-zero")
    return v / norm


def scatter(
    camera_position: Sequence[float],
    ray_direction: Sequence[float],
    sun_direction: Sequence[float],
    params: ScatteringParameters,
    pixel: Sequence[int] = (0, 0),
    dither: bool = True,
) -> np.ndarray:
    """
    Evaluate the scattering kernel for a single view ray.

    Parameters
    ----------
    camera_position : array_like
        Camera position relative to the planet centre, shape (3,)
    ray_direction : array_like
        View direction, shape (3,); normalized here
    sun_direction : array_like
        Direction toward the sun, shape (3,); normalized here
    params : ScatteringParameters
        Physical parameter set
    pixel : tuple of int, optional
        Integer screen coordinate used to seed the dither
    dither : bool, optional
        Apply the 1/255 screen-space dither (default True)

    Returns
    -------
    rgba : ndarray
        Shape (4,). Alpha 0 and zero colour when the ray has no atmosphere
        contribution; otherwise alpha 1 and non-negative colour.
    """
    camera = np.asarray(camera_position, dtype=np.float64)
    ray = _unit(ray_direction, "ray_direction")
    sun = _unit(sun_direction, "sun_direction")

    covered, r, g, b = scatter_ray(
        camera[0], camera[1], camera[2],
        ray[0], ray[1], ray[2],
        sun[0], sun[1], sun[2],
        *params.kernel_args(),
    )

    rgba = np.zeros(4)
    if not covered:
        return rgba

    amplitude = DITHER_AMPLITUDE if dither else 0.0
    rgba[:3] = finish_sample(r, g, b, int(pixel[0]), int(pixel[1]), amplitude)
    rgba[3] = 1.0
    return rgba
