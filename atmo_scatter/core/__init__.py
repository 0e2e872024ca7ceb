"""
Core scattering computation.

- ray_sphere_intersect: Ray vs origin-centred sphere
- light_optical_depth / integrate_view_ray: Optical depth sampling
- rayleigh_phase / mie_phase: Phase functions
- scatter_ray / scatter: Per-sample scattering kernel
- shade_samples: Parallel map of the kernel over covered samples
"""

from atmo_scatter.core.parameters import ScatteringParameters, ConfigurationError
from atmo_scatter.core.intersect import (
    intersect_sphere,
    ray_sphere_intersect,
    ray_sphere_intersect_batch,
)
from atmo_scatter.core.optical_depth import (
    density_step,
    light_optical_depth,
    integrate_view_ray,
)
from atmo_scatter.core.phase import rayleigh_phase, mie_phase
from atmo_scatter.core.dither import coordinate_noise, finish_sample
from atmo_scatter.core.kernel import view_segment, scatter_ray, shade_samples, scatter

__all__ = [
    "ScatteringParameters",
    "ConfigurationError",
    "intersect_sphere",
    "ray_sphere_intersect",
    "ray_sphere_intersect_batch",
    "density_step",
    "light_optical_depth",
    "integrate_view_ray",
    "rayleigh_phase",
    "mie_phase",
    "coordinate_noise",
    "finish_sample",
    "view_segment",
    "scatter_ray",
    "shade_samples",
    "scatter",
]
