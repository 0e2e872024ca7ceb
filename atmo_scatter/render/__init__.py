"""
Rendering of the atmosphere surface.

- PinholeCamera: Pixel rays and view/projection matrices
- SoftwareRenderer: CPU rasterization of the shell with the numba sample map
- composite_additive: Additive blend of a frame over a background

The moderngl program lives in atmo_scatter.render.gl and is imported
explicitly, since moderngl is an optional dependency.
"""

from atmo_scatter.render.camera import PinholeCamera
from atmo_scatter.render.software import SoftwareRenderer, covered_samples, composite_additive

__all__ = [
    "PinholeCamera",
    "SoftwareRenderer",
    "covered_samples",
    "composite_additive",
]
