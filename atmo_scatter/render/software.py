"""
Software fallback renderer.

Plays the part of the host rasterizer: finds the samples covered by the
rasterized face of the enclosing sphere, then maps the scattering kernel over
them on numba's thread pool. The sphere is intersected analytically, which is
the limit of the tessellated mesh the GPU path draws.

Frames are RGBA float arrays. Uncovered samples keep alpha 0 and are never
written, matching a discarded fragment.
"""

import logging
import time
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import numba

from atmo_scatter.core.constants import DITHER_AMPLITUDE
from atmo_scatter.core.intersect import ray_sphere_intersect_batch
from atmo_scatter.core.kernel import shade_samples
from atmo_scatter.render.camera import PinholeCamera
from atmo_scatter.surface.atmosphere import AtmosphereSurface, FrameState
from atmo_scatter.surface.material import Side

logger = logging.getLogger(__name__)


def covered_samples(
    state: FrameState,
    camera: PinholeCamera,
    atmosphere_radius: float,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Pixels where the active face of the shell is rasterized.

    Args:
        state: Frame state snapshot (camera position and face side)
        camera: Camera supplying the pixel rays
        atmosphere_radius: Radius of the enclosing sphere

    Returns:
        Tuple of (rows, cols, world_positions) where world_positions has
        shape (n_covered, 3) and lies on the sphere surface
    """
    origin = state.camera_position
    directions = camera.ray_directions()
    t_near, t_far = ray_sphere_intersect_batch(origin, directions, atmosphere_radius)

    # Back face: the exit point. Front face: the entry point, in front of the eye.
    t = t_far if state.side is Side.BACK else t_near
    rows, cols = np.nonzero(t > 0.0)

    world_positions = origin + directions[rows, cols] * t[rows, cols, None]
    return rows, cols, np.ascontiguousarray(world_positions)


class SoftwareRenderer:
    """CPU renderer for an AtmosphereSurface.

    Example:
        >>> renderer = SoftwareRenderer()
        >>> frame = renderer.render(surface, camera)
        >>> image = composite_additive((0.0, 0.0, 0.02), frame)
    """

    def __init__(self, dither: bool = True, num_threads: Optional[int] = None):
        """Initialize the renderer.

        Args:
            dither: Apply the 1/255 screen-space dither
            num_threads: numba worker threads; numba's default when None
        """
        self.dither = dither
        if num_threads is not None:
            numba.set_num_threads(num_threads)
            logger.debug(f"Using {num_threads} numba threads")

    @property
    def dither_amplitude(self) -> float:
        return DITHER_AMPLITUDE if self.dither else 0.0

    def render(self, surface: AtmosphereSurface, camera: PinholeCamera) -> np.ndarray:
        """Render the surface's current frame state.

        update() must already have been called for this frame; the frame
        state is snapshotted before any sample is shaded.

        Returns:
            RGBA frame of shape (camera.height, camera.width, 4)
        """
        state = surface.snapshot()
        start = time.perf_counter()

        rows, cols, world_positions = covered_samples(state, camera, surface.atmosphere_radius)
        # Screen coordinates with the origin at the bottom-left pixel
        pixels = np.stack([cols, camera.height - 1 - rows], axis=1).astype(np.int64)

        rgba = shade_samples(
            state.camera_position,
            world_positions,
            np.ascontiguousarray(pixels),
            state.sun_direction,
            *surface.params.kernel_args(),
            self.dither_amplitude,
        )

        frame = np.zeros((camera.height, camera.width, 4))
        frame[rows, cols] = rgba

        elapsed = time.perf_counter() - start
        logger.debug(
            f"Shaded {len(rows)} of {camera.width * camera.height} samples "
            f"({state.orientation.value}) in {elapsed * 1000:.1f} ms"
        )
        return frame


def composite_additive(
    background: Union[np.ndarray, Sequence[float]],
    frame: np.ndarray,
) -> np.ndarray:
    """
    Add an atmosphere frame over a background, as additive blending does.

    Parameters
    ----------
    background : ndarray or sequence of float
        Background image of shape (H, W, 3), or a single RGB colour
    frame : ndarray
        RGBA frame of shape (H, W, 4) from SoftwareRenderer.render

    Returns
    -------
    image : ndarray
        RGB image of shape (H, W, 3), clipped to [0, 1]
    """
    base = np.broadcast_to(np.asarray(background, dtype=np.float64), frame.shape[:2] + (3,))
    image = base + frame[..., :3] * frame[..., 3:4]
    return np.clip(image, 0.0, 1.0)
