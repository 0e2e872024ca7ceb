"""
Enclosing sphere mesh.

UV sphere with the same vertex layout and triangle winding as the common
engine sphere primitive: rings run from the +Y pole to the -Y pole and
triangles are counter-clockwise seen from outside.
"""

import logging
from typing import Optional

import numpy as np

from atmo_scatter.core.constants import SPHERE_WIDTH_SEGMENTS, SPHERE_HEIGHT_SEGMENTS

logger = logging.getLogger(__name__)


class SphereGeometry:
    """
    Vertex and index buffers for a sphere centred at the origin.

    Attributes:
        radius: Sphere radius
        width_segments: Segments around the equator
        height_segments: Segments from pole to pole
        positions: Vertex positions, shape (n_vertices, 3), float32
        normals: Unit vertex normals, shape (n_vertices, 3), float32
        uvs: Texture coordinates, shape (n_vertices, 2), float32
        indices: Triangle indices, shape (n_triangles, 3), uint32
    """

    def __init__(
        self,
        radius: float,
        width_segments: int = SPHERE_WIDTH_SEGMENTS,
        height_segments: int = SPHERE_HEIGHT_SEGMENTS,
    ):
        if width_segments < 3 or height_segments < 2:
            raise ValueError("sphere needs at least 3 width and 2 height segments")

        self.radius = float(radius)
        self.width_segments = width_segments
        self.height_segments = height_segments

        u = np.linspace(0.0, 1.0, width_segments + 1)
        v = np.linspace(0.0, 1.0, height_segments + 1)
        uu, vv = np.meshgrid(u, v)  # Shape: (height + 1, width + 1)

        phi = uu * 2.0 * np.pi
        theta = vv * np.pi

        nx = -np.cos(phi) * np.sin(theta)
        ny = np.cos(theta)
        nz = np.sin(phi) * np.sin(theta)
        normals = np.stack([nx, ny, nz], axis=-1).reshape(-1, 3)

        self.normals: Optional[np.ndarray] = normals.astype(np.float32)
        self.positions: Optional[np.ndarray] = (normals * self.radius).astype(np.float32)
        self.uvs: Optional[np.ndarray] = np.stack(
            [uu, 1.0 - vv], axis=-1
        ).reshape(-1, 2).astype(np.float32)
        self.indices: Optional[np.ndarray] = self._build_indices()
        self.disposed = False

    def _build_indices(self) -> np.ndarray:
        ws = self.width_segments
        hs = self.height_segments
        grid = np.arange((hs + 1) * (ws + 1)).reshape(hs + 1, ws + 1)

        a = grid[:-1, 1:]
        b = grid[:-1, :-1]
        c = grid[1:, :-1]
        d = grid[1:, 1:]

        # The pole rings collapse to a point, so they keep one triangle each
        upper = np.stack([a, b, d], axis=-1)[1:]
        lower = np.stack([b, c, d], axis=-1)[:-1]
        triangles = np.concatenate([upper.reshape(-1, 3), lower.reshape(-1, 3)])
        return triangles.astype(np.uint32)

    @property
    def vertex_count(self) -> int:
        return (self.width_segments + 1) * (self.height_segments + 1)

    @property
    def triangle_count(self) -> int:
        return 2 * self.width_segments * (self.height_segments - 1)

    def interleaved(self) -> np.ndarray:
        """Vertex buffer in [x, y, z, nx, ny, nz] layout, float32."""
        if self.disposed:
            raise RuntimeError("geometry has been disposed")
        return np.hstack([self.positions, self.normals]).astype(np.float32)

    def dispose(self) -> None:
        """Release the vertex and index buffers."""
        self.positions = None
        self.normals = None
        self.uvs = None
        self.indices = None
        self.disposed = True
        logger.debug(f"Disposed sphere geometry (radius={self.radius})")
