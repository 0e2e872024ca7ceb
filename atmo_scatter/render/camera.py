"""
Pinhole camera.

World convention matches OpenGL: right-handed, the camera looks down its
local -Z axis with +Y up. Pixel rows run top to bottom.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


def _as_vec3(value) -> np.ndarray:
    return np.asarray(value, dtype=np.float64).reshape(3)


@dataclass
class PinholeCamera:
    """Perspective camera looking from position toward target.

    The position attribute makes the camera usable directly as the camera
    argument of AtmosphereSurface.update.

    Attributes:
        position: Eye position in world space
        target: Point the camera looks at
        up: Approximate up direction
        fov_deg: Vertical field of view in degrees
        width: Image width in pixels
        height: Image height in pixels
        near: Near clip distance
        far: Far clip distance
    """
    position: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 200.0]))
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    fov_deg: float = 60.0
    width: int = 320
    height: int = 240
    near: float = 0.1
    far: float = 1000.0

    def __post_init__(self):
        self.position = _as_vec3(self.position)
        self.target = _as_vec3(self.target)
        self.up = _as_vec3(self.up)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def look_at(self, eye, target=None) -> None:
        """Move the eye and optionally retarget."""
        self.position = _as_vec3(eye)
        if target is not None:
            self.target = _as_vec3(target)

    def basis(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Orthonormal (right, up, forward) vectors of the camera frame."""
        forward = self.target - self.position
        norm = np.linalg.norm(forward)
        if norm == 0.0:
            raise ValueError("camera position and target coincide")
        forward = forward / norm

        right = np.cross(forward, self.up)
        if np.linalg.norm(right) < 1e-9:
            # Looking along the up vector; pick any perpendicular
            fallback = np.array([0.0, 0.0, 1.0]) if abs(forward[2]) < 0.9 else np.array([1.0, 0.0, 0.0])
            right = np.cross(forward, fallback)
        right = right / np.linalg.norm(right)
        true_up = np.cross(right, forward)
        return right, true_up, forward

    def ray_directions(self) -> np.ndarray:
        """Unit world-space rays through every pixel centre.

        Returns:
            Array of shape (height, width, 3)
        """
        right, true_up, forward = self.basis()
        half_height = np.tan(np.radians(self.fov_deg) / 2.0)
        half_width = half_height * self.aspect_ratio

        cols = (np.arange(self.width) + 0.5) / self.width * 2.0 - 1.0
        rows = 1.0 - (np.arange(self.height) + 0.5) / self.height * 2.0
        xx, yy = np.meshgrid(cols * half_width, rows * half_height)

        directions = (
            forward[None, None, :]
            + xx[..., None] * right[None, None, :]
            + yy[..., None] * true_up[None, None, :]
        )
        return directions / np.linalg.norm(directions, axis=-1, keepdims=True)

    def view_matrix(self) -> np.ndarray:
        """World-to-camera matrix, shape (4, 4), row-major."""
        right, true_up, forward = self.basis()
        view = np.eye(4)
        view[0, :3] = right
        view[1, :3] = true_up
        view[2, :3] = -forward
        view[:3, 3] = -view[:3, :3] @ self.position
        return view

    def projection_matrix(self) -> np.ndarray:
        """OpenGL perspective projection, shape (4, 4), row-major."""
        f = 1.0 / np.tan(np.radians(self.fov_deg) / 2.0)
        near, far = self.near, self.far
        proj = np.zeros((4, 4))
        proj[0, 0] = f / self.aspect_ratio
        proj[1, 1] = f
        proj[2, 2] = (far + near) / (near - far)
        proj[2, 3] = 2.0 * far * near / (near - far)
        proj[3, 2] = -1.0
        return proj
