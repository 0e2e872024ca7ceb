"""
ModernGL program for the atmosphere surface.

Draws the surface's sphere geometry with the GLSL port of the scattering
kernel. The host owns the OpenGL context; this module only creates and
releases the buffers and program it needs.

Requires the optional ``moderngl`` dependency (``pip install atmo-scatter[gl]``).
"""

import logging
import os
from typing import Optional

import moderngl
import numpy as np

from atmo_scatter.core.constants import DITHER_AMPLITUDE
from atmo_scatter.render.camera import PinholeCamera
from atmo_scatter.surface.atmosphere import AtmosphereSurface
from atmo_scatter.surface.material import Side

logger = logging.getLogger(__name__)

SHADER_DIR = os.path.join(os.path.dirname(__file__), "shaders")

# Uniform names in the material map to u_<name> in the shader
_STATIC_UNIFORMS = (
    "planet_radius",
    "atmosphere_radius",
    "rayleigh_coefficient",
    "mie_coefficient",
    "mie_asymmetry",
    "sun_intensity",
    "rayleigh_scale_height",
    "mie_scale_height",
    "view_samples",
    "light_samples",
)


def load_shader_source(name: str) -> str:
    """Read a shader shipped with the package."""
    with open(os.path.join(SHADER_DIR, name), "r") as f:
        return f.read()


def _matrix_bytes(matrix: np.ndarray) -> bytes:
    # GLSL expects column-major storage
    return np.asarray(matrix, dtype="f4").T.tobytes()


def _uniform_value(value):
    if isinstance(value, np.ndarray):
        return tuple(float(v) for v in value)
    return value


class GLAtmosphereProgram:
    """GPU renderer for an AtmosphereSurface.

    Example:
        >>> ctx = moderngl.create_context(standalone=True)
        >>> program = GLAtmosphereProgram(ctx, surface)
        >>> surface.update(camera, sun_position)
        >>> program.render(camera)
        >>> program.release()
    """

    def __init__(
        self,
        ctx: moderngl.Context,
        surface: AtmosphereSurface,
        dither: bool = True,
    ):
        """Compile the shaders and upload the sphere geometry.

        Args:
            ctx: Host OpenGL context
            surface: Surface providing geometry, material and frame state
            dither: Apply the 1/255 screen-space dither
        """
        self.ctx = ctx
        self.surface = surface

        try:
            self.program = ctx.program(
                vertex_shader=load_shader_source("atmosphere_vs.glsl"),
                fragment_shader=load_shader_source("atmosphere_fs.glsl"),
            )
        except moderngl.Error as e:
            logger.error(f"Atmosphere shader compilation failed: {e}")
            raise

        geometry = surface.geometry
        self.vbo = ctx.buffer(geometry.positions.astype("f4").tobytes())
        self.ibo = ctx.buffer(geometry.indices.astype("i4").tobytes())
        self.vao = ctx.vertex_array(
            self.program,
            [(self.vbo, "3f", "in_position")],
            index_buffer=self.ibo,
            index_element_size=4,
        )

        uniforms = surface.material.uniforms
        for name in _STATIC_UNIFORMS:
            self.program[f"u_{name}"].value = _uniform_value(uniforms[name])
        self.program["u_dither_amplitude"].value = DITHER_AMPLITUDE if dither else 0.0
        self.program["u_model"].write(_matrix_bytes(np.eye(4)))

        logger.info(
            f"Uploaded atmosphere sphere ({geometry.vertex_count} vertices, "
            f"{geometry.triangle_count} triangles)"
        )

    def render(self, camera: PinholeCamera, framebuffer: Optional[moderngl.Framebuffer] = None) -> None:
        """Draw the shell with the surface's current frame state.

        Args:
            camera: Camera supplying view and projection matrices
            framebuffer: Target framebuffer; the context's current one if None
        """
        material = self.surface.material
        uniforms = material.uniforms

        self.program["u_camera_position"].value = _uniform_value(uniforms["camera_position"])
        self.program["u_sun_direction"].value = _uniform_value(uniforms["sun_direction"])
        self.program["u_view"].write(_matrix_bytes(camera.view_matrix()))
        self.program["u_projection"].write(_matrix_bytes(camera.projection_matrix()))

        fbo = framebuffer if framebuffer is not None else self.ctx.fbo
        fbo.use()

        self.ctx.enable(moderngl.BLEND | moderngl.DEPTH_TEST | moderngl.CULL_FACE)
        self.ctx.blend_func = moderngl.ONE, moderngl.ONE
        # Keep the rasterized face, cull the other one
        self.ctx.cull_face = "front" if material.side is Side.BACK else "back"

        depth_mask = fbo.depth_mask
        fbo.depth_mask = material.depth_write
        try:
            self.vao.render(moderngl.TRIANGLES)
        finally:
            fbo.depth_mask = depth_mask

    def release(self) -> None:
        """Release the GPU objects created by this program."""
        self.vao.release()
        self.ibo.release()
        self.vbo.release()
        self.program.release()
        logger.debug("Released atmosphere GL program")
