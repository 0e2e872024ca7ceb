"""
Integration tests for the software rendering pipeline.

Tests the workflow from surface creation through update, rendering and
compositing.
"""

import pytest
import numpy as np

from atmo_scatter.render import PinholeCamera, SoftwareRenderer, covered_samples, composite_additive
from atmo_scatter.surface import create, Orientation, SurfaceDisposedError


class TestPinholeCamera:
    """Tests for camera rays and matrices."""

    def test_centre_ray_points_at_target(self):
        camera = PinholeCamera(position=[0, 0, 200], width=3, height=3)
        rays = camera.ray_directions()
        assert rays.shape == (3, 3, 3)
        np.testing.assert_allclose(rays[1, 1], [0.0, 0.0, -1.0], atol=1e-12)

    def test_top_row_looks_up(self):
        camera = PinholeCamera(position=[0, 0, 200], width=4, height=4)
        rays = camera.ray_directions()
        assert rays[0, 0, 1] > 0.0
        assert rays[-1, 0, 1] < 0.0

    def test_view_matrix_moves_eye_to_origin(self):
        camera = PinholeCamera(position=[10, 20, 200], target=[0, 0, 0])
        eye = camera.view_matrix() @ np.array([10.0, 20.0, 200.0, 1.0])
        np.testing.assert_allclose(eye[:3], 0.0, atol=1e-9)

    def test_projection_maps_near_plane(self):
        camera = PinholeCamera(near=1.0, far=100.0)
        clip = camera.projection_matrix() @ np.array([0.0, 0.0, -1.0, 1.0])
        assert clip[2] / clip[3] == pytest.approx(-1.0)

    def test_looking_along_up_vector(self):
        camera = PinholeCamera(position=[0, 200, 0], target=[0, 0, 0])
        right, up, forward = camera.basis()
        assert abs(np.dot(right, forward)) < 1e-12
        assert abs(np.dot(up, forward)) < 1e-12

    def test_coincident_target_rejected(self):
        camera = PinholeCamera(position=[0, 0, 0], target=[0, 0, 0])
        with pytest.raises(ValueError):
            camera.basis()


class TestSoftwareRenderer:
    """Tests for rendering frames of the atmosphere shell."""

    @pytest.fixture
    def surface(self):
        surface = create(60.0, 75.0)
        yield surface
        surface.dispose()

    @pytest.fixture
    def renderer(self):
        return SoftwareRenderer(dither=False)

    def test_orbit_frame(self, surface, renderer):
        """From orbit the shell is a disc; corners stay transparent."""
        camera = PinholeCamera(position=[0, 0, 200], width=32, height=24)
        surface.update(camera, (400.0, 0.0, 0.0))
        assert surface.orientation is Orientation.OUTSIDE

        frame = renderer.render(surface, camera)

        assert frame.shape == (24, 32, 4)
        assert set(np.unique(frame[..., 3])) <= {0.0, 1.0}
        for row, col in [(0, 0), (0, -1), (-1, 0), (-1, -1)]:
            np.testing.assert_array_equal(frame[row, col], np.zeros(4))
        assert frame[12, 16, 3] == 1.0
        assert np.all(frame[..., :3] >= 0.0)
        assert frame[..., :3].max() > 0.0

    def test_uncovered_pixels_untouched(self, surface, renderer):
        camera = PinholeCamera(position=[0, 0, 200], width=32, height=24)
        surface.update(camera, (400.0, 0.0, 0.0))
        frame = renderer.render(surface, camera)
        transparent = frame[..., 3] == 0.0
        assert np.all(frame[transparent][:, :3] == 0.0)

    def test_inside_covers_every_pixel(self, surface, renderer):
        """Inside the shell the back face surrounds the camera."""
        camera = PinholeCamera(position=[0, 0, 70], target=[0, 0, 200], width=16, height=12)
        surface.update(camera, (0.0, 0.0, 400.0))
        assert surface.orientation is Orientation.INSIDE

        frame = renderer.render(surface, camera)
        assert np.all(frame[..., 3] == 1.0)

    def test_dead_band_outside_mode_covers_nothing(self, surface, renderer):
        """Just inside the shell but still in outside mode, the front face is behind the camera."""
        camera = PinholeCamera(position=[0, 0, 200], width=16, height=12)
        surface.update(camera, (400.0, 0.0, 0.0))
        camera.look_at([0, 0, 74.5])
        surface.update(camera, (400.0, 0.0, 0.0))
        assert surface.orientation is Orientation.OUTSIDE

        frame = renderer.render(surface, camera)
        assert np.all(frame[..., 3] == 0.0)

    def test_dither_changes_frame_slightly(self, surface):
        camera = PinholeCamera(position=[0, 0, 200], width=16, height=12)
        surface.update(camera, (400.0, 0.0, 0.0))
        plain = SoftwareRenderer(dither=False).render(surface, camera)
        noisy = SoftwareRenderer(dither=True).render(surface, camera)
        np.testing.assert_array_equal(plain[..., 3], noisy[..., 3])
        assert np.max(np.abs(plain - noisy)) <= 0.5 / 255.0 + 1e-12

    def test_render_is_deterministic(self, surface):
        camera = PinholeCamera(position=[0, 30, 180], width=16, height=12)
        surface.update(camera, (400.0, 100.0, 0.0))
        renderer = SoftwareRenderer()
        np.testing.assert_array_equal(renderer.render(surface, camera), renderer.render(surface, camera))

    def test_render_after_dispose_raises(self, renderer):
        surface = create(60.0, 75.0)
        surface.dispose()
        with pytest.raises(SurfaceDisposedError):
            renderer.render(surface, PinholeCamera(width=4, height=4))


class TestCoveredSamples:
    """Tests for locating the rasterized face."""

    def test_world_positions_on_shell(self):
        surface = create(60.0, 75.0)
        camera = PinholeCamera(position=[0, 0, 200], width=16, height=12)
        surface.update(camera, (400.0, 0.0, 0.0))
        rows, cols, world = covered_samples(surface.snapshot(), camera, 75.0)
        assert len(rows) == len(cols) == len(world) > 0
        np.testing.assert_allclose(np.linalg.norm(world, axis=1), 75.0)
        # Front face: the entry point faces the camera
        assert np.all(world[:, 2] > 0.0)


class TestCompositeAdditive:
    """Tests for additive compositing."""

    def test_adds_over_background(self):
        frame = np.zeros((2, 2, 4))
        frame[0, 0] = [0.2, 0.3, 0.4, 1.0]
        frame[1, 1] = [0.9, 0.9, 0.9, 0.0]
        image = composite_additive((0.1, 0.1, 0.1), frame)
        np.testing.assert_allclose(image[0, 0], [0.3, 0.4, 0.5])
        np.testing.assert_allclose(image[1, 1], [0.1, 0.1, 0.1])

    def test_clips_to_unit_range(self):
        frame = np.ones((1, 1, 4)) * 2.0
        frame[..., 3] = 1.0
        image = composite_additive(np.full((1, 1, 3), 0.5), frame)
        np.testing.assert_array_equal(image, np.ones((1, 1, 3)))
