"""
Physical validity tests for the single-scattering model.

Checks qualitative behaviour that any correct Rayleigh + Mie single
scattering integration must show for the reference planet.
"""

import pytest
import numpy as np

from atmo_scatter.core.kernel import scatter
from atmo_scatter.core.parameters import ScatteringParameters


def _ray_with_impact(camera_distance, impact):
    """Unit direction from (0, 0, d) passing the centre at the given distance."""
    s = impact / camera_distance
    return np.array([s, 0.0, -np.sqrt(1.0 - s * s)])


class TestLimbBrightening:
    """Planet 60, shell 75, camera at 200 looking down -Z with the sun ahead."""

    @pytest.fixture
    def params(self):
        return ScatteringParameters(planet_radius=60.0, atmosphere_radius=75.0)

    def test_tangent_brighter_than_centre(self, params):
        camera = [0.0, 0.0, 200.0]
        sun = [0.0, 0.0, -1.0]

        centre = scatter(camera, [0.0, 0.0, -1.0], sun, params, dither=False)
        tangent = scatter(camera, _ray_with_impact(200.0, 65.0), sun, params, dither=False)

        assert centre[3] == 1.0
        assert tangent[3] == 1.0
        assert tangent[:3].sum() > centre[:3].sum()
        assert np.all(tangent[:3] > centre[:3])

    def test_brightness_grows_toward_limb(self, params):
        """Across the lit annulus the glow strengthens as rays graze lower."""
        camera = [0.0, 0.0, 200.0]
        sun = [0.0, 0.0, -1.0]
        impacts = [74.0, 70.0, 66.0]
        totals = [
            scatter(camera, _ray_with_impact(200.0, b), sun, params, dither=False)[:3].sum()
            for b in impacts
        ]
        assert totals[0] < totals[1] < totals[2]


class TestSpectralBehaviour:
    """Colour of the scattered light."""

    def test_rayleigh_only_sky_is_blue(self):
        """Without aerosols a thin, lit path scatters blue most."""
        params = ScatteringParameters(mie_coefficient=0.0)
        rgba = scatter([0.0, 0.0, 200.0], _ray_with_impact(200.0, 72.0), [1.0, 0.0, 0.0],
                       params, dither=False)
        r, g, b = rgba[:3]
        assert b > g > r > 0.0

    def test_mie_forward_glow(self):
        """With strong forward scattering, looking toward the sun is brighter."""
        params = ScatteringParameters(mie_asymmetry=0.9)
        camera = [0.0, 0.0, 200.0]
        ray = _ray_with_impact(200.0, 70.0)
        toward = scatter(camera, ray, ray, params, dither=False)
        away = scatter(camera, ray, -ray, params, dither=False)
        assert toward[:3].sum() > away[:3].sum()

    def test_scales_with_sun_intensity(self):
        base = ScatteringParameters(sun_intensity=10.0)
        double = ScatteringParameters(sun_intensity=20.0)
        ray = _ray_with_impact(200.0, 70.0)
        a = scatter([0, 0, 200], ray, [1, 0, 0], base, dither=False)
        b = scatter([0, 0, 200], ray, [1, 0, 0], double, dither=False)
        np.testing.assert_allclose(b[:3], 2.0 * a[:3])


class TestConvergence:
    """Integration converges as sample counts grow."""

    def test_view_samples_converge(self):
        ray = _ray_with_impact(200.0, 68.0)
        results = [
            scatter([0, 0, 200], ray, [1, 0, 0],
                    ScatteringParameters(view_samples=n, light_samples=n), dither=False)[:3]
            for n in (32, 64, 128)
        ]
        coarse = np.abs(results[1] - results[0]).max()
        fine = np.abs(results[2] - results[1]).max()
        assert fine < coarse
        np.testing.assert_allclose(results[2], results[1], rtol=1e-2)
