"""
Unit tests for optical depth sampling.

Covers density falloff, the sun-ward shadow test and view-ray marching.
"""

import pytest
import numpy as np

from atmo_scatter.core.parameters import ScatteringParameters
from atmo_scatter.core.optical_depth import (
    density_step,
    light_optical_depth,
    integrate_view_ray,
)


class TestDensityStep:
    """Tests for exponential density falloff."""

    def test_surface_density_is_step(self):
        """At altitude 0 both densities equal the step length."""
        hr, hm = density_step(0.0, 5.0, 2.0, 0.5)
        assert hr == pytest.approx(0.5)
        assert hm == pytest.approx(0.5)

    def test_one_scale_height(self):
        """Density drops by 1/e per scale height."""
        hr, hm = density_step(5.0, 5.0, 2.0, 1.0)
        assert hr == pytest.approx(np.exp(-1.0))
        assert hm == pytest.approx(np.exp(-2.5))

    def test_mie_falls_faster(self):
        """Smaller Mie scale height means thinner aerosol aloft."""
        hr, hm = density_step(8.0, 5.0, 2.0, 1.0)
        assert hm < hr


class TestLightOpticalDepth:
    """Tests for the sun-ward integration."""

    def test_point_behind_planet_is_shadowed(self):
        """Sun-ward ray that hits the core returns no light and zero depth."""
        lit, depth_r, depth_m = light_optical_depth(
            0.0, 0.0, 65.0, 0.0, 0.0, -1.0, 60.0, 75.0, 5.0, 2.0, 4
        )
        assert not lit
        assert depth_r == 0.0
        assert depth_m == 0.0

    def test_point_facing_sun_is_lit(self):
        lit, depth_r, depth_m = light_optical_depth(
            0.0, 0.0, 65.0, 0.0, 0.0, 1.0, 60.0, 75.0, 5.0, 2.0, 4
        )
        assert lit
        assert depth_r > 0.0
        assert depth_m > 0.0

    def test_radial_depth_matches_closed_form(self):
        """Straight up from altitude 5, depth approaches the analytic integral."""
        lit, depth_r, _ = light_optical_depth(
            0.0, 0.0, 65.0, 0.0, 0.0, 1.0, 60.0, 75.0, 5.0, 2.0, 200
        )
        expected = 5.0 * (np.exp(-1.0) - np.exp(-3.0))
        assert lit
        assert depth_r == pytest.approx(expected, rel=1e-3)

    def test_grazing_point_not_shadowed(self):
        """A sample beside the planet sees the sun past the limb."""
        lit, _, _ = light_optical_depth(
            65.0, 0.0, 0.0, 0.0, 0.0, -1.0, 60.0, 75.0, 5.0, 2.0, 4
        )
        assert lit

    def test_point_on_shell_facing_out(self):
        """At the shell boundary facing outward the remaining path is empty."""
        lit, depth_r, depth_m = light_optical_depth(
            0.0, 0.0, 75.0, 0.0, 0.0, 1.0, 60.0, 75.0, 5.0, 2.0, 4
        )
        assert lit
        assert depth_r == pytest.approx(0.0, abs=1e-12)
        assert depth_m == pytest.approx(0.0, abs=1e-12)


class TestIntegrateViewRay:
    """Tests for view-ray marching."""

    @pytest.fixture
    def params(self):
        return ScatteringParameters()

    def _integrate(self, params, camera, direction, t_start, t_end, sun):
        return integrate_view_ray(
            camera[0], camera[1], camera[2],
            direction[0], direction[1], direction[2],
            t_start, t_end,
            sun[0], sun[1], sun[2],
            params.planet_radius, params.atmosphere_radius,
            params.rayleigh_array, params.mie_coefficient,
            params.rayleigh_scale_height, params.mie_scale_height,
            params.view_samples, params.light_samples,
        )

    def test_shadowed_samples_add_depth_only(self, params):
        """All samples in the planet's shadow: no light, but view depth accrues."""
        total_r, total_m, depth_r, depth_m = self._integrate(
            params, (0.0, 0.0, 200.0), (0.0, 0.0, -1.0), 125.0, 140.0, (0.0, 0.0, -1.0)
        )
        np.testing.assert_array_equal(total_r, np.zeros(3))
        np.testing.assert_array_equal(total_m, np.zeros(3))
        assert depth_r > 0.0
        assert depth_m > 0.0

    def test_lit_samples_accumulate(self, params):
        total_r, total_m, _, _ = self._integrate(
            params, (0.0, 0.0, 200.0), (0.0, 0.0, -1.0), 125.0, 140.0, (0.0, 0.0, 1.0)
        )
        assert np.all(total_r > 0.0)
        assert np.all(total_m > 0.0)

    def test_blue_attenuated_most(self, params):
        """Larger Rayleigh coefficient means stronger extinction per unit density."""
        total_r, _, _, _ = self._integrate(
            params, (0.0, 0.0, 200.0), (0.0, 0.0, -1.0), 125.0, 140.0, (0.0, 0.0, 1.0)
        )
        assert total_r[0] > total_r[1] > total_r[2]

    def test_view_depth_independent_of_sun(self, params):
        """View-ray depth only depends on the segment."""
        lit = self._integrate(
            params, (0.0, 0.0, 200.0), (0.0, 0.0, -1.0), 125.0, 140.0, (0.0, 0.0, 1.0)
        )
        dark = self._integrate(
            params, (0.0, 0.0, 200.0), (0.0, 0.0, -1.0), 125.0, 140.0, (0.0, 0.0, -1.0)
        )
        assert lit[2] == pytest.approx(dark[2])
        assert lit[3] == pytest.approx(dark[3])
