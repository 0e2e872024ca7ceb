"""Tests for the Rayleigh and Mie phase functions."""

import pytest
import numpy as np

from atmo_scatter.core.phase import rayleigh_phase, mie_phase


def _sphere_integral(phase, n=20000):
    """Integrate a phase function of cos(theta) over the unit sphere."""
    mu = -1.0 + (np.arange(n) + 0.5) * (2.0 / n)
    return 2.0 * np.pi * sum(phase(m) for m in mu) * (2.0 / n)


class TestRayleighPhase:
    """Tests for the Rayleigh phase function."""

    def test_forward_backward_symmetry(self):
        """Rayleigh scattering is symmetric about 90 degrees."""
        assert rayleigh_phase(0.7) == pytest.approx(rayleigh_phase(-0.7))

    def test_extremes(self):
        """Forward value is twice the side value."""
        assert rayleigh_phase(1.0) == pytest.approx(2.0 * rayleigh_phase(0.0))
        assert rayleigh_phase(0.0) == pytest.approx(0.0596831)

    def test_normalized(self):
        """Rayleigh phase integrates to 1 over the sphere."""
        assert _sphere_integral(rayleigh_phase) == pytest.approx(1.0, rel=1e-4)


class TestMiePhase:
    """Tests for the Cornette-Shanks Mie phase function."""

    @pytest.mark.parametrize("g", [0.1, 0.5, 0.76, 0.9])
    def test_peaks_forward(self, g):
        """For g > 0 the maximum is at cos(theta) = 1."""
        mu = np.linspace(-1.0, 1.0, 401)
        values = np.array([mie_phase(m, g) for m in mu])
        assert np.argmax(values) == len(mu) - 1

    def test_isotropic_asymmetry_finite(self):
        """g = 0 is finite and reduces to the Rayleigh shape."""
        for mu in (-1.0, 0.0, 0.3, 1.0):
            value = mie_phase(mu, 0.0)
            assert np.isfinite(value)
            assert value == pytest.approx(rayleigh_phase(mu))

    def test_negative_asymmetry_peaks_backward(self):
        """For g < 0 the back-scatter lobe dominates."""
        assert mie_phase(-1.0, -0.5) > mie_phase(1.0, -0.5)

    def test_positive(self):
        """Phase values are strictly positive for |g| < 1."""
        for mu in np.linspace(-1.0, 1.0, 21):
            assert mie_phase(mu, 0.76) > 0.0

    @pytest.mark.parametrize("g", [0.0, 0.3, 0.76])
    def test_normalized(self, g):
        """Mie phase integrates to 1 over the sphere."""
        assert _sphere_integral(lambda mu: mie_phase(mu, g)) == pytest.approx(1.0, rel=1e-2)
