"""
Phase functions for single scattering.

Both functions take the cosine of the angle between the view ray and the sun
direction. They are jitted for use inside the kernel and can be called from
Python with scalars.
"""

from numba import jit

from atmo_scatter.core.constants import (
    RAYLEIGH_PHASE_FACTOR,
    MIE_PHASE_FACTOR,
    MIE_PHASE_EXPONENT,
)


@jit(nopython=True, cache=True)
def rayleigh_phase(cos_theta: float) -> float:
    """
    Rayleigh phase function.

    P(theta) = 3 / (16 pi) * (1 + cos^2 theta)

    Parameters
    ----------
    cos_theta : float
        Cosine of the scattering angle

    Returns
    -------
    phase : float
        Phase function value (integrates to 1 over the sphere)
    """
    return RAYLEIGH_PHASE_FACTOR * (1.0 + cos_theta * cos_theta)


@jit(nopython=True, cache=True)
def mie_phase(cos_theta: float, g: float) -> float:
    """
    Mie phase function (Cornette-Shanks form of Henyey-Greenstein).

    P(theta) = 3 / (8 pi) * (1 - g^2)(1 + cos^2 theta)
               / ((2 + g^2)(1 + g^2 - 2 g cos theta)^1.5)

    The denominator stays positive for |g| < 1, including g = 0.

    Parameters
    ----------
    cos_theta : float
        Cosine of the scattering angle
    g : float
        Asymmetry parameter, strictly between -1 and 1

    Returns
    -------
    phase : float
        Phase function value, peaking at cos_theta = 1 for g > 0
    """
    g2 = g * g
    cos2 = cos_theta * cos_theta
    return (
        MIE_PHASE_FACTOR * (1.0 - g2) * (1.0 + cos2)
        / ((2.0 + g2) * (1.0 + g2 - 2.0 * g * cos_theta) ** MIE_PHASE_EXPONENT)
    )
