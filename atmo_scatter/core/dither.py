"""
Screen-space dither derived from integer pixel coordinates.

The hash is stateless so every sample is independent of evaluation order and
of the previous frame. The same integer mix is used by the GLSL fragment
shader, so software and GPU frames agree bit for bit on the noise pattern.
"""

from numba import jit

_MASK32 = 0xFFFFFFFF
_MIX = 0x45D9F3B
_MASK24 = 0xFFFFFF


@jit(nopython=True, cache=True)
def _mix32(h: int) -> int:
    h = ((h >> 16) ^ h) * _MIX & _MASK32
    h = ((h >> 16) ^ h) * _MIX & _MASK32
    return (h >> 16) ^ h


@jit(nopython=True, cache=True)
def coordinate_noise(x: int, y: int) -> float:
    """Deterministic value in [0, 1) for an integer pixel coordinate."""
    h = _mix32(((x & _MASK32) + _mix32(y & _MASK32)) & _MASK32)
    return (h & _MASK24) / 16777216.0


@jit(nopython=True, cache=True)
def finish_sample(r: float, g: float, b: float, x: int, y: int, amplitude: float):
    """Add the pixel's dither offset and clamp each channel at zero.

    Args:
        r, g, b: Integrated colour
        x, y: Integer screen coordinate of the sample
        amplitude: Peak-to-peak dither amplitude (0 disables)

    Returns:
        Tuple of (r, g, b), each >= 0
    """
    offset = (coordinate_noise(x, y) - 0.5) * amplitude
    return max(r + offset, 0.0), max(g + offset, 0.0), max(b + offset, 0.0)
