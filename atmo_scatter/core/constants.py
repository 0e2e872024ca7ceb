"""
Reference constants for the atmosphere model.

Scene units are arbitrary world units (the reference planet is 60 units in
radius). Coefficients are per world unit.
"""

# =============================================================================
# Reference Planet
# =============================================================================

PLANET_RADIUS = 60.0
ATMOSPHERE_RADIUS = 75.0

# =============================================================================
# Scattering Coefficients
# =============================================================================

# Rayleigh scattering per RGB channel (blue scatters most)
RAYLEIGH_COEFFICIENT = (0.005, 0.012, 0.030)

# Mie scattering, wavelength independent
MIE_COEFFICIENT = 0.01

# Henyey-Greenstein asymmetry (forward scattering lobe)
MIE_ASYMMETRY = 0.76

SUN_INTENSITY = 15.0

# Exponential density falloff heights
RAYLEIGH_SCALE_HEIGHT = 5.0
MIE_SCALE_HEIGHT = 2.0

# =============================================================================
# Integration
# =============================================================================

VIEW_SAMPLES = 8
LIGHT_SAMPLES = 4

# Ray parameter reported for both roots when a ray misses a sphere
NO_HIT = -1.0

# 3 / (16 pi)
RAYLEIGH_PHASE_FACTOR = 0.0596831

# 3 / (8 pi)
MIE_PHASE_FACTOR = 0.1193662
MIE_PHASE_EXPONENT = 1.5

# One 8-bit quantization step
DITHER_AMPLITUDE = 1.0 / 255.0

# =============================================================================
# Surface Object
# =============================================================================

# Orientation hysteresis, as fractions of the atmosphere radius
HYSTERESIS_EXIT = 1.01
HYSTERESIS_ENTER = 0.99

SPHERE_WIDTH_SEGMENTS = 64
SPHERE_HEIGHT_SEGMENTS = 32

# Drawn before other transparent objects
RENDER_ORDER = -1

# Minimum camera altitude hosts keep above the planet surface
MIN_CAMERA_ALTITUDE = 0.01
