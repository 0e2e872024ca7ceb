"""
Atmosphere Visualization
========================

Helpers for writing rendered frames to disk and plotting frames and phase
functions.

Plotting functions return matplotlib axis objects for flexibility.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from atmo_scatter.core.constants import MIE_ASYMMETRY
from atmo_scatter.core.phase import rayleigh_phase, mie_phase

logger = logging.getLogger(__name__)


def _as_rgb(image: np.ndarray) -> np.ndarray:
    image = np.asarray(image, dtype=np.float64)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"expected an (H, W, 3) or (H, W, 4) image, got shape {image.shape}")
    if image.shape[2] == 4:
        # RGBA frame straight from the renderer: composite over black
        image = image[..., :3] * image[..., 3:4]
    return np.clip(image, 0.0, 1.0)


def save_frame(image: np.ndarray, path: str) -> str:
    """
    Write an image to a PNG file.

    Parameters
    ----------
    image : ndarray
        RGB image of shape (H, W, 3), or an RGBA frame of shape (H, W, 4)
        which is composited over black
    path : str
        Output file path

    Returns
    -------
    path : str
    """
    import matplotlib.pyplot as plt

    plt.imsave(path, _as_rgb(image))
    logger.info(f"Saved frame to {path}")
    return path


def plot_frame(image: np.ndarray, ax=None, title: Optional[str] = None):
    """
    Show a rendered frame.

    Parameters
    ----------
    image : ndarray
        RGB image (H, W, 3) or RGBA frame (H, W, 4)
    ax : matplotlib axis, optional
    title : str, optional
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    ax.imshow(_as_rgb(image), origin='upper', interpolation='nearest')
    ax.set_axis_off()
    if title:
        ax.set_title(title)
    return ax


def plot_phase_functions(
    g_values: Sequence[float] = (0.0, 0.5, MIE_ASYMMETRY),
    ax=None,
    num_points: int = 361,
):
    """
    Plot the Rayleigh phase function and Mie phase functions against angle.

    Parameters
    ----------
    g_values : sequence of float
        Mie asymmetry parameters to plot
    ax : matplotlib axis, optional
    num_points : int
        Number of scattering angles between 0 and 180 degrees
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    angles = np.linspace(0.0, 180.0, num_points)
    cos_theta = np.cos(np.radians(angles))

    ax.plot(angles, [rayleigh_phase(c) for c in cos_theta], 'k-', linewidth=2, label='Rayleigh')
    for g in g_values:
        ax.plot(angles, [mie_phase(c, g) for c in cos_theta], linewidth=1.5, label=f'Mie (g={g:.2f})')

    ax.set_yscale('log')
    ax.set_xlabel('Scattering Angle (degrees)')
    ax.set_ylabel('Phase Function (1/sr)')
    ax.set_title('Rayleigh and Mie Phase Functions')
    ax.set_xlim(0, 180)
    ax.legend(fontsize=9)
    ax.grid(True, which='both', alpha=0.3)
    return ax
