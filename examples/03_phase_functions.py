#!/usr/bin/env python3
"""
Phase Function Comparison
=========================

Plots the Rayleigh phase function against Cornette-Shanks Mie phase functions
for several asymmetry parameters, and checks their normalization over the
sphere.

Usage:
    python 03_phase_functions.py
    python 03_phase_functions.py --g 0.2 0.76 0.95

Output:
    - Console: Forward/backward ratios and sphere integrals
    - Graph: phase_functions.png
"""

import argparse
import numpy as np
import sys

# Add parent directory to path for running without installation
sys.path.insert(0, '..')

try:
    from atmo_scatter.core import rayleigh_phase, mie_phase
    from atmo_scatter.visualization import plot_phase_functions
except ImportError:
    print("Error: atmo_scatter package not found.")
    print("Please install it first: pip install -e . (from the project root)")
    sys.exit(1)


def sphere_integral(phase, n=20000):
    mu = -1.0 + (np.arange(n) + 0.5) * (2.0 / n)
    return 2.0 * np.pi * sum(phase(m) for m in mu) * (2.0 / n)


def main():
    parser = argparse.ArgumentParser(description="Compare Rayleigh and Mie phase functions")
    parser.add_argument("--g", type=float, nargs="+", default=[0.0, 0.5, 0.76],
                        help="Mie asymmetry parameters")
    parser.add_argument("--output", type=str, default="phase_functions.png",
                        help="Output filename for the plot")
    args = parser.parse_args()

    print("=" * 60)
    print("PHASE FUNCTIONS")
    print("=" * 60)

    print(f"\n{'Function':>14} {'P(0 deg)':>10} {'P(180 deg)':>11} {'Ratio':>10} {'Integral':>10}")
    print("-" * 60)
    print(f"{'Rayleigh':>14} {rayleigh_phase(1.0):>10.4f} {rayleigh_phase(-1.0):>11.4f} "
          f"{rayleigh_phase(1.0) / rayleigh_phase(-1.0):>10.2f} {sphere_integral(rayleigh_phase):>10.4f}")
    for g in args.g:
        forward = mie_phase(1.0, g)
        backward = mie_phase(-1.0, g)
        integral = sphere_integral(lambda mu: mie_phase(mu, g))
        print(f"{'Mie g=' + format(g, '.2f'):>14} {forward:>10.4f} {backward:>11.4f} "
              f"{forward / backward:>10.2f} {integral:>10.4f}")

    import matplotlib.pyplot as plt

    ax = plot_phase_functions(args.g)
    ax.figure.savefig(args.output, dpi=150, bbox_inches='tight')
    plt.close(ax.figure)
    print(f"\nPlot saved to: {args.output}")


if __name__ == "__main__":
    main()
