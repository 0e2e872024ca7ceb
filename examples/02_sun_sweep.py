#!/usr/bin/env python3
"""
Sun Sweep
=========

This example keeps the camera in orbit and moves the sun around the planet:
- Sun behind the camera: a bright, blue-dominated disc rim
- Sun at 90 degrees: a terminator splits the glow
- Sun behind the planet: a thin forward-scattering ring (Mie halo)

Usage:
    python 02_sun_sweep.py
    python 02_sun_sweep.py --angles 0 45 90 135 180
    python 02_sun_sweep.py --help

Output:
    - Console: Lit fraction and channel balance per sun angle
    - Graph: sun_sweep.png
"""

import argparse
import numpy as np
import sys

# Add parent directory to path for running without installation
sys.path.insert(0, '..')

try:
    from atmo_scatter.surface import create
    from atmo_scatter.render import PinholeCamera, SoftwareRenderer, composite_additive
except ImportError:
    print("Error: atmo_scatter package not found.")
    print("Please install it first: pip install -e . (from the project root)")
    sys.exit(1)


def parse_args():
    parser = argparse.ArgumentParser(
        description="Sweep the sun around the planet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--angles", type=float, nargs="+", default=[0.0, 60.0, 90.0, 120.0, 180.0],
        help="Sun angles from the camera axis in degrees"
    )
    parser.add_argument(
        "--size", type=int, default=96,
        help="Square frame size in pixels (default: 96)"
    )
    parser.add_argument(
        "--no-plot", action="store_true",
        help="Disable plotting (text output only)"
    )
    parser.add_argument(
        "--output", type=str, default="sun_sweep.png",
        help="Output filename for the plot"
    )
    return parser.parse_args()


def main():
    args = parse_args()

    print("=" * 70)
    print("SUN SWEEP")
    print("=" * 70)

    surface = create(60.0, 75.0)
    renderer = SoftwareRenderer()
    camera = PinholeCamera(position=[0.0, 0.0, 200.0], width=args.size, height=args.size, fov_deg=50.0)

    images = []
    print(f"\n{'Angle':>8} {'Lit %':>8} {'R':>10} {'G':>10} {'B':>10} {'B/R':>8}")
    print("-" * 60)

    for angle in args.angles:
        theta = np.radians(angle)
        sun_position = 400.0 * np.array([np.sin(theta), 0.0, np.cos(theta)])
        surface.update(camera, sun_position)

        frame = renderer.render(surface, camera)
        images.append(composite_additive((0.0, 0.0, 0.0), frame))

        covered = frame[..., 3] > 0
        rgb = frame[covered][:, :3]
        lit = (rgb.sum(axis=1) > 2.0 / 255.0).mean() * 100 if len(rgb) else 0.0
        totals = rgb.sum(axis=0) if len(rgb) else np.zeros(3)
        ratio = totals[2] / totals[0] if totals[0] > 0 else float('nan')
        print(f"{angle:>8.0f} {lit:>8.1f} {totals[0]:>10.3f} {totals[1]:>10.3f} "
              f"{totals[2]:>10.3f} {ratio:>8.2f}")

    print("-" * 60)
    print("\n   Blue dominates where sunlight reaches the limb directly;")
    print("   the forward-scattered halo is whiter because Mie scattering is grey.")

    surface.dispose()

    if not args.no_plot:
        try:
            import matplotlib.pyplot as plt

            fig, axes = plt.subplots(1, len(images), figsize=(3 * len(images), 3.2), squeeze=False)
            for ax, image, angle in zip(axes[0], images, args.angles):
                ax.imshow(image)
                ax.set_axis_off()
                ax.set_title(f'Sun at {angle:.0f} deg', fontsize=9)

            plt.tight_layout()
            plt.savefig(args.output, dpi=150, bbox_inches='tight')
            print(f"\nPlot saved to: {args.output}")
        except ImportError:
            print("\nNote: matplotlib not available, skipping plot")


if __name__ == "__main__":
    main()
