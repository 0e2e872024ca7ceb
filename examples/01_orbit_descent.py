#!/usr/bin/env python3
"""
Orbit Descent
=============

This example flies the camera from high orbit down through the atmosphere
shell and shows:
- How the rasterized face switches from front to back as the camera enters
- That hovering at the boundary does not flip the face every frame
- How the glow changes from a thin limb ring to a full sky

Usage:
    python 01_orbit_descent.py
    python 01_orbit_descent.py --frames 12 --width 160 --height 120
    python 01_orbit_descent.py --help

Output:
    - Console: Per-frame orientation, coverage and mean brightness
    - Graph: orbit_descent.png
"""

import argparse
import numpy as np
import sys

# Add parent directory to path for running without installation
sys.path.insert(0, '..')

try:
    from atmo_scatter.surface import create, clamp_above_surface
    from atmo_scatter.render import PinholeCamera, SoftwareRenderer, composite_additive
except ImportError:
    print("Error: atmo_scatter package not found.")
    print("Please install it first: pip install -e . (from the project root)")
    sys.exit(1)


def parse_args():
    parser = argparse.ArgumentParser(
        description="Fly the camera from orbit into the atmosphere",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # 8 frames from 200 down to 62
  %(prog)s --frames 16              # Smoother descent
  %(prog)s --no-plot                # Text output only
        """
    )
    parser.add_argument(
        "--frames", type=int, default=8,
        help="Number of frames in the descent (default: 8)"
    )
    parser.add_argument(
        "--width", type=int, default=96,
        help="Frame width in pixels (default: 96)"
    )
    parser.add_argument(
        "--height", type=int, default=72,
        help="Frame height in pixels (default: 72)"
    )
    parser.add_argument(
        "--no-plot", action="store_true",
        help="Disable plotting (text output only)"
    )
    parser.add_argument(
        "--output", type=str, default="orbit_descent.png",
        help="Output filename for the plot"
    )
    return parser.parse_args()


def main():
    args = parse_args()

    print("=" * 70)
    print("ORBIT DESCENT")
    print("=" * 70)

    surface = create(60.0, 75.0)
    renderer = SoftwareRenderer()
    sun_position = np.array([400.0, 0.0, 0.0])

    # Descend along +Z, looking at the horizon point of the planet
    distances = np.geomspace(200.0, 62.0, args.frames)
    frames = []

    print(f"\n{'Frame':>6} {'Distance':>10} {'Orientation':>12} {'Coverage':>10} {'Mean RGB':>24}")
    print("-" * 70)

    for i, distance in enumerate(distances):
        eye = clamp_above_surface([0.0, 0.0, distance], surface.planet_radius)
        camera = PinholeCamera(
            position=eye,
            target=[0.0, 60.0, 0.0] if distance < 90.0 else [0.0, 0.0, 0.0],
            width=args.width,
            height=args.height,
        )
        surface.update(camera, sun_position)
        frame = renderer.render(surface, camera)
        frames.append(composite_additive((0.0, 0.0, 0.0), frame))

        covered = frame[..., 3] > 0
        mean_rgb = frame[covered][:, :3].mean(axis=0) if covered.any() else np.zeros(3)
        print(f"{i:>6} {distance:>10.1f} {surface.orientation.value:>12} "
              f"{covered.mean() * 100:>9.1f}% {np.array2string(mean_rgb, precision=3):>24}")

    print("-" * 70)

    # Hover at the boundary: the face must not flip
    print("\nHovering between 0.995 and 1.005 x atmosphere radius...")
    before = surface.orientation
    for k in range(20):
        factor = 0.995 if k % 2 == 0 else 1.005
        surface.update([0.0, 0.0, 75.0 * factor], sun_position)
    print(f"   Orientation before: {before.value}, after: {surface.orientation.value}")

    surface.dispose()

    if not args.no_plot:
        try:
            import matplotlib.pyplot as plt

            cols = min(4, len(frames))
            rows = int(np.ceil(len(frames) / cols))
            fig, axes = plt.subplots(rows, cols, figsize=(3 * cols, 2.4 * rows), squeeze=False)
            fig.suptitle('Descent from orbit into the atmosphere', fontsize=14, fontweight='bold')
            for ax in axes.ravel():
                ax.set_axis_off()
            for ax, image, distance in zip(axes.ravel(), frames, distances):
                ax.imshow(image)
                ax.set_title(f'd = {distance:.1f}', fontsize=9)

            plt.tight_layout()
            plt.savefig(args.output, dpi=150, bbox_inches='tight')
            print(f"\nPlot saved to: {args.output}")
        except ImportError:
            print("\nNote: matplotlib not available, skipping plot")


if __name__ == "__main__":
    main()
