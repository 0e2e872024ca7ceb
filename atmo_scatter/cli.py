"""
Command-line interface for atmo-scatter.

Renders one frame of the atmosphere shell with the software renderer and
writes it to a PNG file.
"""

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from atmo_scatter import __version__


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_config(args: argparse.Namespace):
    """Scene configuration from the config file and command-line overrides."""
    from atmo_scatter.config import SceneConfig, load_config

    config = load_config(args.config) if args.config else SceneConfig()
    config_dict = config.to_dict()

    if args.camera_distance is not None:
        # Keep the viewing direction, move along it
        position = np.asarray(config_dict["camera"]["position"], dtype=float)
        target = np.asarray(config_dict["camera"]["target"], dtype=float)
        offset = position - target
        norm = np.linalg.norm(offset)
        direction = offset / norm if norm > 0 else np.array([0.0, 0.0, 1.0])
        config_dict["camera"]["position"] = list(target + direction * args.camera_distance)
    if args.sun is not None:
        config_dict["sun"]["position"] = list(args.sun)
    if args.fov is not None:
        config_dict["camera"]["fov_deg"] = args.fov
    if args.width is not None:
        config_dict["render"]["width"] = args.width
    if args.height is not None:
        config_dict["render"]["height"] = args.height
    if args.no_dither:
        config_dict["render"]["dither"] = False
    if args.threads is not None:
        config_dict["render"]["num_threads"] = args.threads
    if args.background is not None:
        config_dict["render"]["background"] = list(args.background)
    if args.output:
        config_dict["render"]["output_path"] = args.output

    return load_config(config_dict)


def render_frame(args: argparse.Namespace) -> int:
    """Render a single frame to PNG."""
    from atmo_scatter.render import SoftwareRenderer, composite_additive
    from atmo_scatter.surface import create, clamp_above_surface
    from atmo_scatter.visualization import save_frame

    config = build_config(args)
    params = config.atmosphere.to_parameters()

    surface = create(params.planet_radius, params.atmosphere_radius, params)
    try:
        camera = config.build_camera()
        camera.position = clamp_above_surface(camera.position, surface.planet_radius)

        surface.update(camera, config.sun.position)
        print(f"Rendering {camera.width}x{camera.height} frame "
              f"(camera {surface.orientation.value} the atmosphere)...")

        renderer = SoftwareRenderer(
            dither=config.render.dither,
            num_threads=config.render.num_threads,
        )
        frame = renderer.render(surface, camera)
        image = composite_additive(config.render.background, frame)
    finally:
        surface.dispose()

    output_path = save_frame(image, config.render.output_path)
    coverage = float(frame[..., 3].mean())
    print(f"Frame saved to: {output_path}")
    print(f"  Coverage: {coverage * 100:.1f}% of pixels")
    print(f"  Peak RGB: {frame[..., :3].max(axis=(0, 1)).round(4).tolist()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="atmo-scatter: render a single-scattering planetary atmosphere",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Reference scene seen from orbit
    atmo-scatter --output orbit.png

    # Camera inside the shell, sun behind the planet
    atmo-scatter --camera-distance 70 --sun -400 0 0 --output dusk.png

    # Scene from a config file
    atmo-scatter --config scene.yaml --width 1280 --height 720
        """,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"atmo-scatter {__version__}",
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to JSON or YAML scene configuration",
    )

    # Scene options
    parser.add_argument(
        "--camera-distance",
        type=float,
        help="Camera distance from the look-at target",
    )
    parser.add_argument(
        "--sun",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        help="Sun world position",
    )
    parser.add_argument(
        "--fov",
        type=float,
        help="Vertical field of view [degrees]",
    )

    # Render options
    parser.add_argument(
        "--width",
        type=int,
        help="Image width [pixels]",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Image height [pixels]",
    )
    parser.add_argument(
        "--no-dither",
        action="store_true",
        help="Disable the screen-space dither",
    )
    parser.add_argument(
        "--threads",
        type=int,
        help="Number of numba worker threads",
    )
    parser.add_argument(
        "--background",
        type=float,
        nargs=3,
        metavar=("R", "G", "B"),
        help="Background colour in [0, 1]",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        help="Output PNG path",
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return render_frame(args)
    except Exception as e:
        logging.exception(f"Rendering failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
