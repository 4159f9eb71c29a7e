#!/usr/bin/env python3
"""
OrbitView - Interactive Orbit Visualizer

Command-line entry point for viewing a single elliptical orbit, either in
an interactive window or as a headless trace of satellite positions.

Usage:
    python main.py                                  # Default orbit (a=2, e=0.6, i=40°)
    python main.py -a 3 -e 0.2 -i 60 --raan 45      # Custom initial elements
    python main.py --motion keplerian               # Areal-velocity-conserving motion
    python main.py --headless --duration 10         # Print a satellite trace
    python main.py --help                           # Show all options
"""

import argparse
import logging
import math
import sys
from typing import List, Optional


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interactive 3D Orbit Visualizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                    # Default orbit
  %(prog)s -a 4 -e 0.3 -i 90                  # Polar orbit
  %(prog)s --raan 120 --speed 1.5             # Rotated node, faster satellite
  %(prog)s --headless --duration 7 --timestep 0.5

Controls (visualization mode):
  Mouse drag / arrows : Rotate camera
  Wheel / +/-         : Zoom in/out
  Sliders             : Change orbital elements
  [ ]                 : Decrease/increase time scale
  SPACE               : Pause/Resume
  K                   : Toggle Keplerian motion
  L                   : Toggle labels
  R                   : Reset satellite
  ESC                 : Quit
        """,
    )

    # -------------------------------------------------------------------------
    # Orbital elements
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--semi-major-axis",
        "-a",
        type=float,
        default=2.0,
        help="Semi-major axis in sphere radii (default: 2, range 0.5-6)",
    )
    parser.add_argument(
        "--eccentricity",
        "-e",
        type=float,
        default=0.6,
        help="Eccentricity (default: 0.6, range 0-0.9)",
    )
    parser.add_argument(
        "--inclination",
        "-i",
        type=float,
        default=40.0,
        help="Inclination in degrees (default: 40, range 0-180)",
    )
    parser.add_argument(
        "--raan",
        type=float,
        default=0.0,
        help="Right ascension of ascending node in degrees (default: 0)",
    )

    # -------------------------------------------------------------------------
    # Satellite motion
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--speed",
        type=float,
        default=0.9,
        help="Satellite angular speed in rad/s (default: 0.9)",
    )
    parser.add_argument(
        "--motion",
        type=str,
        choices=["constant_rate", "keplerian"],
        default="constant_rate",
        help="How the satellite advances: constant true-anomaly rate or "
             "Kepler's equation (default: constant_rate)",
    )
    parser.add_argument(
        "--time-scale",
        type=float,
        default=1.0,
        help="Time scale multiplier (default: 1)",
    )
    parser.add_argument(
        "--segments",
        type=int,
        default=256,
        help="Number of segments used to draw the orbit (default: 256)",
    )
    parser.add_argument(
        "--no-labels",
        action="store_true",
        help="Start with scene labels hidden",
    )

    # -------------------------------------------------------------------------
    # Headless mode
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print a satellite trace instead of opening a window",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=2 * math.pi / 0.9,
        help="Trace duration in seconds for headless mode (default: one lap)",
    )
    parser.add_argument(
        "--timestep",
        type=float,
        default=0.5,
        help="Trace timestep in seconds for headless mode (default: 0.5)",
    )

    # -------------------------------------------------------------------------
    # Window settings
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--width",
        type=int,
        default=1000,
        help="Window width in pixels (default: 1000)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=800,
        help="Window height in pixels (default: 800)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def build_config(args: argparse.Namespace):
    """Turn parsed arguments into an OrbitConfig, clamping the elements."""
    from orbit_model import ElementBounds, MotionMode, OrbitConfig

    if args.segments < 1:
        raise ValueError("Segment count must be at least 1")
    if args.speed < 0:
        raise ValueError("Speed must be non-negative")
    if args.time_scale <= 0:
        raise ValueError("Time scale must be positive")
    if args.timestep <= 0:
        raise ValueError("Timestep must be positive")

    bounds = ElementBounds()
    requested = {
        "semi_major_axis": args.semi_major_axis,
        "eccentricity": args.eccentricity,
        "inclination_deg": args.inclination,
        "raan_deg": args.raan,
    }
    for name, value in requested.items():
        clamped = bounds.clamp(name, value)
        if clamped != value:
            logger.warning(f"{name}={value} out of range, using {clamped}")

    return OrbitConfig(
        elements=bounds.clamp_elements(**requested),
        segment_count=args.segments,
        angular_speed=args.speed,
        motion_mode=MotionMode(args.motion),
        time_scale=args.time_scale,
        bounds=bounds,
        labels_visible=not args.no_labels,
    )


def run_headless(context, duration: float, timestep: float) -> int:
    """
    Step the scene without a window and print the satellite trace.

    Returns
    -------
    int
        Number of steps executed
    """
    if timestep <= 0:
        raise ValueError("Timestep must be positive")

    print(f"\n{'=' * 60}")
    print(f"Headless trace for {duration:.2f} seconds, timestep {timestep:.2f} s")
    print(f"{'=' * 60}")
    print(f"{'t (s)':>8} {'nu (deg)':>9} {'r':>7} {'x':>8} {'y':>8} {'z':>8}")

    elapsed = 0.0
    steps = 0
    r_min = math.inf
    r_max = 0.0

    while elapsed < duration - 1e-9:
        dt = min(timestep, duration - elapsed)
        position = context.step(dt)
        elapsed += dt
        steps += 1

        nu = context.clock.true_anomaly
        r = float((position ** 2).sum() ** 0.5)
        r_min = min(r_min, r)
        r_max = max(r_max, r)
        print(
            f"{elapsed:8.2f} {math.degrees(nu):9.2f} {r:7.3f} "
            f"{position[0]:8.3f} {position[1]:8.3f} {position[2]:8.3f}"
        )

    print(f"\n{'=' * 60}")
    print("Trace Complete!")
    print(f"{'=' * 60}")
    print(f"Steps executed: {steps}")
    if steps:
        print(f"Radius range seen: {r_min:.3f} - {r_max:.3f}")

    return steps


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    # -------------------------------------------------------------------------
    # Build the scene
    # -------------------------------------------------------------------------
    from orbit_model import SceneContext

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    context = SceneContext(config)
    elements = context.elements

    # -------------------------------------------------------------------------
    # Print configuration summary
    # -------------------------------------------------------------------------
    print("=" * 60)
    print("OrbitView - Interactive Orbit Visualizer")
    print("=" * 60)
    print(f"\nSemi-major axis: {elements.semi_major_axis:.2f}")
    print(f"Eccentricity: {elements.eccentricity:.2f}")
    print(f"Inclination: {elements.inclination_deg:.1f}°")
    print(f"RAAN: {elements.raan_deg:.1f}°")
    print(f"Periapsis / Apoapsis: {elements.periapsis_distance:.3f} / "
          f"{elements.apoapsis_distance:.3f}")
    print(f"\nMotion: {config.motion_mode.value} at {config.angular_speed} rad/s")

    if args.headless:
        run_headless(context, args.duration, args.timestep)
        return 0

    try:
        from visualization import Visualizer
    except ImportError as e:
        print(f"\nError: Could not import visualization module: {e}")
        print("Try running with --headless flag for a trace without graphics.")
        sys.exit(1)

    print(f"\n{'=' * 60}")
    print("Starting Visualization")
    print(f"{'=' * 60}")
    print()

    visualizer = Visualizer(context, width=args.width, height=args.height)
    visualizer.run()
    return 0


if __name__ == "__main__":
    main()
