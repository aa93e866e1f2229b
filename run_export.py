#!/usr/bin/env python3
"""
StickFigure SVG Export

Poses the default humanoid and writes one view as an SVG document.

Usage:
    python run_export.py --view front --output front.svg
    python run_export.py --pose poses/wave.yaml --view side

Pose files map joint names to (x, y, z) rotations in degrees:

    left_lower_leg: [0, 45, 0]
    back: [0, 20, 0]
"""

import argparse
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent))

from stickfigure.config import StickFigureConfig, PoseConfig
from stickfigure.errors import StickFigureError
from stickfigure.figure import StickFigure
from stickfigure.utils.logging import export_log, set_log_level


def main():
    parser = argparse.ArgumentParser(description="Export the stick figure to SVG")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to config.yaml (defaults to ~/.stickfigure/config.yaml)"
    )
    parser.add_argument(
        "--view", "-v",
        default=None,
        help="View to export (defaults to the first configured view)"
    )
    parser.add_argument(
        "--pose", "-p",
        type=Path,
        default=None,
        help="YAML pose file (joint -> [x, y, z] degrees)"
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output file (prints to stdout if omitted)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    config = StickFigureConfig.load(args.config)
    if args.output is None:
        # Log lines share stdout with the markup
        set_log_level("ERROR")
    else:
        set_log_level("DEBUG" if args.debug else config.log_level)

    view_name = args.view or config.views[0].name
    try:
        config.get_view(view_name)
    except KeyError as e:
        export_log.error(str(e))
        return 1

    figure = StickFigure.from_config(config)

    if args.pose is not None:
        pose = PoseConfig.load(args.pose)
        try:
            figure.apply_pose(pose.rotations, degrees=True)
        except (KeyError, StickFigureError) as e:
            export_log.error(f"Invalid pose {args.pose}: {e}")
            return 1

    markup = figure.export_svg(view_name)

    if args.output is None:
        sys.stdout.write(markup)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(markup)
        export_log.info(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
