#!/usr/bin/env python3
"""
StickFigure GUI Application

Main entry point for the interactive poser.

Usage:
    python run_gui.py [options]

Shows the figure from every configured view and exposes one slider per
pose control (spin, torso, knees, elbows).
"""

import argparse
import sys
from pathlib import Path

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent))

from stickfigure.config import StickFigureConfig
from stickfigure.gui.app import StickFigureApp
from stickfigure.utils.logging import gui_log, set_log_level


def main():
    parser = argparse.ArgumentParser(description="StickFigure interactive poser")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to config.yaml (defaults to ~/.stickfigure/config.yaml)"
    )
    parser.add_argument("--width", type=int, default=1280, help="Window width")
    parser.add_argument("--height", type=int, default=720, help="Window height")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    config = StickFigureConfig.load(args.config)
    set_log_level("DEBUG" if args.debug else config.log_level)

    gui_log.info(f"Starting with views: {[v.name for v in config.views]}")
    app = StickFigureApp(config, width=args.width, height=args.height)
    try:
        app.run()
    except KeyboardInterrupt:
        gui_log.info("Interrupted")
        app.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
