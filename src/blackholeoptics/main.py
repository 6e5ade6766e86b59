"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the command line and sets up logging.
2. Instantiates the Engine State (model).
3. Instantiates the Main Window (view), which owns the interaction controller.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from blackholeoptics import __version__, config
from blackholeoptics.logging_config import setup_logging
from blackholeoptics.model.state import EngineState
from blackholeoptics.model.viewport import Viewport

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blackholeoptics",
        description="Interactive light paths around a black hole.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: ${config.LOG_LEVEL_ENV} or INFO).",
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    parser.add_argument("--trace-solver", action="store_true", help="Log every traced ray (with --log-level DEBUG).")
    parser.add_argument("--gravity", action="store_true", help="Start with gravitation enabled.")
    parser.add_argument("--width", type=int, default=config.DEFAULT_CANVAS_WIDTH, help="Initial canvas width in pixels.")
    parser.add_argument("--height", type=int, default=config.DEFAULT_CANVAS_HEIGHT, help="Initial canvas height in pixels.")
    return parser


def create_state(args: argparse.Namespace) -> EngineState:
    """Build the initial engine state from parsed arguments."""
    state = EngineState(viewport=Viewport(width=args.width, height=args.height))
    state.gravity_enabled = args.gravity
    return state


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file, trace_solver=args.trace_solver)

    # Qt is imported late so --help and --version work without a display
    from PySide6.QtWidgets import QApplication
    from blackholeoptics.view.main_window import MainWindow, VISIBLE_APP_NAME

    app = QApplication(sys.argv[:1])
    app.setApplicationName(VISIBLE_APP_NAME)

    state = create_state(args)
    window = MainWindow(state)
    window.resize(args.width + 240, args.height)
    window.show()
    logger.info("Window shown, canvas %dx%d.", args.width, args.height)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
