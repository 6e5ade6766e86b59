"""
Logging Configuration
Sets up the package logger for the engine and the Qt host.

The level comes from the command line when given, else from the
BLACKHOLEOPTICS_LOG_LEVEL environment variable (see ``config.get_log_level``).
Solver tracing is logged at DEBUG for every ray and repaint, so it is routed to
its own logger that stays at INFO unless the solver trace is requested.
"""
import logging
import sys
from typing import Optional, Union

from blackholeoptics import config

PACKAGE_LOGGER = "blackholeoptics"
SOLVER_LOGGER = "blackholeoptics.model.geodesic"


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name or number into a logging level; None reads the environment."""
    if level is None:
        return config.get_log_level()
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    trace_solver: bool = False,
) -> logging.Logger:
    """
    Configures the logger for the 'blackholeoptics' namespace.

    Args:
        level: Logging level as a number or name ("DEBUG", "info", ...).
            None uses the environment, defaulting to INFO.
        log_file: Optional path to save logs to a file.
        trace_solver: Also emit the per-ray DEBUG lines of the geodesic solver.

    Returns:
        The configured package logger.
    """
    level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # setup_logging may run again in the same process (tests, re-launch)
    if logger.hasHandlers():
        logger.handlers.clear()

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    solver_level = level if trace_solver else max(level, logging.INFO)
    logging.getLogger(SOLVER_LOGGER).setLevel(solver_level)

    logger.info("Logging initialized at %s.", logging.getLevelName(level))
    return logger
