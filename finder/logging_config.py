"""Logging configuration for shodh."""
import logging
import sys


def setup_logging(level: str = "WARNING") -> None:
    """Configure application-wide logging.

    Call once from the CLI entry point. Repeated calls only adjust the level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if root.handlers:
        return

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Results go to stdout, so logs stay on stderr
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    root.addHandler(console)
