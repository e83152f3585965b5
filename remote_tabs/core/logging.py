"""Centralized logging configuration."""
import logging
import sys
from typing import TextIO


def setup_logging(level: str = "INFO", stream: TextIO = sys.stderr) -> None:
    """Configure logging for the application.

    Logs go to stderr by default because stdout carries the MCP stdio
    protocol.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Stream the handler writes to.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(stream)],
        force=True,
    )
