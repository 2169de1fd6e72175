# universe_rag/logging/logger.py
"""
Logging helpers.

Modules grab a named logger with get_logger(__name__). Only the CLI
installs a handler, through configure_logging(verbose=...).
"""

import logging
import sys


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("universe_rag").setLevel(level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
