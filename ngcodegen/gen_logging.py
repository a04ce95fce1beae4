"""Loggers for the generator.

All module loggers hang off ``ngcodegen``; the surrounding CLI calls
``configure_gen_logging`` once to decide what reaches stderr.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "ngcodegen"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


class _GenHandler(logging.StreamHandler):
    """The stderr handler installed by ``configure_gen_logging``."""


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger ``ngcodegen.<last part of name>``, or the root one."""
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name.rsplit('.', 1)[-1]}")


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route ``ngcodegen`` records to stderr at DEBUG, WARNING or (default) INFO."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    if not any(isinstance(h, _GenHandler) for h in root.handlers):
        handler = _GenHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
