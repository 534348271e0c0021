"""Logging configuration.

Engine modules log through ``logging.getLogger(__name__)`` or ``get_logger``
and never install handlers themselves. Entry points call
``configure_logging`` once; the level comes from ``LOG_LEVEL`` (see
``core.config``) unless given explicitly.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from ..core.config import get_config

formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    global _handler
    name = (level or get_config().log_level).upper()
    log_level = getattr(logging, name, logging.WARNING)
    root = logging.getLogger("seedmarket")
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(formatter)
        root.addHandler(_handler)
    _handler.setLevel(log_level)
    root.setLevel(log_level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Child of the ``seedmarket`` logger; ``name`` may already carry the prefix."""
    if name != "seedmarket" and not name.startswith("seedmarket."):
        name = f"seedmarket.{name}"
    return logging.getLogger(name)
