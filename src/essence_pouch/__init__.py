"""Essence pouch state tracking under partial observation."""

import logging

from .errors import ConfigError, EssencePouchError, InvalidPouchKind
from .pouches import ALL_POUCHES, COLOSSAL, GIANT, LARGE, MEDIUM, SMALL, PouchKind, find_kind
from .state import UNKNOWN_FILLS_RATIO, FillsLeft, FillsStatus, PouchState

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ALL_POUCHES",
    "COLOSSAL",
    "ConfigError",
    "EssencePouchError",
    "FillsLeft",
    "FillsStatus",
    "GIANT",
    "InvalidPouchKind",
    "LARGE",
    "MEDIUM",
    "PouchKind",
    "PouchState",
    "SMALL",
    "UNKNOWN_FILLS_RATIO",
    "find_kind",
    "__version__",
]
