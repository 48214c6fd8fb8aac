from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .errors import InvalidPouchKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PouchKind:
    """Static description of a kind of essence pouch.

    Kinds are shared by reference between every tracked pouch of that kind and
    are never mutated. ``decay_exempt`` marks a kind that can never degrade,
    whatever the tracked state asks for.
    """

    name: str
    max_capacity: int
    max_degraded_capacity: int
    max_usage_before_decay: int
    decay_exempt: bool = False

    def __post_init__(self) -> None:
        if self.max_capacity < 0:
            raise InvalidPouchKind(f"{self.name}: max capacity cannot be negative")
        if not 0 <= self.max_degraded_capacity <= self.max_capacity:
            raise InvalidPouchKind(
                f"{self.name}: degraded capacity {self.max_degraded_capacity} "
                f"must be within 0..{self.max_capacity}"
            )
        if self.max_usage_before_decay < 0:
            raise InvalidPouchKind(f"{self.name}: usage before decay cannot be negative")

    @property
    def decays(self) -> bool:
        return not self.decay_exempt

    @property
    def key(self) -> str:
        """Short lookup key, e.g. ``"giant"`` for the Giant Pouch."""
        return self.name.lower().replace("pouch", "").strip()


SMALL = PouchKind("Small Pouch", 3, 3, 0, decay_exempt=True)
MEDIUM = PouchKind("Medium Pouch", 6, 3, 270)
LARGE = PouchKind("Large Pouch", 9, 7, 261)
GIANT = PouchKind("Giant Pouch", 12, 9, 120)
COLOSSAL = PouchKind("Colossal Pouch", 40, 35, 1020)

ALL_POUCHES: Tuple[PouchKind, ...] = (SMALL, MEDIUM, LARGE, GIANT, COLOSSAL)

_BY_NAME: Dict[str, PouchKind] = {}
for _kind in ALL_POUCHES:
    _BY_NAME[_kind.name.lower()] = _kind
    _BY_NAME[_kind.key] = _kind
del _kind


def find_kind(name: str) -> Optional[PouchKind]:
    """Resolve a catalog kind by display name or short key (case-insensitive)."""
    kind = _BY_NAME.get(name.strip().lower())
    if kind is None:
        logger.debug("Unknown pouch kind requested: %r", name)
    return kind


__all__ = [
    "PouchKind",
    "SMALL",
    "MEDIUM",
    "LARGE",
    "GIANT",
    "COLOSSAL",
    "ALL_POUCHES",
    "find_kind",
]
