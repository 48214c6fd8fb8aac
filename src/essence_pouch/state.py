from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .pouches import PouchKind

logger = logging.getLogger(__name__)

# Smallest positive normal double: "unknown, but not zero" fills left.
UNKNOWN_FILLS_RATIO: float = sys.float_info.min


class FillsStatus(str, Enum):
    KNOWN = "known"
    UNLIMITED = "unlimited"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FillsLeft:
    """Fills remaining before decay, with the unknown/unlimited cases made explicit."""

    status: FillsStatus
    ratio: float

    @property
    def known(self) -> bool:
        return self.status == FillsStatus.KNOWN


class PouchState:
    """
    Tracked state of a single essence pouch.

    The observer rarely sees the real contents of a pouch, so the stored amount
    and the remaining usage before decay each carry an ``unknown`` flag. While
    the stored amount is unknown, fills and empties are refused (they return 0
    and change nothing) instead of guessing from an assumed baseline.

    No operation raises. Setters accept out-of-range values, the decay budget
    is never floored and overflow beyond capacity is discarded, mirroring what
    happens to essence in game.
    """

    def __init__(
        self,
        kind: PouchKind,
        stored_essence: int = 0,
        remaining_before_decay: Optional[int] = None,
        is_degraded: bool = False,
        should_degrade: bool = True,
        unknown_stored: bool = True,
        unknown_decay: bool = True,
    ) -> None:
        self._kind = kind
        self.stored_essence = stored_essence
        self.remaining_before_decay = (
            kind.max_usage_before_decay if remaining_before_decay is None else remaining_before_decay
        )
        self.is_degraded = is_degraded
        self.should_degrade = should_degrade
        self.unknown_stored = unknown_stored
        self.unknown_decay = unknown_decay
        logger.debug("Created new pouch state: %r", self)

    @classmethod
    def with_amount(
        cls,
        kind: PouchKind,
        stored_essence: int,
        unknown_stored: bool = False,
        unknown_decay: bool = True,
    ) -> "PouchState":
        """State seeded from an observed stored amount; decay starts at the kind's maximum."""
        return cls(
            kind,
            stored_essence=stored_essence,
            unknown_stored=unknown_stored,
            unknown_decay=unknown_decay,
        )

    @classmethod
    def full(
        cls,
        kind: PouchKind,
        stored_essence: int,
        remaining_before_decay: int,
        is_degraded: bool,
        should_degrade: bool,
        unknown_stored: bool,
        unknown_decay: bool,
    ) -> "PouchState":
        return cls(
            kind,
            stored_essence=stored_essence,
            remaining_before_decay=remaining_before_decay,
            is_degraded=is_degraded,
            should_degrade=should_degrade,
            unknown_stored=unknown_stored,
            unknown_decay=unknown_decay,
        )

    @property
    def kind(self) -> PouchKind:
        return self._kind

    @property
    def should_degrade(self) -> bool:
        return self._should_degrade

    @should_degrade.setter
    def should_degrade(self, value: bool) -> None:
        # Exempt kinds never take part in decay tracking.
        self._should_degrade = bool(value) and self._kind.decays

    def __repr__(self) -> str:
        return (
            f"PouchState(kind={self._kind.name!r}, stored_essence={self.stored_essence}, "
            f"remaining_before_decay={self.remaining_before_decay}, is_degraded={self.is_degraded}, "
            f"should_degrade={self.should_degrade}, unknown_stored={self.unknown_stored}, "
            f"unknown_decay={self.unknown_decay})"
        )

    # ------------------------------------------------------------------
    # Authoritative updates
    # ------------------------------------------------------------------
    def set_stored_essence(self, stored_essence: int) -> None:
        """Overwrite the stored amount without touching the decay budget."""
        logger.debug(
            "Setting %s stored essence to %d (previously %d)",
            self._kind.name,
            stored_essence,
            self.stored_essence,
        )
        self.stored_essence = stored_essence
        self.unknown_stored = False

    def set_remaining_before_decay(self, remaining: int) -> None:
        logger.debug(
            "Setting %s remaining essence before decay to %d (previously %d)",
            self._kind.name,
            remaining,
            self.remaining_before_decay,
        )
        self.remaining_before_decay = remaining
        self.unknown_decay = False

    def repair(self) -> None:
        """Restore the full decay budget and clear the degraded state."""
        self.remaining_before_decay = self._kind.max_usage_before_decay
        self.is_degraded = False
        self.unknown_decay = False
        logger.debug(
            "Repaired %s back to %d remaining essence before decay",
            self._kind.name,
            self._kind.max_usage_before_decay,
        )

    def degrade(self) -> None:
        """Mark the pouch as degraded. Stored essence is left as observed."""
        self.is_degraded = True
        logger.debug("%s degraded; capacity now %d", self._kind.name, self.maximum_capacity())

    # ------------------------------------------------------------------
    # Inferred deposits / withdrawals
    # ------------------------------------------------------------------
    def empty(self, requested: int) -> int:
        """
        Remove up to ``requested`` essence from the pouch.

        Returns the amount actually removed, or 0 when the stored amount is
        unknown.
        """
        if self.unknown_stored:
            return 0
        previous = self.stored_essence
        removed = min(requested, self.stored_essence)
        self.stored_essence -= removed
        self.unknown_stored = False
        logger.debug(
            "Asked to remove %d essence from the %s, removed %d (%d -> %d/%d)",
            requested,
            self._kind.name,
            removed,
            previous,
            self.stored_essence,
            self.maximum_capacity(),
        )
        return removed

    def fill(self, incoming: int, ignore_decay: bool = False) -> int:
        """
        Store as much of ``incoming`` essence as fits.

        Anything beyond the available space is lost. ``ignore_decay`` skips
        the decay budget, e.g. while equipment that prevents decay is worn.
        Returns the amount stored, or 0 when the stored amount is unknown.
        """
        if self.unknown_stored:
            return 0
        stored = min(incoming, self.available_space())
        self.stored_essence += stored
        if self.should_degrade and not ignore_decay and not self.unknown_decay:
            self.remaining_before_decay -= stored
        self.unknown_stored = False
        logger.debug(
            "Given %d essence, stored %d into the %s (now %d/%d, ~%d before decay)",
            incoming,
            stored,
            self._kind.name,
            self.stored_essence,
            self.maximum_capacity(),
            self.remaining_before_decay,
        )
        return stored

    def reset_stored(self) -> None:
        self.stored_essence = 0
        self.unknown_stored = False

    def reset_decay(self) -> None:
        self.remaining_before_decay = self._kind.max_usage_before_decay
        self.unknown_decay = False

    def reset(self) -> None:
        self.reset_stored()
        self.reset_decay()
        logger.debug("Reset %s to an empty, fully repaired budget", self._kind.name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def maximum_capacity(self) -> int:
        if self.is_degraded:
            return self._kind.max_degraded_capacity
        return self._kind.max_capacity

    def available_space(self) -> int:
        """Free space in the pouch; negative if the stored amount exceeds capacity."""
        return self.maximum_capacity() - self.stored_essence

    def is_filled(self) -> bool:
        return self.stored_essence == self.maximum_capacity()

    def is_empty(self) -> bool:
        return self.stored_essence == 0

    def approximate_fills_left(self) -> float:
        """
        Ratio of the decay budget still left.

        1.0 for pouches that never decay, ``UNKNOWN_FILLS_RATIO`` when the
        budget is unknown, otherwise ``remaining / max usage`` which may be
        above 1 or below 0.
        """
        return self.fills_left().ratio

    def fills_left(self) -> FillsLeft:
        if not self.should_degrade:
            return FillsLeft(FillsStatus.UNLIMITED, 1.0)
        if self.unknown_decay:
            return FillsLeft(FillsStatus.UNKNOWN, UNKNOWN_FILLS_RATIO)
        max_usage = self._kind.max_usage_before_decay
        if max_usage == 0:
            return FillsLeft(FillsStatus.KNOWN, 0.0)
        return FillsLeft(FillsStatus.KNOWN, self.remaining_before_decay / max_usage)

    def remaining_fills(self) -> Optional[int]:
        """Estimated full fills before decay, or None when unlimited or unknown."""
        if not self.should_degrade or self.unknown_decay:
            return None
        capacity = self.maximum_capacity()
        if capacity <= 0:
            return None
        if self.remaining_before_decay <= 0:
            return 0
        return -(-self.remaining_before_decay // capacity)

    def summary(self) -> str:
        stored = "?" if self.unknown_stored else str(self.stored_essence)
        text = f"{self._kind.name}: {stored}/{self.maximum_capacity()}"
        if self.is_degraded:
            text += " (degraded)"
        if not self.should_degrade:
            return text
        remaining = "?" if self.unknown_decay else str(self.remaining_before_decay)
        return f"{text} (~{remaining} before decay)"


__all__ = [
    "FillsLeft",
    "FillsStatus",
    "PouchState",
    "UNKNOWN_FILLS_RATIO",
]
