"""Outcome of a single played deal."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .contract import Contract, Trump

MIN_TRICKS = 0
MAX_TRICKS = 13


class InvalidDeal(ValueError):
    """Raised when deal fields are out of range or inconsistent."""


class Side(Enum):
    NORTH_SOUTH = "NS"
    EAST_WEST = "EW"

    def __str__(self) -> str:
        return self.value


class Honors(Enum):
    PARTIAL = "H"  # four of the five trump honors in one hand
    FULL = "FH"  # all five trump honors, or all four aces at no-trump

    def __str__(self) -> str:
        return self.value


def other_side(side: Side) -> Side:
    return Side.EAST_WEST if side is Side.NORTH_SOUTH else Side.NORTH_SOUTH


@dataclass(frozen=True, eq=False)
class Deal:
    """Immutable record of a played hand.

    Deals compare by identity: two hands with the same outcome are still two
    separate entries on the score sheet.
    """

    declarer: Side
    contract: Contract
    tricks_won: int
    honors: Mapping[Side, Honors] = field(default_factory=dict)
    is_last: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.declarer, Side):
            raise InvalidDeal(f"Declarer must be a Side. Got {self.declarer!r}")
        if not isinstance(self.contract, Contract):
            raise InvalidDeal(f"Contract must be a Contract. Got {self.contract!r}")
        if isinstance(self.tricks_won, bool) or not isinstance(self.tricks_won, int):
            raise InvalidDeal(f"Tricks won must be an integer. Got {self.tricks_won!r}")
        if not MIN_TRICKS <= self.tricks_won <= MAX_TRICKS:
            raise InvalidDeal(f"Tricks won must be {MIN_TRICKS}-{MAX_TRICKS}. Got {self.tricks_won}")

        honors: Dict[Side, Honors] = {}
        for side, grade in dict(self.honors).items():
            if grade is None:
                continue
            if not isinstance(side, Side) or not isinstance(grade, Honors):
                raise InvalidDeal(f"Honors must map Side to Honors. Got {side!r}: {grade!r}")
            honors[side] = grade
        if len(honors) > 1:
            raise InvalidDeal("Only one side can hold honors in a deal.")
        if self.contract.trump is Trump.NO_TRUMP and Honors.PARTIAL in honors.values():
            raise InvalidDeal("Partial honors do not exist at no-trump; only all four aces count.")
        object.__setattr__(self, "honors", MappingProxyType(honors))

    @property
    def defender(self) -> Side:
        return other_side(self.declarer)

    def won(self) -> bool:
        return self.tricks_won >= self.contract.tricks_required()

    def overtricks(self) -> int:
        return max(0, self.tricks_won - self.contract.tricks_required())

    def undertricks(self) -> int:
        return max(0, self.contract.tricks_required() - self.tricks_won)

    def honors_for(self, side: Side) -> Optional[Honors]:
        return self.honors.get(side)

    def as_last(self) -> "Deal":
        """Return a copy of this deal flagged as the final deal of the rubber."""
        return replace(self, is_last=True)
