"""Score sheet line items and the per-side ledger of a game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .deal import Deal


class BonusKind(Enum):
    CONTRACT = "Contract"
    OVERTRICKS = "Overtricks"
    SLAM = "Slam bonus"
    INSULT = "Insult bonus"
    UNDERTRICKS = "Undertricks"
    HONORS = "Honors"
    RUBBER = "Rubber bonus"
    UNFINISHED_GAME = "Unfinished rubber game"
    PART_SCORE = "Unfinished rubber part score"

    @property
    def title(self) -> str:
        return self.value


@dataclass(frozen=True)
class LineItem:
    """Points awarded to one side, traced back to the deal that earned them."""

    points: int
    kind: BonusKind
    deal: Deal
    vulnerable: bool = False


@dataclass
class GameSide:
    below: List[LineItem] = field(default_factory=list)
    above: List[LineItem] = field(default_factory=list)

    def add_below(self, item: LineItem) -> None:
        self.below.append(item)

    def add_above(self, item: LineItem) -> None:
        self.above.append(item)

    def contract_points(self) -> int:
        return sum(item.points for item in self.below)

    def bonus_points(self) -> int:
        return sum(item.points for item in self.above)

    def total_points(self) -> int:
        return self.contract_points() + self.bonus_points()

    def items(self) -> List[LineItem]:
        return self.below + self.above
