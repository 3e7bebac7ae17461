"""A single game within a rubber."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .deal import Deal, Side
from .ledger import BonusKind, GameSide, LineItem
from .rules_schema import DEFAULT_RULES, ScoringRules
from .scoring import score_deal

logger = logging.getLogger(__name__)


@dataclass
class Game:
    """One game: a ledger per side, completed once a side reaches the game threshold."""

    rules: ScoringRules = field(default_factory=lambda: DEFAULT_RULES)
    sides: Dict[Side, GameSide] = field(default_factory=lambda: {side: GameSide() for side in Side})
    completed: bool = False

    def score(self, deal: Deal, *, vulnerable: bool) -> None:
        """Apply the per-deal rules in order using the declarer's pre-deal vulnerability."""
        if self.completed:
            raise RuntimeError("Cannot score a deal in a completed game.")

        result = score_deal(deal, vulnerable, self.rules)
        declarer = self.sides[deal.declarer]
        defender = self.sides[deal.defender]

        def item(points: int, kind: BonusKind) -> LineItem:
            return LineItem(points=points, kind=kind, deal=deal, vulnerable=vulnerable)

        if deal.won():
            declarer.add_below(item(result.contract, BonusKind.CONTRACT))
        if result.overtricks:
            declarer.add_above(item(result.overtricks, BonusKind.OVERTRICKS))
        if result.slam:
            declarer.add_above(item(result.slam, BonusKind.SLAM))
        if result.insult:
            declarer.add_above(item(result.insult, BonusKind.INSULT))
        if not deal.won():
            defender.add_above(item(result.undertricks, BonusKind.UNDERTRICKS))
        for side, points in result.honors.items():
            if points:
                self.sides[side].add_above(item(points, BonusKind.HONORS))

        logger.debug(
            "Scored %s by %s taking %d tricks: %s",
            deal.contract,
            deal.declarer,
            deal.tricks_won,
            result,
        )

        if any(side.contract_points() >= self.rules.game_threshold for side in self.sides.values()):
            self.completed = True
            logger.info("Game won by %s", self.winner())

    def winner(self) -> Optional[Side]:
        if not self.completed:
            return None
        for side, ledger in self.sides.items():
            if ledger.contract_points() >= self.rules.game_threshold:
                return side
        return None

    def award_above(self, side: Side, points: int, kind: BonusKind, deal: Deal, *, vulnerable: bool = False) -> None:
        self.sides[side].add_above(LineItem(points=points, kind=kind, deal=deal, vulnerable=vulnerable))

    def contract_points(self, side: Side) -> int:
        return self.sides[side].contract_points()

    def total_points(self, side: Side) -> int:
        return self.sides[side].total_points()

    def items(self) -> Iterator[tuple[Side, LineItem]]:
        for side, ledger in self.sides.items():
            for entry in ledger.items():
                yield side, entry
