"""Rubber orchestration: games, vulnerability and rubber completion."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .deal import Deal, Side, other_side
from .game import Game
from .ledger import BonusKind
from .rules_schema import DEFAULT_RULES, ScoringRules
from .scoring import rubber_bonus, unfinished_rubber_bonus

logger = logging.getLogger(__name__)

GAMES_TO_WIN = 2


class RubberAlreadyCompleted(RuntimeError):
    """Raised when a deal is scored against a finished rubber."""


@dataclass
class Rubber:
    """Track games across a rubber and award the closing bonuses.

    Deals must be scored one at a time in the order they were played: every
    bonus depends on the vulnerability and game wins accumulated so far.
    """

    rules: ScoringRules = field(default_factory=lambda: DEFAULT_RULES)
    games: List[Game] = field(default_factory=list)
    completed: bool = False

    @classmethod
    def replay(cls, deals: Iterable[Deal], rules: Optional[ScoringRules] = None) -> "Rubber":
        """Build a fresh rubber by scoring ``deals`` in order."""
        rubber = cls(rules=rules if rules is not None else DEFAULT_RULES)
        for deal in deals:
            rubber.score(deal)
        return rubber

    # Scoring -----------------------------------------------------------

    def current_game(self) -> Game:
        if self.completed:
            raise RubberAlreadyCompleted("The rubber is already complete.")
        if not self.games or self.games[-1].completed:
            self.games.append(Game(rules=self.rules))
        return self.games[-1]

    def score(self, deal: Deal) -> None:
        if self.completed:
            raise RubberAlreadyCompleted("Cannot score a deal once the rubber is complete.")

        vulnerable = self.is_vulnerable(deal.declarer)
        game = self.current_game()
        game.score(deal, vulnerable=vulnerable)
        self._check_completion(deal, game)

    def _check_completion(self, deal: Deal, game: Game) -> None:
        declarer = deal.declarer
        if self.win_count(declarer) >= GAMES_TO_WIN:
            loser_wins = self.win_count(other_side(declarer))
            bonus = rubber_bonus(loser_wins, self.rules)
            game.award_above(declarer, bonus, BonusKind.RUBBER, deal)
            self.completed = True
            logger.info(
                "Rubber won by %s %d-%d with a %d point bonus",
                declarer,
                self.win_count(declarer),
                loser_wins,
                bonus,
            )
            return

        if not deal.is_last:
            return

        wins = {side: self.win_count(side) for side in Side}
        contract_totals = {side: self.contract_points(side) for side in Side}
        award = unfinished_rubber_bonus(wins, contract_totals, self.rules)
        if award is not None:
            side, kind, points = award
            game.award_above(side, points, kind, deal)
        self.completed = True
        logger.info("Rubber stopped unfinished at %d-%d", wins[Side.NORTH_SOUTH], wins[Side.EAST_WEST])

    # Queries -----------------------------------------------------------

    def completed_games(self) -> List[Game]:
        return [game for game in self.games if game.completed]

    def win_count(self, side: Side) -> int:
        return sum(1 for game in self.completed_games() if game.winner() is side)

    def is_vulnerable(self, side: Side) -> bool:
        return self.win_count(side) > 0

    def contract_points(self, side: Side) -> int:
        return sum(game.contract_points(side) for game in self.games)

    def side_points(self, side: Side) -> int:
        return sum(game.total_points(side) for game in self.games)

    def is_unfinished(self) -> bool:
        """True when the rubber was closed before either side won two games."""
        return self.completed and all(self.win_count(side) < GAMES_TO_WIN for side in Side)

    def winners(self) -> Tuple[Side, ...]:
        """Highest-scoring side, or both sides on a tie; empty while the rubber is open."""
        if not self.completed:
            return ()
        totals: Dict[Side, int] = {side: self.side_points(side) for side in Side}
        best = max(totals.values())
        return tuple(side for side in Side if totals[side] == best)

    def deal_points(self, deal: Deal) -> int:
        """Net points a deal earned for its declarer across every game."""
        net = 0
        for game in self.games:
            for side, item in game.items():
                if item.deal is not deal:
                    continue
                net += item.points if side is deal.declarer else -item.points
        return net
