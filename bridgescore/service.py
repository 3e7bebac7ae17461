"""Convenience service layer for score sheet UIs."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .deal import Deal, Side
from .game import Game
from .ledger import LineItem
from .rules_schema import DEFAULT_RULES, ScoringRules
from .rubber import Rubber


class ServiceError(RuntimeError):
    """Raised when the service is asked to do something it cannot."""


@dataclass
class LineItemView:
    points: int
    kind: str
    title: str
    deal_index: int
    vulnerable: bool


@dataclass
class GameView:
    completed: bool
    winner: Optional[str]
    below: dict[str, list[LineItemView]]


@dataclass
class SideView:
    side: str
    total: int
    contract_points: int
    games_won: int
    vulnerable: bool
    above: list[LineItemView]


@dataclass
class DealView:
    index: int
    declarer: str
    contract: str
    tricks_won: int
    honors: dict[str, str]
    is_last: bool
    net_points: int


@dataclass
class ScorecardView:
    completed: bool
    unfinished: bool
    winners: list[str]
    sides: list[SideView]
    games: list[GameView]
    deals: list[DealView]


class ScorecardService:
    """Facade around Rubber for UI consumers.

    Mutating calls are serialized, so a single service can be shared between
    request handlers while the underlying rubber keeps a single writer.
    """

    def __init__(self, rules: Optional[ScoringRules] = None) -> None:
        self.rules = rules if rules is not None else DEFAULT_RULES
        self._lock = threading.Lock()
        self._deals: List[Deal] = []
        self.rubber = Rubber(rules=self.rules)

    # Deal list ---------------------------------------------------------

    @property
    def deals(self) -> tuple[Deal, ...]:
        return tuple(self._deals)

    def add_deal(self, deal: Deal) -> ScorecardView:
        with self._lock:
            if any(existing is deal for existing in self._deals):
                raise ServiceError("Deal has already been scored.")
            self.rubber.score(deal)
            self._deals.append(deal)
            return self._scorecard()

    def remove_deal(self, index: int) -> ScorecardView:
        with self._lock:
            if not 0 <= index < len(self._deals):
                raise ServiceError(f"No deal at index {index}.")
            remaining = self._deals[:index] + self._deals[index + 1:]
            self._rebuild(remaining)
            return self._scorecard()

    def replace_deals(self, deals: Sequence[Deal]) -> ScorecardView:
        with self._lock:
            self._rebuild(list(deals))
            return self._scorecard()

    def reset(self) -> ScorecardView:
        return self.replace_deals([])

    # Views -------------------------------------------------------------

    def scorecard(self) -> ScorecardView:
        with self._lock:
            return self._scorecard()

    # Helpers -----------------------------------------------------------

    def _rebuild(self, deals: List[Deal]) -> None:
        seen: set[int] = set()
        for deal in deals:
            if id(deal) in seen:
                raise ServiceError("The same deal appears more than once.")
            seen.add(id(deal))
        # A deal that fails to score leaves the current sheet untouched.
        rubber = Rubber.replay(deals, rules=self.rules)
        self.rubber = rubber
        self._deals = deals

    def _scorecard(self) -> ScorecardView:
        rubber = self.rubber
        index_of = {id(deal): index for index, deal in enumerate(self._deals)}

        def item_view(item: LineItem) -> LineItemView:
            return LineItemView(
                points=item.points,
                kind=item.kind.name.lower(),
                title=item.kind.title,
                deal_index=index_of[id(item.deal)],
                vulnerable=item.vulnerable,
            )

        def game_view(game: Game) -> GameView:
            winner = game.winner()
            return GameView(
                completed=game.completed,
                winner=winner.value if winner else None,
                below={side.value: [item_view(item) for item in game.sides[side].below] for side in Side},
            )

        sides = [
            SideView(
                side=side.value,
                total=rubber.side_points(side),
                contract_points=rubber.contract_points(side),
                games_won=rubber.win_count(side),
                vulnerable=rubber.is_vulnerable(side),
                above=[item_view(item) for game in rubber.games for item in game.sides[side].above],
            )
            for side in Side
        ]
        deals = [
            DealView(
                index=index,
                declarer=deal.declarer.value,
                contract=str(deal.contract),
                tricks_won=deal.tricks_won,
                honors={side.value: grade.value for side, grade in deal.honors.items()},
                is_last=deal.is_last,
                net_points=rubber.deal_points(deal),
            )
            for index, deal in enumerate(self._deals)
        ]
        return ScorecardView(
            completed=rubber.completed,
            unfinished=rubber.is_unfinished(),
            winners=[side.value for side in rubber.winners()],
            sides=sides,
            games=[game_view(game) for game in rubber.games],
            deals=deals,
        )
