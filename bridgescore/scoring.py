"""Table-driven scoring rules for a single deal.

Each rule is a pure function of the deal, the declarer's vulnerability before
the deal, and the scoring tables. A rule that does not apply returns 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .deal import Deal, Side
from .ledger import BonusKind
from .rules_schema import DEFAULT_RULES, ScoringRules

# Undertrick tier boundaries: 1st, 2nd-3rd, 4th and beyond.
_FIRST_TIER_END = 1
_SECOND_TIER_END = 3


def contract_points(deal: Deal, rules: ScoringRules = DEFAULT_RULES) -> int:
    if not deal.won():
        return 0
    contract = deal.contract
    trump = contract.trump
    base = rules.first_trick_points[trump] + (contract.level - 1) * rules.subsequent_trick_points[trump]
    return base * contract.double_multiplier()


def overtrick_points(deal: Deal, vulnerable: bool, rules: ScoringRules = DEFAULT_RULES) -> int:
    overtricks = deal.overtricks()
    if overtricks == 0:
        return 0
    contract = deal.contract
    if contract.is_doubled:
        per_trick = rules.doubled_overtrick_points[contract.doubles]
        if vulnerable:
            per_trick *= 2
    else:
        per_trick = rules.overtrick_points[contract.trump]
    return per_trick * overtricks


def slam_bonus(deal: Deal, vulnerable: bool, rules: ScoringRules = DEFAULT_RULES) -> int:
    if not deal.won():
        return 0
    return rules.slam_bonus(deal.contract.level, vulnerable)


def insult_bonus(deal: Deal, rules: ScoringRules = DEFAULT_RULES) -> int:
    if not deal.won() or not deal.contract.is_doubled:
        return 0
    return rules.insult_bonus[deal.contract.doubles]


def undertrick_tier(undertrick: int) -> int:
    """Map a 1-based undertrick number to its penalty tier."""
    if undertrick <= _FIRST_TIER_END:
        return 0
    if undertrick <= _SECOND_TIER_END:
        return 1
    return 2


def undertrick_penalty(deal: Deal, vulnerable: bool, rules: ScoringRules = DEFAULT_RULES) -> int:
    doubles = deal.contract.doubles
    return sum(
        rules.undertricks.lookup(vulnerable, undertrick_tier(undertrick), doubles)
        for undertrick in range(1, deal.undertricks() + 1)
    )


def honor_bonus(deal: Deal, side: Side, rules: ScoringRules = DEFAULT_RULES) -> int:
    grade = deal.honors_for(side)
    if grade is None:
        return 0
    return rules.honor_points[grade]


def rubber_bonus(loser_wins: int, rules: ScoringRules = DEFAULT_RULES) -> int:
    return rules.slow_rubber_bonus if loser_wins > 0 else rules.fast_rubber_bonus


def unfinished_rubber_bonus(
    wins: Dict[Side, int],
    contract_totals: Dict[Side, int],
    rules: ScoringRules = DEFAULT_RULES,
) -> Optional[tuple[Side, BonusKind, int]]:
    """Bonus for a rubber stopped before either side won two games.

    A sole game winner earns the game bonus; failing that, a sole holder of
    contract points earns the part score bonus.
    """
    ns, ew = Side.NORTH_SOUTH, Side.EAST_WEST
    if sorted((wins[ns], wins[ew])) == [0, 1]:
        winner = ns if wins[ns] == 1 else ew
        return winner, BonusKind.UNFINISHED_GAME, rules.unfinished_game_bonus
    holders = [side for side in (ns, ew) if contract_totals[side] > 0]
    if len(holders) == 1:
        return holders[0], BonusKind.PART_SCORE, rules.part_score_bonus
    return None


@dataclass(frozen=True)
class DealScore:
    """Breakdown of what a single deal earns before game and rubber effects."""

    contract: int
    overtricks: int
    slam: int
    insult: int
    undertricks: int
    honors: Dict[Side, int]


def score_deal(deal: Deal, vulnerable: bool, rules: ScoringRules = DEFAULT_RULES) -> DealScore:
    return DealScore(
        contract=contract_points(deal, rules),
        overtricks=overtrick_points(deal, vulnerable, rules),
        slam=slam_bonus(deal, vulnerable, rules),
        insult=insult_bonus(deal, rules),
        undertricks=undertrick_penalty(deal, vulnerable, rules),
        honors={side: honor_bonus(deal, side, rules) for side in Side},
    )
