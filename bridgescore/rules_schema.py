"""Validation schema for the rubber bridge scoring tables."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .contract import MAX_DOUBLES, Trump
from .deal import Honors

UNDERTRICK_TIERS = 3


def _trump_table(minor: int, major: int, no_trump: int) -> dict[Trump, int]:
    return {
        Trump.CLUBS: minor,
        Trump.DIAMONDS: minor,
        Trump.HEARTS: major,
        Trump.SPADES: major,
        Trump.NO_TRUMP: no_trump,
    }


def _validate_trump_table(value: Mapping[Trump, int]) -> Mapping[Trump, int]:
    missing = set(Trump) - set(value)
    if missing:
        raise ValueError(f"Missing trumps: {sorted(trump.value for trump in missing)}")
    for trump, points in value.items():
        if points < 0:
            raise ValueError(f"Points for {trump.value} must not be negative.")
    return MappingProxyType(dict(value))


def _validate_doubling_table(value: Mapping[int, int]) -> Mapping[int, int]:
    if set(value) != set(range(1, MAX_DOUBLES + 1)):
        raise ValueError("Doubling tables must be keyed by 1 (doubled) and 2 (redoubled).")
    if any(points < 0 for points in value.values()):
        raise ValueError("Doubling table points must not be negative.")
    return MappingProxyType(dict(value))


class UndertrickTable(BaseModel):
    """Per-undertrick penalties; rows are tiers (1st, 2nd-3rd, 4th+), columns are doubles."""

    model_config = ConfigDict(frozen=True)

    invulnerable: tuple[tuple[int, ...], ...] = ((50, 100, 200), (50, 200, 400), (50, 300, 600))
    vulnerable: tuple[tuple[int, ...], ...] = ((100, 200, 400), (100, 300, 600), (100, 300, 600))

    @field_validator("invulnerable", "vulnerable")
    @classmethod
    def validate_shape(cls, value: tuple[tuple[int, ...], ...]) -> tuple[tuple[int, ...], ...]:
        if len(value) != UNDERTRICK_TIERS:
            raise ValueError(f"Undertrick table needs {UNDERTRICK_TIERS} tiers.")
        for row in value:
            if len(row) != MAX_DOUBLES + 1:
                raise ValueError(f"Each undertrick tier needs {MAX_DOUBLES + 1} doubling columns.")
            if any(points < 0 for points in row):
                raise ValueError("Undertrick points must not be negative.")
        return value

    def lookup(self, vulnerable: bool, tier: int, doubles: int) -> int:
        table = self.vulnerable if vulnerable else self.invulnerable
        return table[tier][doubles]


class ScoringRules(BaseModel):
    # Defaults go through the validators too, so every table is stored read-only.
    model_config = ConfigDict(frozen=True, validate_default=True)

    first_trick_points: Mapping[Trump, int] = Field(default_factory=lambda: _trump_table(20, 30, 40))
    subsequent_trick_points: Mapping[Trump, int] = Field(default_factory=lambda: _trump_table(20, 30, 30))
    overtrick_points: Mapping[Trump, int] = Field(
        default_factory=lambda: _trump_table(20, 30, 30),
        description="Undoubled value of each overtrick.",
    )
    doubled_overtrick_points: Mapping[int, int] = Field(
        default_factory=lambda: {1: 100, 2: 200},
        description="Overtrick value when doubled/redoubled; doubled again when declarer is vulnerable.",
    )
    insult_bonus: Mapping[int, int] = Field(default_factory=lambda: {1: 50, 2: 100})
    small_slam_bonus: tuple[int, int] = Field((500, 750), description="(not vulnerable, vulnerable)")
    grand_slam_bonus: tuple[int, int] = Field((1000, 1500), description="(not vulnerable, vulnerable)")
    undertricks: UndertrickTable = Field(default_factory=UndertrickTable)
    honor_points: Mapping[Honors, int] = Field(
        default_factory=lambda: {Honors.PARTIAL: 100, Honors.FULL: 150},
    )
    fast_rubber_bonus: int = Field(700, ge=0, description="Rubber won two games to nil.")
    slow_rubber_bonus: int = Field(500, ge=0, description="Rubber won two games to one.")
    unfinished_game_bonus: int = Field(300, ge=0, description="Sole game won in an unfinished rubber.")
    part_score_bonus: int = Field(100, ge=0, description="Sole part score in an unfinished rubber.")
    game_threshold: int = Field(100, gt=0, description="Contract points needed to win a game.")

    @field_validator("first_trick_points", "subsequent_trick_points", "overtrick_points")
    @classmethod
    def validate_trump_tables(cls, value: Mapping[Trump, int]) -> Mapping[Trump, int]:
        return _validate_trump_table(value)

    @field_validator("doubled_overtrick_points", "insult_bonus")
    @classmethod
    def validate_doubling_tables(cls, value: Mapping[int, int]) -> Mapping[int, int]:
        return _validate_doubling_table(value)

    @field_validator("small_slam_bonus", "grand_slam_bonus")
    @classmethod
    def validate_slam_bonus(cls, value: tuple[int, int]) -> tuple[int, int]:
        if min(value) < 0:
            raise ValueError("Slam bonuses must not be negative.")
        return value

    @field_validator("honor_points")
    @classmethod
    def validate_honor_points(cls, value: Mapping[Honors, int]) -> Mapping[Honors, int]:
        if set(value) != set(Honors):
            raise ValueError("Honor points must cover partial and full honors.")
        if any(points < 0 for points in value.values()):
            raise ValueError("Honor points must not be negative.")
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def validate_rubber_bonuses(self) -> "ScoringRules":
        if self.fast_rubber_bonus < self.slow_rubber_bonus:
            raise ValueError("A two-nil rubber cannot be worth less than a two-one rubber.")
        return self

    def slam_bonus(self, level: int, vulnerable: bool) -> int:
        if level == 6:
            return self.small_slam_bonus[int(vulnerable)]
        if level == 7:
            return self.grand_slam_bonus[int(vulnerable)]
        return 0


DEFAULT_RULES = ScoringRules()


def load_rules(path: Union[str, Path]) -> ScoringRules:
    """Load scoring tables from a JSON file, filling omitted tables with defaults."""
    return ScoringRules.model_validate_json(Path(path).read_text(encoding="utf-8"))
