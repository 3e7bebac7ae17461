"""Contract notation and derived quantities for rubber bridge."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

BOOK_COUNT = 6
MIN_LEVEL = 1
MAX_LEVEL = 7
MAX_DOUBLES = 2

_CONTRACT_RE = re.compile(r"([1-7])(c|d|h|s|n|nt)(x{0,2})", re.IGNORECASE)
_PREFIX_RE = re.compile(r"|[1-7]|[1-7](c|d|h|s|n|nt)(x{0,2})", re.IGNORECASE)


class InvalidContract(ValueError):
    """Raised when a contract is constructed from out-of-range fields."""


class Trump(Enum):
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    NO_TRUMP = "NT"

    def __str__(self) -> str:
        return self.value

    @property
    def is_minor(self) -> bool:
        return self in (Trump.CLUBS, Trump.DIAMONDS)


_TRUMP_TOKENS: dict[str, Trump] = {
    "c": Trump.CLUBS,
    "d": Trump.DIAMONDS,
    "h": Trump.HEARTS,
    "s": Trump.SPADES,
    "n": Trump.NO_TRUMP,
    "nt": Trump.NO_TRUMP,
}


@dataclass(frozen=True)
class Contract:
    """Immutable final contract: level above book, trump and doubling."""

    level: int
    trump: Trump
    doubles: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.level, bool) or not isinstance(self.level, int):
            raise InvalidContract(f"Contract level must be an integer. Got {self.level!r}")
        if isinstance(self.doubles, bool) or not isinstance(self.doubles, int):
            raise InvalidContract(f"Double count must be an integer. Got {self.doubles!r}")
        if not MIN_LEVEL <= self.level <= MAX_LEVEL:
            raise InvalidContract(f"Contract level must be {MIN_LEVEL}-{MAX_LEVEL}. Got {self.level}")
        if not 0 <= self.doubles <= MAX_DOUBLES:
            raise InvalidContract(f"Double count must be 0-{MAX_DOUBLES}. Got {self.doubles}")
        if not isinstance(self.trump, Trump):
            raise InvalidContract(f"Unknown trump: {self.trump!r}")

    def tricks_required(self) -> int:
        return self.level + BOOK_COUNT

    def double_multiplier(self) -> int:
        return 2 ** self.doubles

    @property
    def is_doubled(self) -> bool:
        return self.doubles > 0

    def __str__(self) -> str:
        return f"{self.level}{self.trump.value}{'X' * self.doubles}"


def parse_contract(text: str) -> Optional[Contract]:
    """Parse ``LEVEL TRUMP DOUBLES?`` notation such as ``3NT`` or ``7sxx``.

    Returns ``None`` for anything that does not match the whole grammar, so that
    callers can tell an incomplete entry apart from a hard failure.
    """
    if not isinstance(text, str):
        return None
    match = _CONTRACT_RE.fullmatch(text)
    if match is None:
        return None
    level_token, trump_token, doubles_token = match.groups()
    return Contract(
        level=int(level_token),
        trump=_TRUMP_TOKENS[trump_token.lower()],
        doubles=len(doubles_token),
    )


def is_contract_prefix(text: str) -> bool:
    """Return True if ``text`` is empty, a valid contract, or can still become one."""
    if not isinstance(text, str):
        return False
    return _PREFIX_RE.fullmatch(text) is not None
