"""Rubber bridge scoring engine."""

from .contract import Contract, InvalidContract, Trump, is_contract_prefix, parse_contract
from .deal import Deal, Honors, InvalidDeal, Side, other_side
from .rubber import Rubber, RubberAlreadyCompleted

__all__ = [
    "Contract",
    "Deal",
    "Honors",
    "InvalidContract",
    "InvalidDeal",
    "Rubber",
    "RubberAlreadyCompleted",
    "Side",
    "Trump",
    "is_contract_prefix",
    "other_side",
    "parse_contract",
]
