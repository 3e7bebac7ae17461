import dataclasses

import pytest

from bridgescore.contract import parse_contract
from bridgescore.deal import Deal, Honors, InvalidDeal, Side, other_side


def test_won_and_trick_counts():
    made = Deal(Side.NORTH_SOUTH, parse_contract("4S"), 11)
    assert made.won()
    assert made.overtricks() == 1
    assert made.undertricks() == 0

    exact = Deal(Side.NORTH_SOUTH, parse_contract("4S"), 10)
    assert exact.won()
    assert exact.overtricks() == 0

    down = Deal(Side.EAST_WEST, parse_contract("4S"), 7)
    assert not down.won()
    assert down.undertricks() == 3
    assert down.defender is Side.NORTH_SOUTH


def test_other_side():
    assert other_side(Side.NORTH_SOUTH) is Side.EAST_WEST
    assert other_side(Side.EAST_WEST) is Side.NORTH_SOUTH


@pytest.mark.parametrize("tricks", [-1, 14, 2.0, True])
def test_tricks_out_of_range_rejected(tricks):
    with pytest.raises(InvalidDeal):
        Deal(Side.NORTH_SOUTH, parse_contract("1C"), tricks)


def test_contract_must_be_parsed():
    with pytest.raises(InvalidDeal):
        Deal(Side.NORTH_SOUTH, "1C", 7)
    with pytest.raises(InvalidDeal):
        Deal(Side.NORTH_SOUTH, parse_contract("1Q"), 7)


def test_declarer_must_be_a_side():
    with pytest.raises(InvalidDeal):
        Deal("NS", parse_contract("1C"), 7)


def test_only_one_side_may_hold_honors():
    with pytest.raises(InvalidDeal):
        Deal(
            Side.NORTH_SOUTH,
            parse_contract("4H"),
            10,
            honors={Side.NORTH_SOUTH: Honors.PARTIAL, Side.EAST_WEST: Honors.PARTIAL},
        )


def test_partial_honors_do_not_exist_at_no_trump():
    with pytest.raises(InvalidDeal):
        Deal(Side.NORTH_SOUTH, parse_contract("3NT"), 9, honors={Side.EAST_WEST: Honors.PARTIAL})

    deal = Deal(Side.NORTH_SOUTH, parse_contract("3NT"), 9, honors={Side.EAST_WEST: Honors.FULL})
    assert deal.honors_for(Side.EAST_WEST) is Honors.FULL
    assert deal.honors_for(Side.NORTH_SOUTH) is None


def test_empty_honor_entries_are_dropped():
    deal = Deal(Side.NORTH_SOUTH, parse_contract("2H"), 8, honors={Side.NORTH_SOUTH: None})
    assert deal.honors == {}


def test_deal_is_immutable():
    deal = Deal(Side.NORTH_SOUTH, parse_contract("2H"), 8)
    with pytest.raises(dataclasses.FrozenInstanceError):
        deal.tricks_won = 9


def test_honors_cannot_be_edited_after_validation():
    deal = Deal(Side.NORTH_SOUTH, parse_contract("4S"), 10, honors={Side.NORTH_SOUTH: Honors.PARTIAL})
    with pytest.raises(TypeError):
        deal.honors[Side.EAST_WEST] = Honors.FULL

    assert deal.honors == {Side.NORTH_SOUTH: Honors.PARTIAL}
    assert deal.honors_for(Side.EAST_WEST) is None


def test_as_last_flags_a_copy():
    deal = Deal(Side.EAST_WEST, parse_contract("2H"), 8, honors={Side.EAST_WEST: Honors.FULL})
    last = deal.as_last()
    assert last.is_last
    assert not deal.is_last
    assert last.contract == deal.contract
    assert last.honors == deal.honors


def test_deals_compare_by_identity():
    first = Deal(Side.NORTH_SOUTH, parse_contract("1NT"), 7)
    second = Deal(Side.NORTH_SOUTH, parse_contract("1NT"), 7)
    assert first != second
    assert first == first
