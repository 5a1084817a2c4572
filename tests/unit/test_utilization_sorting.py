"""Unit tests for utilization calculation and strategy sorting"""

import pytest
from card_planner.domain.sorting import sort_cards_by_strategy
from card_planner.domain.utilization import calculate_utilization
from tests.conftest import make_card


def test_utilization_percentage():
    card = make_card("a", "A", current_balance_cents=25_000, credit_limit_cents=100_000)
    assert calculate_utilization(card) == 25.0


def test_utilization_over_limit_exceeds_100():
    card = make_card("a", "A", current_balance_cents=150_000, credit_limit_cents=100_000)
    assert calculate_utilization(card) == 150.0


@pytest.mark.parametrize("limit", [None, 0])
def test_utilization_unknown_limit_is_zero(limit):
    card = make_card("a", "A", current_balance_cents=10_000, credit_limit_cents=limit)
    assert calculate_utilization(card) == 0


def test_snowball_sorts_smallest_balance_first(portfolio_cards):
    ordered = sort_cards_by_strategy(portfolio_cards, "snowball")
    assert [c.card_id for c in ordered] == ["card-low", "card-apr", "card-util-high", "card-high"]


def test_avalanche_sorts_highest_apr_first(portfolio_cards):
    ordered = sort_cards_by_strategy(portfolio_cards, "avalanche")
    assert [c.card_id for c in ordered] == ["card-apr", "card-util-high", "card-low", "card-high"]


def test_avalanche_missing_apr_sorts_last():
    cards = [
        make_card("none", "No APR", apr_bps=None),
        make_card("low", "Low APR", apr_bps=500),
    ]
    assert [c.card_id for c in sort_cards_by_strategy(cards, "avalanche")] == ["low", "none"]


def test_utilization_sorts_highest_first(portfolio_cards):
    ordered = sort_cards_by_strategy(portfolio_cards, "utilization")
    # 90%, 87.5%, 50%, 5%
    assert [c.card_id for c in ordered] == ["card-high", "card-util-high", "card-apr", "card-low"]


def test_sorting_does_not_mutate_input(portfolio_cards):
    before = [c.card_id for c in portfolio_cards]
    for strategy in ("snowball", "avalanche", "utilization"):
        result = sort_cards_by_strategy(portfolio_cards, strategy)
        assert result is not portfolio_cards
    assert [c.card_id for c in portfolio_cards] == before


def test_sorting_ties_keep_input_order():
    cards = [make_card(str(i), str(i), current_balance_cents=1_000, apr_bps=1000) for i in range(4)]
    assert [c.card_id for c in sort_cards_by_strategy(cards, "snowball")] == ["0", "1", "2", "3"]
    assert [c.card_id for c in sort_cards_by_strategy(cards, "avalanche")] == ["0", "1", "2", "3"]


def test_unknown_strategy_returns_copy(portfolio_cards):
    result = sort_cards_by_strategy(portfolio_cards, "random")
    assert result == portfolio_cards
    assert result is not portfolio_cards
