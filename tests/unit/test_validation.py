"""Unit tests for constraint validation"""

import pytest
from card_planner.domain.exceptions import ConstraintViolationError, DomainException
from card_planner.domain.validation import validate_constraints
from tests.conftest import make_card


def test_validation_passes_when_cash_covers_minimums():
    cards = [make_card("a", "A", minimum_due_cents=1_000), make_card("b", "B", minimum_due_cents=500)]
    result = validate_constraints(cards, 1_500)
    assert result.success is True
    assert result.error is None


def test_validation_missing_minimum_counts_as_zero():
    cards = [make_card("a", "A", minimum_due_cents=None), make_card("b", "B", minimum_due_cents=700)]
    assert validate_constraints(cards, 700).success is True


def test_validation_empty_cards_always_passes():
    assert validate_constraints([], 0).success is True


def test_validation_shortfall():
    """Minimums 3000 + 4000 against 5000 cash"""
    cards = [make_card("a", "A", minimum_due_cents=3_000), make_card("b", "B", minimum_due_cents=4_000)]
    result = validate_constraints(cards, 5_000)

    assert result.success is False
    error = result.error
    assert isinstance(error, ConstraintViolationError)
    assert isinstance(error, DomainException)
    assert error.total_minimum_cents == 7_000
    assert error.available_cash_cents == 5_000
    assert error.shortfall_cents == 2_000
    assert error.card_count == 2


def test_validation_suggestions_fixed_order_and_text():
    cards = [make_card("a", "A", minimum_due_cents=3_000)]
    error = validate_constraints(cards, 1_000).error

    assert [s.kind for s in error.suggestions] == ["increase_cash", "reduce_cards"]
    assert error.suggestions[0].message == "Increase available cash by at least 2000 cents."
    assert error.suggestions[1].message == (
        "Reduce the number of cards or lower minimum payments "
        "so total minimums do not exceed available cash."
    )


def test_validation_message_is_deterministic():
    cards = [make_card("a", "A", minimum_due_cents=3_000), make_card("b", "B", minimum_due_cents=4_000)]
    first = validate_constraints(cards, 5_000).error
    second = validate_constraints(cards, 5_000).error

    assert str(first) == str(second)
    assert str(first) == (
        "Total minimum payments exceed available cash. "
        "Required: 7000 cents. Available: 5000 cents. Shortfall: 2000 cents."
    )
    assert first.to_payload() == second.to_payload()


def test_violation_payload_keeps_every_field():
    error = validate_constraints([make_card("a", "A", minimum_due_cents=900)], 400).error
    assert error.to_payload() == {
        "code": "CONSTRAINT_VIOLATION",
        "total_minimum_cents": 900,
        "available_cash_cents": 400,
        "shortfall_cents": 500,
        "card_count": 1,
        "suggestions": [
            {"kind": "increase_cash", "message": "Increase available cash by at least 500 cents."},
            {
                "kind": "reduce_cards",
                "message": "Reduce the number of cards or lower minimum payments "
                "so total minimums do not exceed available cash.",
            },
        ],
    }


def test_violation_can_be_raised():
    error = validate_constraints([make_card("a", "A", minimum_due_cents=10)], 0).error
    with pytest.raises(ConstraintViolationError) as exc_info:
        raise error
    assert exc_info.value.shortfall_cents == 10
