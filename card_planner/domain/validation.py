"""Constraint validation - the only gate before allocation"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
from card_planner.domain.models import Card, ConstraintSuggestion
from card_planner.domain.exceptions import ConstraintViolationError

REDUCE_CARDS_MESSAGE = (
    "Reduce the number of cards or lower minimum payments "
    "so total minimums do not exceed available cash."
)


@dataclass
class ValidationResult:
    """Outcome of constraint validation"""

    success: bool
    error: Optional[ConstraintViolationError] = None


def total_minimum_cents(cards: Sequence[Card]) -> int:
    # Missing minimum counts as 0
    return sum(card.minimum_due_cents or 0 for card in cards)


def build_suggestions(shortfall_cents: int) -> List[ConstraintSuggestion]:
    """Deterministic remediation: increase_cash first, then reduce_cards"""
    return [
        ConstraintSuggestion(
            kind="increase_cash",
            message=f"Increase available cash by at least {shortfall_cents} cents.",
        ),
        ConstraintSuggestion(kind="reduce_cards", message=REDUCE_CARDS_MESSAGE),
    ]


def validate_constraints(cards: Sequence[Card], available_cash_cents: int) -> ValidationResult:
    """
    Check that available cash covers the sum of minimum payments.

    Returns a failed result carrying a ConstraintViolationError when it does not;
    the caller decides whether to raise it.
    """
    total = total_minimum_cents(cards)
    if total <= available_cash_cents:
        return ValidationResult(success=True)

    shortfall = total - available_cash_cents
    error = ConstraintViolationError(
        total_minimum_cents=total,
        available_cash_cents=available_cash_cents,
        shortfall_cents=shortfall,
        card_count=len(cards),
        suggestions=build_suggestions(shortfall),
    )
    return ValidationResult(success=False, error=error)
