"""Domain-specific exceptions"""

from typing import Any, Dict, List
from card_planner.domain.models import ConstraintSuggestion

CONSTRAINT_VIOLATION_CODE = "CONSTRAINT_VIOLATION"


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidStrategyError(DomainException, ValueError):
    """Strategy tag is not one of snowball, avalanche or utilization"""

    pass


class ConstraintViolationError(DomainException):
    """
    Total minimum payments exceed available cash.

    Carries the structured shortfall and deterministic remediation suggestions;
    identical inputs always produce an identical message.
    """

    code = CONSTRAINT_VIOLATION_CODE

    def __init__(
        self,
        total_minimum_cents: int,
        available_cash_cents: int,
        shortfall_cents: int,
        card_count: int,
        suggestions: List[ConstraintSuggestion],
    ):
        self.total_minimum_cents = total_minimum_cents
        self.available_cash_cents = available_cash_cents
        self.shortfall_cents = shortfall_cents
        self.card_count = card_count
        self.suggestions = list(suggestions)
        super().__init__(
            "Total minimum payments exceed available cash. "
            f"Required: {total_minimum_cents} cents. "
            f"Available: {available_cash_cents} cents. "
            f"Shortfall: {shortfall_cents} cents."
        )

    def to_payload(self) -> Dict[str, Any]:
        """Structured payload for callers translating this into a user-facing error"""
        return {
            "code": self.code,
            "total_minimum_cents": self.total_minimum_cents,
            "available_cash_cents": self.available_cash_cents,
            "shortfall_cents": self.shortfall_cents,
            "card_count": self.card_count,
            "suggestions": [{"kind": s.kind, "message": s.message} for s in self.suggestions],
        }
