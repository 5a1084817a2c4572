"""Domain models - pure Python dataclasses representing planning entities"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Literal, Optional, Tuple

Strategy = Literal["snowball", "avalanche", "utilization"]
STRATEGIES: Tuple[str, ...] = ("snowball", "avalanche", "utilization")

ActionType = Literal["BY_DUE_DATE", "BEFORE_STATEMENT_CLOSE"]
Confidence = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class Card:
    """Credit card supplied by the caller for a single planning run"""

    card_id: str
    card_name: str
    current_balance_cents: int
    credit_limit_cents: Optional[int] = None  # None or 0 = unknown limit
    apr_bps: Optional[int] = None
    minimum_due_cents: Optional[int] = None
    due_date: Optional[str] = None  # YYYY-MM-DD
    statement_close_date: Optional[str] = None  # YYYY-MM-DD


@dataclass(frozen=True)
class PlanAction:
    """Single payment the user should make against a card"""

    card_id: str
    card_name: str
    action_type: ActionType
    amount_cents: int
    target_date: str
    priority: float
    reason: str
    reason_tags: Tuple[str, ...] = ()


@dataclass
class Portfolio:
    """Portfolio-level metrics after applying the plan"""

    utilization: float  # ratio on a 0-10 scale, not a percentage
    confidence: Confidence


@dataclass
class PlanSnapshot:
    """Complete output of one allocation run"""

    plan_id: str
    generated_at: str
    cycle_label: str
    focus_summary: List[str]
    next_action: Optional[PlanAction]
    actions: List[PlanAction]
    portfolio: Portfolio

    @property
    def total_payment_cents(self) -> int:
        return sum(a.amount_cents for a in self.actions)


@dataclass
class GeneratePlanOptions:
    """Overrides for reproducible plan generation"""

    reference_date: Optional[datetime] = None
    plan_id: Optional[str] = None
    generated_at: Optional[str] = None


@dataclass(frozen=True)
class ConstraintSuggestion:
    """Actionable remediation attached to a constraint violation"""

    kind: Literal["increase_cash", "reduce_cards"]
    message: str


@dataclass
class StoredCard:
    """Card as kept by a card source, before it is handed to the solver"""

    card_id: str
    card_name: str
    current_balance_cents: int
    credit_limit_cents: Optional[int] = None
    apr_bps: Optional[int] = None
    minimum_due_cents: Optional[int] = None
    due_date: Optional[str] = None
    statement_close_date: Optional[str] = None
    due_date_day: Optional[int] = None  # 1-31
    statement_close_day: Optional[int] = None  # 1-31
    exclude_from_optimization: bool = False
