"""Plan assembly - core entry point for generating a payment plan snapshot"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from card_planner.domain.models import (
    Card,
    Confidence,
    GeneratePlanOptions,
    PlanAction,
    PlanSnapshot,
    Portfolio,
)
from card_planner.domain.allocator import allocate_payments
from card_planner.domain.validation import validate_constraints
from card_planner.utils.date_utils import epoch_millis, is_iso_date, to_iso_timestamp
from card_planner.utils.hashing import hash128_hex

logger = logging.getLogger(__name__)

CYCLE_LABEL = "This Cycle"
MAX_SUMMARY_LINES = 5
MAX_SUMMARY_CHARS = 140
MAX_PORTFOLIO_UTILIZATION = 10.0

STRATEGY_LABELS = {
    "snowball": "snowball (smallest balance)",
    "avalanche": "avalanche (highest APR)",
    "utilization": "utilization",
}


def normalized_hash_input(
    cards: Sequence[Card],
    available_cash_cents: int,
    strategy: str,
    reference_time_ms: int,
) -> str:
    """Stable text encoding of the inputs; cards sorted by id so input order does not matter"""
    payload = [
        {
            "id": c.card_id,
            "bal": c.current_balance_cents,
            "min": c.minimum_due_cents or 0,
            "lim": c.credit_limit_cents or 0,
            "due": c.due_date,
            "close": c.statement_close_date,
        }
        for c in sorted(cards, key=lambda c: c.card_id)
    ]
    return json.dumps(
        {
            "cards": payload,
            "available_cash_cents": available_cash_cents,
            "strategy": strategy,
            "ref": reference_time_ms,
        },
        separators=(",", ":"),
    )


def derive_plan_id(
    cards: Sequence[Card],
    available_cash_cents: int,
    strategy: str,
    reference_date: datetime,
) -> str:
    """Same inputs and reference time always give the same 32-char hex id"""
    encoded = normalized_hash_input(cards, available_cash_cents, strategy, epoch_millis(reference_date))
    return hash128_hex(encoded)


def projected_balances(cards: Sequence[Card], actions: Sequence[PlanAction]) -> Dict[str, int]:
    """Balance per card after every planned payment, floored at 0"""
    paid: Dict[str, int] = {}
    for action in actions:
        paid[action.card_id] = paid.get(action.card_id, 0) + action.amount_cents

    return {c.card_id: max(0, c.current_balance_cents - paid.get(c.card_id, 0)) for c in cards}


def portfolio_utilization(cards: Sequence[Card], projected: Dict[str, int]) -> float:
    """
    Total projected balance over total limit, as a ratio (0.3 = 30%).

    Clamped to [0, 10]. Returns 0 when no card has a known limit.
    """
    total_balance = sum(projected.get(c.card_id, c.current_balance_cents) for c in cards)
    total_limit = sum(c.credit_limit_cents or 0 for c in cards)

    if total_limit <= 0:
        return 0.0

    return min(MAX_PORTFOLIO_UTILIZATION, max(0.0, total_balance / total_limit))


def portfolio_confidence(cards: Sequence[Card]) -> Confidence:
    """
    Data-completeness confidence.

    high: every card has a valid due date and a positive limit
    low: no card has either
    medium: anything in between, including no cards at all
    """
    if not cards:
        return "medium"

    with_due = sum(1 for c in cards if is_iso_date(c.due_date))
    with_limit = sum(1 for c in cards if c.credit_limit_cents is not None and c.credit_limit_cents > 0)

    if with_due == len(cards) and with_limit == len(cards):
        return "high"
    if with_due == 0 and with_limit == 0:
        return "low"
    return "medium"


def pick_next_action(actions: Sequence[PlanAction]) -> Optional[PlanAction]:
    """Earliest target date wins; higher priority breaks ties"""
    if not actions:
        return None
    return min(actions, key=lambda a: (a.target_date, -a.priority))


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def build_focus_summary(cards: Sequence[Card], actions: Sequence[PlanAction], strategy: str) -> List[str]:
    lines: List[str] = []
    minimums = {c.card_id: c.minimum_due_cents or 0 for c in cards}

    min_count = sum(1 for m in minimums.values() if m > 0)
    if min_count > 0:
        lines.append(f"Pay minimums on {_plural(min_count, 'card')}.")

    first_extra = next(
        (
            a
            for a in actions
            if a.action_type == "BY_DUE_DATE"
            and a.card_id in minimums
            and a.amount_cents > minimums[a.card_id]
        ),
        None,
    )
    if first_extra is not None:
        label = STRATEGY_LABELS.get(strategy, strategy)
        lines.append(f"Extra to {first_extra.card_name} ({label}).")

    pre_statement = sum(1 for a in actions if a.action_type == "BEFORE_STATEMENT_CLOSE")
    if pre_statement > 0:
        lines.append(f"{_plural(pre_statement, 'pre-statement payment')} to lower utilization.")

    return [line[:MAX_SUMMARY_CHARS] for line in lines[:MAX_SUMMARY_LINES]]


def generate_plan(
    cards: Sequence[Card],
    available_cash_cents: int,
    strategy: str,
    options: Optional[GeneratePlanOptions] = None,
) -> PlanSnapshot:
    """
    Main entry point: validate, allocate, and assemble a PlanSnapshot.

    Raises:
        ConstraintViolationError: minimum payments exceed available cash
        InvalidStrategyError: strategy is not snowball, avalanche or utilization

    Passing options.reference_date makes the output fully reproducible.
    """
    options = options or GeneratePlanOptions()

    result = validate_constraints(cards, available_cash_cents)
    if not result.success:
        raise result.error

    reference_date = options.reference_date or datetime.now(timezone.utc)
    actions = allocate_payments(cards, available_cash_cents, strategy, reference_date)

    plan_id = (
        options.plan_id
        if options.plan_id is not None
        else derive_plan_id(cards, available_cash_cents, strategy, reference_date)
    )
    generated_at = options.generated_at if options.generated_at is not None else to_iso_timestamp(reference_date)

    projected = projected_balances(cards, actions)
    portfolio = Portfolio(
        utilization=portfolio_utilization(cards, projected),
        confidence=portfolio_confidence(cards),
    )

    logger.debug(
        "Plan assembled",
        extra={"plan_id": plan_id, "strategy": strategy, "action_count": len(actions)},
    )

    return PlanSnapshot(
        plan_id=plan_id,
        generated_at=generated_at,
        cycle_label=CYCLE_LABEL,
        focus_summary=build_focus_summary(cards, actions, strategy),
        next_action=pick_next_action(actions),
        actions=actions,
        portfolio=portfolio,
    )
