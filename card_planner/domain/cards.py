"""Conversion from stored card records to solver input"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union
from card_planner.domain.models import Card, StoredCard
from card_planner.utils.date_utils import (
    get_next_due_date,
    get_next_statement_close_date,
    is_iso_date,
)


def _resolve_date(explicit: Optional[str], day_of_month: Optional[int], next_occurrence, reference) -> Optional[str]:
    if is_iso_date(explicit):
        return explicit
    if day_of_month is not None:
        return next_occurrence(day_of_month, reference)
    # Malformed explicit dates pass through so the allocator applies its fallback
    return explicit


def build_solver_cards(
    stored_cards: Iterable[StoredCard],
    reference_date: Union[date, datetime],
) -> List[Card]:
    """
    Build solver cards for a planning run.

    Cards flagged exclude_from_optimization are dropped. Explicit ISO dates are
    used as-is; otherwise due / statement-close days of month are resolved to
    their next occurrence on or after reference_date. Input order is kept.
    """
    return [
        Card(
            card_id=stored.card_id,
            card_name=stored.card_name,
            current_balance_cents=stored.current_balance_cents,
            credit_limit_cents=stored.credit_limit_cents,
            apr_bps=stored.apr_bps,
            minimum_due_cents=stored.minimum_due_cents,
            due_date=_resolve_date(stored.due_date, stored.due_date_day, get_next_due_date, reference_date),
            statement_close_date=_resolve_date(
                stored.statement_close_date,
                stored.statement_close_day,
                get_next_statement_close_date,
                reference_date,
            ),
        )
        for stored in stored_cards
        if not stored.exclude_from_optimization
    ]
