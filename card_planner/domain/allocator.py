"""Payment allocation - minimums first, then surplus distribution by strategy"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple
from card_planner.domain.models import Card, PlanAction, STRATEGIES
from card_planner.domain.exceptions import InvalidStrategyError
from card_planner.domain.sorting import sort_cards_by_strategy
from card_planner.domain.utilization import calculate_utilization
from card_planner.domain.validation import total_minimum_cents
from card_planner.utils.date_utils import add_days_iso, is_iso_date

logger = logging.getLogger(__name__)

DUE_DATE_FALLBACK_DAYS = 30
TARGET_UTILIZATION_PCT = 30

MINIMUM_PRIORITY = 0.5
PRE_STATEMENT_PRIORITY = 0.9

MINIMUM_REASON = "Minimum payment to avoid late fees"
SNOWBALL_REASON = "Extra toward balance (snowball - smallest balance first)"
AVALANCHE_REASON = "Extra toward balance (avalanche - highest APR first)"
PRE_STATEMENT_REASON = "Reduces utilization below 30% before reporting"


class _ActionBook:
    """Allocator-private working set: actions in emission order, indexed by card"""

    def __init__(self, actions: List[PlanAction]):
        self.actions = actions
        self.index_by_card: Dict[str, int] = {a.card_id: i for i, a in enumerate(actions)}

    def add_to_due_date_action(self, card_id: str, extra_cents: int, reason: str, tags: Tuple[str, ...]) -> None:
        i = self.index_by_card[card_id]
        current = self.actions[i]
        self.actions[i] = replace(
            current,
            amount_cents=current.amount_cents + extra_cents,
            reason=reason,
            reason_tags=tags,
        )

    def append(self, action: PlanAction) -> None:
        self.actions.append(action)


def target_due_date(card: Card, reference_date: datetime) -> str:
    """Card's due date when syntactically valid, else reference + 30 days (UTC)"""
    if is_iso_date(card.due_date):
        return card.due_date
    return add_days_iso(reference_date, DUE_DATE_FALLBACK_DAYS)


def target_statement_close_date(card: Card) -> Optional[str]:
    if is_iso_date(card.statement_close_date):
        return card.statement_close_date
    return None


def build_minimum_actions(cards: Sequence[Card], reference_date: datetime) -> List[PlanAction]:
    """One BY_DUE_DATE action per card for its minimum (missing minimum = 0)"""
    return [
        PlanAction(
            card_id=card.card_id,
            card_name=card.card_name,
            action_type="BY_DUE_DATE",
            amount_cents=card.minimum_due_cents or 0,
            target_date=target_due_date(card, reference_date),
            priority=MINIMUM_PRIORITY,
            reason=MINIMUM_REASON,
            reason_tags=("minimum_payment",),
        )
        for card in cards
    ]


def _distribute_toward_balance(
    ordered_cards: Sequence[Card],
    surplus_cents: int,
    book: _ActionBook,
    reason: str,
    tags: Tuple[str, ...],
) -> int:
    """Top up due-date actions in order, never past a card's balance. Returns leftover."""
    remaining = surplus_cents
    for card in ordered_cards:
        if remaining <= 0:
            break
        if card.card_id not in book.index_by_card:
            continue

        headroom = max(0, card.current_balance_cents - (card.minimum_due_cents or 0))
        add_cents = min(headroom, remaining)
        if add_cents > 0:
            remaining -= add_cents
            book.add_to_due_date_action(card.card_id, add_cents, reason, tags)

    return remaining


def distribute_snowball(cards: Sequence[Card], surplus_cents: int, book: _ActionBook) -> int:
    return _distribute_toward_balance(
        sort_cards_by_strategy(cards, "snowball"),
        surplus_cents,
        book,
        SNOWBALL_REASON,
        ("minimum_payment", "stability"),
    )


def distribute_avalanche(cards: Sequence[Card], surplus_cents: int, book: _ActionBook) -> int:
    return _distribute_toward_balance(
        sort_cards_by_strategy(cards, "avalanche"),
        surplus_cents,
        book,
        AVALANCHE_REASON,
        ("apr_priority", "minimum_payment"),
    )


def distribute_utilization(cards: Sequence[Card], surplus_cents: int, book: _ActionBook) -> int:
    """
    Pay high-utilization cards down to 30% before their statement closes.

    Only cards with a valid statement close date and utilization above 30%
    qualify. Highest utilization goes first, earliest close date breaks ties.
    """
    candidates = []
    for card in cards:
        close_date = target_statement_close_date(card)
        utilization = calculate_utilization(card)
        if close_date is not None and utilization > TARGET_UTILIZATION_PCT:
            candidates.append((card, utilization, close_date))

    candidates.sort(key=lambda c: (-c[1], c[2]))

    remaining = surplus_cents
    for card, _, close_date in candidates:
        if remaining <= 0:
            break

        limit_cents = card.credit_limit_cents or 0
        balance_after_min = max(0, card.current_balance_cents - (card.minimum_due_cents or 0))
        target_balance = limit_cents * TARGET_UTILIZATION_PCT // 100
        pay_before = min(max(0, balance_after_min - target_balance), balance_after_min, remaining)

        if pay_before > 0:
            remaining -= pay_before
            book.append(
                PlanAction(
                    card_id=card.card_id,
                    card_name=card.card_name,
                    action_type="BEFORE_STATEMENT_CLOSE",
                    amount_cents=pay_before,
                    target_date=close_date,
                    priority=PRE_STATEMENT_PRIORITY,
                    reason=PRE_STATEMENT_REASON,
                    reason_tags=("utilization_reporting",),
                )
            )

    return remaining


def allocate_payments(
    cards: Sequence[Card],
    available_cash_cents: int,
    strategy: str,
    reference_date: Optional[datetime] = None,
) -> List[PlanAction]:
    """
    Allocate cash across cards.

    Flow:
    1. One BY_DUE_DATE minimum action per card
    2. Surplus = cash - sum(minimums), floored at 0
    3. Surplus distributed by strategy; utilization leftovers fall back to snowball

    Must only be called after constraint validation has passed.
    """
    if strategy not in STRATEGIES:
        raise InvalidStrategyError(f"Unknown strategy: {strategy!r}")

    if reference_date is None:
        reference_date = datetime.now(timezone.utc)

    book = _ActionBook(build_minimum_actions(cards, reference_date))
    surplus = max(0, available_cash_cents - total_minimum_cents(cards))

    if surplus <= 0:
        return book.actions

    if strategy == "utilization":
        surplus = distribute_utilization(cards, surplus, book)
        if surplus > 0:
            surplus = distribute_snowball(cards, surplus, book)
    elif strategy == "snowball":
        surplus = distribute_snowball(cards, surplus, book)
    else:
        surplus = distribute_avalanche(cards, surplus, book)

    logger.debug("Allocation finished", extra={"strategy": strategy, "unallocated_cents": surplus})
    return book.actions
