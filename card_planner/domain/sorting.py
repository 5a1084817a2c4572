"""Strategy-based card ordering"""

from typing import List, Sequence
from card_planner.domain.models import Card
from card_planner.domain.utilization import calculate_utilization


def sort_cards_by_strategy(cards: Sequence[Card], strategy: str) -> List[Card]:
    """
    Return a new list of cards in priority order for the strategy.

    - snowball: smallest balance first
    - avalanche: highest APR first (missing APR sorts as 0)
    - utilization: highest utilization first

    Ties keep their input order. The input sequence is never modified;
    an unknown strategy returns an unsorted copy.
    """
    if strategy == "snowball":
        return sorted(cards, key=lambda c: c.current_balance_cents)
    if strategy == "avalanche":
        return sorted(cards, key=lambda c: c.apr_bps or 0, reverse=True)
    if strategy == "utilization":
        return sorted(cards, key=calculate_utilization, reverse=True)
    return list(cards)
