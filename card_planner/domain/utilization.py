"""Per-card utilization calculation"""

from card_planner.domain.models import Card


def calculate_utilization(card: Card) -> float:
    """
    Utilization percentage: balance / limit * 100.

    Missing or non-positive limit is treated as unknown and returns 0.
    Over-limit balances produce values above 100.
    """
    limit_cents = card.credit_limit_cents or 0
    if limit_cents <= 0:
        return 0.0
    return card.current_balance_cents / limit_cents * 100
