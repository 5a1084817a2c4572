"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from card_planner.api.main import create_app
from card_planner.domain.models import Card


REFERENCE_DATE = datetime(2026, 1, 15, tzinfo=timezone.utc)


def make_card(card_id: str, card_name: str, **overrides) -> Card:
    """Card with sensible defaults; overrides win"""
    fields = dict(
        current_balance_cents=50_000,
        credit_limit_cents=100_000,
        apr_bps=1999,
        minimum_due_cents=2_500,
        due_date="2026-02-10",
        statement_close_date="2026-01-20",
    )
    fields.update(overrides)
    return Card(card_id=card_id, card_name=card_name, **fields)


@pytest.fixture
def reference_date() -> datetime:
    return REFERENCE_DATE


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def portfolio_cards() -> list[Card]:
    """Mixed card set covering low/high balance, high APR and high utilization"""
    return [
        make_card(
            "card-low",
            "Low Balance",
            current_balance_cents=5_000,
            minimum_due_cents=500,
            apr_bps=1599,
            due_date="2026-02-05",
            statement_close_date="2026-01-18",
        ),
        make_card(
            "card-high",
            "High Balance",
            current_balance_cents=90_000,
            minimum_due_cents=3_000,
            apr_bps=1299,
            due_date="2026-02-11",
            statement_close_date="2026-01-21",
        ),
        make_card(
            "card-apr",
            "High APR",
            current_balance_cents=40_000,
            minimum_due_cents=2_000,
            apr_bps=2999,
            credit_limit_cents=80_000,
            due_date="2026-02-09",
            statement_close_date="2026-01-19",
        ),
        make_card(
            "card-util-high",
            "High Util",
            current_balance_cents=70_000,
            minimum_due_cents=2_500,
            apr_bps=1799,
            credit_limit_cents=80_000,
            due_date="2026-02-12",
            statement_close_date="2026-01-17",
        ),
    ]
