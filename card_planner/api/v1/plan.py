"""POST /v1/plan/generate - payment plan generation endpoint"""

import asyncio
import logging
import time
from functools import partial
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Request

from card_planner.api.v1.schemas import (
    GeneratePlanRequest,
    PlanActionSchema,
    PlanResponse,
    PlanSnapshotSchema,
    PortfolioSchema,
)
from card_planner.api.dependencies import get_request_id
from card_planner.config import settings
from card_planner.domain.cards import build_solver_cards
from card_planner.domain.exceptions import ConstraintViolationError
from card_planner.domain.models import GeneratePlanOptions, PlanAction, PlanSnapshot, StoredCard
from card_planner.domain.plan import generate_plan
from card_planner.infrastructure.observability.metrics import (
    constraint_violation_counter,
    record_plan,
    solver_timeout_counter,
)
from card_planner.infrastructure.observability.logging import log_plan_generated

router = APIRouter()


def _action_schema(action: PlanAction) -> PlanActionSchema:
    return PlanActionSchema(
        card_id=action.card_id,
        card_name=action.card_name,
        action_type=action.action_type,
        amount_cents=action.amount_cents,
        target_date=action.target_date,
        priority=action.priority,
        reason=action.reason,
        reason_tags=list(action.reason_tags),
    )


def _snapshot_schema(snapshot: PlanSnapshot) -> PlanSnapshotSchema:
    return PlanSnapshotSchema(
        plan_id=snapshot.plan_id,
        generated_at=snapshot.generated_at,
        cycle_label=snapshot.cycle_label,
        focus_summary=snapshot.focus_summary,
        next_action=_action_schema(snapshot.next_action) if snapshot.next_action else None,
        actions=[_action_schema(a) for a in snapshot.actions],
        portfolio=PortfolioSchema(
            utilization=snapshot.portfolio.utilization,
            confidence=snapshot.portfolio.confidence,
        ),
    )


@router.post("/plan/generate", response_model=PlanResponse)
async def create_plan(request_body: GeneratePlanRequest, request: Request):
    """
    Generate a payment plan for the supplied cards.

    Flow:
    1. Drop excluded cards and resolve day-of-month dates
    2. Run the solver in the default executor under the configured time budget
    3. Return the snapshot with total payment for the caller to persist
    """
    request_id = get_request_id(request)
    strategy = request_body.strategy or settings.default_strategy
    reference_date = request_body.reference_date or datetime.now(timezone.utc)

    cards = build_solver_cards(
        (StoredCard(**card.model_dump()) for card in request_body.cards),
        reference_date,
    )
    options = GeneratePlanOptions(
        reference_date=reference_date,
        plan_id=request_body.plan_id,
        generated_at=request_body.generated_at,
    )

    loop = asyncio.get_running_loop()
    start_time = time.time()
    try:
        snapshot = await asyncio.wait_for(
            loop.run_in_executor(
                None, partial(generate_plan, cards, request_body.available_cash_cents, strategy, options)
            ),
            timeout=settings.solver_timeout_ms / 1000,
        )

    except ConstraintViolationError as e:
        constraint_violation_counter.inc()
        logging.warning(f"Constraint violation: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=400,
            detail={
                "code": "SOLVER_CONSTRAINT_VIOLATION",
                "message": str(e),
                "details": e.to_payload(),
            },
        )

    except asyncio.TimeoutError:
        solver_timeout_counter.inc()
        logging.error("Solver timed out", extra={"request_id": request_id, "card_count": len(cards)})
        raise HTTPException(
            status_code=504,
            detail={
                "code": "SOLVER_TIMEOUT",
                "message": "Plan generation timed out.",
                "details": {"suggestion": "Try reducing the number of cards or simplifying constraints."},
            },
        )

    except Exception as e:
        logging.error(f"Unexpected solver error: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=500,
            detail={"code": "SOLVER_ERROR", "message": "Failed to generate plan."},
        )

    duration = time.time() - start_time
    record_plan(strategy, duration)
    log_plan_generated(
        request_id,
        strategy,
        len(cards),
        len(snapshot.actions),
        snapshot.total_payment_cents,
        duration * 1000,
    )

    return PlanResponse(
        plan=_snapshot_schema(snapshot),
        strategy=strategy,
        available_cash_cents=request_body.available_cash_cents,
        total_payment_cents=snapshot.total_payment_cents,
    )
