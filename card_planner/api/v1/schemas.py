"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

StrategyName = Literal["snowball", "avalanche", "utilization"]


class CardSchema(BaseModel):
    """Card supplied by the caller for plan generation"""

    card_id: str = Field(..., min_length=1)
    card_name: str
    current_balance_cents: int = Field(..., ge=0)
    credit_limit_cents: Optional[int] = Field(None, ge=0)
    apr_bps: Optional[int] = Field(None, ge=0)
    minimum_due_cents: Optional[int] = Field(None, ge=0)
    due_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    statement_close_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    due_date_day: Optional[int] = Field(None, ge=1, le=31)
    statement_close_day: Optional[int] = Field(None, ge=1, le=31)
    exclude_from_optimization: bool = False


class GeneratePlanRequest(BaseModel):
    """Request body for POST /v1/plan/generate"""

    available_cash_cents: int = Field(..., ge=0, description="Cash available for payments in cents")
    strategy: Optional[StrategyName] = None
    cards: List[CardSchema] = Field(default_factory=list)
    reference_date: Optional[datetime] = None
    plan_id: Optional[str] = None
    generated_at: Optional[str] = None


class PlanActionSchema(BaseModel):
    """Single payment action"""

    card_id: str
    card_name: str
    action_type: Literal["BY_DUE_DATE", "BEFORE_STATEMENT_CLOSE"]
    amount_cents: int
    target_date: str
    priority: float
    reason: str
    reason_tags: List[str]


class PortfolioSchema(BaseModel):
    utilization: float
    confidence: Literal["high", "medium", "low"]


class PlanSnapshotSchema(BaseModel):
    """Plan snapshot as returned to the caller for storage"""

    plan_id: str
    generated_at: str
    cycle_label: str
    focus_summary: List[str]
    next_action: Optional[PlanActionSchema] = None
    actions: List[PlanActionSchema]
    portfolio: PortfolioSchema


class PlanResponse(BaseModel):
    """Response for POST /v1/plan/generate"""

    plan: PlanSnapshotSchema
    strategy: StrategyName
    available_cash_cents: int
    total_payment_cents: int
