"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

IntervalName = Literal["monthly", "quarterly", "semi_yearly", "yearly"]


class IncomeSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    amount: int = Field(..., description="Amount in cents")
    interval: IntervalName = "monthly"
    confidence: Literal["fixed", "likely", "uncertain"] = "fixed"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    note: Optional[str] = None


class ExpenseSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    amount: int = Field(..., description="Amount in cents")
    interval: IntervalName = "monthly"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    note: Optional[str] = None


class ReserveSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    target_amount: int = 0
    monthly_contribution: int = Field(..., description="Precomputed monthly contribution in cents")
    current_amount: int = 0
    interval: IntervalName = "yearly"
    due_date: Optional[date] = None
    linked_expense_id: Optional[str] = None
    note: Optional[str] = None


class GoalSchema(BaseModel):
    """Goal amounts: *_cents in cents, legacy fields in euros"""

    id: str = Field(..., min_length=1)
    name: str = ""
    priority: int = Field(3, ge=1, le=5)
    target_amount: Optional[float] = None
    current_amount: Optional[float] = None
    monthly_contribution: Optional[float] = None
    target_amount_cents: Optional[int] = None
    current_amount_cents: Optional[int] = None
    monthly_contribution_cents: Optional[int] = None
    wish_date: Optional[date] = None
    note: Optional[str] = None


class InvestmentSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    monthly_contribution: int = Field(..., description="Monthly contribution in cents")
    current_value: Optional[int] = None
    cost_basis_cents: Optional[int] = None
    note: Optional[str] = None


class KnownPaymentSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    amount: int = Field(..., description="Amount in cents")
    due_date: date
    note: Optional[str] = None


class PlanInputSchema(BaseModel):
    incomes: List[IncomeSchema] = []
    expenses: List[ExpenseSchema] = []
    reserves: List[ReserveSchema] = []
    goals: List[GoalSchema] = []
    investments: List[InvestmentSchema] = []
    known_payments: List[KnownPaymentSchema] = []


class PlanSettingsSchema(BaseModel):
    forecast_months: int = Field(12, gt=0, le=600)
    start_month: Optional[str] = Field(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/projection"""

    plan_input: PlanInputSchema
    settings: PlanSettingsSchema = PlanSettingsSchema()


class RecommendationRequest(ProjectionRequest):
    """Request body for POST /v1/recommendations"""

    max_results: int = Field(2, gt=0, le=10)


class BucketSchema(BaseModel):
    bound: int
    planned: int
    invested: int
    free: int


class MonthProjectionSchema(BaseModel):
    month: str
    income: int
    buckets: BucketSchema
    planned_goal_breakdown_by_id: Dict[str, int] = {}


class GoalProjectionSchema(BaseModel):
    goal_id: str
    reachable: bool
    eta_month: Optional[str] = None


class PlanEventSchema(BaseModel):
    month: str
    type: str
    amount: Optional[int] = None
    ref_id: Optional[str] = None
    note: Optional[str] = None


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projection"""

    settings: PlanSettingsSchema
    timeline: List[MonthProjectionSchema]
    goals: List[GoalProjectionSchema]
    events: List[PlanEventSchema]


class ScoreSchema(BaseModel):
    impact: float
    urgency: float
    simplicity: float
    robustness: float
    total: float


class RecommendationSchema(BaseModel):
    id: str
    type: str
    title: str
    reason: str
    evidence: Dict[str, Any]
    actions: List[Dict[str, Any]]
    score: ScoreSchema
    action: Optional[Dict[str, Any]] = None


class RecommendationResponse(BaseModel):
    """Response for POST /v1/recommendations"""

    hero_free_cents: int
    recommendations: List[RecommendationSchema]


class GoalSummarySchema(BaseModel):
    goal_id: str
    name: str
    priority: int
    reachable: bool
    eta_month: Optional[str] = None


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    hero_free: int
    buckets: BucketSchema
    free_timeline: List[Dict[str, Any]]
    shortfalls: List[Dict[str, Any]]
    goals: List[GoalSummarySchema]
    recommendations: List[RecommendationSchema]
    projection: ProjectionResponse


class StoreValueResponse(BaseModel):
    """Response for GET/PUT /v1/store/{key}"""

    key: str
    value: Any
