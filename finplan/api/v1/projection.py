"""POST /v1/projection and /v1/recommendations - plan projection endpoints"""

import logging
import time
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Request

from finplan.api.dependencies import get_request_id
from finplan.api.v1.schemas import (
    PlanInputSchema,
    PlanSettingsSchema,
    ProjectionRequest,
    ProjectionResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from finplan.domain.exceptions import InvalidCentsError, InvalidSettingsError
from finplan.domain.forecast import build_plan_projection
from finplan.domain.models import (
    Goal,
    InvestmentPlan,
    KnownFuturePayment,
    PlanInput,
    PlanSettings,
    RecurringExpense,
    RecurringIncome,
    ReserveBucket,
)
from finplan.domain.scoring import select_top_recommendations
from finplan.domain.selectors import select_hero_free
from finplan.infrastructure.observability.logging import log_projection
from finplan.infrastructure.observability.metrics import (
    projection_duration_histogram,
    record_projection,
    record_recommendations,
)

router = APIRouter()


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def to_plan_input(body: PlanInputSchema) -> PlanInput:
    """Request schema -> domain input (dates become ISO strings)"""
    return PlanInput(
        incomes=[
            RecurringIncome(**i.model_dump(exclude={"start_date", "end_date"}),
                            start_date=_iso(i.start_date), end_date=_iso(i.end_date))
            for i in body.incomes
        ],
        expenses=[
            RecurringExpense(**e.model_dump(exclude={"start_date", "end_date"}),
                             start_date=_iso(e.start_date), end_date=_iso(e.end_date))
            for e in body.expenses
        ],
        reserves=[
            ReserveBucket(**r.model_dump(exclude={"due_date"}), due_date=_iso(r.due_date))
            for r in body.reserves
        ],
        goals=[Goal(**g.model_dump(exclude={"wish_date"}), wish_date=_iso(g.wish_date)) for g in body.goals],
        investments=[InvestmentPlan(**inv.model_dump()) for inv in body.investments],
        known_payments=[
            KnownFuturePayment(**p.model_dump(exclude={"due_date"}), due_date=_iso(p.due_date))
            for p in body.known_payments
        ],
    )


def to_plan_settings(body: PlanSettingsSchema) -> PlanSettings:
    return PlanSettings(forecast_months=body.forecast_months, start_month=body.start_month)


def projection_response(projection) -> ProjectionResponse:
    return ProjectionResponse.model_validate(asdict(projection))


def _project(plan_input: PlanInput, plan_settings: PlanSettings, request_id: str):
    start_time = time.time()

    try:
        with projection_duration_histogram.time():
            projection = build_plan_projection(plan_input, plan_settings)
    except (InvalidCentsError, InvalidSettingsError) as e:
        logging.warning(f"Rejected plan input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_projection(projection, source="request")
    duration_ms = (time.time() - start_time) * 1000
    log_projection(
        request_id,
        plan_settings.forecast_months,
        projection.timeline[0].month,
        sum(1 for event in projection.events if event.type == "shortfall"),
        select_hero_free(projection),
        duration_ms,
    )
    return projection


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(request_body: ProjectionRequest, request: Request):
    """
    Project the submitted plan month by month.

    Returns:
        Timeline with bound/planned/invested/free buckets, goal ETAs and
        payment_due/shortfall events
    """
    plan_input = to_plan_input(request_body.plan_input)
    projection = _project(plan_input, to_plan_settings(request_body.settings), get_request_id(request))
    return projection_response(projection)


@router.post("/recommendations", response_model=RecommendationResponse)
def create_recommendations(request_body: RecommendationRequest, request: Request):
    """
    Rank recommendations for the submitted plan.

    Returns:
        At most ``max_results`` recommendations, highest score first
    """
    plan_input = to_plan_input(request_body.plan_input)
    projection = _project(plan_input, to_plan_settings(request_body.settings), get_request_id(request))
    hero_free = select_hero_free(projection)

    recommendations = select_top_recommendations(
        projection, plan_input.goals, hero_free, max_results=request_body.max_results
    )
    record_recommendations(recommendations)

    return RecommendationResponse.model_validate(
        {"hero_free_cents": hero_free, "recommendations": [asdict(rec) for rec in recommendations]}
    )
