"""GET /v1/dashboard - Dashboard model from the persisted snapshot"""

import logging
import time
from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finplan.adapters.persisted_store import build_dashboard_model_from_store
from finplan.api.dependencies import get_request_id, get_store_repository
from finplan.api.v1.schemas import DashboardResponse
from finplan.config import settings
from finplan.domain.exceptions import InvalidCentsError, InvalidSettingsError
from finplan.domain.models import PlanSettings
from finplan.infrastructure.database.repositories import StoreRepository
from finplan.infrastructure.observability.logging import log_projection
from finplan.infrastructure.observability.metrics import record_projection, record_recommendations

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request: Request,
    forecast_months: int = Query(settings.default_forecast_months, gt=0, le=600),
    start_month: Optional[str] = Query(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$"),
    goal_limit: int = Query(settings.goal_summary_limit, gt=0),
    repository: StoreRepository = Depends(get_store_repository),
):
    """
    Build the dashboard from the stored snapshot.

    Returns:
        Hero free amount, current buckets, free timeline, shortfalls,
        prioritized goals and top recommendations
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        model = build_dashboard_model_from_store(
            repository,
            PlanSettings(forecast_months=forecast_months, start_month=start_month),
            goal_limit=goal_limit,
        )
    except (InvalidCentsError, InvalidSettingsError) as e:
        logging.error(f"Stored snapshot rejected by forecast: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_projection(model.projection, source="store")
    record_recommendations(model.recommendations)
    log_projection(
        request_id,
        forecast_months,
        model.projection.timeline[0].month,
        len(model.shortfalls),
        model.hero_free,
        (time.time() - start_time) * 1000,
    )

    payload = asdict(model)
    payload.pop("domain_goals")
    return DashboardResponse.model_validate(payload)
