"""Load the persisted client snapshot and turn it into planning input"""

import logging
from typing import Any, Dict, List

from finplan.adapters.records import build_plan_input_from_records
from finplan.config import settings
from finplan.domain.dashboard import build_dashboard_model
from finplan.domain.models import DashboardModel, PlanInput, PlanSettings
from finplan.domain.units import is_finite_number, round_half_up
from finplan.infrastructure.database.repositories import StoreRepository


def ensure_amount_cents_mirror(entry: Dict[str, Any]) -> Dict[str, Any]:
    """
    Older store versions wrote cents into ``amount`` without the
    ``amountCents`` mirror. Backfill it so the record adapter's
    "amountCents present -> cents" rule applies.
    """
    if is_finite_number(entry.get("amount")) and entry.get("amountCents") is None:
        return {**entry, "amountCents": round_half_up(entry["amount"])}
    return entry


def _records(state: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    items = state.get(name)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def build_plan_input_from_persisted_store(repository: StoreRepository, key: str | None = None) -> PlanInput:
    """
    Read ``{"state": {...}}`` from the store and adapt it.

    A missing or malformed snapshot yields an empty PlanInput: the dashboard
    of a fresh install must still render.
    """
    key = key or settings.store_key
    snapshot = repository.get(key)
    if snapshot is None:
        return PlanInput()

    state = snapshot.get("state") if isinstance(snapshot, dict) else None
    if not isinstance(state, dict):
        logging.warning("Persisted snapshot has no state", extra={"store_key": key})
        return PlanInput()

    try:
        return build_plan_input_from_records(
            incomes=[ensure_amount_cents_mirror(i) for i in _records(state, "incomes")],
            expenses=[ensure_amount_cents_mirror(e) for e in _records(state, "expenses")],
            goals=_records(state, "goals"),
            assets=_records(state, "assets"),
            reserves=_records(state, "reserves"),
        )
    except (KeyError, TypeError, ValueError) as e:
        logging.warning(f"Malformed persisted snapshot: {e!r}", extra={"store_key": key})
        return PlanInput()


def build_dashboard_model_from_store(
    repository: StoreRepository,
    plan_settings: PlanSettings,
    goal_limit: int | None = None,
    recommendation_limit: int | None = None,
    key: str | None = None,
) -> DashboardModel:
    plan_input = build_plan_input_from_persisted_store(repository, key)
    return build_dashboard_model(
        plan_input,
        plan_settings,
        goal_limit=goal_limit or settings.goal_summary_limit,
        recommendation_limit=recommendation_limit or settings.recommendation_limit,
    )
