"""Read-only views over a PlanProjection for dashboard consumption"""

from typing import Dict, List, Optional

from finplan.domain.models import (
    BucketBreakdown,
    CostBasisPoint,
    Goal,
    GoalSummary,
    InvestmentPlan,
    PlanProjection,
)


def select_current_month(projection: PlanProjection) -> Optional[str]:
    return projection.timeline[0].month if projection.timeline else None


def select_hero_free(projection: PlanProjection) -> int:
    return projection.timeline[0].buckets.free if projection.timeline else 0


def select_current_buckets(projection: PlanProjection) -> BucketBreakdown:
    if not projection.timeline:
        return BucketBreakdown()
    return projection.timeline[0].buckets


def select_free_timeline(projection: PlanProjection) -> List[Dict[str, object]]:
    return [{"month": m.month, "free": m.buckets.free} for m in projection.timeline]


def select_shortfall_events(projection: PlanProjection) -> List[Dict[str, object]]:
    return [
        {"month": e.month, "amount": e.amount if e.amount is not None else 0}
        for e in projection.events
        if e.type == "shortfall"
    ]


def _goal_summary_sort_key(summary: GoalSummary) -> tuple:
    # priority asc, reachable first, earlier ETA first, missing ETA last
    return (
        summary.priority,
        not summary.reachable,
        summary.eta_month is None,
        summary.eta_month or "",
    )


def select_prioritized_goal_summaries(
    projection: PlanProjection,
    domain_goals: List[Goal],
    limit: int = 3,
) -> List[GoalSummary]:
    """
    Join projected goals with their domain records and rank them.

    Projected goals without a matching domain record are dropped.
    """
    domain_by_id = {goal.id: goal for goal in domain_goals}
    merged = []
    for projected in projection.goals:
        goal = domain_by_id.get(projected.goal_id)
        if goal is None:
            continue
        merged.append(
            GoalSummary(
                goal_id=goal.id,
                name=goal.name,
                priority=goal.priority,
                reachable=projected.reachable,
                eta_month=projected.eta_month,
            )
        )

    merged.sort(key=_goal_summary_sort_key)
    return merged[:limit]


def compute_cost_basis_timeline(
    investments: List[InvestmentPlan],
    month_keys: List[str],
) -> Dict[str, List[CostBasisPoint]]:
    """Cost basis per investment at the start of each month (contributions only, no returns)"""
    result: Dict[str, List[CostBasisPoint]] = {}
    for investment in investments:
        if not investment.id:
            continue
        cost_basis = investment.cost_basis_cents or 0
        points = []
        for month in month_keys:
            points.append(CostBasisPoint(month=month, cost_basis_cents=cost_basis))
            cost_basis += investment.monthly_contribution
        result[investment.id] = points
    return result
