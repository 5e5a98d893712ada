"""Recommendation rules - stateless predicates over a PlanProjection

Each rule returns unscored candidates; ranking happens in ``scoring``.
"""

from typing import List, Optional

from finplan.domain.goals import goal_rate_cents
from finplan.domain.models import Goal, PlanProjection, Recommendation, RecommendationAction

LOW_SLACK_THRESHOLD_CENTS = 1000


def rule_shortfall_risk(projection: PlanProjection) -> Optional[Recommendation]:
    """First month with negative free money"""
    for month in projection.timeline:
        free = month.buckets.free
        if free < 0:
            return Recommendation(
                id=f"shortfall_risk_{month.month}",
                type="shortfall_risk",
                title="Avoid a budget gap",
                reason=f"In {month.month} your free amount is negative ({free / 100:.2f}).",
                evidence={"month": month.month, "amount_cents": free},
                actions=[
                    RecommendationAction(label="Review fixed costs", kind="navigate"),
                    RecommendationAction(label="Reduce savings rates", kind="adjust_value"),
                    RecommendationAction(label="Increase income", kind="navigate"),
                ],
            )
    return None


def rule_low_slack(projection: PlanProjection, hero_free_cents: int) -> Optional[Recommendation]:
    """Current month leaves (almost) no buffer"""
    if hero_free_cents <= 0 or hero_free_cents < LOW_SLACK_THRESHOLD_CENTS:
        return Recommendation(
            id="low_slack",
            type="low_slack",
            title="Build a larger monthly buffer",
            reason="Your free amount this month is very small.",
            evidence={"amount_cents": hero_free_cents},
            actions=[RecommendationAction(label="Increase buffer", kind="adjust_value")],
        )
    return None


def rule_goal_contribution_issue(projection: PlanProjection, goals: List[Goal]) -> List[Recommendation]:
    """Goals with a savings rate that receive nothing in the first month"""
    if not projection.timeline:
        return []

    first = projection.timeline[0]
    recs = []
    for goal in goals:
        rate = goal_rate_cents(goal)
        if rate <= 0:
            continue
        planned = first.planned_goal_breakdown_by_id.get(goal.id)
        if not planned or planned <= 0:
            recs.append(
                Recommendation(
                    id=f"goal_contrib_issue_{goal.id}",
                    type="goal_contrib_issue",
                    title="Activate the savings rate for this goal",
                    reason="No monthly contribution is currently planned for this goal.",
                    evidence={"goal_id": goal.id, "amount_cents": rate},
                    actions=[
                        RecommendationAction(
                            label="Adjust savings rate",
                            kind="adjust_value",
                            payload={"goal_id": goal.id},
                        )
                    ],
                )
            )
    return recs


def build_recommendation_candidates(
    projection: PlanProjection,
    goals: List[Goal],
    hero_free_cents: int,
) -> List[Recommendation]:
    candidates = []
    shortfall = rule_shortfall_risk(projection)
    if shortfall:
        candidates.append(shortfall)
    low_slack = rule_low_slack(projection, hero_free_cents)
    if low_slack:
        candidates.append(low_slack)
    candidates.extend(rule_goal_contribution_issue(projection, goals))
    return candidates
