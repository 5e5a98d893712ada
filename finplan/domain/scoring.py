"""Recommendation scoring - weighted ranking of rule candidates"""

from dataclasses import replace
from typing import List

from finplan.domain.models import Goal, NavigationAction, PlanProjection, Recommendation, RecommendationScore
from finplan.domain.recommendations import build_recommendation_candidates

MAX_RECOMMENDATIONS = 2

IMPACT_WEIGHT = 0.35
URGENCY_WEIGHT = 0.35
SIMPLICITY_WEIGHT = 0.20
ROBUSTNESS_WEIGHT = 0.10


def calculate_score(candidate: Recommendation) -> RecommendationScore:
    """
    Score a candidate on four 0-10 axes.

    Axis values per type:
    - shortfall_risk: most urgent; impact grows from 8 to 10 with the gap
      (+1 per 100.00 of shortfall, capped)
    - low_slack: medium on every axis, easy to act on
    - goal_contrib_issue: impact scales with the goal rate, 7 at 100.00/month
    """
    amount_cents = candidate.evidence.get("amount_cents") or 0
    impact = urgency = simplicity = robustness = 0.0

    if candidate.type == "shortfall_risk":
        urgency = 10
        impact = min(10, 8 + min(2, abs(amount_cents) / 10_000))
        simplicity = 5
        robustness = 8
    elif candidate.type == "low_slack":
        urgency = 6
        impact = 6
        simplicity = 8
        robustness = 6
    elif candidate.type == "goal_contrib_issue":
        urgency = 4
        impact = min(7, amount_cents / 10_000 * 7)
        simplicity = 8
        robustness = 6

    total = (
        (IMPACT_WEIGHT * impact)
        + (URGENCY_WEIGHT * urgency)
        + (SIMPLICITY_WEIGHT * simplicity)
        + (ROBUSTNESS_WEIGHT * robustness)
    )

    return RecommendationScore(
        impact=impact,
        urgency=urgency,
        simplicity=simplicity,
        robustness=robustness,
        total=round(total, 2),
    )


def score_candidate(candidate: Recommendation) -> Recommendation:
    return replace(candidate, score=calculate_score(candidate))


def determine_navigation(candidate: Recommendation) -> NavigationAction | None:
    """Primary call-to-action: open the planning view, or the affected goal"""
    if candidate.type in ("shortfall_risk", "low_slack"):
        return NavigationAction(label="View", kind="open_planning", intent="planning")
    if candidate.type == "goal_contrib_issue":
        goal_id = candidate.evidence.get("goal_id")
        if goal_id:
            return NavigationAction(label="Go to goal", kind="open_goal", intent="goals", payload={"goal_id": goal_id})
    return None


def select_top_recommendations(
    projection: PlanProjection,
    goals: List[Goal],
    hero_free_cents: int,
    max_results: int = MAX_RECOMMENDATIONS,
) -> List[Recommendation]:
    """
    Main entry point: build, score and rank recommendation candidates.

    Ties keep rule order (shortfall, low slack, goals).
    """
    candidates = [
        score_candidate(replace(candidate, action=determine_navigation(candidate)))
        for candidate in build_recommendation_candidates(projection, goals, hero_free_cents)
    ]
    candidates.sort(key=lambda rec: rec.score.total, reverse=True)
    return candidates[:max_results]
