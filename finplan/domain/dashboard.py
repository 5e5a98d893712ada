"""Dashboard facade - one projection, every view the dashboard needs"""

from finplan.domain.forecast import build_plan_projection
from finplan.domain.models import DashboardModel, PlanInput, PlanSettings
from finplan.domain.scoring import MAX_RECOMMENDATIONS, select_top_recommendations
from finplan.domain.selectors import (
    select_current_buckets,
    select_free_timeline,
    select_hero_free,
    select_prioritized_goal_summaries,
    select_shortfall_events,
)


def build_dashboard_model(
    plan_input: PlanInput,
    plan_settings: PlanSettings,
    goal_limit: int = 3,
    recommendation_limit: int = MAX_RECOMMENDATIONS,
) -> DashboardModel:
    projection = build_plan_projection(plan_input, plan_settings)
    hero_free = select_hero_free(projection)

    return DashboardModel(
        hero_free=hero_free,
        buckets=select_current_buckets(projection),
        free_timeline=select_free_timeline(projection),
        shortfalls=select_shortfall_events(projection),
        goals=select_prioritized_goal_summaries(projection, plan_input.goals, limit=goal_limit),
        recommendations=select_top_recommendations(
            projection, plan_input.goals, hero_free, max_results=recommendation_limit
        ),
        projection=projection,
        domain_goals=plan_input.goals,
    )
