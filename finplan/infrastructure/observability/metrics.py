"""Prometheus metrics for projection volume, shortfalls and recommendations"""

from typing import List
from prometheus_client import Counter, Histogram
from finplan.domain.models import PlanProjection, Recommendation

# Projection metrics
projection_counter = Counter(
    "finplan_projection_total",
    "Total plan projections built",
    ["source"],  # request | store
)

shortfall_month_counter = Counter(
    "finplan_shortfall_months_total",
    "Projected months with negative free money",
)

projection_duration_histogram = Histogram(
    "finplan_projection_duration_seconds",
    "Time spent building a projection",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Recommendation metrics
recommendation_counter = Counter(
    "finplan_recommendation_total",
    "Recommendations returned",
    ["type"],  # shortfall_risk | low_slack | goal_contrib_issue
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(projection: PlanProjection, source: str) -> None:
    projection_counter.labels(source=source).inc()
    shortfalls = sum(1 for event in projection.events if event.type == "shortfall")
    if shortfalls:
        shortfall_month_counter.inc(shortfalls)


def record_recommendations(recommendations: List[Recommendation]) -> None:
    for rec in recommendations:
        recommendation_counter.labels(type=rec.type).inc()
