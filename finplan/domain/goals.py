"""Goal funding - stateful, capped monthly contributions toward savings goals"""

from typing import Dict, List

from finplan.domain.models import Goal, GoalsSimulationResult, SimGoal
from finplan.domain.units import resolve_cents


def goal_target_cents(goal: Goal) -> int:
    return resolve_cents(goal, "target_amount_cents", "target_amount")


def goal_current_cents(goal: Goal) -> int:
    return resolve_cents(goal, "current_amount_cents", "current_amount")


def goal_rate_cents(goal: Goal) -> int:
    return resolve_cents(goal, "monthly_contribution_cents", "monthly_contribution")


def goal_remaining_cents(goal: Goal) -> int:
    return max(0, goal_target_cents(goal) - goal_current_cents(goal))


class GoalFundingState:
    """
    Remaining balance per goal, carried forward month by month.

    ``allocate`` must be called once per month in chronological order. Each
    call funds every goal with ``min(rate, remaining)`` and decrements the
    remaining balance, so a goal never receives more than
    ``max(0, target - current)`` over the whole horizon and never restarts
    once exhausted.
    """

    def __init__(self, goals: List[Goal]):
        self.rate_by_id: Dict[str, int] = {}
        self.remaining_by_id: Dict[str, int] = {}
        for goal in goals:
            self.rate_by_id[goal.id] = goal_rate_cents(goal)
            self.remaining_by_id[goal.id] = goal_remaining_cents(goal)

    def allocate(self) -> Dict[str, int]:
        """Fund one month; returns the positive contributions keyed by goal id"""
        breakdown: Dict[str, int] = {}
        for goal_id, rate in self.rate_by_id.items():
            remaining = self.remaining_by_id[goal_id]
            contribution = min(rate, remaining)
            if contribution > 0:
                breakdown[goal_id] = contribution
                self.remaining_by_id[goal_id] = remaining - contribution
        return breakdown


def _is_month_in_range(month: str, start: str | None, end: str | None) -> bool:
    if start and month < start:
        return False
    if end and month > end:
        return False
    return True


def simulate_goals_by_month(months: List[str], goals: List[SimGoal]) -> List[GoalsSimulationResult]:
    """
    Simulate goal balances over ``months``.

    Goals outside their optional [start_month, end_month] window record a
    zero contribution and keep their balance. Active goals receive
    ``min(rate, target - balance)`` while both are positive.
    """
    balances = {goal.id: goal.current_amount_cents for goal in goals}
    results = []

    for month in months:
        planned_goals_cents = 0
        contributions: Dict[str, int] = {}
        balances_after: Dict[str, int] = {}

        for goal in goals:
            if not _is_month_in_range(month, goal.start_month, goal.end_month):
                contributions[goal.id] = 0
                balances_after[goal.id] = balances[goal.id]
                continue

            remaining = max(0, goal.target_amount_cents - balances[goal.id])
            rate = goal.monthly_contribution_cents or 0
            contribution = min(rate, remaining) if rate > 0 and remaining > 0 else 0

            balances[goal.id] += contribution
            planned_goals_cents += contribution
            contributions[goal.id] = contribution
            balances_after[goal.id] = balances[goal.id]

        results.append(
            GoalsSimulationResult(
                month=month,
                planned_goals_cents=planned_goals_cents,
                contributions_by_goal_id=contributions,
                goal_balance_after_by_id=balances_after,
            )
        )

    return results


def to_sim_goal(goal: Goal) -> SimGoal:
    """Reduce a domain goal to resolved cents for the simulator"""
    return SimGoal(
        id=goal.id,
        target_amount_cents=goal_target_cents(goal),
        current_amount_cents=goal_current_cents(goal),
        monthly_contribution_cents=goal_rate_cents(goal),
    )
