"""Forecast engine - month-by-month cash-flow projection over a planning snapshot"""

from typing import Dict, List, Optional

from finplan.config import settings as app_settings
from finplan.domain.exceptions import InvalidCentsError, InvalidSettingsError
from finplan.domain.goals import GoalFundingState, goal_rate_cents, goal_remaining_cents
from finplan.domain.models import (
    BucketBreakdown,
    Goal,
    GoalProjection,
    KnownFuturePayment,
    MonthProjection,
    PlanEvent,
    PlanInput,
    PlanProjection,
    PlanSettings,
    RecurringExpense,
    RecurringIncome,
)
from finplan.domain.units import assert_integer_cents, is_active_in_month, is_occurrence_month
from finplan.utils.date_utils import current_month_key, generate_month_keys, is_valid_month_key, month_of


def resolve_month_keys(plan_settings: PlanSettings) -> List[str]:
    """Validate the horizon and return its month keys"""
    months = plan_settings.forecast_months
    if isinstance(months, bool) or not isinstance(months, int) or months <= 0:
        raise InvalidSettingsError(f"forecast_months must be a positive integer, got: {months!r}")

    start_month = plan_settings.start_month or current_month_key()
    if not is_valid_month_key(start_month):
        raise InvalidSettingsError(f"start_month must be formatted YYYY-MM, got: {start_month!r}")

    return generate_month_keys(start_month, months)


def validate_plan_input(plan_input: PlanInput) -> None:
    """
    Reject any monetary input that is not integer cents.

    Floats are rejected even when integral; unit resolution belongs to the
    adapters.
    """
    for income in plan_input.incomes:
        assert_integer_cents(income.amount, f"income[{income.id}].amount")
    for expense in plan_input.expenses:
        assert_integer_cents(expense.amount, f"expense[{expense.id}].amount")
    for reserve in plan_input.reserves:
        assert_integer_cents(reserve.monthly_contribution, f"reserve[{reserve.id}].monthly_contribution")
    for investment in plan_input.investments:
        assert_integer_cents(investment.monthly_contribution, f"investment[{investment.id}].monthly_contribution")
    for payment in plan_input.known_payments:
        assert_integer_cents(payment.amount, f"known_payment[{payment.id}].amount")


def income_for_month(month: str, incomes: List[RecurringIncome]) -> int:
    """
    Income booked in ``month``.

    Recurring incomes book their full amount in each occurrence month within
    their date range. One-time incomes (start_date == end_date) book only in
    their own month.
    """
    recurring = sum(
        income.amount
        for income in incomes
        if not income.is_one_time
        and is_active_in_month(month, income.start_date, income.end_date)
        and is_occurrence_month(month, income.start_date, income.interval)
    )
    one_time = sum(
        income.amount
        for income in incomes
        if income.is_one_time and month_of(income.start_date) == month
    )
    return recurring + one_time


def expenses_for_month(month: str, expenses: List[RecurringExpense]) -> int:
    """Recurring expenses booked in ``month`` (full amount in occurrence months)"""
    return sum(
        expense.amount
        for expense in expenses
        if is_active_in_month(month, expense.start_date, expense.end_date)
        and is_occurrence_month(month, expense.start_date, expense.interval)
    )


def payments_by_month(payments: List[KnownFuturePayment]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for payment in payments:
        month = month_of(payment.due_date)
        totals[month] = totals.get(month, 0) + payment.amount
    return totals


def check_month_integrity(projection: MonthProjection) -> None:
    """Every output field must be integer cents and free must balance exactly"""
    label = f"month[{projection.month}]"
    buckets = projection.buckets
    assert_integer_cents(projection.income, f"{label}.income")
    assert_integer_cents(buckets.bound, f"{label}.bound")
    assert_integer_cents(buckets.planned, f"{label}.planned")
    assert_integer_cents(buckets.invested, f"{label}.invested")
    assert_integer_cents(buckets.free, f"{label}.free")
    for goal_id, amount in projection.planned_goal_breakdown_by_id.items():
        assert_integer_cents(amount, f"{label}.planned_goal_breakdown_by_id[{goal_id}]")

    expected_free = projection.income - buckets.bound - buckets.planned - buckets.invested
    if buckets.free != expected_free:
        raise InvalidCentsError(f"{label}.free", buckets.free)


def build_events(timeline: List[MonthProjection], payments: List[KnownFuturePayment]) -> List[PlanEvent]:
    """payment_due for every known payment, then shortfall for every month with free < 0"""
    events = [
        PlanEvent(
            month=month_of(payment.due_date),
            type="payment_due",
            amount=payment.amount,
            ref_id=payment.id,
            note=payment.note,
        )
        for payment in payments
    ]
    events.extend(
        PlanEvent(month=month.month, type="shortfall", amount=month.buckets.free)
        for month in timeline
        if month.buckets.free < 0
    )
    return events


def project_goals(goals: List[Goal], month_keys: List[str]) -> List[GoalProjection]:
    """
    Reachability and ETA per goal within the horizon.

    A goal needs ``ceil(remaining / rate)`` months; an already funded goal is
    reached in the first month. Goals without a positive rate are never
    reachable.
    """
    summaries = []
    for goal in goals:
        rate = goal_rate_cents(goal)
        eta_month: Optional[str] = None
        reachable = False

        if rate > 0:
            remaining = goal_remaining_cents(goal)
            if remaining <= 0:
                eta_month = month_keys[0]
                reachable = True
            else:
                months_needed = -(-remaining // rate)
                if months_needed <= len(month_keys):
                    eta_month = month_keys[months_needed - 1]
                    reachable = True

        summaries.append(GoalProjection(goal_id=goal.id, reachable=reachable, eta_month=eta_month))
    return summaries


def build_plan_projection(
    plan_input: PlanInput,
    plan_settings: PlanSettings,
    integrity_checks: bool | None = None,
) -> PlanProjection:
    """
    Main entry point: project the plan month by month.

    Pure and deterministic: the same input and settings always produce the
    same projection, and earlier months never depend on the horizon length.
    Months are processed strictly in order because goal funding carries its
    remaining balances forward.

    Raises:
        InvalidSettingsError: horizon or start month malformed
        InvalidCentsError: a monetary input (or, with integrity checks on,
            an output field) is not integer cents
    """
    if integrity_checks is None:
        integrity_checks = app_settings.integrity_checks_enabled

    month_keys = resolve_month_keys(plan_settings)
    validate_plan_input(plan_input)

    reserve_total = sum(reserve.monthly_contribution for reserve in plan_input.reserves)
    invested_total = sum(investment.monthly_contribution for investment in plan_input.investments)
    due_by_month = payments_by_month(plan_input.known_payments)
    funding = GoalFundingState(plan_input.goals)

    timeline: List[MonthProjection] = []
    for month in month_keys:
        breakdown = funding.allocate()
        planned = sum(breakdown.values())
        income = income_for_month(month, plan_input.incomes)
        bound = (
            expenses_for_month(month, plan_input.expenses)
            + reserve_total
            + due_by_month.get(month, 0)
        )
        free = income - bound - planned - invested_total

        projection = MonthProjection(
            month=month,
            income=income,
            buckets=BucketBreakdown(bound=bound, planned=planned, invested=invested_total, free=free),
            planned_goal_breakdown_by_id=breakdown,
        )
        if integrity_checks:
            check_month_integrity(projection)
        timeline.append(projection)

    return PlanProjection(
        settings=plan_settings,
        timeline=timeline,
        goals=project_goals(plan_input.goals, month_keys),
        events=build_events(timeline, plan_input.known_payments),
    )
