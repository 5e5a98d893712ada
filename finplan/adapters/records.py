"""Map loosely typed stored records into the planning domain

Stored records use the client app's camelCase keys and may predate the cents
migration, so every monetary field is resolved with ``resolve_cents`` here,
once. Nothing downstream of this module sees euro floats, except Goal's
legacy fields which are kept for display.
"""

from typing import Any, Dict, Iterable, List, Optional

from finplan.domain.models import (
    Goal,
    InvestmentPlan,
    KnownFuturePayment,
    PlanInput,
    RecurringExpense,
    RecurringIncome,
    ReserveBucket,
)
from finplan.domain.units import INTERVAL_MONTHS, is_finite_number, resolve_cents, round_half_up, to_iso_date

Record = Dict[str, Any]

GOAL_PRIORITY_BY_LABEL = {
    "critical": 1,
    "high": 2,
    "medium": 3,
    "low": 5,
}


def map_interval(value: Optional[str]) -> str:
    """Repository recurrence -> domain interval; daily/weekly/biweekly approximate as monthly"""
    return value if value in INTERVAL_MONTHS else "monthly"


def map_goal_priority(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 5:
        return value
    return GOAL_PRIORITY_BY_LABEL.get(value, 3)


def is_recurring(record: Record) -> bool:
    if "isRecurring" in record:
        return bool(record["isRecurring"])
    return bool(record.get("recurrenceInterval"))


def _name(record: Record) -> str:
    return record.get("title") or record.get("name") or ""


def _amount_cents(record: Record) -> int:
    return resolve_cents(record, "amountCents", "amount")


def map_income(record: Record) -> Optional[RecurringIncome]:
    """
    Recurring incomes start at their date; one-time incomes start and end on it.

    An undated one-time income is dropped: without a date it would read as an
    unbounded monthly income.
    """
    when = to_iso_date(record.get("date"))
    if is_recurring(record):
        return RecurringIncome(
            id=record["id"],
            name=_name(record),
            amount=_amount_cents(record),
            interval=map_interval(record.get("recurrenceInterval")),
            confidence=record.get("confidence") or "fixed",
            start_date=when,
            end_date=to_iso_date(record.get("endDate")),
            note=record.get("notes"),
        )
    if not when:
        return None
    return RecurringIncome(
        id=record["id"],
        name=_name(record),
        amount=_amount_cents(record),
        interval="monthly",
        confidence="fixed",
        start_date=when,
        end_date=when,
        note=record.get("notes"),
    )


def map_expense(record: Record) -> Optional[RecurringExpense]:
    """Recurring expenses only; one-time expenses become known payments"""
    if not is_recurring(record):
        return None
    return RecurringExpense(
        id=record["id"],
        name=_name(record),
        amount=_amount_cents(record),
        interval=map_interval(record.get("recurrenceInterval")),
        start_date=to_iso_date(record.get("date")),
        end_date=to_iso_date(record.get("endDate")),
        note=record.get("notes"),
    )


def map_known_payment(record: Record) -> Optional[KnownFuturePayment]:
    """One-time expense -> known payment; undated ones cannot be scheduled"""
    if is_recurring(record):
        return None
    due_date = to_iso_date(record.get("date"))
    if not due_date:
        return None
    return KnownFuturePayment(
        id=record["id"],
        name=_name(record),
        amount=_amount_cents(record),
        due_date=due_date,
        note=record.get("notes"),
    )


def map_goal(record: Record) -> Goal:
    return Goal(
        id=record["id"],
        name=_name(record),
        priority=map_goal_priority(record.get("priority")),
        target_amount=record.get("targetAmount"),
        current_amount=record.get("currentAmount"),
        monthly_contribution=record.get("monthlyContribution"),
        target_amount_cents=resolve_cents(record, "targetAmountCents", "targetAmount"),
        current_amount_cents=resolve_cents(record, "currentAmountCents", "currentAmount"),
        monthly_contribution_cents=resolve_cents(record, "monthlyContributionCents", "monthlyContribution"),
        wish_date=to_iso_date(record.get("targetDate")),
        note=record.get("description"),
    )


def resolve_cost_basis_cents(record: Record) -> int:
    """First usable value of costBasisCents, valueCents, then euro costBasis, currentValue, initialInvestment"""
    for cents_field in ("costBasisCents", "valueCents"):
        if is_finite_number(record.get(cents_field)):
            return round_half_up(record[cents_field])
    for euro_field in ("costBasis", "currentValue", "initialInvestment"):
        if is_finite_number(record.get(euro_field)):
            return round_half_up(record[euro_field] * 100)
    return 0


def map_asset(record: Record) -> InvestmentPlan:
    monthly = record.get("monthlyContributionCents")
    has_market_value = any(record.get(key) is not None for key in ("marketValueCents", "marketValue"))
    return InvestmentPlan(
        id=record["id"],
        name=_name(record),
        monthly_contribution=round_half_up(monthly) if is_finite_number(monthly) else 0,
        current_value=resolve_cents(record, "marketValueCents", "marketValue") if has_market_value else None,
        cost_basis_cents=resolve_cost_basis_cents(record),
        note=record.get("notes"),
    )


def map_reserve(record: Record) -> ReserveBucket:
    return ReserveBucket(
        id=record["id"],
        name=_name(record),
        target_amount=resolve_cents(record, "targetAmountCents", "targetAmount"),
        monthly_contribution=resolve_cents(record, "monthlyContributionCents", "monthlyContribution"),
        current_amount=resolve_cents(record, "currentAmountCents", "currentAmount"),
        interval=map_interval(record.get("interval")),
        due_date=to_iso_date(record.get("dueDate")),
        linked_expense_id=record.get("linkedExpenseId"),
        note=record.get("notes"),
    )


def build_plan_input_from_records(
    incomes: Iterable[Record] = (),
    expenses: Iterable[Record] = (),
    goals: Iterable[Record] = (),
    assets: Iterable[Record] = (),
    reserves: Iterable[Record] = (),
) -> PlanInput:
    """
    Build the engine input from stored records.

    Raises:
        KeyError: a record lacks its ``id``
    """
    expenses = list(expenses)
    recurring_expenses: List[RecurringExpense] = [e for e in map(map_expense, expenses) if e is not None]
    known_payments: List[KnownFuturePayment] = [p for p in map(map_known_payment, expenses) if p is not None]

    return PlanInput(
        incomes=[i for i in map(map_income, incomes) if i is not None],
        expenses=recurring_expenses,
        reserves=[map_reserve(record) for record in reserves],
        goals=[map_goal(record) for record in goals],
        investments=[map_asset(record) for record in assets],
        known_payments=known_payments,
    )
