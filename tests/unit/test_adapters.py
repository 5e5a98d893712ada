"""Unit tests for the stored-record adapters"""

from finplan.adapters.persisted_store import (
    build_dashboard_model_from_store,
    build_plan_input_from_persisted_store,
    ensure_amount_cents_mirror,
)
from finplan.adapters.records import (
    build_plan_input_from_records,
    map_asset,
    map_expense,
    map_goal,
    map_goal_priority,
    map_income,
    map_interval,
    map_known_payment,
    map_reserve,
    resolve_cost_basis_cents,
)
from finplan.config import settings
from finplan.domain.models import PlanInput, PlanSettings


class TestRecordMappers:
    def test_map_interval(self):
        assert map_interval("quarterly") == "quarterly"
        assert map_interval("weekly") == "monthly"
        assert map_interval(None) == "monthly"

    def test_map_goal_priority(self):
        assert map_goal_priority(2) == 2
        assert map_goal_priority("critical") == 1
        assert map_goal_priority("low") == 5
        assert map_goal_priority(9) == 3
        assert map_goal_priority(True) == 3
        assert map_goal_priority(None) == 3

    def test_recurring_income(self):
        income = map_income({
            "id": "i1", "title": "Salary", "amountCents": 350000, "amount": 1.0,
            "isRecurring": True, "recurrenceInterval": "monthly",
            "date": "2026-01-01T00:00:00Z", "endDate": "2026-12-31",
        })
        assert income.amount == 350000
        assert income.start_date == "2026-01-01"
        assert income.end_date == "2026-12-31"
        assert not income.is_one_time

    def test_one_time_income(self):
        income = map_income({"id": "i2", "name": "Refund", "amount": 800.5, "isRecurring": False, "date": "2026-05-20"})
        assert income.amount == 80050
        assert income.is_one_time
        assert income.start_date == income.end_date == "2026-05-20"

    def test_undated_one_time_income_is_dropped(self):
        assert map_income({"id": "i3", "amount": 10.0, "isRecurring": False}) is None

    def test_recurrence_inferred_from_interval(self):
        income = map_income({"id": "i4", "amount": 1.0, "recurrenceInterval": "yearly", "date": "2026-03-01"})
        assert income.interval == "yearly"
        assert not income.is_one_time

    def test_expense_split(self):
        recurring = {"id": "e1", "title": "Rent", "amountCents": 120000, "isRecurring": True}
        one_time = {"id": "e2", "title": "Laptop", "amount": 1500.0, "isRecurring": False, "date": "2026-04-10"}
        undated = {"id": "e3", "title": "Someday", "amount": 10.0, "isRecurring": False}

        assert map_expense(recurring).amount == 120000
        assert map_expense(one_time) is None
        assert map_known_payment(recurring) is None
        payment = map_known_payment(one_time)
        assert (payment.amount, payment.due_date) == (150000, "2026-04-10")
        assert map_known_payment(undated) is None

    def test_map_goal(self):
        goal = map_goal({
            "id": "g1", "name": "Vacation", "priority": "high",
            "targetAmount": 3000.0, "currentAmountCents": 50000, "monthlyContribution": 250.0,
            "targetDate": "2027-06-01",
        })
        assert goal.priority == 2
        assert goal.target_amount == 3000.0
        assert goal.target_amount_cents == 300000
        assert goal.current_amount_cents == 50000
        assert goal.monthly_contribution_cents == 25000
        assert goal.wish_date == "2027-06-01"

    def test_cost_basis_resolution_order(self):
        assert resolve_cost_basis_cents({"costBasisCents": 100, "valueCents": 200}) == 100
        assert resolve_cost_basis_cents({"valueCents": 200, "costBasis": 5.0}) == 200
        assert resolve_cost_basis_cents({"costBasis": 5.0, "currentValue": 9.0}) == 500
        assert resolve_cost_basis_cents({"currentValue": 9.0}) == 900
        assert resolve_cost_basis_cents({"initialInvestment": 1.25}) == 125
        assert resolve_cost_basis_cents({}) == 0

    def test_map_asset(self):
        asset = map_asset({
            "id": "a1", "name": "ETF", "monthlyContributionCents": 30000, "monthlyContribution": 999.0,
            "marketValue": 12500.0, "costBasisCents": 1000000,
        })
        assert asset.monthly_contribution == 30000
        assert asset.current_value == 1250000
        assert asset.cost_basis_cents == 1000000

    def test_map_asset_without_contribution_or_value(self):
        asset = map_asset({"id": "a2", "name": "Gold", "monthlyContribution": 50.0})
        assert asset.monthly_contribution == 0
        assert asset.current_value is None

    def test_map_reserve(self):
        reserve = map_reserve({
            "id": "r1", "name": "Insurance", "targetAmount": 1200.0, "monthlyContributionCents": 10000,
            "interval": "yearly", "dueDate": "2026-09-01", "linkedExpenseId": "e9",
        })
        assert reserve.target_amount == 120000
        assert reserve.monthly_contribution == 10000
        assert reserve.due_date == "2026-09-01"
        assert reserve.linked_expense_id == "e9"

    def test_build_plan_input_from_records(self):
        plan = build_plan_input_from_records(
            incomes=[{"id": "i1", "amountCents": 100, "isRecurring": True}],
            expenses=[
                {"id": "e1", "amountCents": 10, "isRecurring": True},
                {"id": "e2", "amountCents": 20, "isRecurring": False, "date": "2026-02-02"},
            ],
            goals=[{"id": "g1", "targetAmountCents": 500}],
            assets=[{"id": "a1", "monthlyContributionCents": 5}],
            reserves=[{"id": "r1", "monthlyContributionCents": 7}],
        )
        assert [i.id for i in plan.incomes] == ["i1"]
        assert [e.id for e in plan.expenses] == ["e1"]
        assert [p.id for p in plan.known_payments] == ["e2"]
        assert [g.id for g in plan.goals] == ["g1"]
        assert plan.investments[0].monthly_contribution == 5
        assert plan.reserves[0].monthly_contribution == 7

    def test_build_plan_input_from_no_records(self):
        assert build_plan_input_from_records() == PlanInput()


class TestPersistedStore:
    def test_amount_mirror_backfill(self):
        assert ensure_amount_cents_mirror({"amount": 1999})["amountCents"] == 1999
        assert ensure_amount_cents_mirror({"amount": 5, "amountCents": 7})["amountCents"] == 7
        assert "amountCents" not in ensure_amount_cents_mirror({"amount": None})

    def test_missing_snapshot_gives_empty_input(self, repository):
        assert build_plan_input_from_persisted_store(repository) == PlanInput()

    def test_malformed_snapshot_gives_empty_input(self, repository):
        repository.set(settings.store_key, {"version": 3})
        assert build_plan_input_from_persisted_store(repository) == PlanInput()

        repository.set(settings.store_key, {"state": {"incomes": [{"amount": 100, "isRecurring": True}]}})
        assert build_plan_input_from_persisted_store(repository) == PlanInput()

    def test_non_record_items_are_ignored(self, repository):
        repository.set(settings.store_key, {"state": {"incomes": "oops", "expenses": [1, None, {"id": "e1", "amount": 500, "isRecurring": True}]}})
        plan = build_plan_input_from_persisted_store(repository)
        assert plan.incomes == []
        assert [(e.id, e.amount) for e in plan.expenses] == [("e1", 500)]

    def test_dashboard_from_store(self, repository):
        repository.set(settings.store_key, {
            "state": {
                "incomes": [{"id": "salary", "title": "Salary", "amount": 300000, "isRecurring": True, "date": "2025-01-01"}],
                "expenses": [
                    {"id": "rent", "title": "Rent", "amount": 100000, "amountCents": 100000, "isRecurring": True},
                    {"id": "car", "title": "Car repair", "amount": 250000, "isRecurring": False, "date": "2026-03-05"},
                ],
                "goals": [{"id": "trip", "name": "Trip", "targetAmountCents": 90000, "monthlyContributionCents": 40000}],
                "assets": [{"id": "etf", "name": "ETF", "monthlyContributionCents": 20000}],
                "reserves": [],
            },
            "version": 3,
        })

        model = build_dashboard_model_from_store(repository, PlanSettings(forecast_months=4, start_month="2026-02"))

        assert [(m["month"], m["free"]) for m in model.free_timeline] == [
            ("2026-02", 140000),
            ("2026-03", -110000),
            ("2026-04", 170000),
            ("2026-05", 180000),
        ]
        assert model.shortfalls == [{"month": "2026-03", "amount": -110000}]
        assert model.goals[0].eta_month == "2026-04"
        assert model.recommendations[0].id == "shortfall_risk_2026-03"

    def test_custom_store_key(self, repository):
        repository.set("other", {"state": {"incomes": [{"id": "i", "amount": 42, "isRecurring": True}]}})
        assert build_plan_input_from_persisted_store(repository, key="other").incomes[0].amount == 42
        assert build_plan_input_from_persisted_store(repository) == PlanInput()
