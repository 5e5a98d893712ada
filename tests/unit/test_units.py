"""Unit tests for cents resolution, interval helpers and month keys"""

import math
import pytest
from datetime import date, datetime
from finplan.domain.exceptions import InvalidCentsError
from finplan.domain.models import Goal
from finplan.domain.units import (
    assert_integer_cents,
    interval_months,
    is_active_in_month,
    is_occurrence_month,
    normalize_to_monthly,
    resolve_cents,
    round_half_up,
    to_iso_date,
)
from finplan.utils.date_utils import (
    current_month_key,
    generate_month_keys,
    is_valid_month_key,
    month_of,
    months_between,
)


class TestResolveCents:
    def test_cents_field_wins(self):
        assert resolve_cents({"amountCents": 1999, "amount": 5.0}, "amountCents", "amount") == 1999

    def test_legacy_euros_are_converted(self):
        assert resolve_cents({"amount": 19.99}, "amountCents", "amount") == 1999
        assert resolve_cents({"amount": 12}, "amountCents", "amount") == 1200

    def test_missing_or_non_finite_resolves_to_zero(self):
        assert resolve_cents({}, "amountCents", "amount") == 0
        assert resolve_cents({"amount": None}, "amountCents", "amount") == 0
        assert resolve_cents({"amount": math.nan}, "amountCents", "amount") == 0
        assert resolve_cents({"amount": "12.50"}, "amountCents", "amount") == 0

    def test_non_finite_cents_falls_back_to_legacy(self):
        assert resolve_cents({"amountCents": math.inf, "amount": 3.5}, "amountCents", "amount") == 350

    def test_fractional_cents_round_half_up(self):
        assert resolve_cents({"amountCents": 10.5}, "amountCents", "amount") == 11
        assert resolve_cents({"amount": 0.125}, "amountCents", "amount") == 13

    def test_attribute_objects(self):
        goal = Goal(id="g", name="Bike", target_amount=10.0, target_amount_cents=None)
        assert resolve_cents(goal, "target_amount_cents", "target_amount") == 1000


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(-0.5) == 0
    assert round_half_up(2.4999) == 2


def test_assert_integer_cents():
    assert assert_integer_cents(0, "x") == 0
    assert assert_integer_cents(-500, "x") == -500
    for bad in (1.0, True, None, "1"):
        with pytest.raises(InvalidCentsError):
            assert_integer_cents(bad, "x")


def test_normalize_to_monthly():
    assert normalize_to_monthly(1200, "yearly") == 100
    assert normalize_to_monthly(900, "quarterly") == 300
    assert normalize_to_monthly(600, "semi_yearly") == 100
    assert normalize_to_monthly(750, "monthly") == 750
    assert normalize_to_monthly(1000, "yearly") == pytest.approx(83.3333, rel=1e-4)
    assert normalize_to_monthly(1000, "weekly") == 0


def test_interval_months():
    assert [interval_months(i) for i in ("monthly", "quarterly", "semi_yearly", "yearly")] == [1, 3, 6, 12]
    assert interval_months("fortnightly") == 1


class TestOccurrence:
    def test_monthly_always_occurs(self):
        assert is_occurrence_month("2026-07", "2026-01-15", "monthly")

    def test_missing_start_always_occurs(self):
        assert is_occurrence_month("2026-07", None, "yearly")

    def test_before_start_never_occurs(self):
        assert not is_occurrence_month("2025-12", "2026-01-15", "quarterly")

    def test_occurrence_steps(self):
        months = generate_month_keys("2026-01", 13)
        yearly = [m for m in months if is_occurrence_month(m, "2026-01-31", "yearly")]
        semi = [m for m in months if is_occurrence_month(m, "2026-01-31", "semi_yearly")]
        assert yearly == ["2026-01", "2027-01"]
        assert semi == ["2026-01", "2026-07", "2027-01"]

    def test_active_range_is_inclusive(self):
        assert is_active_in_month("2026-03", "2026-03-31", "2026-03-01")
        assert not is_active_in_month("2026-02", "2026-03-01", None)
        assert not is_active_in_month("2026-04", None, "2026-03-31")
        assert is_active_in_month("2099-01", None, None)


def test_to_iso_date():
    assert to_iso_date("2026-03-15T10:00:00Z") == "2026-03-15"
    assert to_iso_date(date(2026, 3, 15)) == "2026-03-15"
    assert to_iso_date(datetime(2026, 3, 15, 8, 30)) == "2026-03-15"
    assert to_iso_date("") is None
    assert to_iso_date("not a date") is None
    assert to_iso_date(None) is None


class TestMonthKeys:
    def test_generate_with_rollover(self):
        assert generate_month_keys("2025-11", 4) == ["2025-11", "2025-12", "2026-01", "2026-02"]

    def test_generate_zero(self):
        assert generate_month_keys("2026-01", 0) == []

    def test_validation(self):
        assert is_valid_month_key("2026-12")
        assert not is_valid_month_key("2026-00")
        assert not is_valid_month_key("2026-1")
        assert not is_valid_month_key(202601)

    def test_month_of(self):
        assert month_of("2026-03-15") == "2026-03"
        assert month_of(None) is None

    def test_months_between(self):
        assert months_between("2025-11", "2026-02") == 3
        assert months_between("2026-02", "2025-11") == -3

    def test_current_month_key(self):
        assert current_month_key(date(2026, 1, 31)) == "2026-01"
