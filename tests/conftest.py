"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finplan.api.main import create_app
from finplan.domain.models import (
    Goal,
    InvestmentPlan,
    KnownFuturePayment,
    PlanInput,
    RecurringExpense,
    RecurringIncome,
    ReserveBucket,
)
from finplan.infrastructure.database.models import Base
from finplan.infrastructure.database.repositories import StoreRepository
from finplan.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db: Session) -> StoreRepository:
    return StoreRepository(db)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(create_tables=False)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def household_plan() -> PlanInput:
    """A realistic household: salary, bonus, rent, insurance, reserve, two goals, ETF plan"""
    return PlanInput(
        incomes=[
            RecurringIncome(id="salary", name="Salary", amount=350_000, start_date="2025-01-01"),
            RecurringIncome(
                id="bonus", name="Bonus", amount=200_000, interval="yearly", start_date="2025-12-01"
            ),
            RecurringIncome(
                id="refund", name="Tax refund", amount=80_000, start_date="2026-05-20", end_date="2026-05-20"
            ),
        ],
        expenses=[
            RecurringExpense(id="rent", name="Rent", amount=120_000),
            RecurringExpense(
                id="insurance", name="Car insurance", amount=60_000, interval="semi_yearly", start_date="2026-01-01"
            ),
        ],
        reserves=[
            ReserveBucket(
                id="car", name="Car repairs", target_amount=120_000, monthly_contribution=10_000,
                due_date="2026-09-01",
            ),
        ],
        goals=[
            Goal(
                id="vacation", name="Vacation", priority=2,
                target_amount_cents=300_000, current_amount_cents=100_000, monthly_contribution_cents=50_000,
            ),
            Goal(
                id="emergency", name="Emergency fund", priority=1,
                target_amount=5000.0, current_amount=1000.0, monthly_contribution=250.0,
            ),
        ],
        investments=[
            InvestmentPlan(id="etf", name="World ETF", monthly_contribution=30_000, current_value=1_250_000),
        ],
        known_payments=[
            KnownFuturePayment(id="laptop", name="Laptop", amount=150_000, due_date="2026-04-10"),
        ],
    )
