"""Domain models - pure Python dataclasses representing planning entities

All monetary amounts are integer cents unless a field is explicitly a legacy
euro float (``Goal.target_amount`` and friends).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RecurringIncome:
    """Planned income; start_date == end_date marks a one-time income"""

    id: str
    name: str
    amount: int
    interval: str = "monthly"  # "monthly" | "quarterly" | "semi_yearly" | "yearly"
    confidence: str = "fixed"  # "fixed" | "likely" | "uncertain"
    start_date: Optional[str] = None  # YYYY-MM-DD
    end_date: Optional[str] = None
    note: Optional[str] = None

    @property
    def is_one_time(self) -> bool:
        return bool(self.start_date and self.end_date and self.start_date == self.end_date)


@dataclass
class RecurringExpense:
    """Mandatory recurring expense"""

    id: str
    name: str
    amount: int
    interval: str = "monthly"
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    note: Optional[str] = None


@dataclass
class ReserveBucket:
    """Sinking fund; monthly_contribution is precomputed and drained every month"""

    id: str
    name: str
    target_amount: int
    monthly_contribution: int
    current_amount: int = 0
    interval: str = "yearly"
    due_date: Optional[str] = None
    linked_expense_id: Optional[str] = None
    note: Optional[str] = None


@dataclass
class Goal:
    """Savings goal; *_cents fields win over the legacy euro fields"""

    id: str
    name: str
    priority: int = 3  # 1 = highest .. 5 = lowest
    target_amount: Optional[float] = None
    current_amount: Optional[float] = None
    monthly_contribution: Optional[float] = None
    target_amount_cents: Optional[int] = None
    current_amount_cents: Optional[int] = None
    monthly_contribution_cents: Optional[int] = None
    wish_date: Optional[str] = None
    note: Optional[str] = None


@dataclass
class InvestmentPlan:
    """Planned monthly investment flow (not an asset valuation model)"""

    id: str
    name: str
    monthly_contribution: int
    current_value: Optional[int] = None  # informational only
    cost_basis_cents: Optional[int] = None
    note: Optional[str] = None


@dataclass
class KnownFuturePayment:
    """One-time payment due on a specific date"""

    id: str
    name: str
    amount: int
    due_date: str
    note: Optional[str] = None


@dataclass
class PlanInput:
    """Snapshot of every entity the forecast engine consumes"""

    incomes: List[RecurringIncome] = field(default_factory=list)
    expenses: List[RecurringExpense] = field(default_factory=list)
    reserves: List[ReserveBucket] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    investments: List[InvestmentPlan] = field(default_factory=list)
    known_payments: List[KnownFuturePayment] = field(default_factory=list)


@dataclass(frozen=True)
class PlanSettings:
    forecast_months: int = 12
    start_month: Optional[str] = None  # YYYY-MM, defaults to current month


@dataclass
class BucketBreakdown:
    """The four mutually exclusive money buckets of one month"""

    bound: int = 0
    planned: int = 0
    invested: int = 0
    free: int = 0


@dataclass
class MonthProjection:
    month: str
    income: int
    buckets: BucketBreakdown
    planned_goal_breakdown_by_id: Dict[str, int] = field(default_factory=dict)


@dataclass
class GoalProjection:
    goal_id: str
    reachable: bool
    eta_month: Optional[str] = None


@dataclass
class PlanEvent:
    month: str
    type: str  # "shortfall" | "goal_reached" | "payment_due"
    amount: Optional[int] = None
    ref_id: Optional[str] = None
    note: Optional[str] = None


@dataclass
class PlanProjection:
    """Output of the forecast engine"""

    settings: PlanSettings
    timeline: List[MonthProjection]
    goals: List[GoalProjection]
    events: List[PlanEvent]


@dataclass
class GoalSummary:
    goal_id: str
    name: str
    priority: int
    reachable: bool
    eta_month: Optional[str] = None


@dataclass
class SimGoal:
    """Goal reduced to the cents needed by the month-by-month simulator"""

    id: str
    target_amount_cents: int
    current_amount_cents: int
    monthly_contribution_cents: Optional[int] = None
    start_month: Optional[str] = None
    end_month: Optional[str] = None


@dataclass
class GoalsSimulationResult:
    month: str
    planned_goals_cents: int
    contributions_by_goal_id: Dict[str, int]
    goal_balance_after_by_id: Dict[str, int]


@dataclass
class CostBasisPoint:
    month: str
    cost_basis_cents: int


@dataclass
class RecommendationScore:
    impact: float = 0.0
    urgency: float = 0.0
    simplicity: float = 0.0
    robustness: float = 0.0
    total: float = 0.0


@dataclass
class RecommendationAction:
    """Follow-up step offered with a recommendation"""

    label: str
    kind: str  # "navigate" | "adjust_value"
    payload: Optional[Dict[str, Any]] = None


@dataclass
class NavigationAction:
    """Primary call-to-action attached after candidate selection"""

    label: str
    kind: str  # "open_planning" | "open_goal"
    intent: str  # "planning" | "goals"
    payload: Optional[Dict[str, Any]] = None


@dataclass
class Recommendation:
    id: str
    type: str  # "shortfall_risk" | "low_slack" | "goal_contrib_issue"
    title: str
    reason: str
    evidence: Dict[str, Any]
    actions: List[RecommendationAction]
    score: RecommendationScore = field(default_factory=RecommendationScore)
    action: Optional[NavigationAction] = None


@dataclass
class DashboardModel:
    """Everything the dashboard renders, derived from one projection"""

    hero_free: int
    buckets: BucketBreakdown
    free_timeline: List[Dict[str, Any]]
    shortfalls: List[Dict[str, Any]]
    goals: List[GoalSummary]
    recommendations: List[Recommendation]
    projection: PlanProjection
    domain_goals: List[Goal]
