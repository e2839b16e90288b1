"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union

Value = Union[str, float, int, bool]


class Dimension(str, Enum):
    """Bipolar trait axes scored by the assessment, in style-code order"""

    EI = "EI"
    SN = "SN"
    TF = "TF"
    JP = "JP"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FindingType(str, Enum):
    STATED_VS_ACTUAL = "stated_vs_actual"
    GOAL_VS_BEHAVIOR = "goal_vs_behavior"
    PLAN_VS_EXECUTION = "plan_vs_execution"
    SPENDING_PATTERN = "spending_pattern"
    POSITIVE_PATTERN = "positive_pattern"


class TimeRange(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class ResolutionOutcome(str, Enum):
    PREFERENCE_ADJUSTED = "preference_adjusted"
    BEHAVIOR_CHANGED = "behavior_changed"
    CONTEXT_EXPLAINED = "context_explained"


# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssessmentOption:
    text: str
    score: int
    description: str


@dataclass(frozen=True)
class AssessmentQuestion:
    """Single item of the assessment bank"""

    id: int
    dimension: Dimension
    question_text: str
    options: List[AssessmentOption]
    contextual: bool = False  # demographic item, never moves a trait score


@dataclass(frozen=True)
class AssessmentAnswer:
    question_id: int
    dimension: Dimension
    score: int


@dataclass(frozen=True)
class TraitScore:
    dimension: Dimension
    value: int


@dataclass
class AssessmentResult:
    """Output of the trait scorer"""

    style_code: str
    scores: List[TraitScore]
    contextual_answers: Dict[int, int] = field(default_factory=dict)

    def score_for(self, dimension: Dimension) -> int:
        return next(s.value for s in self.scores if s.dimension == dimension)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@dataclass
class MoneyStyle:
    """Style code plus the trait scores it was derived from"""

    style_code: str
    scores: List[TraitScore]
    assessed_at: datetime


@dataclass
class StatedPreferences:
    risk_tolerance: Optional[str] = None  # conservative | moderate | aggressive
    savings_goal: Optional[float] = None
    priority_goals: List[str] = field(default_factory=list)
    investment_style: Optional[str] = None  # passive | active
    spending_style: Optional[str] = None  # planner | spontaneous


@dataclass
class LifeContext:
    age: Optional[int] = None
    income: Optional[float] = None
    dependents: Optional[int] = None
    employment_status: Optional[str] = None
    location: Optional[str] = None


@dataclass
class UserProfile:
    """User identity plus optional onboarding data"""

    user_id: str
    email: str
    name: str
    created_at: datetime
    life_context: Optional[LifeContext] = None
    stated_preferences: Optional[StatedPreferences] = None
    money_style: Optional[MoneyStyle] = None


@dataclass
class FinancialGoal:
    """User-defined savings or payoff target"""

    id: str
    title: str
    target_amount: float
    current_amount: float
    target_date: date
    category: str
    created_at: Optional[date] = None

    @property
    def remaining_amount(self) -> float:
        return max(self.target_amount - self.current_amount, 0.0)

    @property
    def progress_percent(self) -> float:
        if self.target_amount <= 0:
            return 0.0
        return self.current_amount / self.target_amount * 100


# ---------------------------------------------------------------------------
# Financial data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transaction:
    """Ledger entry. Negative amount = money out (spend), positive = money in."""

    id: str
    date: date
    amount: float
    category: str
    merchant: str
    account_id: str = ""

    @property
    def is_spend(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    type: str  # checking | savings | credit | investment | loan
    balance: float
    institution: str = ""


@dataclass
class FinancialSnapshot:
    """Point-in-time bundle of balances and a transaction window"""

    timestamp: datetime
    accounts: List[Account]
    transactions: List[Transaction]
    net_worth: float
    monthly_income: float
    monthly_expenses: float


@dataclass
class CategorySpend:
    category: str
    amount: float
    percentage: float


@dataclass
class SpendingAnalysis:
    """Aggregated view of outflows in a snapshot window"""

    total_spending: float
    categories: List[CategorySpend]
    discretionary_spending: float
    discretionary_percent: float
    essential_spending: float
    essential_percent: float
    spend_transaction_count: int

    def category(self, name: str) -> Optional[CategorySpend]:
        key = name.casefold()
        return next((c for c in self.categories if c.category.casefold() == key), None)


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatedSide:
    description: str
    source: str  # assessment | goal_setting | plan | financial_best_practices
    value: Value


@dataclass(frozen=True)
class ActualSide:
    description: str
    evidence: List[str]
    value: Value


@dataclass(frozen=True)
class Resolution:
    resolved_at: datetime
    outcome: ResolutionOutcome
    notes: str


@dataclass(frozen=True)
class Contradiction:
    """Gap between a stated preference or goal and observed behavior"""

    id: str
    detected_at: datetime
    type: FindingType
    severity: Severity
    stated: StatedSide
    actual: ActualSide
    suggestion: str
    title: str = ""
    description: str = ""
    hypothesis: Optional[str] = None
    potential_savings: Optional[float] = None
    rule: str = ""
    resolved: bool = False
    resolution: Optional[Resolution] = None


@dataclass(frozen=True)
class RuleFailure:
    rule: str
    error: str


@dataclass
class SeverityBreakdown:
    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.high + self.medium + self.low


@dataclass
class AnalysisResult:
    """Output of a single analyze() call"""

    findings: List[Contradiction]
    breakdown: SeverityBreakdown
    time_range: TimeRange
    analyzed_at: datetime
    failures: List[RuleFailure] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.findings
