"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from money_mirror.domain.models import (
    AssessmentAnswer,
    AssessmentQuestion,
    Dimension,
    FindingType,
    FinancialGoal,
    LifeContext,
    MoneyStyle,
    ResolutionOutcome,
    Severity,
    StatedPreferences,
    TimeRange,
    UserProfile,
)

# ---------------------------------------------------------------------------
# Assessment
# ---------------------------------------------------------------------------


class OptionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    text: str
    score: int
    description: str


class QuestionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    dimension: Dimension
    question_text: str
    options: List[OptionSchema]
    contextual: bool


class QuestionBankResponse(BaseModel):
    """Response for GET /v1/assessment/questions"""

    questions: List[QuestionSchema]

    @classmethod
    def from_domain(cls, questions: List[AssessmentQuestion]) -> "QuestionBankResponse":
        return cls(questions=[QuestionSchema.model_validate(q) for q in questions])


class AnswerSchema(BaseModel):
    question_id: int
    dimension: Dimension
    score: int = Field(..., ge=-2, le=2)

    def to_domain(self) -> AssessmentAnswer:
        return AssessmentAnswer(question_id=self.question_id, dimension=self.dimension, score=self.score)


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/assessment"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    answers: List[AnswerSchema]


class AssessmentResponse(BaseModel):
    """Response for POST /v1/assessment"""

    style_code: str
    scores: Dict[str, int]
    money_style_name: str
    money_style_description: str
    coaching_approach: str
    profile_updated: bool


# ---------------------------------------------------------------------------
# Profiles and goals
# ---------------------------------------------------------------------------


class LifeContextSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    age: Optional[int] = Field(None, ge=0)
    income: Optional[float] = Field(None, ge=0)
    dependents: Optional[int] = Field(None, ge=0)
    employment_status: Optional[str] = None
    location: Optional[str] = None

    def to_domain(self) -> LifeContext:
        return LifeContext(**self.model_dump())


class StatedPreferencesSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    risk_tolerance: Optional[Literal["conservative", "moderate", "aggressive"]] = None
    savings_goal: Optional[float] = Field(None, ge=0)
    priority_goals: List[str] = Field(default_factory=list)
    investment_style: Optional[Literal["passive", "active"]] = None
    spending_style: Optional[Literal["planner", "spontaneous"]] = None

    def to_domain(self) -> StatedPreferences:
        return StatedPreferences(**self.model_dump())


class MoneyStyleSchema(BaseModel):
    style_code: str
    scores: Dict[str, int]
    assessed_at: datetime

    @classmethod
    def from_domain(cls, style: MoneyStyle) -> "MoneyStyleSchema":
        return cls(
            style_code=style.style_code,
            scores={s.dimension.value: s.value for s in style.scores},
            assessed_at=style.assessed_at,
        )


class ProfileRequest(BaseModel):
    """Request body for PUT /v1/profiles/{user_id}"""

    email: str = Field(..., min_length=3)
    name: str = Field(..., min_length=1)
    life_context: Optional[LifeContextSchema] = None
    stated_preferences: Optional[StatedPreferencesSchema] = None


class ProfileResponse(BaseModel):
    user_id: str
    email: str
    name: str
    created_at: datetime
    life_context: Optional[LifeContextSchema] = None
    stated_preferences: Optional[StatedPreferencesSchema] = None
    money_style: Optional[MoneyStyleSchema] = None

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "ProfileResponse":
        return cls(
            user_id=profile.user_id,
            email=profile.email,
            name=profile.name,
            created_at=profile.created_at,
            life_context=LifeContextSchema.model_validate(profile.life_context) if profile.life_context else None,
            stated_preferences=(
                StatedPreferencesSchema.model_validate(profile.stated_preferences)
                if profile.stated_preferences
                else None
            ),
            money_style=MoneyStyleSchema.from_domain(profile.money_style) if profile.money_style else None,
        )


class GoalSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    target_amount: float = Field(..., gt=0)
    current_amount: float = Field(0.0, ge=0)
    target_date: date
    category: str
    created_at: Optional[date] = None

    def to_domain(self) -> FinancialGoal:
        return FinancialGoal(**self.model_dump())


class GoalProgressRequest(BaseModel):
    """Request body for PATCH /v1/profiles/{user_id}/goals/{goal_id}"""

    current_amount: float = Field(..., ge=0)


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    """Request body for POST /v1/analyze"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    time_range: TimeRange = TimeRange.MONTH


class StatedSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    source: str
    value: Union[float, int, bool, str]


class ActualSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    evidence: List[str]
    value: Union[float, int, bool, str]


class ResolutionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    resolved_at: datetime
    outcome: ResolutionOutcome
    notes: str


class FindingSchema(BaseModel):
    """Single contradiction, as returned by analysis and the findings routes"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    detected_at: datetime
    type: FindingType
    severity: Severity
    title: str
    description: str
    stated: StatedSchema
    actual: ActualSchema
    suggestion: str
    hypothesis: Optional[str] = None
    potential_savings: Optional[float] = None
    rule: str
    resolved: bool
    resolution: Optional[ResolutionSchema] = None
    nudge: Optional[str] = None


class BreakdownSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    high: int
    medium: int
    low: int


class RuleFailureSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rule: str
    error: str


class AnalyzeResponse(BaseModel):
    """Response for POST /v1/analyze"""

    user_id: str
    findings: List[FindingSchema]
    breakdown: BreakdownSchema
    total_detected: int
    time_range: TimeRange
    analyzed_at: datetime
    failures: List[RuleFailureSchema]


class ResolveFindingRequest(BaseModel):
    """Request body for POST /v1/profiles/{user_id}/findings/{finding_id}/resolve"""

    outcome: ResolutionOutcome
    notes: str = Field("", max_length=2000)
