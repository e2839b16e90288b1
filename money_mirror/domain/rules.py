"""Contradiction detector rules

Each rule inspects a read-only RuleContext and returns zero or more findings.
Rules never share state, so they can be evaluated in any order or in parallel.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Mapping, Optional
from money_mirror.domain.models import (
    ActualSide,
    Contradiction,
    FinancialGoal,
    FinancialSnapshot,
    FindingType,
    Severity,
    SpendingAnalysis,
    StatedSide,
    TimeRange,
    Transaction,
    UserProfile,
)
from money_mirror.domain.spending import (
    in_categories,
    is_discretionary,
    recommended_budget,
    spend_transactions,
)
from money_mirror.utils.date_utils import months_between

IMPULSE_CATEGORIES = ("Shopping", "Dining", "Food & Dining")
INVESTMENT_CATEGORIES = ("Investment", "Retirement")
SPECULATIVE_CATEGORIES = ("Investment", "Cryptocurrency")
DEBT_PAYMENT_CATEGORIES = ("Loan Payment", "Credit Card Payment")


@dataclass(frozen=True)
class RuleContext:
    """Inputs shared by every rule for a single analysis run"""

    profile: UserProfile
    goals: List[FinancialGoal]
    snapshot: FinancialSnapshot
    spending: SpendingAnalysis
    time_range: TimeRange
    as_of: date
    detected_at: datetime

    @property
    def style_code(self) -> str:
        style = self.profile.money_style
        return style.style_code.upper() if style else ""

    @property
    def spends(self) -> List[Transaction]:
        return spend_transactions(self.snapshot.transactions)


class Rule(ABC):
    """A single contradiction detector"""

    name: str = "rule"

    @abstractmethod
    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        ...

    def finding(self, ctx: RuleContext, **fields) -> Contradiction:
        return Contradiction(
            id=f"{self.name.replace('_', '-')}-{uuid.uuid4().hex[:12]}",
            detected_at=ctx.detected_at,
            rule=self.name,
            **fields,
        )


def money(amount: float) -> str:
    return f"${amount:,.0f}"


def describe_spend(txn: Transaction) -> str:
    return f"{txn.merchant}: {money(abs(txn.amount))}"


def is_savings_goal(goal: FinancialGoal) -> bool:
    title = goal.title.casefold()
    return goal.category.casefold() == "savings" or "save" in title or "fund" in title


def style_letter(style_code: str, position: int) -> Optional[str]:
    if len(style_code) != 4:
        return None
    return style_code[position]


def accrual_pace(goal: FinancialGoal, snapshot: FinancialSnapshot, as_of: date) -> float:
    """
    Monthly amount currently flowing into a goal.

    Uses the goal's own history (current amount / months since creation) when a
    creation date is known, otherwise the snapshot's net monthly savings.
    """
    if goal.created_at is not None:
        elapsed = months_between(goal.created_at, as_of)
        if elapsed > 0:
            return goal.current_amount / elapsed
    return snapshot.monthly_income - snapshot.monthly_expenses


def calculate_months_saved(remaining: float, current_pace: float, monthly_increase: float) -> Optional[float]:
    """
    Months shaved off a goal by adding monthly_increase to the current pace.

    months_saved = remaining / current_pace - remaining / (current_pace + increase)

    Returns None when the current pace never reaches the goal (pace <= 0).
    """
    if remaining <= 0 or monthly_increase <= 0:
        return 0.0
    if current_pace <= 0:
        return None
    return max(0.0, remaining / current_pace - remaining / (current_pace + monthly_increase))


class DiscretionaryVsSavingsGoalRule(Rule):
    """High discretionary spend while a savings goal is open"""

    name = "discretionary_vs_savings_goal"

    discretionary_threshold_percent = 25.0
    reduction_fraction = 0.3

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        savings_goals = [g for g in ctx.goals if is_savings_goal(g)]
        spending = ctx.spending
        if not savings_goals or spending.discretionary_percent <= self.discretionary_threshold_percent:
            return []

        goal = savings_goals[0]
        monthly_target = goal.target_amount / 12  # naive annualization
        discretionary = spending.discretionary_spending
        if discretionary <= monthly_target * 0.5:
            return []

        reduction = discretionary * self.reduction_fraction
        pace = accrual_pace(goal, ctx.snapshot, ctx.as_of)
        months_saved = calculate_months_saved(goal.remaining_amount, pace, reduction)

        if months_saved is None:
            outcome = (
                f"At that pace your {goal.title} would be fully funded in "
                f"{goal.remaining_amount / reduction:.0f} months."
            )
        else:
            outcome = f"This would accelerate your {goal.title} by {months_saved:.1f} months."

        evidence = [describe_spend(t) for t in ctx.spends if is_discretionary(t.category)][:5]

        return [
            self.finding(
                ctx,
                type=FindingType.GOAL_VS_BEHAVIOR,
                severity=Severity.HIGH,
                title=f"Discretionary spending conflicts with {goal.title}",
                description=(
                    f"You're spending {spending.discretionary_percent:.0f}% of your budget on discretionary "
                    f"items while trying to save for {goal.title}."
                ),
                stated=StatedSide(
                    description=f"Goal: {goal.title} - Target: {money(goal.target_amount)}",
                    source="goal_setting",
                    value=goal.target_amount,
                ),
                actual=ActualSide(
                    description=(
                        f"Discretionary spending: {money(discretionary)} "
                        f"({spending.discretionary_percent:.0f}% of budget)"
                    ),
                    evidence=evidence,
                    value=discretionary,
                ),
                suggestion=f"Consider reducing discretionary spending by {money(reduction)}/month. {outcome}",
                hypothesis="Automatic savings transfers before discretionary spending may help",
                potential_savings=round(reduction, 2),
            )
        ]


class CategoryOverageRule(Rule):
    """Categories spending well above their recommended share"""

    name = "category_overage"

    trigger_percent = 30.0
    reduction_fraction = 0.2

    def __init__(self, budget: Mapping[str, float] | None = None):
        self.budget: Dict[str, float] = recommended_budget(budget)

    @staticmethod
    def severity_for(overage_percent: float) -> Severity:
        if overage_percent > 50:
            return Severity.HIGH
        if overage_percent > 40:
            return Severity.MEDIUM
        return Severity.LOW

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        spending = ctx.spending
        if spending.total_spending <= 0:
            return []

        findings = []
        for category, fraction in self.budget.items():
            if fraction <= 0:
                continue
            entry = spending.category(category)
            spent = entry.amount if entry else 0.0
            actual_percent = entry.percentage if entry else 0.0
            recommended_percent = fraction * 100
            overage_percent = (actual_percent - recommended_percent) / recommended_percent * 100

            if overage_percent <= self.trigger_percent:
                continue

            reduction = spent * self.reduction_fraction
            evidence = [describe_spend(t) for t in ctx.spends if t.category.casefold() == category.casefold()][:3]

            findings.append(
                self.finding(
                    ctx,
                    type=FindingType.SPENDING_PATTERN,
                    severity=self.severity_for(overage_percent),
                    title=f"{category} spending {overage_percent:.0f}% over recommended budget",
                    description=(
                        f"You're spending {money(spent)} on {category}, which is {overage_percent:.0f}% more "
                        f"than the recommended {recommended_percent:.0f}% of your budget."
                    ),
                    stated=StatedSide(
                        description=f"Recommended {category} budget: {recommended_percent:.0f}% of spending",
                        source="financial_best_practices",
                        value=recommended_percent,
                    ),
                    actual=ActualSide(
                        description=f"Actual {category} spending: {money(spent)} ({actual_percent:.0f}%)",
                        evidence=evidence,
                        value=actual_percent,
                    ),
                    suggestion=(
                        f"Try reducing {category} by {money(reduction)} this {ctx.time_range.value}. "
                        "Small changes like cooking at home or finding free alternatives can make a big difference."
                    ),
                    potential_savings=round(reduction, 2),
                )
            )

        return findings


class PersonalityImpulseRule(Rule):
    """Structured (J) styles making many small impulse-category purchases"""

    name = "personality_impulse"

    small_amount = 20.0
    trigger_percent = 40.0
    min_transactions = 20

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        if style_letter(ctx.style_code, 3) != "J":
            return []

        spends = ctx.spends
        # Thin data produces noisy percentages
        if len(spends) <= self.min_transactions:
            return []

        small = [
            t for t in spends
            if abs(t.amount) < self.small_amount and in_categories(t.category, IMPULSE_CATEGORIES)
        ]
        impulse_percent = len(small) / len(spends) * 100
        if impulse_percent <= self.trigger_percent:
            return []

        return [
            self.finding(
                ctx,
                type=FindingType.STATED_VS_ACTUAL,
                severity=Severity.MEDIUM,
                title="Spontaneous purchases don't match your planned Money Style",
                description=(
                    f"As a {ctx.style_code} type, you prefer structure and planning. However, "
                    f"{impulse_percent:.0f}% of your transactions are small purchases suggesting impulse buying."
                ),
                stated=StatedSide(
                    description=f"{ctx.style_code} Money Style: prefers planned, structured spending",
                    source="assessment",
                    value="structured",
                ),
                actual=ActualSide(
                    description=f"{len(small)} small purchases out of {len(spends)} transactions",
                    evidence=[t.id for t in small[:5]],
                    value=round(impulse_percent, 1),
                ),
                suggestion=(
                    'Try a "planned impulse budget" - set aside a fixed weekly amount for spontaneous buys, '
                    "or batch purchases weekly to keep your structure while allowing flexibility."
                ),
            )
        ]


class PersonalitySecurityRule(Rule):
    """Concrete (S) styles investing heavily without an emergency cushion"""

    name = "personality_security"

    min_coverage_months = 3.0
    investment_trigger_percent = 15.0

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        if style_letter(ctx.style_code, 1) != "S":
            return []

        snapshot = ctx.snapshot
        if snapshot.monthly_income <= 0:
            return []

        savings = sum(a.balance for a in snapshot.accounts if a.type == "savings")
        if snapshot.monthly_expenses > 0:
            coverage = savings / snapshot.monthly_expenses
        else:
            coverage = float("inf")
        if coverage >= self.min_coverage_months:
            return []

        investments = [t for t in ctx.spends if in_categories(t.category, INVESTMENT_CATEGORIES)]
        invested = sum(abs(t.amount) for t in investments)
        investment_percent = invested / snapshot.monthly_income * 100
        if investment_percent <= self.investment_trigger_percent:
            return []

        return [
            self.finding(
                ctx,
                type=FindingType.STATED_VS_ACTUAL,
                severity=Severity.MEDIUM,
                title="Future investments before present security",
                description=(
                    "As a Sensing type, you value concrete security. Investing heavily without an "
                    "emergency fund may not align with your comfort zone."
                ),
                stated=StatedSide(
                    description="Your Money Style suggests you prefer tangible, present security",
                    source="assessment",
                    value=ctx.style_code,
                ),
                actual=ActualSide(
                    description=(
                        f"{investment_percent:.0f}% of income goes to investments, but only "
                        f"{coverage:.1f} months of expenses in savings"
                    ),
                    evidence=[t.id for t in investments[:5]],
                    value=round(investment_percent, 1),
                ),
                suggestion=(
                    "Consider building 3 months of expenses in savings first. This concrete safety net "
                    "will make future investments feel more comfortable."
                ),
            )
        ]


class GoalProgressRule(Rule):
    """Goals due within a year that are less than 30% funded"""

    name = "goal_progress_behind_schedule"

    horizon_months = 24
    urgent_months = 12
    behind_percent = 30.0
    critical_percent = 15.0

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        findings = []
        for goal in ctx.goals:
            if goal.target_amount <= 0:
                continue

            months_left = months_between(ctx.as_of, goal.target_date)
            if not 0 < months_left < self.horizon_months:
                continue

            remaining = goal.remaining_amount
            monthly_required = remaining / months_left
            progress = goal.progress_percent

            if progress >= self.behind_percent or months_left >= self.urgent_months:
                continue

            findings.append(
                self.finding(
                    ctx,
                    type=FindingType.GOAL_VS_BEHAVIOR,
                    severity=Severity.HIGH if progress < self.critical_percent else Severity.MEDIUM,
                    title=f"{goal.title} progress is behind schedule",
                    description=(
                        f"You're {progress:.0f}% toward your {goal.title} goal with {months_left:.0f} months "
                        f"remaining. You'll need to save {money(monthly_required)}/month to reach your target."
                    ),
                    stated=StatedSide(
                        description=f"Goal: {goal.title} by {goal.target_date.isoformat()}",
                        source="goal_setting",
                        value=goal.target_amount,
                    ),
                    actual=ActualSide(
                        description=f"Current progress: {money(goal.current_amount)} ({progress:.0f}%)",
                        evidence=[f"{money(remaining)} remaining", f"{months_left:.0f} months left"],
                        value=goal.current_amount,
                    ),
                    suggestion=(
                        f"Boost your savings to {money(monthly_required)}/month or extend your timeline by "
                        f"{months_left * 0.5:.0f} months to make this goal more achievable."
                    ),
                )
            )

        return findings


class PositiveProgressRule(Rule):
    name = "positive_progress"

    celebrate_percent = 75.0

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        findings = []
        for goal in ctx.goals:
            progress = goal.progress_percent
            if progress <= self.celebrate_percent:
                continue
            findings.append(
                self.finding(
                    ctx,
                    type=FindingType.POSITIVE_PATTERN,
                    severity=Severity.LOW,
                    title=f"Excellent progress on {goal.title}!",
                    description=(
                        f"You're {progress:.0f}% of the way to your {goal.title} goal. "
                        "Your consistent saving habit is paying off!"
                    ),
                    stated=StatedSide(description=goal.title, source="goal_setting", value=goal.target_amount),
                    actual=ActualSide(
                        description=f"Current: {money(goal.current_amount)}",
                        evidence=["Strong progress maintained"],
                        value=goal.current_amount,
                    ),
                    suggestion="Keep up the great work! Consider celebrating this milestone in a budget-friendly way.",
                )
            )
        return findings


class PositiveBalanceRule(Rule):
    name = "positive_balance"

    low_percent = 50.0
    high_percent = 70.0

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        essential_percent = ctx.spending.essential_percent
        if ctx.spending.total_spending <= 0 or not self.low_percent <= essential_percent <= self.high_percent:
            return []

        return [
            self.finding(
                ctx,
                type=FindingType.POSITIVE_PATTERN,
                severity=Severity.LOW,
                title="Great balance between needs and wants!",
                description=f"{essential_percent:.0f}% of your spending goes to essentials. This is a healthy balance.",
                stated=StatedSide(
                    description="Recommended essential spending: 50-70%",
                    source="financial_best_practices",
                    value=60,
                ),
                actual=ActualSide(
                    description=f"Your essential spending: {essential_percent:.0f}%",
                    evidence=["spending_analysis"],
                    value=round(essential_percent, 1),
                ),
                suggestion="Keep it up! This foundation gives you flexibility to pursue your goals while enjoying life.",
            )
        ]


class RiskToleranceRule(Rule):
    """Stated conservative risk tolerance vs repeated large speculative buys"""

    name = "risk_tolerance"

    income_fraction = 0.1
    max_large_positions = 3

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        prefs = ctx.profile.stated_preferences
        income = ctx.snapshot.monthly_income
        if prefs is None or prefs.risk_tolerance != "conservative" or income <= 0:
            return []

        speculative = [t for t in ctx.spends if in_categories(t.category, SPECULATIVE_CATEGORIES)]
        large = [t for t in speculative if abs(t.amount) > income * self.income_fraction]
        if len(large) <= self.max_large_positions:
            return []

        return [
            self.finding(
                ctx,
                type=FindingType.STATED_VS_ACTUAL,
                severity=Severity.MEDIUM,
                title="Investment activity is riskier than your stated comfort level",
                description=(
                    f"You described yourself as conservative, but made {len(large)} investments larger "
                    f"than {self.income_fraction:.0%} of your monthly income."
                ),
                stated=StatedSide(
                    description="You indicated a conservative approach to risk",
                    source="assessment",
                    value=prefs.risk_tolerance,
                ),
                actual=ActualSide(
                    description=f"You've made {len(large)} high-risk investments recently",
                    evidence=[t.id for t in large],
                    value="aggressive",
                ),
                suggestion=(
                    "Track how you feel about market swings over the next month and check whether these "
                    "positions still fit your long-term goals."
                ),
                hypothesis=(
                    "You may be more comfortable with risk than you initially thought, or you're reacting "
                    "to fear of missing out."
                ),
            )
        ]


class StatedSavingsGoalRule(Rule):
    name = "stated_savings_goal"

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        prefs = ctx.profile.stated_preferences
        if prefs is None or not prefs.savings_goal or prefs.savings_goal <= 0:
            return []

        snapshot = ctx.snapshot
        actual_monthly = snapshot.monthly_income - snapshot.monthly_expenses
        required_monthly = prefs.savings_goal / 12
        if actual_monthly >= required_monthly * 0.5:
            return []

        return [
            self.finding(
                ctx,
                type=FindingType.GOAL_VS_BEHAVIOR,
                severity=Severity.HIGH,
                title="Savings rate is well below your savings goal",
                description=(
                    f"Reaching {money(prefs.savings_goal)} in a year needs about {money(required_monthly)}/month; "
                    f"you're currently saving {money(actual_monthly)}/month."
                ),
                stated=StatedSide(
                    description=f"You set a savings goal of {money(prefs.savings_goal)}",
                    source="goal_setting",
                    value=prefs.savings_goal,
                ),
                actual=ActualSide(
                    description=f"Your current savings rate is {money(actual_monthly)}/month",
                    evidence=["monthly_income_expenses"],
                    value=round(actual_monthly, 2),
                ),
                suggestion=(
                    "Identify 2-3 spending categories where you could reduce by 10% without major "
                    "lifestyle impact."
                ),
                hypothesis="Your goal might be aspirational but not yet aligned with your current lifestyle choices.",
            )
        ]


class DebtPriorityRule(Rule):
    """Debt payoff stated as a priority while discretionary spend outruns payments"""

    name = "debt_priority"

    def evaluate(self, ctx: RuleContext) -> List[Contradiction]:
        prefs = ctx.profile.stated_preferences
        if prefs is None or not any("debt" in g.casefold() for g in prefs.priority_goals):
            return []

        discretionary = ctx.spending.discretionary_spending
        debt_payments = sum(
            abs(t.amount) for t in ctx.spends if in_categories(t.category, DEBT_PAYMENT_CATEGORIES)
        )
        if discretionary <= debt_payments:
            return []

        return [
            self.finding(
                ctx,
                type=FindingType.GOAL_VS_BEHAVIOR,
                severity=Severity.MEDIUM,
                title="Discretionary spending outpaces debt payments",
                description="Paying off debt is one of your priorities, but more money goes to wants than to debt.",
                stated=StatedSide(
                    description="You prioritized paying off debt",
                    source="goal_setting",
                    value="debt_payoff_priority",
                ),
                actual=ActualSide(
                    description=(
                        f"Discretionary spending ({money(discretionary)}) exceeds debt payments "
                        f"({money(debt_payments)})"
                    ),
                    evidence=[t.id for t in ctx.spends if is_discretionary(t.category)][:5],
                    value=round(discretionary, 2),
                ),
                suggestion=(
                    f"Redirect {money(discretionary * 0.25)} of discretionary spending to debt for one "
                    f"{ctx.time_range.value} and see how it feels."
                ),
                hypothesis="You may be balancing quality of life with debt reduction, or debt fatigue is setting in.",
            )
        ]


def default_rules(budget: Mapping[str, float] | None = None) -> List[Rule]:
    """Full rule set in evaluation order"""
    return [
        DiscretionaryVsSavingsGoalRule(),
        CategoryOverageRule(budget),
        PersonalityImpulseRule(),
        PersonalitySecurityRule(),
        GoalProgressRule(),
        RiskToleranceRule(),
        StatedSavingsGoalRule(),
        DebtPriorityRule(),
        PositiveProgressRule(),
        PositiveBalanceRule(),
    ]
