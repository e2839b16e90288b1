"""Unit tests for contradiction detector rules"""

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional
from money_mirror.domain.models import (
    Account,
    FinancialGoal,
    FinancialSnapshot,
    FindingType,
    MoneyStyle,
    Severity,
    StatedPreferences,
    TimeRange,
    Transaction,
    UserProfile,
)
from money_mirror.domain.rules import (
    CategoryOverageRule,
    DebtPriorityRule,
    DiscretionaryVsSavingsGoalRule,
    GoalProgressRule,
    PersonalityImpulseRule,
    PersonalitySecurityRule,
    PositiveBalanceRule,
    PositiveProgressRule,
    RiskToleranceRule,
    RuleContext,
    StatedSavingsGoalRule,
    accrual_pace,
    calculate_months_saved,
    default_rules,
    is_savings_goal,
)
from money_mirror.domain.spending import analyze_spending

AS_OF = date(2025, 1, 1)


def txn(amount: float, category: str, txn_id: str = "t", merchant: str = "Merchant") -> Transaction:
    return Transaction(id=txn_id, date=AS_OF - timedelta(days=3), amount=amount, category=category, merchant=merchant)


def goal(
    title: str = "Emergency Fund",
    target: float = 10000,
    current: float = 0,
    days_left: int = 365,
    category: str = "savings",
    created_at: Optional[date] = None,
) -> FinancialGoal:
    return FinancialGoal(
        id=title.lower().replace(" ", "_"),
        title=title,
        target_amount=target,
        current_amount=current,
        target_date=AS_OF + timedelta(days=days_left),
        category=category,
        created_at=created_at,
    )


def make_context(
    transactions: List[Transaction] = (),
    goals: List[FinancialGoal] = (),
    style: Optional[str] = "INTJ",
    preferences: Optional[StatedPreferences] = None,
    accounts: List[Account] = (),
    income: float = 5000,
    expenses: float = 3000,
    time_range: TimeRange = TimeRange.MONTH,
) -> RuleContext:
    now = datetime(2025, 1, 1, 12, tzinfo=timezone.utc)
    profile = UserProfile(
        user_id="user_1",
        email="user@example.com",
        name="Test User",
        created_at=now,
        stated_preferences=preferences or StatedPreferences(),
        money_style=MoneyStyle(style_code=style, scores=[], assessed_at=now) if style else None,
    )
    snapshot = FinancialSnapshot(
        timestamp=now,
        accounts=list(accounts),
        transactions=list(transactions),
        net_worth=0.0,
        monthly_income=income,
        monthly_expenses=expenses,
    )
    return RuleContext(
        profile=profile,
        goals=list(goals),
        snapshot=snapshot,
        spending=analyze_spending(snapshot.transactions),
        time_range=time_range,
        as_of=AS_OF,
        detected_at=now,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_months_saved_formula():
    assert calculate_months_saved(6000, 1000, 300) == pytest.approx(6000 / 1000 - 6000 / 1300)
    assert calculate_months_saved(6000, 0, 300) is None
    assert calculate_months_saved(0, 1000, 300) == 0.0


def test_accrual_pace_prefers_goal_history():
    g = goal(current=3000, created_at=AS_OF - timedelta(days=180))
    ctx = make_context(income=5000, expenses=4000)

    assert accrual_pace(g, ctx.snapshot, AS_OF) == pytest.approx(500.0)
    assert accrual_pace(goal(current=3000), ctx.snapshot, AS_OF) == pytest.approx(1000.0)


def test_savings_goal_detection():
    assert is_savings_goal(goal(title="Emergency Fund", category="other"))
    assert is_savings_goal(goal(title="Save for a car", category="other"))
    assert is_savings_goal(goal(title="House", category="Savings"))
    assert not is_savings_goal(goal(title="Vacation", category="travel"))


def test_default_rule_set():
    rules = default_rules()
    names = [r.name for r in rules]

    assert len(rules) == 10
    assert len(set(names)) == 10
    assert names[-2:] == ["positive_progress", "positive_balance"]


# ---------------------------------------------------------------------------
# Discretionary vs savings goal
# ---------------------------------------------------------------------------


def discretionary_month() -> List[Transaction]:
    return [
        txn(-600, "Dining", "d1", "Bistro"),
        txn(-400, "Shopping", "s1", "Store"),
        txn(-1000, "Housing", "h1", "Landlord"),
    ]


def test_discretionary_vs_savings_goal_fires():
    """50% discretionary against a $12,000 fund, paced at $1,000/month"""
    ctx = make_context(
        discretionary_month(),
        goals=[goal(target=12000, current=6000)],
        income=5000,
        expenses=4000,
    )

    findings = DiscretionaryVsSavingsGoalRule().evaluate(ctx)

    assert len(findings) == 1
    finding = findings[0]
    assert finding.type == FindingType.GOAL_VS_BEHAVIOR
    assert finding.severity == Severity.HIGH
    assert finding.potential_savings == pytest.approx(300.0)
    assert "$300/month" in finding.suggestion
    assert "1.4 months" in finding.suggestion
    assert finding.actual.evidence == ["Bistro: $600", "Store: $400"]
    assert finding.id.startswith("discretionary-vs-savings-goal-")
    assert finding.rule == "discretionary_vs_savings_goal"


def test_discretionary_vs_savings_goal_without_pace():
    """No net savings: report months to goal at the reduction pace"""
    ctx = make_context(
        discretionary_month(),
        goals=[goal(target=12000, current=6000)],
        income=4000,
        expenses=4000,
    )

    finding = DiscretionaryVsSavingsGoalRule().evaluate(ctx)[0]

    assert "fully funded in 20 months" in finding.suggestion


def test_discretionary_ignored_without_savings_goal():
    ctx = make_context(discretionary_month(), goals=[goal(title="Vacation", category="travel")])

    assert DiscretionaryVsSavingsGoalRule().evaluate(ctx) == []


def test_discretionary_below_threshold():
    ctx = make_context(
        [txn(-200, "Dining"), txn(-800, "Housing")],
        goals=[goal(target=1200)],
    )

    assert DiscretionaryVsSavingsGoalRule().evaluate(ctx) == []


# ---------------------------------------------------------------------------
# Category overage
# ---------------------------------------------------------------------------


def test_category_overage_high():
    """$900 of $3,000 on Entertainment is 30% against a 10% budget"""
    ctx = make_context([txn(-900, "Entertainment"), txn(-2100, "Misc")])

    findings = CategoryOverageRule().evaluate(ctx)

    assert len(findings) == 1
    finding = findings[0]
    assert finding.type == FindingType.SPENDING_PATTERN
    assert finding.severity == Severity.HIGH
    assert finding.stated.value == pytest.approx(10.0)
    assert finding.actual.value == pytest.approx(30.0)
    assert finding.potential_savings == pytest.approx(180.0)
    assert finding.title == "Entertainment spending 200% over recommended budget"
    assert "this month" in finding.suggestion


def test_category_overage_severity_bands():
    rule = CategoryOverageRule()

    medium = rule.evaluate(make_context([txn(-290, "Shopping"), txn(-1710, "Misc")]))
    low = rule.evaluate(make_context([txn(-270, "Shopping"), txn(-1730, "Misc")]))

    assert [f.severity for f in medium] == [Severity.MEDIUM]
    assert [f.severity for f in low] == [Severity.LOW]


def test_category_overage_severity_thresholds():
    assert CategoryOverageRule.severity_for(51) == Severity.HIGH
    assert CategoryOverageRule.severity_for(50) == Severity.MEDIUM
    assert CategoryOverageRule.severity_for(41) == Severity.MEDIUM
    assert CategoryOverageRule.severity_for(40) == Severity.LOW


def test_category_overage_within_budget():
    ctx = make_context([txn(-100, "Entertainment"), txn(-900, "Misc")])

    assert CategoryOverageRule().evaluate(ctx) == []


def test_category_overage_custom_budget():
    ctx = make_context([txn(-100, "Entertainment"), txn(-900, "Misc")])

    findings = CategoryOverageRule({"Entertainment": 0.05}).evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].severity == Severity.HIGH


def test_category_overage_uses_time_range_wording():
    ctx = make_context([txn(-900, "Entertainment"), txn(-2100, "Misc")], time_range=TimeRange.WEEK)

    assert "this week" in CategoryOverageRule().evaluate(ctx)[0].suggestion


# ---------------------------------------------------------------------------
# Personality rules
# ---------------------------------------------------------------------------


def impulse_month(small: int, total: int) -> List[Transaction]:
    transactions = [txn(-12, "Shopping", f"small_{i}") for i in range(small)]
    transactions += [txn(-50, "Groceries", f"big_{i}") for i in range(total - small)]
    return transactions


def test_impulse_rule_fires_for_structured_style():
    """12 of 25 purchases are small impulse buys (48%)"""
    ctx = make_context(impulse_month(12, 25), style="INTJ")

    findings = PersonalityImpulseRule().evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].severity == Severity.MEDIUM
    assert findings[0].type == FindingType.STATED_VS_ACTUAL
    assert findings[0].actual.value == pytest.approx(48.0)
    assert len(findings[0].actual.evidence) == 5


def test_impulse_rule_needs_enough_transactions():
    ctx = make_context(impulse_month(12, 15), style="INTJ")

    assert PersonalityImpulseRule().evaluate(ctx) == []


@pytest.mark.parametrize("total,fires", [(20, False), (21, True)])
def test_impulse_rule_transaction_count_boundary(total: int, fires: bool):
    """More than 20 spending transactions are required"""
    ctx = make_context(impulse_month(12, total), style="ISTJ")

    findings = PersonalityImpulseRule().evaluate(ctx)

    assert bool(findings) is fires


def test_impulse_rule_ignores_flexible_style():
    ctx = make_context(impulse_month(12, 25), style="INTP")

    assert PersonalityImpulseRule().evaluate(ctx) == []


def test_impulse_rule_without_style():
    ctx = make_context(impulse_month(12, 25), style=None)

    assert PersonalityImpulseRule().evaluate(ctx) == []


def security_context(style: str, savings: float, income: float = 5000) -> RuleContext:
    return make_context(
        [txn(-1000, "Investment", "inv_1")],
        style=style,
        accounts=[Account(id="sav", name="Savings", type="savings", balance=savings)],
        income=income,
        expenses=3000,
    )


def test_security_rule_fires_for_sensing_style():
    findings = PersonalitySecurityRule().evaluate(security_context("ISTJ", savings=5000))

    assert len(findings) == 1
    assert findings[0].severity == Severity.MEDIUM
    assert findings[0].actual.value == pytest.approx(20.0)
    assert findings[0].actual.evidence == ["inv_1"]


def test_security_rule_with_emergency_cushion():
    assert PersonalitySecurityRule().evaluate(security_context("ISTJ", savings=10000)) == []


def test_security_rule_ignores_intuitive_style():
    assert PersonalitySecurityRule().evaluate(security_context("INTJ", savings=5000)) == []


def test_security_rule_without_income():
    assert PersonalitySecurityRule().evaluate(security_context("ISTJ", savings=5000, income=0)) == []


# ---------------------------------------------------------------------------
# Goal progress
# ---------------------------------------------------------------------------


def test_goal_behind_schedule_high():
    """10% funded with 6 months left"""
    ctx = make_context(goals=[goal(current=1000, days_left=180)])

    findings = GoalProgressRule().evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].severity == Severity.HIGH
    assert "$1,500/month" in findings[0].description


def test_goal_behind_schedule_medium():
    ctx = make_context(goals=[goal(current=2000, days_left=180)])

    assert [f.severity for f in GoalProgressRule().evaluate(ctx)] == [Severity.MEDIUM]


def test_goal_on_track_is_not_flagged():
    """40% with 10 months left"""
    ctx = make_context(goals=[goal(current=4000, days_left=300)])

    assert GoalProgressRule().evaluate(ctx) == []


def test_goal_far_out_is_not_flagged():
    ctx = make_context(goals=[goal(current=2000, days_left=450)])

    assert GoalProgressRule().evaluate(ctx) == []


def test_goal_past_due_is_not_flagged():
    ctx = make_context(goals=[goal(current=1000, days_left=-30)])

    assert GoalProgressRule().evaluate(ctx) == []


def test_positive_progress():
    ctx = make_context(goals=[goal(current=8000), goal(title="House", current=7500)])

    findings = PositiveProgressRule().evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].type == FindingType.POSITIVE_PATTERN
    assert findings[0].severity == Severity.LOW
    assert findings[0].title == "Excellent progress on Emergency Fund!"


# ---------------------------------------------------------------------------
# Positive balance
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "essential,other,fires",
    [(600, 400, True), (500, 500, True), (700, 300, True), (800, 200, False), (400, 600, False)],
)
def test_positive_balance(essential: float, other: float, fires: bool):
    ctx = make_context([txn(-essential, "Housing"), txn(-other, "Misc")])

    findings = PositiveBalanceRule().evaluate(ctx)

    assert bool(findings) is fires


def test_positive_balance_without_spending():
    assert PositiveBalanceRule().evaluate(make_context([txn(3000, "Income")])) == []


# ---------------------------------------------------------------------------
# Stated preference rules
# ---------------------------------------------------------------------------


def investments(count: int) -> List[Transaction]:
    return [txn(-600, "Investment", f"inv_{i}") for i in range(count)]


def test_risk_tolerance_conservative_with_large_positions():
    ctx = make_context(investments(4), preferences=StatedPreferences(risk_tolerance="conservative"))

    findings = RiskToleranceRule().evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].severity == Severity.MEDIUM
    assert findings[0].actual.evidence == ["inv_0", "inv_1", "inv_2", "inv_3"]


def test_risk_tolerance_few_positions():
    ctx = make_context(investments(3), preferences=StatedPreferences(risk_tolerance="conservative"))

    assert RiskToleranceRule().evaluate(ctx) == []


def test_risk_tolerance_moderate():
    ctx = make_context(investments(4), preferences=StatedPreferences(risk_tolerance="moderate"))

    assert RiskToleranceRule().evaluate(ctx) == []


def test_stated_savings_goal_shortfall():
    """$24,000/year needs $2,000/month; saving $500 is under half"""
    ctx = make_context(preferences=StatedPreferences(savings_goal=24000), income=5000, expenses=4500)

    findings = StatedSavingsGoalRule().evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].severity == Severity.HIGH
    assert findings[0].actual.value == pytest.approx(500.0)


def test_stated_savings_goal_met():
    ctx = make_context(preferences=StatedPreferences(savings_goal=24000), income=5000, expenses=3500)

    assert StatedSavingsGoalRule().evaluate(ctx) == []


def test_debt_priority():
    prefs = StatedPreferences(priority_goals=["Pay off debt"])
    ctx = make_context([txn(-500, "Dining", "d1"), txn(-300, "Loan Payment", "l1")], preferences=prefs)

    findings = DebtPriorityRule().evaluate(ctx)

    assert len(findings) == 1
    assert findings[0].severity == Severity.MEDIUM
    assert findings[0].actual.evidence == ["d1"]


def test_debt_priority_payments_ahead():
    prefs = StatedPreferences(priority_goals=["Pay off debt"])
    ctx = make_context([txn(-500, "Dining"), txn(-800, "Loan Payment")], preferences=prefs)

    assert DebtPriorityRule().evaluate(ctx) == []


def test_debt_priority_not_stated():
    prefs = StatedPreferences(priority_goals=["Travel more"])
    ctx = make_context([txn(-500, "Dining"), txn(-300, "Loan Payment")], preferences=prefs)

    assert DebtPriorityRule().evaluate(ctx) == []
