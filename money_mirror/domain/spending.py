"""Spending analyzer - category aggregation and essential/discretionary splits"""

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping
from money_mirror.domain.exceptions import InvalidTransactionDataError
from money_mirror.domain.models import (
    CategorySpend,
    FinancialSnapshot,
    SpendingAnalysis,
    Transaction,
)

DISCRETIONARY_CATEGORIES = frozenset(
    ["Entertainment", "Dining", "Food & Dining", "Shopping", "Travel", "Recreation"]
)
ESSENTIAL_CATEGORIES = frozenset(["Housing", "Utilities", "Groceries", "Transportation", "Healthcare"])

# Categories that mean money arriving when a feed reports unsigned amounts
INFLOW_CATEGORIES = frozenset(["Income", "Payroll", "Salary", "Transfer In", "Refund", "Interest"])

# Recommended share of total spending per category
DEFAULT_RECOMMENDED_BUDGET: Dict[str, float] = {
    "Food & Dining": 0.15,
    "Entertainment": 0.10,
    "Shopping": 0.10,
    "Transportation": 0.12,
    "Utilities": 0.08,
    "Housing": 0.30,
}


def _folded(categories: Iterable[str]) -> frozenset[str]:
    return frozenset(c.casefold() for c in categories)


_DISCRETIONARY = _folded(DISCRETIONARY_CATEGORIES)
_ESSENTIAL = _folded(ESSENTIAL_CATEGORIES)
_INFLOW = _folded(INFLOW_CATEGORIES)


def is_discretionary(category: str) -> bool:
    return category.casefold() in _DISCRETIONARY


def is_essential(category: str) -> bool:
    return category.casefold() in _ESSENTIAL


def in_categories(category: str, categories: Iterable[str]) -> bool:
    return category.casefold() in _folded(categories)


def spend_transactions(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Outflows only (negative amounts)"""
    return [t for t in transactions if t.is_spend]


def analyze_spending(transactions: Iterable[Transaction]) -> SpendingAnalysis:
    """
    Aggregate outflows by category.

    Requirements:
    - Only negative (outgoing) amounts count, taken as absolute values
    - Category percentages sum to 100 when there is any spending
    - Zero total spending yields 0% everywhere instead of dividing by zero
    """
    spends = spend_transactions(transactions)

    # Group by category, keeping first-seen spelling and order
    totals: Dict[str, float] = {}
    spelling: Dict[str, str] = {}
    for txn in spends:
        key = txn.category.casefold()
        spelling.setdefault(key, txn.category)
        totals[key] = totals.get(key, 0.0) + abs(txn.amount)

    total_spending = sum(totals.values())

    def percent_of_total(amount: float) -> float:
        return amount / total_spending * 100 if total_spending > 0 else 0.0

    categories = [
        CategorySpend(category=spelling[key], amount=amount, percentage=percent_of_total(amount))
        for key, amount in totals.items()
    ]

    discretionary = sum(c.amount for c in categories if is_discretionary(c.category))
    essential = sum(c.amount for c in categories if is_essential(c.category))

    return SpendingAnalysis(
        total_spending=total_spending,
        categories=categories,
        discretionary_spending=discretionary,
        discretionary_percent=percent_of_total(discretionary),
        essential_spending=essential,
        essential_percent=percent_of_total(essential),
        spend_transaction_count=len(spends),
    )


def recommended_budget(overrides: Mapping[str, float] | None = None) -> Dict[str, float]:
    """Default budget fractions with optional per-category overrides applied"""
    budget = dict(DEFAULT_RECOMMENDED_BUDGET)
    if overrides:
        budget.update(overrides)
    return budget


def calculate_savings_rate(snapshot: FinancialSnapshot) -> float:
    """Percent of monthly income left after monthly expenses (0 when no income)"""
    if snapshot.monthly_income <= 0:
        return 0.0
    return (snapshot.monthly_income - snapshot.monthly_expenses) / snapshot.monthly_income * 100


def normalize_transactions(records: Iterable[Mapping[str, Any]], convention: str = "signed") -> List[Transaction]:
    """
    Convert raw transaction records to signed Transactions.

    convention:
        "signed"   - amounts already negative for spend, positive for income
        "unsigned" - amounts are magnitudes; inflow categories become positive,
                     everything else is treated as spend

    Raises:
        InvalidTransactionDataError: missing fields, bad dates or amounts, or an
            unknown convention
    """
    if convention not in ("signed", "unsigned"):
        raise InvalidTransactionDataError(f"Unknown amount convention: {convention}")

    transactions = []
    for record in records:
        try:
            raw_date = record["date"]
            txn_date = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date)[:10])
            amount = float(record["amount"])
            category = str(record["category"])
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTransactionDataError(f"Invalid transaction record {record!r}: {e}") from e

        if convention == "unsigned":
            magnitude = abs(amount)
            amount = magnitude if category.casefold() in _INFLOW else -magnitude

        transactions.append(
            Transaction(
                id=str(record.get("id", "")),
                date=txn_date,
                amount=amount,
                category=category,
                merchant=str(record.get("merchant") or record.get("description") or ""),
                account_id=str(record.get("account_id") or record.get("accountId") or ""),
            )
        )

    return transactions
