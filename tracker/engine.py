"""Derivation engine: turns the transaction log and budget table into the
figures the dashboard shows.

Everything here is a pure function of its arguments. Nothing is validated;
a NaN amount simply propagates into the totals.
"""
from datetime import date
from typing import Iterable, List, Dict, Any, Tuple

from tracker.domain import Budget, CategoryBreakdown, Totals, Transaction, View
from tracker.filters import (
    by_category,
    expenses_only,
    filter_by_time_range,
    income_only,
    iter_transactions,
)


def compute_totals(trans: Tuple[Transaction, ...]) -> Totals:
    income = sum((t.amount for t in iter_transactions(trans, income_only)), 0.0)
    expenses = sum((abs(t.amount) for t in iter_transactions(trans, expenses_only)), 0.0)
    return Totals(income=income, expenses=expenses, net=income - expenses)


def category_spent(trans: Iterable[Transaction], category: str) -> float:
    in_category = by_category(category)
    return sum(
        (abs(t.amount) for t in trans if in_category(t) and expenses_only(t)),
        0.0,
    )


def category_breakdown(
    trans: Tuple[Transaction, ...], budgets: Tuple[Budget, ...]
) -> Tuple[CategoryBreakdown, ...]:
    """One row per budget, in budget order.

    Transactions whose category has no budget are left out here but still
    count towards the overall totals.
    """
    rows = []
    for b in budgets:
        spent = category_spent(trans, b.category)
        rows.append(
            CategoryBreakdown(
                category=b.category,
                spent=spent,
                limit=b.limit,
                remaining=b.limit - spent,
            )
        )
    return tuple(rows)


def derive_view(
    transactions: Tuple[Transaction, ...],
    budgets: Tuple[Budget, ...],
    time_range: str,
    reference_date: date,
) -> View:
    filtered = filter_by_time_range(transactions, time_range, reference_date)
    return View(
        filtered=filtered,
        totals=compute_totals(filtered),
        breakdown=category_breakdown(filtered, tuple(budgets)),
    )


def pie_data(breakdown: Iterable[CategoryBreakdown]) -> List[Dict[str, Any]]:
    return [{"name": row.category, "value": row.spent} for row in breakdown]


def over_budget(breakdown: Iterable[CategoryBreakdown]) -> Tuple[CategoryBreakdown, ...]:
    return tuple(row for row in breakdown if row.remaining < 0)
