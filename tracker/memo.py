from datetime import date
from functools import lru_cache

from tracker.domain import Budget, Transaction, View
from tracker.engine import derive_view


@lru_cache(maxsize=64)
def cached_view(
    transactions: tuple[Transaction, ...],
    budgets: tuple[Budget, ...],
    time_range: str,
    reference_date: date,
) -> View:
    return derive_view(transactions, budgets, time_range, reference_date)


def clear_view_cache() -> None:
    cached_view.cache_clear()
