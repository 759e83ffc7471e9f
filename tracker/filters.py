from datetime import date
from typing import Callable, Iterable, Iterator

from tracker.domain import Transaction, TIME_RANGES

Predicate = Callable[[Transaction], bool]


def month_key(reference_date: date) -> str:
    return reference_date.isoformat()[:7]


def by_prefix(prefix: str) -> Predicate:
    # plain string prefix on the stored YYYY-MM-DD date, not a calendar range
    def _filter(t: Transaction) -> bool:
        return t.date.startswith(prefix)

    return _filter


def by_time_range(time_range: str, reference_date: date) -> Predicate:
    if time_range not in TIME_RANGES:
        raise ValueError(f"Unknown time range: {time_range!r}")

    key = month_key(reference_date)
    if time_range == "month":
        return by_prefix(key)
    if time_range == "year":
        return by_prefix(key[:4])
    return lambda t: True


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def expenses_only(t: Transaction) -> bool:
    return t.amount < 0


def income_only(t: Transaction) -> bool:
    return t.amount > 0


def iter_transactions(
    trans: Iterable[Transaction], pred: Predicate
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def filter_by_time_range(
    trans: Iterable[Transaction], time_range: str, reference_date: date
) -> tuple[Transaction, ...]:
    return tuple(iter_transactions(trans, by_time_range(time_range, reference_date)))
