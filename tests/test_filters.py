from datetime import date
from itertools import islice

import pytest

from tracker.domain import Transaction
from tracker.filters import (
    by_category,
    by_prefix,
    by_time_range,
    expenses_only,
    filter_by_time_range,
    income_only,
    iter_transactions,
    month_key,
)


def make_sample():
    return (
        Transaction("t1", "2024-01-31", "Rent", -1500.0, "Housing"),
        Transaction("t2", "2024-02-01", "Salary", 3000.0, "Other"),
        Transaction("t3", "2023-12-31", "Party", -80.0, "Entertainment"),
        Transaction("t4", "2024-02-14", "Dinner", -60.0, "Food"),
    )


def test_month_key_pads():
    assert month_key(date(2024, 2, 5)) == "2024-02"


@pytest.mark.parametrize(
    "time_range, expected",
    [
        ("month", ["t2", "t4"]),
        ("year", ["t1", "t2", "t4"]),
        ("all", ["t1", "t2", "t3", "t4"]),
    ],
)
def test_filter_by_time_range(time_range, expected):
    result = filter_by_time_range(make_sample(), time_range, date(2024, 2, 20))
    assert [t.id for t in result] == expected


def test_prefix_match_is_literal():
    # a non-canonical date does not match the padded month key
    odd = Transaction("t9", "2024-2-03", "Coffee", -3.0, "Food")
    assert not by_time_range("month", date(2024, 2, 1))(odd)
    assert by_time_range("year", date(2024, 2, 1))(odd)
    assert by_prefix("2024-2")(odd)


def test_unknown_range():
    with pytest.raises(ValueError):
        by_time_range("quarter", date(2024, 1, 1))


def test_by_category():
    result = list(filter(by_category("Food"), make_sample()))
    assert [t.id for t in result] == ["t4"]


def test_sign_predicates():
    trans = make_sample()
    assert [t.id for t in iter_transactions(trans, income_only)] == ["t2"]
    assert [t.id for t in iter_transactions(trans, expenses_only)] == ["t1", "t3", "t4"]


def test_iter_transactions_is_lazy():
    trans = make_sample()
    calls = {"n": 0}

    def pred(t):
        calls["n"] += 1
        return t.amount < 0

    first = list(islice(iter_transactions(trans, pred), 1))
    assert len(first) == 1
    assert calls["n"] < len(trans)
