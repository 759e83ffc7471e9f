from tracker.domain import DEFAULT_BUDGETS, TransactionDraft
from tracker.functional import (
    Left, Nothing, Right, Some,
    find_budget, parse_amount, parse_date, parse_limit, validate_draft,
)


def test_maybe_map():
    assert Some(5).map(lambda x: x * 2) == Some(10)
    assert Nothing().map(lambda x: x * 2).is_none()
    assert Nothing().get_or_else("default") == "default"


def test_either_map_and_bind():
    assert Right(5).map(lambda x: x + 1) == Right(6)

    left = Left("boom")
    assert left.map(lambda x: x + 1).is_left()
    assert left.bind(lambda x: Right(x)).get_error() == "boom"
    assert left.get_or_else(0) == 0
    assert Right(1).bind(lambda x: Left("bad")).get_error() == "bad"


def test_find_budget():
    found = find_budget(DEFAULT_BUDGETS, "Food")
    assert found.is_some()
    assert found.get_or_else(None).limit == 600.0
    assert find_budget(DEFAULT_BUDGETS, "Pets").is_none()


def test_parse_amount():
    assert parse_amount("12.5") == Right(12.5)
    assert parse_amount(" 7 ") == Right(7.0)
    assert parse_amount(3) == Right(3.0)
    assert parse_amount(None).get_error()["error"] == "amount_required"
    assert parse_amount("inf").get_error()["error"] == "invalid_amount"
    assert parse_amount("1e400").is_left()
    assert parse_amount(True).is_left()


def test_parse_limit():
    assert parse_limit("0") == Right(0.0)
    assert parse_limit(250) == Right(250.0)
    assert parse_limit(-1).is_left()
    assert parse_limit("nan").is_left()


def test_parse_date_requires_canonical_form():
    assert parse_date("2024-06-01") == Right("2024-06-01")
    assert parse_date("2024-6-1").is_left()
    assert parse_date("06/01/2024").is_left()
    assert parse_date("2024-02-30").is_left()
    assert parse_date(None).is_left()


def test_validate_draft_signs_amount():
    fields = validate_draft(
        TransactionDraft("2024-06-01", " Paycheck ", "100", "Other", "income")
    ).get_or_else(None)
    assert fields == {"date": "2024-06-01", "description": "Paycheck", "amount": 100.0, "category": "Other"}

    fields = validate_draft(TransactionDraft("2024-06-01", "Gas", "40", "Transportation")).get_or_else(None)
    assert fields["amount"] == -40.0


def test_validate_draft_reports_first_error():
    error = validate_draft(TransactionDraft("bad", "", "x", "Food")).get_error()
    assert error["error"] == "description_required"
    assert "Description" in error["message"]
