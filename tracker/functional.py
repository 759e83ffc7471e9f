import math
from abc import ABC, abstractmethod
from datetime import datetime
from typing import TypeVar, Generic, Callable

from tracker.domain import Budget, TransactionDraft

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _to_finite(raw) -> float | None:
    if isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_amount(raw) -> Either[dict, float]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Left({
            "error": "amount_required",
            "message": "Amount is required",
        })

    value = _to_finite(raw)
    if value is None:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount {raw!r} is not a valid number",
            "amount": raw,
        })
    return Right(value)


def parse_limit(raw) -> Either[dict, float]:
    value = _to_finite(raw)
    if value is None or value < 0:
        return Left({
            "error": "invalid_limit",
            "message": f"Budget limit must be a non-negative number, got {raw!r}",
            "limit": raw,
        })
    return Right(value)


def parse_date(raw) -> Either[dict, str]:
    # strptime alone would accept "2024-6-1", which breaks prefix filtering
    text = str(raw) if raw is not None else ""
    try:
        canonical = datetime.strptime(text, "%Y-%m-%d").date().isoformat()
    except ValueError:
        canonical = None
    if canonical != text:
        return Left({
            "error": "invalid_date",
            "message": f"Date must be in YYYY-MM-DD form, got {raw!r}",
            "date": raw,
        })
    return Right(canonical)


def find_budget(budgets: tuple[Budget, ...], category: str) -> Maybe[Budget]:
    for b in budgets:
        if b.category == category:
            return Some(b)
    return Nothing()


def validate_draft(draft: TransactionDraft) -> Either[dict, dict]:
    """Check a form draft and return the fields of the transaction to store.

    The right value carries ``amount`` already signed from ``draft.type``.
    """
    if not (draft.description or "").strip():
        return Left({
            "error": "description_required",
            "message": "Description is required",
        })

    if draft.type not in ("income", "expense"):
        return Left({
            "error": "invalid_type",
            "message": f"Type must be 'income' or 'expense', got {draft.type!r}",
            "type": draft.type,
        })

    def _positive(value: float) -> Either[dict, float]:
        if value <= 0:
            return Left({
                "error": "non_positive_amount",
                "message": "Amount must be greater than zero",
                "amount": value,
            })
        return Right(value)

    def _fields(date: str) -> Either[dict, dict]:
        return (
            parse_amount(draft.amount)
            .bind(_positive)
            .map(lambda value: {
                "date": date,
                "description": draft.description.strip(),
                "amount": value if draft.type == "income" else -value,
                "category": draft.category,
            })
        )

    return parse_date(draft.date).bind(_fields)
