import math
from dataclasses import dataclass, asdict
from typing import Tuple


@dataclass(frozen=True)
class Transaction:
    id: str
    date: str         # "YYYY-MM-DD"
    description: str
    amount: float     # + for income, - for expense
    category: str     # Budget.category name

    @property
    def type(self) -> str:
        # derived from the sign so it can never drift from amount
        return "income" if self.amount > 0 else "expense"


# A monthly spending ceiling for one category
@dataclass(frozen=True)
class Budget:
    category: str
    limit: float


@dataclass(frozen=True)
class Totals:
    income: float
    expenses: float
    net: float


@dataclass(frozen=True)
class CategoryBreakdown:
    category: str
    spent: float
    limit: float
    remaining: float  # limit - spent, negative when over budget


@dataclass(frozen=True)
class View:
    filtered: Tuple[Transaction, ...]
    totals: Totals
    breakdown: Tuple[CategoryBreakdown, ...]


@dataclass(frozen=True)
class TransactionDraft:
    """Raw add-transaction form input. ``amount`` is the unsigned magnitude
    exactly as typed; the sign is applied from ``type``."""

    date: str
    description: str
    amount: object
    category: str
    type: str = "expense"


DEFAULT_BUDGETS: Tuple[Budget, ...] = (
    Budget("Housing", 1500.0),
    Budget("Food", 600.0),
    Budget("Transportation", 300.0),
    Budget("Entertainment", 200.0),
    Budget("Other", 300.0),
)

TIME_RANGES = ("month", "year", "all")

TIME_RANGE_LABELS = {
    "month": "This Month",
    "year": "This Year",
    "all": "All Time",
}


def _amount(raw) -> float:
    # unparseable amounts load as NaN rather than failing the whole file
    try:
        return float(raw)
    except (TypeError, ValueError):
        return float("nan")


def transaction_to_dict(t: Transaction) -> dict:
    return asdict(t)


def transaction_from_dict(data: dict) -> Transaction:
    # stored "type" tags are ignored, the sign of amount wins
    return Transaction(
        id=str(data["id"]),
        date=str(data["date"]),
        description=data.get("description", ""),
        amount=_amount(data.get("amount")),
        category=data.get("category", ""),
    )


def budget_to_dict(b: Budget) -> dict:
    return asdict(b)


def budget_from_dict(data: dict) -> Budget:
    limit = float(data["limit"])
    if not math.isfinite(limit) or limit < 0:
        raise ValueError(f"invalid limit {data['limit']!r} for {data['category']!r}")
    return Budget(category=data["category"], limit=limit)
