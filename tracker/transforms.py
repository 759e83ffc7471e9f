import logging
from typing import Callable, Tuple
from uuid import uuid4

from tracker.domain import Budget, Transaction, TransactionDraft
from tracker.functional import Either, Right, find_budget, parse_limit, validate_draft

logger = logging.getLogger(__name__)


def new_transaction_id() -> str:
    return uuid4().hex


def add_transaction(
    trans: Tuple[Transaction, ...],
    draft: TransactionDraft,
    id_factory: Callable[[], str] = new_transaction_id,
) -> Either[dict, Tuple[Transaction, ...]]:
    result = validate_draft(draft).map(
        lambda fields: trans + (Transaction(id=id_factory(), **fields),)
    )
    if result.is_left():
        logger.info("Rejected transaction draft: %s", result.get_error()["message"])
    return result


def delete_transaction(
    trans: Tuple[Transaction, ...], tx_id: str
) -> Tuple[Transaction, ...]:
    remaining = tuple(t for t in trans if t.id != tx_id)
    if len(remaining) == len(trans):
        logger.debug("No transaction with id %s, nothing deleted", tx_id)
        return trans
    return remaining


def update_budget_limit(
    budgets: Tuple[Budget, ...], category: str, new_limit
) -> Either[dict, Tuple[Budget, ...]]:
    def _apply(limit: float) -> Either[dict, Tuple[Budget, ...]]:
        if find_budget(budgets, category).is_none():
            logger.debug("No budget for category %s, limit unchanged", category)
            return Right(budgets)
        return Right(tuple(
            Budget(category=b.category, limit=limit if b.category == category else b.limit)
            for b in budgets
        ))

    result = parse_limit(new_limit).bind(_apply)
    if result.is_left():
        logger.info("Rejected budget limit for %s: %s", category, result.get_error()["message"])
    return result
