import logging
from datetime import date
from typing import Callable, List, Optional, Tuple

from tracker.domain import Budget, Transaction, TransactionDraft, View
from tracker.engine import category_spent
from tracker.events import (
    BUDGET_ALERT,
    BUDGET_UPDATED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    Event,
    EventBus,
    budget_alert_handler,
)
from tracker.filters import filter_by_time_range
from tracker.functional import Either, find_budget
from tracker.memo import cached_view
from tracker.storage import load_state, save_state
from tracker import transforms

logger = logging.getLogger(__name__)

MUTATION_EVENTS = (TRANSACTION_ADDED, TRANSACTION_DELETED, BUDGET_UPDATED)


class FinanceTracker:
    """Owns the canonical transaction and budget tuples for one session.

    Commands delegate to the pure functions in ``tracker.transforms`` and
    swap in the returned tuples whole. Every committed mutation is published
    on the bus; a subscriber registered here writes the state back through
    ``saver``.
    """

    def __init__(
        self,
        transactions: Tuple[Transaction, ...] = (),
        budgets: Tuple[Budget, ...] = (),
        saver: Optional[Callable[[Tuple[Transaction, ...], Tuple[Budget, ...]], None]] = None,
        bus: Optional[EventBus] = None,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = transforms.new_transaction_id,
    ):
        self.transactions = tuple(transactions)
        self.budgets = tuple(budgets)
        self.alerts: List[dict] = []
        self.bus = bus or EventBus()
        self._saver = saver
        self._today = today
        self._id_factory = id_factory

        for name in MUTATION_EVENTS:
            self.bus.subscribe(name, self._persist)
        self.bus.subscribe(BUDGET_ALERT, budget_alert_handler)

    @classmethod
    def from_file(cls, path, **kwargs) -> "FinanceTracker":
        transactions, budgets = load_state(path)
        return cls(
            transactions,
            budgets,
            saver=lambda t, b: save_state(path, t, b),
            **kwargs,
        )

    def _persist(self, event: Event, payload: dict) -> dict:
        if self._saver is None:
            return {}
        self._saver(self.transactions, self.budgets)
        return {"saved": event.name}

    def add_transaction(self, draft: TransactionDraft) -> Either[dict, Transaction]:
        result = transforms.add_transaction(self.transactions, draft, self._id_factory)
        if result.is_left():
            return result

        self.transactions = result.get_or_else(self.transactions)
        added = self.transactions[-1]
        logger.info("Added %s %s (%s) on %s", added.type, added.description, added.category, added.date)
        self.bus.publish(TRANSACTION_ADDED, {"id": added.id, "amount": added.amount, "category": added.category})
        self._check_budget(added)
        return result.map(lambda new: new[-1])

    def _check_budget(self, t: Transaction) -> None:
        limit = find_budget(self.budgets, t.category).map(lambda b: b.limit).get_or_else(None)
        if limit is None or t.amount >= 0:
            return
        month = filter_by_time_range(self.transactions, "month", date.fromisoformat(t.date))
        payload = {
            "amount": t.amount,
            "category": t.category,
            "limit": limit,
            "spent": category_spent(month, t.category),
        }
        for result in self.bus.publish(BUDGET_ALERT, payload):
            if "alert" in result:
                logger.warning(result["alert"])
                self.alerts.append(result)

    def delete_transaction(self, tx_id: str) -> bool:
        remaining = transforms.delete_transaction(self.transactions, tx_id)
        if remaining is self.transactions:
            return False
        self.transactions = remaining
        logger.info("Deleted transaction %s", tx_id)
        self.bus.publish(TRANSACTION_DELETED, {"id": tx_id})
        return True

    def update_budget_limit(self, category: str, new_limit) -> Either[dict, Tuple[Budget, ...]]:
        result = transforms.update_budget_limit(self.budgets, category, new_limit)
        updated = result.get_or_else(self.budgets)
        if updated != self.budgets:
            self.budgets = updated
            logger.info("Budget for %s set to %s", category, new_limit)
            self.bus.publish(BUDGET_UPDATED, {"category": category, "limit": new_limit})
        return result

    def clear_alerts(self) -> None:
        self.alerts = []

    def view(self, time_range: str, reference_date: Optional[date] = None) -> View:
        return cached_view(
            self.transactions,
            self.budgets,
            time_range,
            reference_date or self._today(),
        )
