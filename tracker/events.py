from typing import Callable, Dict, List, NamedTuple
from datetime import datetime

__all__ = [
    'Event', 'EventBus',
    'TRANSACTION_ADDED', 'TRANSACTION_DELETED', 'BUDGET_UPDATED', 'BUDGET_ALERT',
    'budget_alert_handler',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in list(handlers)]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
BUDGET_UPDATED = "BUDGET_UPDATED"
BUDGET_ALERT = "BUDGET_ALERT"


def budget_alert_handler(event: Event, payload: dict) -> dict:
    """Flag an expense booked while its category is over the monthly limit.

    Fires for every later expense in that month too, not only the one that
    first crosses the limit.

    payload: amount, category, limit, spent (month-to-date, including amount)
    """
    amount = payload.get("amount", 0)
    limit = payload.get("limit")
    spent = payload.get("spent", 0)
    category = payload.get("category", "")

    if amount >= 0 or limit is None or spent <= limit:
        return {}
    return {
        "alert": f"Budget exceeded for {category}: ${spent:,.2f} of ${limit:,.2f}",
        "category": category,
        "spent": spent,
        "limit": limit,
        "over_budget": spent - limit,
    }
