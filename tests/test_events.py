from datetime import datetime

from tracker.events import (
    BUDGET_ALERT,
    Event,
    EventBus,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    budget_alert_handler,
)


def make_event(name, payload):
    return Event(name=name, ts=datetime.now().isoformat(), payload=payload)


def test_publish_without_subscribers():
    assert EventBus().publish(TRANSACTION_ADDED, {"amount": -5}) == []


def test_subscribe_and_publish():
    bus = EventBus()
    seen = []

    def handler(event: Event, payload: dict) -> dict:
        seen.append(event)
        return {"handled": payload["id"]}

    bus.subscribe(TRANSACTION_DELETED, handler)
    results = bus.publish(TRANSACTION_DELETED, {"id": "t1"})

    assert results == [{"handled": "t1"}]
    assert seen[0].name == TRANSACTION_DELETED
    assert seen[0].payload == {"id": "t1"}


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    bus.subscribe(TRANSACTION_ADDED, lambda e, p: {"n": 1})
    bus.subscribe(TRANSACTION_ADDED, lambda e, p: {"n": 2})
    assert [r["n"] for r in bus.publish(TRANSACTION_ADDED, {})] == [1, 2]


def test_unsubscribe():
    bus = EventBus()

    def handler(event, payload):
        return {"called": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    bus.unsubscribe(TRANSACTION_ADDED, handler)
    bus.unsubscribe(BUDGET_ALERT, handler)
    assert bus.publish(TRANSACTION_ADDED, {}) == []


def test_budget_alert_when_over_limit():
    payload = {"amount": -150.0, "category": "Food", "limit": 600.0, "spent": 650.0}
    result = budget_alert_handler(make_event(BUDGET_ALERT, payload), payload)
    assert "Budget exceeded for Food" in result["alert"]
    assert result["over_budget"] == 50.0


def test_budget_alert_quiet_within_limit_or_for_income():
    within = {"amount": -10.0, "category": "Food", "limit": 600.0, "spent": 600.0}
    income = {"amount": 10.0, "category": "Food", "limit": 0.0, "spent": 50.0}
    assert budget_alert_handler(make_event(BUDGET_ALERT, within), within) == {}
    assert budget_alert_handler(make_event(BUDGET_ALERT, income), income) == {}
    assert within == {"amount": -10.0, "category": "Food", "limit": 600.0, "spent": 600.0}
