"""JSON persistence for the transaction log and budget table.

The file holds plain data only: ``{"transactions": [...], "budgets": [...]}``.
Derived figures are never written.
"""
import json
import logging
import os
from pathlib import Path
from typing import Tuple

from tracker.domain import (
    Budget,
    DEFAULT_BUDGETS,
    Transaction,
    budget_from_dict,
    budget_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)

logger = logging.getLogger(__name__)


class CorruptDataFile(ValueError):
    pass


def _read_records(items, convert, kind: str, path: Path) -> tuple:
    records = []
    for i, item in enumerate(items):
        try:
            records.append(convert(item))
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Skipping %s #%d in %s (%s)", kind, i, path, e)
    return tuple(records)


def _read_document(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as e:
        raise CorruptDataFile(str(e)) from e
    if not isinstance(data, dict):
        raise CorruptDataFile(f"expected a JSON object, got {type(data).__name__}")
    for key in ("transactions", "budgets"):
        if not isinstance(data.get(key) or [], list):
            raise CorruptDataFile(f"{key!r} is not a list")
    return data


def backup_path(path) -> Path:
    path = Path(path)
    return path.with_name(path.name + ".bak")


def load_state(path) -> Tuple[Tuple[Transaction, ...], Tuple[Budget, ...]]:
    """Return (transactions, budgets) from ``path``.

    Records that cannot be converted are skipped one by one. A file that
    cannot be parsed at all is moved to ``<name>.bak`` so the next save
    cannot overwrite it, and the defaults are returned. A missing file
    also yields no transactions and the default budgets.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No data file at %s, starting with default budgets", path)
        return (), DEFAULT_BUDGETS

    try:
        data = _read_document(path)
    except CorruptDataFile as e:
        backup = backup_path(path)
        os.replace(path, backup)
        logger.warning("Could not parse %s (%s), moved it to %s and started from defaults", path, e, backup)
        return (), DEFAULT_BUDGETS

    transactions = _read_records(data.get("transactions") or [], transaction_from_dict, "transaction", path)
    budgets = _read_records(data.get("budgets") or [], budget_from_dict, "budget", path) or DEFAULT_BUDGETS

    logger.debug("Loaded %d transactions and %d budgets from %s", len(transactions), len(budgets), path)
    return transactions, budgets


def save_state(path, transactions: Tuple[Transaction, ...], budgets: Tuple[Budget, ...]) -> None:
    """Write both collections to ``path`` atomically via a .tmp file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "transactions": [transaction_to_dict(t) for t in transactions],
        "budgets": [budget_to_dict(b) for b in budgets],
    }

    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, path)
    except OSError:
        logger.exception("Failed to save data to %s", path)
        tmp.unlink(missing_ok=True)
        raise
    logger.debug("Saved %d transactions and %d budgets to %s", len(transactions), len(budgets), path)
