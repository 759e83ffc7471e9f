"""Configuration for the finance tracker.

Paths and defaults live here as module constants; each can be overridden
through an environment variable.
"""
import logging
import os
from pathlib import Path

from tracker.domain import TIME_RANGES

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))
DATA_PATH = Path(os.getenv("TRACKER_DATA_PATH", DATA_DIR / "finance.json"))

DEFAULT_TIME_RANGE = os.getenv("TRACKER_TIME_RANGE", "month")
if DEFAULT_TIME_RANGE not in TIME_RANGES:
    DEFAULT_TIME_RANGE = "month"

CURRENCY_SYMBOL = "$"

LOG_LEVEL = os.getenv("TRACKER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# colours for the category pie, cycled by budget position
CHART_COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884D8"]


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; later calls are no-ops."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)


def ensure_data_directories() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    DATA_PATH.parent.mkdir(parents=True, exist_ok=True)
