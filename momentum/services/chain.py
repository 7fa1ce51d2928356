from dataclasses import dataclass
from typing import List

from ..calendar_utils import add_days, days_in_month, parse_date_key
from ..entities import Goal

MONTH = "month"
ROLLING = "rolling"
CHAIN_MODES = (MONTH, ROLLING)


@dataclass(frozen=True)
class ChainCell:
    date_key: str
    filled: bool


def month_chain(goal: Goal, today_key: str) -> List[ChainCell]:
    """
    Every day of today's calendar month, oldest first. A cell is filled only
    when it lies within [start_date, today] and is marked in the history, so
    stray entries before the start or after today never show.
    """
    t = parse_date_key(today_key)
    prefix = today_key[:7]                # "YYYY-MM"

    cells = []
    for day in range(1, days_in_month(t.year, t.month) + 1):
        key = f"{prefix}-{day:02d}"
        filled = goal.start_date <= key <= today_key and goal.is_done(key)
        cells.append(ChainCell(date_key=key, filled=filled))
    return cells


def rolling_chain(goal: Goal, today_key: str, window: int = 30) -> List[ChainCell]:
    """The `window` most recent days ending today, oldest first."""
    if window < 1:
        raise ValueError("window must be at least 1 day")
    first = add_days(today_key, -(window - 1))
    cells = []
    for offset in range(window):
        key = add_days(first, offset)
        filled = key >= goal.start_date and goal.is_done(key)
        cells.append(ChainCell(date_key=key, filled=filled))
    return cells


def generate_chain(goal: Goal, today_key: str, mode: str = MONTH, window: int = 30) -> List[ChainCell]:
    if mode == MONTH:
        return month_chain(goal, today_key)
    if mode == ROLLING:
        return rolling_chain(goal, today_key, window)
    raise ValueError(f"Unknown chain mode {mode!r}, expected one of {CHAIN_MODES}")
