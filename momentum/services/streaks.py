from typing import NamedTuple

from ..calendar_utils import add_days
from ..entities import Goal


class StreakResult(NamedTuple):
    current: int
    best: int


def compute_streak(goal: Goal, today_key: str) -> StreakResult:
    """
    Walk backward from today one day at a time.
      - completed day: count it, keep walking
      - first missing day: tolerated (usually today, not done yet)
      - second missing day: the streak ends

    At most one miss is tolerated, so the walk stops after current + 2 steps.
    Pure: the caller decides whether to persist a raised best streak.
    """
    streak = 0
    missed_once = False
    day = today_key

    while True:
        if goal.history.get(day):
            streak += 1
        elif not missed_once:
            missed_once = True
        else:
            break
        day = add_days(day, -1)

    return StreakResult(current=streak, best=max(goal.best_streak, streak))
