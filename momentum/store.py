import copy
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Callable, List, NamedTuple, Optional, Tuple
from uuid import uuid4

from .calendar_utils import add_days, is_date_key, to_date_key, today
from .entities import Goal
from .errors import NotFoundError, PersistenceCorruptError, ValidationError
from .persistence import KeyValueStore, decode_state, default_state, encode_state
from .services.feedback import CompletionFeedback, SoundCue
from .services.streaks import StreakResult, compute_streak

log = logging.getLogger(__name__)

THEMES = ("light", "dark")


class Completion(NamedTuple):
    goal: Goal
    streak: StreakResult
    cue: Optional[SoundCue]


class DailyScore(NamedTuple):
    date: str
    completed: int
    total: int


class GoalStore:
    """
    Ordered goals plus preferences, held in memory and written back as one
    blob after every mutation. "Today" comes from `clock` and is read at the
    start of each operation.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = "momentumData",
        *,
        clock: Optional[Callable[[], str]] = None,
        tz: Optional[str] = None,
        feedback: Optional[CompletionFeedback] = None,
        backfill_on_create: bool = False,
    ):
        self._kv = kv
        self._key = key
        self._clock = clock or (lambda: today(tz))
        self._feedback = feedback
        self.backfill_on_create = backfill_on_create
        self._state = default_state()
        self._lock = threading.RLock()

    # ---------- persistence ----------
    def load(self) -> "GoalStore":
        with self._lock:
            raw = self._kv.get(self._key)
            if raw is None:
                self._state = default_state()
            else:
                try:
                    self._state = decode_state(raw)
                except PersistenceCorruptError as e:
                    log.warning("[store] %s; starting from an empty store", e)
                    self._state = default_state()
            log.info("[store] loaded %d goals from %r", len(self._state.goals), self._key)
            return self

    def save(self) -> None:
        with self._lock:
            self._kv.set(self._key, encode_state(self._state))

    # ---------- reads ----------
    def today(self) -> str:
        return self._clock()

    @property
    def goals(self) -> List[Goal]:
        return list(self._state.goals)

    @property
    def theme(self) -> Optional[str]:
        return self._state.theme

    def find(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self._state.goals if g.id == goal_id), None)

    def get(self, goal_id: str) -> Goal:
        g = self.find(goal_id)
        if g is None:
            raise NotFoundError(goal_id)
        return g

    def daily_score(self) -> DailyScore:
        t = self.today()
        done = sum(1 for g in self._state.goals if g.is_done(t))
        return DailyScore(date=t, completed=done, total=len(self._state.goals))

    # ---------- mutations ----------
    @contextmanager
    def _mutating(self):
        """
        Run a state transition under the lock. If anything raises (usually the
        write to the key-value store), the in-memory state is rolled back, so a
        failed operation leaves nothing behind.
        """
        with self._lock:
            before = copy.deepcopy(self._state)
            try:
                yield
            except Exception:
                self._state = before
                raise

    def add_goal(self, name: str, color: str, start_date, backfill: Optional[bool] = None) -> Goal:
        name = (name or "").strip()
        if isinstance(start_date, date):
            start_date = to_date_key(start_date)
        if not name or not start_date:
            raise ValidationError("Please enter goal name and start date.")
        if not is_date_key(start_date):
            raise ValidationError(f"Bad start date {start_date!r}, expected YYYY-MM-DD")

        with self._mutating():
            t = self.today()
            if start_date > t:
                raise ValidationError("Start date cannot be in the future.")

            goal = Goal(id=uuid4().hex, name=name, color=color or "", start_date=start_date)
            if backfill is None:
                backfill = self.backfill_on_create
            if backfill:
                # invents history: every day from start through yesterday counts as done
                day = start_date
                while day < t:
                    goal.history[day] = True
                    day = add_days(day, 1)

            self._state.goals.append(goal)
            self.save()
        log.info("[store] added goal %s (%s), start %s, %d backfilled days",
                 goal.id, goal.name, goal.start_date, len(goal.history))
        return goal

    def delete_goal(self, goal_id: str) -> bool:
        with self._mutating():
            before = len(self._state.goals)
            self._state.goals = [g for g in self._state.goals if g.id != goal_id]
            removed = len(self._state.goals) < before
            self.save()
        if removed:
            log.info("[store] deleted goal %s", goal_id)
        return removed

    def mark_complete(self, goal_id: str) -> Completion:
        with self._mutating():
            goal = self.get(goal_id)
            t = self.today()
            goal.history[t] = True
            result = self._raise_best(goal, t)
            self.save()
        log.info("[store] goal %s done for %s, streak %d", goal.id, t, result.current)
        return Completion(goal=goal, streak=result, cue=self._fire_feedback())

    def record_streak(self, goal_id: str) -> Tuple[Goal, StreakResult]:
        """
        One lookup for display: the goal and its streak. Persists only when
        the best streak went up.
        """
        with self._mutating():
            goal = self.get(goal_id)
            before = goal.best_streak
            result = self._raise_best(goal, self.today())
            if goal.best_streak != before:
                self.save()
            return goal, result

    def refresh_all(self) -> int:
        """Re-run the engine for every goal; returns how many best streaks rose."""
        with self._mutating():
            t = self.today()
            raised = 0
            for goal in self._state.goals:
                before = goal.best_streak
                self._raise_best(goal, t)
                if goal.best_streak != before:
                    raised += 1
            if raised:
                self.save()
            return raised

    def set_theme(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValidationError(f"theme must be one of {THEMES}")
        with self._mutating():
            self._state.theme = theme
            self.save()
            return theme

    def _fire_feedback(self) -> Optional[SoundCue]:
        # the completion is already saved; a broken handle must not undo the reply
        if self._feedback is None:
            return None
        try:
            return self._feedback.fire()
        except Exception:
            log.exception("[feedback] completion cue failed")
            return None

    def _raise_best(self, goal: Goal, today_key: str) -> StreakResult:
        result = compute_streak(goal, today_key)
        if result.best > goal.best_streak:
            log.info("[store] goal %s best streak %d -> %d", goal.id, goal.best_streak, result.best)
            goal.best_streak = result.best
        return result
