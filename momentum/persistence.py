import logging
from typing import Callable, Optional, Protocol

import pydantic
from sqlalchemy.orm import Session

from . import models
from .calendar_utils import is_date_key
from .entities import Goal, TrackerState
from .errors import PersistenceCorruptError
from .schemas import GoalRecord, StateRecord

log = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class SqlKeyValueStore:
    """get/set of one text blob per key, backed by the kv_store table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self._session_factory()
        try:
            row = db.get(models.KeyValue, key)
            return row.value if row else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self._session_factory()
        try:
            # single row, single transaction: the whole state lands or nothing does
            db.merge(models.KeyValue(key=key, value=value))
            db.commit()
        finally:
            db.close()


# ---------- codec ----------

def encode_state(state: TrackerState) -> str:
    record = StateRecord(
        goals=[
            GoalRecord(
                id=g.id,
                name=g.name,
                color=g.color,
                start_date=g.start_date,
                history=dict(g.history),
                best_streak=g.best_streak,
            )
            for g in state.goals
        ],
        theme=state.theme,
    )
    return record.model_dump_json(by_alias=True, exclude_none=True)


def decode_state(raw: str) -> TrackerState:
    try:
        record = StateRecord.model_validate_json(raw)
    except (pydantic.ValidationError, ValueError) as e:
        raise PersistenceCorruptError(f"Unreadable tracker state: {e}") from e

    goals = []
    seen = set()
    for r in record.goals:
        if r.id in seen:
            raise PersistenceCorruptError(f"Duplicate goal id {r.id!r}")
        seen.add(r.id)
        if not is_date_key(r.start_date):
            raise PersistenceCorruptError(f"Goal {r.id!r} has bad startDate {r.start_date!r}")
        # drop malformed keys, they can never be matched by the engine
        history = {k: v for k, v in r.history.items() if is_date_key(k)}
        if len(history) != len(r.history):
            log.warning("[store] goal %s: dropped %d malformed history keys", r.id, len(r.history) - len(history))
        goals.append(Goal(
            id=r.id,
            name=r.name,
            color=r.color,
            start_date=r.start_date,
            history=history,
            best_streak=r.best_streak,
        ))
    return TrackerState(goals=goals, theme=record.theme)


def default_state() -> TrackerState:
    return TrackerState(goals=[])

