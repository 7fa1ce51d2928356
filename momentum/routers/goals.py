from fastapi import APIRouter, Depends, HTTPException

from ..calendar_utils import format_display_date
from ..config import settings
from ..deps import get_store, require_api_key
from ..entities import Goal
from ..errors import NotFoundError, ValidationError
from ..services.chain import generate_chain
from ..services.streaks import StreakResult
from ..store import GoalStore
from .. import schemas

router = APIRouter(prefix="/goals", tags=["goals"], dependencies=[Depends(require_api_key)])

# ---------- helpers ----------
def chain_for(goal: Goal, today_key: str) -> list[dict]:
    cells = generate_chain(goal, today_key, mode=settings.chain_mode, window=settings.chain_window_days)
    return [{"date": c.date_key, "filled": c.filled} for c in cells]

def card(goal: Goal, streak: StreakResult, today_key: str) -> dict:
    return {
        "id": goal.id,
        "name": goal.name,
        "color": goal.color,
        "start_date": goal.start_date,
        "started": format_display_date(goal.start_date),
        "history": dict(goal.history),
        "streak": streak.current,
        "best_streak": goal.best_streak,
        "done_today": goal.is_done(today_key),
        "chain": chain_for(goal, today_key),
    }

def _goal_or_404(store: GoalStore, goal_id: str) -> tuple[Goal, StreakResult]:
    try:
        return store.record_streak(goal_id)
    except NotFoundError:
        raise HTTPException(404, "Goal not found")

# ---------- endpoints ----------
@router.get("")
def list_goals(store: GoalStore = Depends(get_store)):
    today = store.today()
    cards = []
    for g in store.goals:
        try:
            goal, streak = store.record_streak(g.id)
        except NotFoundError:
            # deleted since the snapshot was taken
            continue
        cards.append(card(goal, streak, today))
    return cards

@router.post("")
def create_goal(payload: schemas.GoalCreate, store: GoalStore = Depends(get_store)):
    try:
        g = store.add_goal(payload.name, payload.color, payload.start_date, backfill=payload.backfill)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    goal, streak = _goal_or_404(store, g.id)
    return {"ok": True, "goal_id": g.id, "goal": card(goal, streak, store.today())}

# before /{goal_id} so "summary" is never taken for an id
@router.get("/summary")
def summary(store: GoalStore = Depends(get_store)):
    score = store.daily_score()
    return {"date": score.date, "completed": score.completed, "total": score.total}

@router.get("/{goal_id}")
def get_goal(goal_id: str, store: GoalStore = Depends(get_store)):
    goal, streak = _goal_or_404(store, goal_id)
    return card(goal, streak, store.today())

@router.get("/{goal_id}/streak")
def get_streak(goal_id: str, store: GoalStore = Depends(get_store)):
    _, streak = _goal_or_404(store, goal_id)
    return {"current": streak.current, "best": streak.best}

@router.get("/{goal_id}/chain")
def get_chain(goal_id: str, store: GoalStore = Depends(get_store)):
    g = store.find(goal_id)
    if not g:
        raise HTTPException(404, "Goal not found")
    today = store.today()
    return {"goal_id": goal_id, "date": today, "mode": settings.chain_mode, "cells": chain_for(g, today)}

@router.post("/{goal_id}/complete")
def complete_goal(goal_id: str, store: GoalStore = Depends(get_store)):
    try:
        done = store.mark_complete(goal_id)
    except NotFoundError:
        raise HTTPException(404, "Goal not found")
    return {
        "ok": True,
        "goal": card(done.goal, done.streak, store.today()),
        "cue": done.cue.as_dict() if done.cue else None,
    }

@router.delete("/{goal_id}")
def delete_goal(goal_id: str, store: GoalStore = Depends(get_store)):
    # unknown ids are not an error
    return {"ok": True, "deleted": store.delete_goal(goal_id)}
