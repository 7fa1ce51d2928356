from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------- persisted record ----------
# Field names match the stored blob: {"goals": [...], "theme": ...}

class GoalRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    color: str = ""
    start_date: str = Field(alias="startDate")
    history: Dict[str, bool] = Field(default_factory=dict)
    best_streak: int = Field(default=0, ge=0, alias="bestStreak")

    @field_validator("id", mode="before")
    @classmethod
    def _legacy_numeric_id(cls, v):
        # older payloads used a millisecond timestamp as id
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class StateRecord(BaseModel):
    goals: List[GoalRecord] = Field(default_factory=list)
    theme: Optional[str] = None


# ---------- API payloads ----------

class GoalCreate(BaseModel):
    name: str = Field(..., min_length=1)
    color: str = "#ff7a00"
    start_date: date
    backfill: Optional[bool] = None      # None -> BACKFILL_ON_CREATE


class ThemeUpdate(BaseModel):
    theme: str

