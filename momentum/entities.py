from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Goal:
    id: str
    name: str
    color: str
    start_date: str                      # "YYYY-MM-DD"
    history: Dict[str, bool] = field(default_factory=dict)
    best_streak: int = 0

    def is_done(self, date_key: str) -> bool:
        return bool(self.history.get(date_key))


@dataclass
class TrackerState:
    goals: List[Goal] = field(default_factory=list)
    theme: Optional[str] = None
