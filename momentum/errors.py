class MomentumError(Exception):
    """Base class for tracker failures recoverable at the operation boundary."""


class ValidationError(MomentumError):
    """Empty/missing required field, malformed or future start date, bad preference."""


class NotFoundError(MomentumError):
    def __init__(self, goal_id: str):
        super().__init__(f"Goal not found: {goal_id}")
        self.goal_id = goal_id


class PersistenceCorruptError(MomentumError):
    """Stored payload could not be parsed."""
