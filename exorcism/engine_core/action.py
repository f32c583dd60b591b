"""
Action System - Logged player attempts.

Every selection the player releases becomes one GameAction, whether it
exorcised ghosts or not. Actions are:
- Appended to the session log
- Never mutated after creation
- Re-validated from scratch during replay (the logged outcome is not trusted)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .selection import Selection


class ActionType(Enum):
    """Types of logged actions."""
    SELECT = "SELECT"


class ActionOutcome(Enum):
    """Outcome of a selection as observed during live play."""
    VALID = "valid"
    INVALID = "invalid"

    @classmethod
    def from_bool(cls, is_valid: bool) -> ActionOutcome:
        return cls.VALID if is_valid else cls.INVALID


@dataclass(frozen=True)
class GameAction:
    """
    One logged attempt.

    timestamp_ms is relative to the session start.
    """
    selection: Selection
    timestamp_ms: int
    result: ActionOutcome
    score_gained: int
    action_type: ActionType = ActionType.SELECT

    @property
    def is_valid(self) -> bool:
        return self.result is ActionOutcome.VALID
