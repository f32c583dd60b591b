"""
Session Recorder - Append-only log of one round.

A GameSession is the only artifact needed to prove a score:
the board seed plus every attempted selection, in order.

LIFECYCLE:
1. create_game_session() when the round starts (owns the board seed)
2. log_action() for EVERY attempt, valid or invalid
3. finalize_session() exactly once when the round ends
4. The finalized session is read-only and goes to replay verification

All functions return new sessions; a GameSession is never changed in place.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
import secrets
import string
import time

from ..engine_core.action import GameAction, ActionOutcome
from ..engine_core.selection import Selection

_BASE36 = string.digits + string.ascii_lowercase


class SessionFinalizedError(ValueError):
    """Raised when a finalized session is logged to or finalized again."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} is already finalized")


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_session_id(now: int | None = None) -> str:
    """Session id of the form '<epoch-ms>-<7 base36 chars>'."""
    stamp = now_ms() if now is None else now
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{stamp}-{suffix}"


@dataclass(frozen=True)
class GameSession:
    """
    The seed and ordered action log of one round.

    final_score, end_time and is_complete are stamped once by
    finalize_session().
    """
    session_id: str
    board_seed: int
    start_time: int
    actions: tuple[GameAction, ...] = field(default_factory=tuple)
    final_score: int = 0
    end_time: int = 0
    is_complete: bool = False

    @property
    def action_count(self) -> int:
        return len(self.actions)

    @property
    def logged_score(self) -> int:
        """Score as claimed by the log itself (not trusted by replay)."""
        return sum(action.score_gained for action in self.actions)

    @property
    def duration_ms(self) -> int | None:
        if not self.is_complete:
            return None
        return self.end_time - self.start_time


def create_game_session(
    seed: int,
    session_id: str | None = None,
    start_time: int | None = None,
) -> GameSession:
    """Start an empty session for the board built from seed."""
    started = now_ms() if start_time is None else start_time
    return GameSession(
        session_id=session_id or generate_session_id(started),
        board_seed=seed,
        start_time=started,
    )


def log_action(
    session: GameSession,
    selection: Selection,
    result: ActionOutcome,
    score_gained: int,
    now: int | None = None,
) -> GameSession:
    """
    Return a new session with one more action appended.

    The action is timestamped relative to session.start_time.
    Raises SessionFinalizedError if the session is complete.
    """
    if session.is_complete:
        raise SessionFinalizedError(session.session_id)

    current = now_ms() if now is None else now
    action = GameAction(
        selection=selection,
        timestamp_ms=max(0, current - session.start_time),
        result=result,
        score_gained=score_gained,
    )
    return replace(session, actions=session.actions + (action,))


def finalize_session(
    session: GameSession,
    final_score: int,
    now: int | None = None,
) -> GameSession:
    """
    Stamp the final score and end time.

    Raises SessionFinalizedError if called twice.
    """
    if session.is_complete:
        raise SessionFinalizedError(session.session_id)

    return replace(
        session,
        final_score=final_score,
        end_time=now_ms() if now is None else now,
        is_complete=True,
    )
