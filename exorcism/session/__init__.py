"""
Session Module - Session logging, replay verification and live rounds.

A session is one round of play:
- Created with the seed of its board
- Grows by one logged action per attempted selection
- Finalized exactly once when the round ends
- Replayed from its seed to verify the claimed score
"""

from .recorder import (
    GameSession,
    SessionFinalizedError,
    create_game_session,
    log_action,
    finalize_session,
    generate_session_id,
)
from .replay import ReplayReport, ActionMismatch, replay_report, replay_session, verify_session
from .game_loop import GameLoop, LoopState, TurnResult, EndReason, GAME_DURATION_SECONDS
from .manager import SessionManager

__all__ = [
    "GameSession",
    "SessionFinalizedError",
    "create_game_session",
    "log_action",
    "finalize_session",
    "generate_session_id",
    "ReplayReport",
    "ActionMismatch",
    "replay_report",
    "replay_session",
    "verify_session",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "EndReason",
    "GAME_DURATION_SECONDS",
    "SessionManager",
]
