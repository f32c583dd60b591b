"""
Replay Verifier - Recomputes a session's score from first principles.

Replay trusts only two things in a session: the board seed and the
ordered selections. Logged outcomes and logged scores are ignored;
each selection is re-validated against the replay's own board. A
tampered final score, or a log claiming moves that never validated
against the seed-derived board, therefore fails verification.

Failed verification is a boolean result, not an exception. What to do
with it (reject a leaderboard entry, flag for review) is up to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..engine_core.action import ActionOutcome
from ..engine_core.board import create_board_from_seed
from ..engine_core.reducer import apply_selection
from ..engine_core.state import Board
from .recorder import GameSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionMismatch:
    """A logged action whose outcome disagrees with replay."""
    index: int
    logged_result: ActionOutcome
    replayed_result: ActionOutcome
    logged_score: int
    replayed_score: int


@dataclass
class ReplayReport:
    """
    Detailed result of replaying a session.

    Contains:
    - The independently recomputed score
    - The board as it stands after the last action
    - Every action whose logged outcome differs from replay
    """
    session_id: str
    claimed_score: int
    replayed_score: int
    is_complete: bool
    final_board: Board
    mismatches: list[ActionMismatch] = field(default_factory=list)

    @property
    def verified(self) -> bool:
        return self.is_complete and self.replayed_score == self.claimed_score


def replay_report(session: GameSession) -> ReplayReport:
    """Replay every action against a board rebuilt from the session seed."""
    board = create_board_from_seed(session.board_seed)
    score = 0
    mismatches: list[ActionMismatch] = []

    for index, action in enumerate(session.actions):
        result = apply_selection(board, action.selection)
        board = result.board
        score += result.score_gained

        replayed = ActionOutcome.from_bool(result.is_valid)
        if replayed is not action.result or result.score_gained != action.score_gained:
            mismatches.append(ActionMismatch(
                index=index,
                logged_result=action.result,
                replayed_result=replayed,
                logged_score=action.score_gained,
                replayed_score=result.score_gained,
            ))

    return ReplayReport(
        session_id=session.session_id,
        claimed_score=session.final_score,
        replayed_score=score,
        is_complete=session.is_complete,
        final_board=board,
        mismatches=mismatches,
    )


def replay_session(session: GameSession) -> int:
    """Independently recompute the session's score."""
    return replay_report(session).replayed_score


def verify_session(session: GameSession) -> bool:
    """True iff the session is finalized and replay reproduces its final score."""
    if not session.is_complete:
        return False

    report = replay_report(session)
    if not report.verified:
        logger.warning(
            "Session %s failed verification: claimed %d, replayed %d",
            session.session_id, report.claimed_score, report.replayed_score,
        )
    return report.verified
