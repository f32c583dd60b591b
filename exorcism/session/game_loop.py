"""
Game Loop - Drives one live round.

The loop:
1. Builds the board from a seed and opens a session
2. Takes a released drag gesture (two corners)
3. Normalizes, validates and applies it through the reducer
4. Logs the attempt, valid or invalid
5. Ends the round when the timer runs out or no valid selection remains

Ending the round finalizes the session exactly once. Rendering and input
handling live outside; the loop only deals in coordinates and boards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging

from ..engine_core.action import ActionOutcome
from ..engine_core.action_generator import has_valid_moves
from ..engine_core.board import create_board_from_seed
from ..engine_core.prng import generate_seed
from ..engine_core.reducer import ValidationResult, apply_selection
from ..engine_core.selection import Selection, calculate_selection_bounds
from ..engine_core.state import Board
from .recorder import GameSession, create_game_session, log_action, finalize_session, now_ms

logger = logging.getLogger(__name__)

# Round length in seconds
GAME_DURATION_SECONDS = 120


class LoopState(Enum):
    """State of the game loop."""
    READY = "ready"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class EndReason(Enum):
    """Why a round ended."""
    TIME_UP = "time_up"
    NO_MOVES = "no_moves"
    ABANDONED = "abandoned"


@dataclass
class TurnResult:
    """
    Result of processing one selection.

    Contains the normalized selection, how it validated,
    the score change and whether the round is now over.
    """
    success: bool
    loop_state: LoopState
    selection: Selection | None = None
    validation: ValidationResult | None = None
    score_gained: int = 0
    score: int = 0
    end_reason: EndReason | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.validation is not None and self.validation.is_valid


class GameLoop:
    """
    The live round driver.

    Usage:
        loop = GameLoop()
        loop.start()

        # Player releases a drag from (2, 3) to (0, 4)
        result = loop.select(2, 3, 0, 4)

        if result.loop_state == LoopState.GAME_OVER:
            submit(loop.session)
    """

    def __init__(
        self,
        seed: int | None = None,
        duration_seconds: float = GAME_DURATION_SECONDS,
        clock: Callable[[], int] = now_ms,
    ):
        self.seed = generate_seed() if seed is None else seed
        self.duration_seconds = duration_seconds
        self.clock = clock

        self.state = LoopState.READY
        self.board: Board | None = None
        self.session: GameSession | None = None
        self.score = 0
        self.end_reason: EndReason | None = None

    @property
    def session_id(self) -> str | None:
        return self.session.session_id if self.session else None

    @property
    def is_playing(self) -> bool:
        return self.state == LoopState.PLAYING

    def start(self) -> TurnResult:
        """Build the board and open the session."""
        if self.state != LoopState.READY:
            return TurnResult(
                success=False,
                loop_state=self.state,
                score=self.score,
                errors=["Round already started"],
            )

        self.board = create_board_from_seed(self.seed)
        self.session = create_game_session(self.seed, start_time=self.clock())
        self.score = 0
        self.state = LoopState.PLAYING
        logger.info("Round %s started with seed %d", self.session.session_id, self.seed)

        if not has_valid_moves(self.board):
            self._end(EndReason.NO_MOVES)

        return TurnResult(
            success=True,
            loop_state=self.state,
            score=self.score,
            end_reason=self.end_reason,
        )

    def time_remaining(self, now: int | None = None) -> float:
        """Seconds left on the round clock."""
        if self.session is None:
            return float(self.duration_seconds)
        if self.state == LoopState.GAME_OVER:
            return 0.0
        current = self.clock() if now is None else now
        elapsed = (current - self.session.start_time) / 1000
        return max(0.0, self.duration_seconds - elapsed)

    def tick(self, now: int | None = None) -> bool:
        """
        Check the round clock.

        Returns True if the round is over (possibly ended by this call).
        """
        if self.state != LoopState.PLAYING:
            return self.state == LoopState.GAME_OVER
        if self.time_remaining(now) <= 0:
            self._end(EndReason.TIME_UP, now)
        return self.state == LoopState.GAME_OVER

    def select(
        self,
        start_row: int,
        start_col: int,
        end_row: int,
        end_col: int,
    ) -> TurnResult:
        """
        Process a released drag gesture.

        Every attempt on a live round is logged, including invalid ones.
        """
        now = self.clock()
        if self.state == LoopState.PLAYING:
            self.tick(now)

        if self.state != LoopState.PLAYING:
            return TurnResult(
                success=False,
                loop_state=self.state,
                score=self.score,
                end_reason=self.end_reason,
                errors=["Round is not in progress"],
            )

        selection = calculate_selection_bounds(start_row, start_col, end_row, end_col)
        result = apply_selection(self.board, selection)

        self.session = log_action(
            self.session,
            selection,
            ActionOutcome.from_bool(result.is_valid),
            result.score_gained,
            now=now,
        )

        if result.is_valid:
            self.board = result.board
            self.score += result.score_gained
            if not has_valid_moves(self.board):
                self._end(EndReason.NO_MOVES, now)

        return TurnResult(
            success=True,
            loop_state=self.state,
            selection=selection,
            validation=result.validation,
            score_gained=result.score_gained,
            score=self.score,
            end_reason=self.end_reason,
        )

    def finish(self, reason: EndReason = EndReason.ABANDONED) -> GameSession | None:
        """
        End the round early with the score accumulated so far.

        Returns the finalized session (None if the round never started).
        """
        if self.state == LoopState.PLAYING:
            self._end(reason)
        return self.session

    def _end(self, reason: EndReason, now: int | None = None):
        self.session = finalize_session(
            self.session,
            self.score,
            now=self.clock() if now is None else now,
        )
        self.state = LoopState.GAME_OVER
        self.end_reason = reason
        logger.info(
            "Round %s ended (%s) with score %d after %d action(s)",
            self.session.session_id, reason.value, self.score, self.session.action_count,
        )
