"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages live rounds
3. Verifies submitted sessions by replay
4. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateGameRequest,
    SelectionRequest,
    # Responses
    GameResponse,
    SelectionResponse,
    HintResponse,
    VerifyResponse,
    MismatchInfo,
    ErrorResponse,
    # Records
    GameSessionRecord,
    SelectionRecord,
    # Enums
    ActionResultValue,
    ErrorCode,
    GameStatus,
)
from ..engine_core.action_generator import find_first_valid_move, has_valid_moves
from ..engine_core.reducer import count_non_null_cells
from ..session import SessionManager, GameLoop, LoopState, EndReason, replay_report

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a round
        game = service.create_game(CreateGameRequest())

        # Play
        result = service.submit_selection(game.session_id, SelectionRequest(...))

        # Verify a session captured elsewhere
        verdict = service.verify_session(record)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new round."""
        loop = self.session_manager.create_game(seed=request.seed)
        return self._game_to_response(loop)

    def get_game(self, session_id: str) -> GameResponse | ErrorResponse:
        """Get round state."""
        loop = self.session_manager.get_game(session_id)
        if loop is None:
            return self._not_found(session_id)
        loop.tick()
        return self._game_to_response(loop)

    def submit_selection(
        self,
        session_id: str,
        request: SelectionRequest,
    ) -> SelectionResponse | ErrorResponse:
        """Apply a released drag gesture to a round."""
        loop = self.session_manager.get_game(session_id)
        if loop is None:
            return self._not_found(session_id)

        result = loop.select(
            request.start_row, request.start_col, request.end_row, request.end_col,
        )
        if not result.success:
            return ErrorResponse(
                error=f"Game {session_id} is over",
                error_code=ErrorCode.GAME_OVER,
                details={"end_reason": loop.end_reason.value if loop.end_reason else None},
            )

        return SelectionResponse(
            session_id=session_id,
            selection=SelectionRecord.from_selection(result.selection),
            is_valid=result.validation.is_valid,
            sum=result.validation.sum,
            tile_count=result.validation.tile_count,
            score_gained=result.score_gained,
            score=result.score,
            status=self._status(loop),
            end_reason=result.end_reason.value if result.end_reason else None,
            board=loop.board.to_powers(),
        )

    def get_hint(self, session_id: str) -> HintResponse | ErrorResponse:
        """Suggest a selection that currently exorcises ghosts."""
        loop = self.session_manager.get_game(session_id)
        if loop is None:
            return self._not_found(session_id)

        selection = find_first_valid_move(loop.board) if loop.is_playing else None
        if selection is None:
            return HintResponse(session_id=session_id)
        return HintResponse(
            session_id=session_id,
            selection=SelectionRecord.from_selection(selection),
            tile_count=count_non_null_cells(loop.board, selection),
        )

    def finish_game(self, session_id: str) -> GameSessionRecord | ErrorResponse:
        """End a round now and return its finalized session."""
        loop = self.session_manager.get_game(session_id)
        if loop is None:
            return self._not_found(session_id)
        session = loop.finish(EndReason.ABANDONED)
        return GameSessionRecord.from_session(session)

    def get_session_record(self, session_id: str) -> GameSessionRecord | ErrorResponse:
        """Current session log of a round (finalized once the round is over)."""
        loop = self.session_manager.get_game(session_id)
        if loop is None:
            return self._not_found(session_id)
        loop.tick()
        return GameSessionRecord.from_session(loop.session)

    def end_game(self, session_id: str) -> bool:
        """Finalize and forget a round."""
        return self.session_manager.end_game(session_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_games()

    def verify_session(self, record: GameSessionRecord) -> VerifyResponse:
        """
        Replay a submitted session from its seed.

        A mismatch is reported, not raised.
        """
        report = replay_report(record.to_session())
        if not report.verified:
            logger.warning(
                "Rejected session %s: claimed %d, replayed %d, complete=%s, %d mismatch(es)",
                report.session_id, report.claimed_score, report.replayed_score,
                report.is_complete, len(report.mismatches),
            )

        return VerifyResponse(
            session_id=report.session_id,
            verified=report.verified,
            is_complete=report.is_complete,
            claimed_score=report.claimed_score,
            replayed_score=report.replayed_score,
            mismatches=[
                MismatchInfo(
                    index=m.index,
                    logged_result=ActionResultValue(m.logged_result.value),
                    replayed_result=ActionResultValue(m.replayed_result.value),
                    logged_score=m.logged_score,
                    replayed_score=m.replayed_score,
                )
                for m in report.mismatches
            ],
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {session_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )

    def _status(self, loop: GameLoop) -> GameStatus:
        if loop.state == LoopState.GAME_OVER:
            return GameStatus.GAME_OVER
        return GameStatus.PLAYING

    def _game_to_response(self, loop: GameLoop) -> GameResponse:
        return GameResponse(
            session_id=loop.session_id,
            status=self._status(loop),
            seed=loop.seed,
            board=loop.board.to_powers(),
            score=loop.score,
            remaining_ghosts=loop.board.remaining,
            time_remaining=loop.time_remaining(),
            action_count=loop.session.action_count,
            has_valid_moves=has_valid_moves(loop.board),
            end_reason=loop.end_reason.value if loop.end_reason else None,
        )
