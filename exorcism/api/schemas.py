"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
The GameSession record keeps the flat camelCase wire shape used by the
game client, so a session captured in the browser can be posted as-is
for verification.

Error Codes:
- GAME_NOT_FOUND: No live round with this session id
- GAME_OVER: The round has ended, no more selections accepted
- VALIDATION_ERROR: Request body has the wrong shape
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Literal, Optional
from pydantic import AliasChoices, BaseModel, Field, model_validator

from ..engine_core.action import GameAction, ActionOutcome
from ..engine_core.selection import Selection
from ..session.recorder import GameSession

UINT32_MAX = 0xFFFFFFFF


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Round status values."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class ActionResultValue(str, Enum):
    """Logged outcome of a selection."""
    VALID = "valid"
    INVALID = "invalid"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Session Record (wire format)
# =============================================================================

class SelectionRecord(BaseModel):
    """A normalized rectangle: startRow <= endRow, startCol <= endCol."""
    start_row: int = Field(..., alias="startRow")
    start_col: int = Field(..., alias="startCol")
    end_row: int = Field(..., alias="endRow")
    end_col: int = Field(..., alias="endCol")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_normalized(self):
        if self.start_row > self.end_row or self.start_col > self.end_col:
            raise ValueError("selection must be normalized (start <= end on both axes)")
        return self

    @classmethod
    def from_selection(cls, selection: Selection) -> "SelectionRecord":
        return cls(
            start_row=selection.start_row,
            start_col=selection.start_col,
            end_row=selection.end_row,
            end_col=selection.end_col,
        )

    def to_selection(self) -> Selection:
        return Selection(self.start_row, self.start_col, self.end_row, self.end_col)


class GameActionRecord(BaseModel):
    """One logged attempt."""
    type: Literal["SELECT"] = "SELECT"
    selection: SelectionRecord
    timestamp_ms: int = Field(
        ...,
        ge=0,
        alias="timestampMs",
        validation_alias=AliasChoices("timestampMs", "timestamp"),
        description="Milliseconds since the session started",
    )
    result: ActionResultValue
    score_gained: int = Field(0, ge=0, alias="scoreGained")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_action(cls, action: GameAction) -> "GameActionRecord":
        return cls(
            selection=SelectionRecord.from_selection(action.selection),
            timestamp_ms=action.timestamp_ms,
            result=ActionResultValue(action.result.value),
            score_gained=action.score_gained,
        )

    def to_action(self) -> GameAction:
        return GameAction(
            selection=self.selection.to_selection(),
            timestamp_ms=self.timestamp_ms,
            result=ActionOutcome(self.result.value),
            score_gained=self.score_gained,
        )


class GameSessionRecord(BaseModel):
    """
    Flat, transmittable form of a GameSession.

    This is the only artifact needed to prove a score.
    """
    session_id: str = Field(..., alias="sessionId")
    board_seed: int = Field(..., ge=0, le=UINT32_MAX, alias="boardSeed")
    start_time: int = Field(..., alias="startTime", description="Epoch milliseconds")
    actions: list[GameActionRecord] = Field(default_factory=list)
    final_score: int = Field(0, alias="finalScore")
    end_time: int = Field(0, alias="endTime", description="Epoch milliseconds")
    is_complete: bool = Field(False, alias="isComplete")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_session(cls, session: GameSession) -> "GameSessionRecord":
        return cls(
            session_id=session.session_id,
            board_seed=session.board_seed,
            start_time=session.start_time,
            actions=[GameActionRecord.from_action(a) for a in session.actions],
            final_score=session.final_score,
            end_time=session.end_time,
            is_complete=session.is_complete,
        )

    def to_session(self) -> GameSession:
        return GameSession(
            session_id=self.session_id,
            board_seed=self.board_seed,
            start_time=self.start_time,
            actions=tuple(a.to_action() for a in self.actions),
            final_score=self.final_score,
            end_time=self.end_time,
            is_complete=self.is_complete,
        )


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new round."""
    seed: Optional[int] = Field(
        None, ge=0, le=UINT32_MAX, description="Board seed for a reproducible round"
    )


class SelectionRequest(BaseModel):
    """A released drag gesture; corners may be given in any order."""
    start_row: int = Field(..., description="Row where the drag started")
    start_col: int = Field(..., description="Column where the drag started")
    end_row: int = Field(..., description="Row where the drag was released")
    end_col: int = Field(..., description="Column where the drag was released")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """Current state of a round."""
    session_id: str
    status: GameStatus
    seed: int
    board: list[list[Optional[int]]] = Field(
        default_factory=list, description="Row-major powers, null for exorcised cells"
    )
    score: int = 0
    remaining_ghosts: int = 0
    time_remaining: float = 0.0
    action_count: int = 0
    has_valid_moves: bool = True
    end_reason: Optional[str] = Field(None, description="time_up, no_moves, abandoned")
    api_version: str = "v1"


class SelectionResponse(BaseModel):
    """Outcome of one selection."""
    session_id: str
    selection: SelectionRecord
    is_valid: bool
    sum: int
    tile_count: int
    score_gained: int = 0
    score: int = 0
    status: GameStatus
    end_reason: Optional[str] = None
    board: list[list[Optional[int]]] = Field(default_factory=list)
    api_version: str = "v1"


class HintResponse(BaseModel):
    """A selection that would currently exorcise ghosts, if any."""
    session_id: str
    selection: Optional[SelectionRecord] = None
    tile_count: int = 0


class MismatchInfo(BaseModel):
    """A logged action whose outcome disagrees with replay."""
    index: int
    logged_result: ActionResultValue
    replayed_result: ActionResultValue
    logged_score: int
    replayed_score: int


class VerifyResponse(BaseModel):
    """Result of replaying a submitted session."""
    session_id: str
    verified: bool
    is_complete: bool
    claimed_score: int
    replayed_score: int
    mismatches: list[MismatchInfo] = Field(default_factory=list)
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing tracked rounds."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after ending a round."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
