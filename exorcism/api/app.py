"""
FastAPI Application - REST API for game clients and score auditing.

Endpoints:
    GET    /api/v1/health                     Health check
    POST   /api/v1/games                      Start a round
    GET    /api/v1/games                      List tracked rounds
    GET    /api/v1/games/{id}                 Get round state
    POST   /api/v1/games/{id}/selections      Submit a released drag gesture
    GET    /api/v1/games/{id}/hint            Get a selection that would score
    POST   /api/v1/games/{id}/finish          End a round, return its session
    GET    /api/v1/games/{id}/session         Get the round's session log
    DELETE /api/v1/games/{id}                 Forget a round
    POST   /api/v1/sessions/verify            Replay-verify a submitted session

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from .. import __version__

# Environment configuration
EXORCISM_ENV = os.getenv("EXORCISM_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
EXORCISM_GAME_DURATION = float(os.getenv("EXORCISM_GAME_DURATION", "120"))
EXORCISM_FINISHED_RETENTION = float(os.getenv("EXORCISM_FINISHED_RETENTION", "600"))


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from ..session import SessionManager
    from .schemas import (
        CreateGameRequest,
        SelectionRequest,
        GameSessionRecord,
        GameResponse,
        SelectionResponse,
        HintResponse,
        VerifyResponse,
        GameListResponse,
        EndGameResponse,
        HealthResponse,
        ErrorResponse,
        ErrorCode,
    )

    # Interactive docs are for development only
    docs_enabled = EXORCISM_ENV != "production"

    app = FastAPI(
        title="Ten Exorcism Engine API",
        description="""
Deterministic engine for the ten exorcism puzzle.

Drag a rectangle over the grid; if the ghosts inside sum to exactly 10
they are exorcised and each one scores a point.

## Score verification

Every round is logged as a session: the board seed plus every attempted
selection. `POST /sessions/verify` rebuilds the board from the seed,
replays the selections and checks the claimed final score.

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | No round with this session id |
| `GAME_OVER` | The round has ended |
| `VALIDATION_ERROR` | Request body has the wrong shape |
        """,
        version=__version__,
        docs_url="/api/docs" if docs_enabled else None,
        redoc_url="/api/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        session_manager=SessionManager(
            duration_seconds=EXORCISM_GAME_DURATION,
            retention_seconds=EXORCISM_FINISHED_RETENTION,
        )
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    status_codes = {
        ErrorCode.GAME_NOT_FOUND: 404,
        ErrorCode.GAME_OVER: 409,
        ErrorCode.VALIDATION_ERROR: 422,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    def error_to_response(error: ErrorResponse) -> JSONResponse:
        """Turn a service-level error into a JSON response."""
        return JSONResponse(
            status_code=status_codes.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="exorcism", version=__version__)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        tags=["Games"],
        summary="Start a new round",
    )
    async def create_game(body: Optional[CreateGameRequest] = None) -> GameResponse:
        """
        Start a new round.

        Omit `seed` for a fresh random board.
        """
        return api_service.create_game(body or CreateGameRequest())

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List tracked rounds",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{session_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get round state",
    )
    async def get_game(session_id: str) -> Union[GameResponse, JSONResponse]:
        response = api_service.get_game(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.post(
        "/api/v1/games/{session_id}/selections",
        response_model=SelectionResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Round not found"},
            409: {"model": ErrorResponse, "description": "Round is over"},
        },
        tags=["Games"],
        summary="Submit a released drag gesture",
    )
    async def submit_selection(
        session_id: str,
        body: SelectionRequest,
    ) -> Union[SelectionResponse, JSONResponse]:
        """
        Submit the two corners of a drag.

        Corners may be given in any order; the response carries the
        normalized selection. Invalid selections are logged and leave
        the board unchanged.
        """
        response = api_service.submit_selection(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.get(
        "/api/v1/games/{session_id}/hint",
        response_model=HintResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get a selection that would score",
    )
    async def get_hint(session_id: str) -> Union[HintResponse, JSONResponse]:
        response = api_service.get_hint(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.post(
        "/api/v1/games/{session_id}/finish",
        response_model=GameSessionRecord,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="End a round and return its finalized session",
    )
    async def finish_game(session_id: str) -> Union[GameSessionRecord, JSONResponse]:
        response = api_service.finish_game(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.get(
        "/api/v1/games/{session_id}/session",
        response_model=GameSessionRecord,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get the round's session log",
    )
    async def get_session_record(session_id: str) -> Union[GameSessionRecord, JSONResponse]:
        response = api_service.get_session_record(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_response(response)
        return response

    @app.delete(
        "/api/v1/games/{session_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="Forget a round",
    )
    async def end_game(session_id: str) -> EndGameResponse:
        success = api_service.end_game(session_id)
        return EndGameResponse(success=success, session_id=session_id)

    # =========================================================================
    # Verification
    # =========================================================================

    @app.post(
        "/api/v1/sessions/verify",
        response_model=VerifyResponse,
        tags=["Verification"],
        summary="Replay-verify a submitted session",
    )
    async def verify_session(body: GameSessionRecord) -> VerifyResponse:
        """
        Rebuild the board from `boardSeed`, replay every selection and
        compare the recomputed score with `finalScore`.

        Logged outcomes are ignored. A failed check returns
        `verified=false`, not an error.
        """
        return api_service.verify_session(body)

    return app
