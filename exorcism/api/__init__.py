"""
API Module - Client and audit interface.

Exposes the engine via REST API:
1. Clients start rounds and submit drag gestures
2. Finished rounds yield a session record (seed + action log + score)
3. Any session record can be replay-verified server-side

All round state is in memory. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    SelectionRequest,
    # Responses
    GameResponse,
    SelectionResponse,
    HintResponse,
    VerifyResponse,
    ErrorResponse,
    # Records
    GameSessionRecord,
    GameActionRecord,
    SelectionRecord,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "SelectionRequest",
    # Responses
    "GameResponse",
    "SelectionResponse",
    "HintResponse",
    "VerifyResponse",
    "ErrorResponse",
    # Records
    "GameSessionRecord",
    "GameActionRecord",
    "SelectionRecord",
    # Service
    "APIService",
    "create_app",
]
