"""
Tests for API Pydantic schemas.

Validates that:
- The session record keeps the camelCase wire shape
- Records convert to and from engine sessions
- Malformed records are rejected at the boundary
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    GameSessionRecord,
    GameActionRecord,
    SelectionRecord,
    CreateGameRequest,
    ErrorResponse,
    ErrorCode,
)
from ..engine_core.action import ActionOutcome
from ..engine_core.selection import Selection
from ..engine_core.board import create_board_from_seed
from ..session import create_game_session, log_action, finalize_session, replay_session, verify_session


def wire_session(**overrides):
    data = {
        "sessionId": "1700000000000-abc1234",
        "boardSeed": 12345,
        "startTime": 1700000000000,
        "actions": [
            {
                "type": "SELECT",
                "selection": {"startRow": 0, "startCol": 0, "endRow": 0, "endCol": 1},
                "timestampMs": 1200,
                "result": "invalid",
                "scoreGained": 0,
            }
        ],
        "finalScore": 0,
        "endTime": 1700000120000,
        "isComplete": True,
    }
    data.update(overrides)
    return data


class TestSessionRecord:
    """Tests for the GameSession wire record."""

    def test_parse_wire_format(self):
        record = GameSessionRecord.model_validate(wire_session())
        assert record.session_id == "1700000000000-abc1234"
        assert record.board_seed == 12345
        assert record.actions[0].selection.end_col == 1
        assert record.actions[0].timestamp_ms == 1200
        assert record.is_complete

    def test_dump_uses_camel_case(self):
        data = GameSessionRecord.model_validate(wire_session()).model_dump(by_alias=True, mode="json")
        assert set(data) == {
            "sessionId", "boardSeed", "startTime", "actions",
            "finalScore", "endTime", "isComplete",
        }
        action = data["actions"][0]
        assert set(action) == {"type", "selection", "timestampMs", "result", "scoreGained"}
        assert action["selection"] == {"startRow": 0, "startCol": 0, "endRow": 0, "endCol": 1}
        assert action["result"] == "invalid"

    def test_browser_timestamp_field_accepted(self):
        """Records from the browser build name the field `timestamp`."""
        data = wire_session()
        action = data["actions"][0]
        action["timestamp"] = action.pop("timestampMs")
        record = GameSessionRecord.model_validate(data)
        assert record.actions[0].timestamp_ms == 1200

    def test_session_round_trip(self):
        session = create_game_session(99, session_id="s-1", start_time=0)
        session = log_action(session, Selection(1, 2, 3, 4), ActionOutcome.INVALID, 0, now=40)
        session = finalize_session(session, 0, now=50)

        assert GameSessionRecord.from_session(session).to_session() == session

    def test_record_session_replays_from_seed(self):
        """The logged 'invalid' flag is not trusted; replay decides."""
        board = create_board_from_seed(12345)
        expected = 2 if board.power(0, 0) + board.power(0, 1) == 10 else 0

        session = GameSessionRecord.model_validate(wire_session()).to_session()

        assert replay_session(session) == expected
        assert verify_session(session) == (expected == 0)

    def test_rejects_seed_out_of_range(self):
        with pytest.raises(ValidationError):
            GameSessionRecord.model_validate(wire_session(boardSeed=2 ** 32))
        with pytest.raises(ValidationError):
            GameSessionRecord.model_validate(wire_session(boardSeed=-1))

    def test_rejects_missing_fields(self):
        data = wire_session()
        del data["boardSeed"]
        with pytest.raises(ValidationError):
            GameSessionRecord.model_validate(data)

    def test_rejects_unknown_result(self):
        data = wire_session()
        data["actions"][0]["result"] = "maybe"
        with pytest.raises(ValidationError):
            GameSessionRecord.model_validate(data)

    def test_rejects_unnormalized_selection(self):
        with pytest.raises(ValidationError):
            SelectionRecord.model_validate({"startRow": 3, "startCol": 0, "endRow": 1, "endCol": 0})

    def test_selection_record_conversion(self):
        record = SelectionRecord.from_selection(Selection(1, 2, 3, 4))
        assert record.to_selection() == Selection(1, 2, 3, 4)

    def test_action_record_conversion(self):
        record = GameActionRecord.model_validate(wire_session()["actions"][0])
        action = record.to_action()
        assert action.selection == Selection(0, 0, 0, 1)
        assert action.result is ActionOutcome.INVALID
        assert GameActionRecord.from_action(action) == record


class TestRequestModels:
    """Tests for request and error models."""

    def test_create_game_request_seed_optional(self):
        assert CreateGameRequest().seed is None
        assert CreateGameRequest(seed=7).seed == 7

    def test_create_game_request_seed_bounds(self):
        with pytest.raises(ValidationError):
            CreateGameRequest(seed=-5)

    def test_error_response(self):
        data = ErrorResponse(error="nope", error_code=ErrorCode.GAME_NOT_FOUND).model_dump(mode="json")
        assert data["error_code"] == "GAME_NOT_FOUND"
        assert data["api_version"] == "v1"
