"""
Session Manager - Tracks live rounds in memory.

PERSISTENCE RULES:
- NO database for gameplay
- A round lives in memory while it is played
- The finalized GameSession (seed + action log + score) is the only
  artifact worth persisting; storing it is the caller's job
"""

from __future__ import annotations
from typing import Callable
import logging

from .game_loop import GameLoop, EndReason, GAME_DURATION_SECONDS
from .recorder import now_ms

logger = logging.getLogger(__name__)

# How long a finished round stays readable before create_game drops it
FINISHED_RETENTION_SECONDS = 600


class SessionManager:
    """
    Manages live rounds.

    Responsibilities:
    - Create and start rounds
    - Look rounds up by session id
    - Drop rounds once their session has been collected, or once they
      have been over for longer than the retention window

    No persistence - rounds are in-memory only.
    """

    def __init__(
        self,
        duration_seconds: float = GAME_DURATION_SECONDS,
        clock: Callable[[], int] = now_ms,
        retention_seconds: float = FINISHED_RETENTION_SECONDS,
    ):
        self.duration_seconds = duration_seconds
        self.retention_seconds = retention_seconds
        self.clock = clock
        self._games: dict[str, GameLoop] = {}

    def create_game(self, seed: int | None = None) -> GameLoop:
        """
        Create and start a new round.

        Rounds that ended more than retention_seconds ago are dropped first.

        Args:
            seed: Board seed (a fresh random seed if omitted)

        Returns:
            Started GameLoop, registered under its session id
        """
        self.cleanup_finished_games(max_age_seconds=self.retention_seconds)
        loop = GameLoop(
            seed=seed,
            duration_seconds=self.duration_seconds,
            clock=self.clock,
        )
        loop.start()
        self._games[loop.session_id] = loop
        return loop

    def get_game(self, session_id: str) -> GameLoop | None:
        """Get a round by session id."""
        return self._games.get(session_id)

    def end_game(self, session_id: str, reason: EndReason = EndReason.ABANDONED) -> bool:
        """
        Finalize (if still running) and forget a round.

        Returns False if the round does not exist.
        """
        loop = self._games.pop(session_id, None)
        if loop is None:
            return False
        loop.finish(reason)
        return True

    def list_active_games(self) -> list[str]:
        """List session ids of rounds still being played."""
        return [
            sid for sid, loop in self._games.items()
            if not loop.tick()
        ]

    def list_games(self) -> list[str]:
        """List session ids of every tracked round."""
        return list(self._games)

    def cleanup_finished_games(self, max_age_seconds: float = 0) -> list[str]:
        """
        Forget rounds that have been over for at least max_age_seconds.

        Returns the removed ids.
        """
        now = self.clock()
        cutoff = now - max_age_seconds * 1000
        finished = [
            sid for sid, loop in self._games.items()
            if loop.tick(now) and loop.session.end_time <= cutoff
        ]
        for session_id in finished:
            del self._games[session_id]
        if finished:
            logger.info("Cleaned up %d finished round(s)", len(finished))
        return finished
