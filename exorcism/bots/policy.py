"""
Bot Policy - Automated players.

A BotPolicy looks at a board and the valid selections on it and picks one.
Bots are used to:
- Generate realistic, verifiable sessions for testing and audits
- Suggest a hint to a stuck player
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.action_generator import find_valid_moves
from ..engine_core.reducer import count_non_null_cells

if TYPE_CHECKING:
    from ..engine_core.state import Board
    from ..engine_core.selection import Selection
    from ..session.game_loop import GameLoop


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The selection to play
    - Explanation (for UI/debugging)
    - How many candidates were considered
    """
    selection: Selection
    explanation: str = ""
    evaluated_moves: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations only ever choose among valid selections,
    so a bot never logs an invalid attempt.
    """

    @abstractmethod
    def select_move(self, board: Board, valid_moves: list[Selection]) -> BotDecision:
        """
        Select a move from the valid selections.

        Args:
            board: Current board
            valid_moves: Non-empty list of selections summing to 10

        Returns:
            BotDecision with the selected selection
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects a valid move uniformly at random.

    Seeded, so a given (board seed, bot seed) pair always plays the same round.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_move(self, board: Board, valid_moves: list[Selection]) -> BotDecision:
        if not valid_moves:
            raise ValueError("No valid moves available")

        return BotDecision(
            selection=self.rng.choice(valid_moves),
            explanation="Selected randomly",
            evaluated_moves=len(valid_moves),
        )


class FirstValidPolicy(BotPolicy):
    """
    First-valid policy - always plays the first move in scan order.

    Used for deterministic testing and as the hint policy.
    """

    def select_move(self, board: Board, valid_moves: list[Selection]) -> BotDecision:
        if not valid_moves:
            raise ValueError("No valid moves available")

        return BotDecision(
            selection=valid_moves[0],
            explanation="Selected first valid move",
            evaluated_moves=1,
        )


class GreedyPolicy(BotPolicy):
    """
    Greedy policy - clears as many ghosts as possible this move.

    Ties go to the earliest move in scan order.
    """

    def select_move(self, board: Board, valid_moves: list[Selection]) -> BotDecision:
        if not valid_moves:
            raise ValueError("No valid moves available")

        best = valid_moves[0]
        best_count = count_non_null_cells(board, best)
        for selection in valid_moves[1:]:
            count = count_non_null_cells(board, selection)
            if count > best_count:
                best, best_count = selection, count

        return BotDecision(
            selection=best,
            explanation=f"Clears {best_count} ghost(s)",
            evaluated_moves=len(valid_moves),
            evaluation_details={"tile_count": best_count},
        )


POLICIES: dict[str, type[BotPolicy]] = {
    "random": RandomPolicy,
    "first": FirstValidPolicy,
    "greedy": GreedyPolicy,
}


def autoplay(loop: GameLoop, policy: BotPolicy, max_moves: int | None = None) -> int:
    """
    Let a bot play a started round until it ends or max_moves is reached.

    Returns the number of moves played.
    """
    played = 0
    while loop.is_playing and (max_moves is None or played < max_moves):
        moves = find_valid_moves(loop.board)
        if not moves:
            break
        decision = policy.select_move(loop.board, moves)
        loop.select(*decision.selection.as_tuple())
        played += 1
    return played
