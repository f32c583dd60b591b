"""
Engine Core - Deterministic board generation and exorcism rules.

The engine is the runtime that:
1. Generates a board from a seed
2. Normalizes drag gestures into selections
3. Validates selections (sum of exactly 10)
4. Applies exorcisms, returning new boards
5. Detects when no valid selection remains
"""

from .prng import create_seeded_random, generate_seed
from .state import (
    Board,
    Cell,
    EMPTY_CELL,
    BOARD_ROWS,
    BOARD_COLS,
    MIN_POWER,
    MAX_POWER,
    TARGET_SUM,
)
from .board import create_board_from_seed, create_initial_board
from .selection import Selection, calculate_selection_bounds
from .reducer import (
    ValidationResult,
    ExorcismResult,
    calculate_power_sum,
    count_non_null_cells,
    validate_selection,
    execute_exorcism,
    calculate_score_increment,
    apply_selection,
)
from .action import GameAction, ActionType, ActionOutcome
from .action_generator import find_valid_moves, find_first_valid_move, has_valid_moves

__all__ = [
    "create_seeded_random",
    "generate_seed",
    "Board",
    "Cell",
    "EMPTY_CELL",
    "BOARD_ROWS",
    "BOARD_COLS",
    "MIN_POWER",
    "MAX_POWER",
    "TARGET_SUM",
    "create_board_from_seed",
    "create_initial_board",
    "Selection",
    "calculate_selection_bounds",
    "ValidationResult",
    "ExorcismResult",
    "calculate_power_sum",
    "count_non_null_cells",
    "validate_selection",
    "execute_exorcism",
    "calculate_score_increment",
    "apply_selection",
    "GameAction",
    "ActionType",
    "ActionOutcome",
    "find_valid_moves",
    "find_first_valid_move",
    "has_valid_moves",
]
