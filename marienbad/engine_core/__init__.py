"""
Engine Core - Game state, commands and the reducer.

The engine is the runtime that:
1. Builds a GameState from a GroupSpec
2. Applies commands via the reducer
3. Reports the (derived) terminal condition
4. Lists the commands a host should enable
"""

from .state import (
    GameState,
    GroupSpec,
    init_state,
    count_remaining,
    is_game_over,
    winner,
)
from .action import Action, ActionType, Remove, PassTurn, Restart, ActionResult
from .reducer import Reducer, apply_action, reduce, remove_token, pass_turn, restart
from .action_generator import can_remove, can_pass, legal_actions
from .validation import (
    MarienbadError,
    GroupSpecError,
    InvalidMoveError,
    ValidationResult,
    validate_group_spec,
    normalize_group_spec,
)

__all__ = [
    "GameState",
    "GroupSpec",
    "init_state",
    "count_remaining",
    "is_game_over",
    "winner",
    "Action",
    "ActionType",
    "Remove",
    "PassTurn",
    "Restart",
    "ActionResult",
    "Reducer",
    "apply_action",
    "reduce",
    "remove_token",
    "pass_turn",
    "restart",
    "can_remove",
    "can_pass",
    "legal_actions",
    "MarienbadError",
    "GroupSpecError",
    "InvalidMoveError",
    "ValidationResult",
    "validate_group_spec",
    "normalize_group_spec",
]
