"""
Reducer - Applies commands to game state.

The reducer is the single point of state change.
All transitions must go through reduce() / apply_action().

Design principles:
- Pure function: (state, command) -> new_state, the input is never touched
- Illegal moves a UI can produce are silent no-ops (same state returned)
- Indices that do not exist are caller bugs and raise InvalidMoveError
"""

from __future__ import annotations
import logging
from dataclasses import replace

from .state import GameState, GroupSpec, NUM_PLAYERS, init_state, is_game_over
from .action import Action, ActionResult, PassTurn, Remove, Restart
from .validation import GroupSpecError, InvalidMoveError

logger = logging.getLogger(__name__)


def remove_token(state: GameState, group: int, item: int) -> GameState:
    """
    Mark token `item` of `group` removed and lock the turn to `group`.

    Returns `state` itself when the removal is not allowed: another group is
    already locked this turn, the token is already removed, or the game is
    over.
    """
    state.check_slot(group, item)

    if not state.is_selecting and group != state.selected_group:
        return state
    if state.tokens[group][item]:
        return state
    if is_game_over(state):
        return state

    return state.with_removed(group, item)


def pass_turn(state: GameState) -> GameState:
    """Hand the turn to the other player and clear the group lock."""
    return replace(
        state,
        current_player=(state.current_player + 1) % NUM_PLAYERS,
        selected_group=None,
    )


def restart(spec: GroupSpec) -> GameState:
    """Discard everything and start again from `spec`."""
    return init_state(spec)


def reduce(state: GameState, action: Action) -> GameState:
    """Apply one command. Unknown command types raise TypeError."""
    if isinstance(action, Remove):
        return remove_token(state, action.group, action.item)
    if isinstance(action, PassTurn):
        return pass_turn(state)
    if isinstance(action, Restart):
        return restart(action.spec)
    raise TypeError(f"Unhandled command: {action!r}")


class Reducer:
    """
    Applies commands and reports the outcome as an ActionResult.

    Stateless - all state is in GameState. Precondition errors from the pure
    transitions are turned into failed results; programming errors such as
    an unknown command type propagate.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply a command to the game state.

        Returns ActionResult with new state or error.
        """
        logger.debug("Applying %s to %s", action, state.to_dict())
        try:
            new_state = reduce(state, action)
        except InvalidMoveError as e:
            logger.warning("Rejected %s: %s", action, e)
            return ActionResult.failure(str(e), error_code="INVALID_ACTION")
        except GroupSpecError as e:
            logger.warning("Rejected %s: %s", action, e)
            return ActionResult.failure(str(e), error_code="INVALID_SPEC")

        changed = new_state != state
        return ActionResult.success_with_state(
            new_state,
            changed=changed,
            changes=self._describe(state, action, new_state, changed),
        )

    def _describe(
        self,
        state: GameState,
        action: Action,
        new_state: GameState,
        changed: bool,
    ) -> list[str]:
        """Human-readable summary of what a command did."""
        player = state.current_player + 1
        if isinstance(action, Remove):
            if not changed:
                return [f"Player {player} cannot take from group {action.group + 1} now"]
            changes = [f"Player {player} took token {action.item + 1} from group {action.group + 1}"]
            if is_game_over(new_state) and not is_game_over(state):
                changes.append(f"Game over: player {player} wins")
            return changes
        if isinstance(action, PassTurn):
            return [f"Player {player} ended the turn"]
        return [f"New game with groups {list(action.spec)}"]


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply a command.

    Creates a Reducer and applies the command.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
