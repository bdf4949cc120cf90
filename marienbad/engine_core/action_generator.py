"""
Action Generator - Commands a host should enable for a snapshot.

A conforming host never lets the user issue a move the engine would ignore:
- a token is clickable only while the game runs, it is still present, and
  it belongs to the locked group (or no group is locked yet)
- "end turn" is enabled only while the game runs and a group is locked
- "restart" is always enabled
"""

from __future__ import annotations

from .state import GameState, GroupSpec, is_game_over
from .action import Action


def can_remove(state: GameState, group: int, item: int) -> bool:
    """Check whether removing (group, item) would change the state."""
    state.check_slot(group, item)
    if is_game_over(state) or state.tokens[group][item]:
        return False
    return state.is_selecting or state.selected_group == group


def can_pass(state: GameState) -> bool:
    return not is_game_over(state) and not state.is_selecting


def legal_actions(state: GameState, spec: GroupSpec | None = None) -> list[Action]:
    """
    List every enabled command, removals first in group/item order.

    Restart is only included when a spec to restart with is given.
    """
    actions: list[Action] = []
    if not is_game_over(state):
        for group, row in enumerate(state.tokens):
            if not state.is_selecting and group != state.selected_group:
                continue
            for item, removed in enumerate(row):
                if not removed:
                    actions.append(Action.remove(group, item))
    if can_pass(state):
        actions.append(Action.pass_turn())
    if spec is not None:
        actions.append(Action.restart(spec))
    return actions
