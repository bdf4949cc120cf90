"""
Game State - Immutable snapshot of a game in progress.

Design principles:
- Immutable: frozen dataclass of tuples, every transition returns a new state
- Derived terminal condition: game over is computed from the tokens, never stored
- Stable slots: a removed token is marked, never deleted
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from .validation import InvalidMoveError, normalize_group_spec

# Ordered initial token count per group, e.g. (3, 5, 7).
GroupSpec = Sequence[int]

NUM_PLAYERS = 2


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    tokens[g][i] is True when token i of group g has been removed.
    selected_group is None until the first removal of a turn, then locks
    every further removal of that turn to the same group.
    """
    tokens: tuple[tuple[bool, ...], ...]
    current_player: int = 0
    selected_group: Optional[int] = None

    @property
    def group_count(self) -> int:
        return len(self.tokens)

    @property
    def group_sizes(self) -> tuple[int, ...]:
        """Original token count of every group."""
        return tuple(len(group) for group in self.tokens)

    @property
    def is_selecting(self) -> bool:
        """True while no removal has happened this turn."""
        return self.selected_group is None

    def check_slot(self, group: int, item: int) -> None:
        """Raise InvalidMoveError unless (group, item) is an existing slot."""
        if not 0 <= group < len(self.tokens):
            raise InvalidMoveError(
                f"group {group} out of range (0..{len(self.tokens) - 1})",
                group=group,
                item=item,
            )
        size = len(self.tokens[group])
        if not 0 <= item < size:
            raise InvalidMoveError(
                f"item {item} out of range for group {group} of size {size}",
                group=group,
                item=item,
            )

    def is_removed(self, group: int, item: int) -> bool:
        self.check_slot(group, item)
        return self.tokens[group][item]

    def remaining_in_group(self, group: int) -> int:
        """Number of unremoved tokens in one group."""
        if not 0 <= group < len(self.tokens):
            raise InvalidMoveError(f"group {group} out of range", group=group)
        return sum(1 for removed in self.tokens[group] if not removed)

    def with_removed(self, group: int, item: int) -> GameState:
        """Return new state with one slot marked removed and the group locked."""
        row = self.tokens[group]
        new_row = row[:item] + (True,) + row[item + 1:]
        new_tokens = self.tokens[:group] + (new_row,) + self.tokens[group + 1:]
        return replace(self, tokens=new_tokens, selected_group=group)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for debugging and logs."""
        return {
            "current_player": self.current_player,
            "selected_group": self.selected_group,
            "tokens": [list(group) for group in self.tokens],
        }


def init_state(spec: GroupSpec) -> GameState:
    """
    Create a fresh state: player 0 to move, no group selected,
    every token unremoved.

    Raises GroupSpecError for an empty spec or non-positive sizes.
    """
    sizes = normalize_group_spec(spec)
    return GameState(tokens=tuple((False,) * size for size in sizes))


def count_remaining(state: GameState) -> int:
    """Count unremoved token slots across all groups."""
    return sum(1 for group in state.tokens for removed in group if not removed)


def is_game_over(state: GameState) -> bool:
    """The game is over once at most one token is left."""
    return count_remaining(state) <= 1


def winner(state: GameState) -> Optional[int]:
    """
    Player who won, or None while the game is still running.

    current_player only advances on an explicit pass, so the player who
    made the final removal is still the current player.
    """
    if not is_game_over(state):
        return None
    return state.current_player
