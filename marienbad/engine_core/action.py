"""
Action System - Commands and results.

Commands are a closed set:
1. Remove - mark one token of a group removed
2. PassTurn - hand the turn to the other player
3. Restart - discard the game and start from a group spec

All state changes flow through commands.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .state import GameState, GroupSpec


class ActionType(Enum):
    """Types of commands a host can issue."""
    REMOVE = "remove"
    PASS_TURN = "pass_turn"
    RESTART = "restart"


@dataclass(frozen=True)
class Action:
    """
    Base class of every command.

    Only the subclasses below are valid; the reducer raises TypeError for
    anything else instead of ignoring it.
    """
    action_type: ClassVar[ActionType]

    @classmethod
    def remove(cls, group: int, item: int) -> Remove:
        """Factory for remove command."""
        return Remove(group=group, item=item)

    @classmethod
    def pass_turn(cls) -> PassTurn:
        """Factory for pass turn command."""
        return PassTurn()

    @classmethod
    def restart(cls, spec: GroupSpec) -> Restart:
        """Factory for restart command."""
        return Restart(spec=tuple(spec))


@dataclass(frozen=True)
class Remove(Action):
    action_type: ClassVar[ActionType] = ActionType.REMOVE
    group: int
    item: int


@dataclass(frozen=True)
class PassTurn(Action):
    action_type: ClassVar[ActionType] = ActionType.PASS_TURN


@dataclass(frozen=True)
class Restart(Action):
    action_type: ClassVar[ActionType] = ActionType.RESTART
    spec: tuple[int, ...]


@dataclass
class ActionResult:
    """
    Result of applying a command.

    Contains:
    - Whether the command was accepted
    - New state (if accepted) and whether it differs from the input
    - Errors (if rejected)
    - Human-readable changes for the host
    """
    success: bool
    new_state: GameState | None = None
    changed: bool = False
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        changed: bool = True,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            changed=changed,
            state_changes=changes or [],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "changed": self.changed,
            "error": self.error,
            "error_code": self.error_code,
            "state_changes": list(self.state_changes),
            "new_state": self.new_state.to_dict() if self.new_state else None,
        }
