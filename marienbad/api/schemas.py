"""
Pydantic Schemas - Command and snapshot models for hosting UIs.

Commands arrive as plain dicts tagged by "type" and are parsed into engine
actions. Snapshots go out as render-ready models: every token carries
whether it is removed and whether the host should let the user click it.

Error Codes:
- INVALID_COMMAND: Command payload could not be parsed
- INVALID_ACTION: Command referenced a group or token that does not exist
- INVALID_SPEC: Group spec is empty or has non-positive sizes
- SESSION_NOT_FOUND: Session does not exist or has ended
- SESSION_ENDED: Session object was used after being ended
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Sequence, Union
from pydantic import BaseModel, Field, TypeAdapter

from ..engine_core.state import GameState, count_remaining, is_game_over, winner
from ..engine_core.action import Action
from ..engine_core.action_generator import can_pass, can_remove


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_COMMAND = "INVALID_COMMAND"
    INVALID_ACTION = "INVALID_ACTION"
    INVALID_SPEC = "INVALID_SPEC"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_ENDED = "SESSION_ENDED"


# =============================================================================
# Commands
# =============================================================================

class RemoveCommand(BaseModel):
    """User clicked an unremoved token."""
    type: Literal["remove"] = "remove"
    group: int = Field(..., ge=0, description="0-based group index")
    item: int = Field(..., ge=0, description="0-based token index within the group")

    def to_action(self, default_spec: Optional[Sequence[int]] = None) -> Action:
        return Action.remove(self.group, self.item)


class PassTurnCommand(BaseModel):
    """User pressed "end turn"."""
    type: Literal["pass_turn"] = "pass_turn"

    def to_action(self, default_spec: Optional[Sequence[int]] = None) -> Action:
        return Action.pass_turn()


class RestartCommand(BaseModel):
    """User pressed "restart". Without groups the current layout is reused."""
    type: Literal["restart"] = "restart"
    groups: Optional[list[int]] = Field(None, description="Token count per group")

    def to_action(self, default_spec: Optional[Sequence[int]] = None) -> Action:
        groups = self.groups if self.groups is not None else default_spec
        if groups is None:
            raise ValueError("restart needs groups when there is no current layout")
        return Action.restart(groups)


Command = Annotated[
    Union[RemoveCommand, PassTurnCommand, RestartCommand],
    Field(discriminator="type"),
]

_command_adapter = TypeAdapter(Command)


def parse_command(
    data: dict[str, Any],
    default_spec: Optional[Sequence[int]] = None,
) -> Action:
    """
    Parse a command dict into an engine action.

    Raises pydantic.ValidationError for malformed payloads and ValueError for
    a restart without groups and without a default layout.
    """
    command = _command_adapter.validate_python(data)
    return command.to_action(default_spec)


# =============================================================================
# Snapshot Models
# =============================================================================

class TokenView(BaseModel):
    """One token slot as the host should render it."""
    index: int
    removed: bool
    can_remove: bool


class GroupView(BaseModel):
    """One group as the host should render it."""
    index: int
    size: int
    remaining: int
    locked: bool = Field(False, description="Removals this turn are locked to this group")
    tokens: list[TokenView] = Field(default_factory=list)


class GameSnapshot(BaseModel):
    """Complete game state for display."""
    current_player: int = Field(..., description="0-based player index")
    selected_group: Optional[int] = None
    groups: list[GroupView] = Field(default_factory=list)
    remaining: int
    can_pass: bool
    game_over: bool
    winner: Optional[int] = Field(None, description="0-based winner index once the game is over")
    status_text: str

    @classmethod
    def from_state(cls, state: GameState) -> "GameSnapshot":
        over = is_game_over(state)
        groups = []
        for g, row in enumerate(state.tokens):
            groups.append(GroupView(
                index=g,
                size=len(row),
                remaining=state.remaining_in_group(g),
                locked=state.selected_group == g,
                tokens=[
                    TokenView(
                        index=i,
                        removed=removed,
                        can_remove=can_remove(state, g, i),
                    )
                    for i, removed in enumerate(row)
                ],
            ))

        won_by = winner(state)
        if won_by is not None:
            status_text = f"Game over! Player {won_by + 1} wins!"
        else:
            status_text = f"Player {state.current_player + 1}'s turn"

        return cls(
            current_player=state.current_player,
            selected_group=state.selected_group,
            groups=groups,
            remaining=count_remaining(state),
            can_pass=can_pass(state),
            game_over=over,
            winner=won_by,
            status_text=status_text,
        )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    groups: list[int] = Field(default_factory=list)
    turn_number: int = 1
    created_at: float = 0.0
    snapshot: GameSnapshot


class DispatchResponse(BaseModel):
    """Response to a dispatched command."""
    session_id: str
    success: bool = True
    changed: bool
    state_changes: list[str] = Field(default_factory=list)
    snapshot: GameSnapshot
