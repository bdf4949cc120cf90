"""
API Module - Host-facing command interface.

A hosting UI:
1. Creates a session for a group layout
2. Sends user intents as command dicts (remove, pass_turn, restart)
3. Renders the returned GameSnapshot

All state is session-scoped and in memory.
"""

from .schemas import (
    # Commands
    RemoveCommand,
    PassTurnCommand,
    RestartCommand,
    parse_command,
    # Snapshots
    TokenView,
    GroupView,
    GameSnapshot,
    # Responses
    SessionResponse,
    DispatchResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService, parse_groups

__all__ = [
    # Commands
    "RemoveCommand",
    "PassTurnCommand",
    "RestartCommand",
    "parse_command",
    # Snapshots
    "TokenView",
    "GroupView",
    "GameSnapshot",
    # Responses
    "SessionResponse",
    "DispatchResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "parse_groups",
]
