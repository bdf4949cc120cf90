"""
API Service - Business logic behind the host-facing command interface.

This layer:
1. Manages sessions via SessionManager
2. Parses command dicts into engine actions
3. Converts engine results into pydantic responses

No transport is attached: a UI (terminal, web, desktop) calls these methods
directly and renders the returned GameSnapshot.
"""

from __future__ import annotations
import logging
import os
from typing import Any, Sequence

from pydantic import ValidationError

from ..engine_core.validation import GroupSpecError
from ..session import SessionManager, Session, SessionState
from .schemas import (
    DispatchResponse,
    ErrorCode,
    ErrorResponse,
    GameSnapshot,
    SessionResponse,
    SessionStatus,
    parse_command,
)

logger = logging.getLogger(__name__)

# Default layout when a session is created without groups
MARIENBAD_GROUPS = os.getenv("MARIENBAD_GROUPS", "3,5,7")


def parse_groups(text: str) -> list[int]:
    """Parse "3,5,7" into [3, 5, 7]. Raises GroupSpecError on bad input."""
    parts = [part.strip() for part in text.split(",") if part.strip()]
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise GroupSpecError([f"cannot parse group sizes from {text!r}"]) from None


class APIService:
    """
    Service layer for hosting UIs.

    Wraps SessionManager and provides a clean interface that returns pydantic
    models, with failures reported as ErrorResponse instead of raised.
    """

    def __init__(
        self,
        session_manager: SessionManager | None = None,
        default_groups: Sequence[int] | None = None,
    ):
        self.session_manager = session_manager or SessionManager()
        self.default_groups = (
            list(default_groups) if default_groups is not None else parse_groups(MARIENBAD_GROUPS)
        )

    def create_session(self, groups: Sequence[int] | None = None) -> SessionResponse | ErrorResponse:
        """Start a new game. Uses the default layout when groups is None."""
        spec = list(groups) if groups is not None else self.default_groups
        try:
            session = self.session_manager.create_session(spec)
        except GroupSpecError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_SPEC,
                details={"errors": e.errors},
            )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def get_snapshot(self, session_id: str) -> GameSnapshot | ErrorResponse:
        """Current render snapshot of a session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return GameSnapshot.from_state(session.game_state)

    def dispatch(self, session_id: str, command: dict[str, Any]) -> DispatchResponse | ErrorResponse:
        """
        Apply a command dict such as {"type": "remove", "group": 1, "item": 2}.

        Ignored moves (wrong group, token already gone, game over) still
        succeed, with changed=False.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        try:
            action = parse_command(command, default_spec=session.spec)
        except ValidationError as e:
            return ErrorResponse(
                error="Invalid command",
                error_code=ErrorCode.INVALID_COMMAND,
                details={"errors": e.errors(include_url=False)},
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_COMMAND)

        result = session.dispatch(action)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Command rejected",
                error_code=ErrorCode(result.error_code or ErrorCode.INVALID_ACTION.value),
            )

        return DispatchResponse(
            session_id=session_id,
            changed=result.changed,
            state_changes=result.state_changes,
            snapshot=GameSnapshot.from_state(session.game_state),
        )

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def _not_found(self, session_id: str) -> ErrorResponse:
        logger.debug("Session %s not found", session_id)
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        status = (
            SessionStatus.GAME_OVER
            if session.state == SessionState.GAME_OVER
            else SessionStatus.ACTIVE
        )
        return SessionResponse(
            session_id=session.session_id,
            status=status,
            groups=list(session.spec),
            turn_number=session.turn_number,
            created_at=session.created_at,
            snapshot=GameSnapshot.from_state(session.game_state),
        )
