"""
Session Manager - Creates and manages game sessions.

A session is the hosting side of one game:
- Holds the current snapshot (the only live state)
- Adopts the snapshot returned by every command
- Keeps the most recent snapshots for debugging (no undo)

Sessions are in-memory only. Nothing is persisted, and ending a session
drops all of its state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.state import GameState, init_state, is_game_over, winner
from ..engine_core.action import Action, ActionResult, PassTurn, Restart
from ..engine_core.reducer import Reducer
from ..engine_core.validation import normalize_group_spec

logger = logging.getLogger(__name__)

# Snapshots kept per session for debugging
MAX_HISTORY = 256


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # At most one token left
    ENDED = "ended"  # Closed by the host


@dataclass
class Session:
    """
    One game hosted in memory.

    `game_state` is replaced, never mutated, on every dispatched command.
    """
    session_id: str
    spec: tuple[int, ...]
    game_state: GameState
    created_at: float

    state: SessionState = SessionState.ACTIVE
    history: list[GameState] = field(default_factory=list)
    passes: int = 0
    reducer: Reducer = field(default_factory=Reducer)

    def is_active(self) -> bool:
        return self.state != SessionState.ENDED

    @property
    def turn_number(self) -> int:
        """Turns passed since the last (re)start, counting from 1."""
        return self.passes + 1

    def dispatch(self, action: Action) -> ActionResult:
        """Apply a command and adopt the resulting snapshot."""
        if self.state == SessionState.ENDED:
            return ActionResult.failure("Session has ended", error_code="SESSION_ENDED")

        result = self.reducer.apply(self.game_state, action)
        if not result.success or result.new_state is None:
            return result

        if isinstance(action, Restart):
            self.spec = action.spec
            self.history = []
            self.passes = 0
            logger.info("Session %s restarted with groups %s", self.session_id, list(action.spec))
        elif result.changed:
            self.history.append(self.game_state)
            del self.history[:-MAX_HISTORY]
            if isinstance(action, PassTurn):
                self.passes += 1

        was_over = is_game_over(self.game_state)
        self.game_state = result.new_state
        self._update_state(was_over)
        return result

    def _update_state(self, was_over: bool) -> None:
        if is_game_over(self.game_state):
            self.state = SessionState.GAME_OVER
            if not was_over:
                logger.info(
                    "Session %s game over, player %d wins",
                    self.session_id,
                    winner(self.game_state) + 1,
                )
        else:
            self.state = SessionState.ACTIVE


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from group specs
    - Track active sessions
    - Drop ended sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(self, spec) -> Session:
        """
        Create a new game session.

        Raises GroupSpecError if the spec is malformed.
        """
        sizes = normalize_group_spec(spec)
        session = Session(
            session_id=str(uuid.uuid4()),
            spec=sizes,
            game_state=init_state(sizes),
            created_at=time.time(),
        )
        session._update_state(was_over=True)
        self._sessions[session.session_id] = session
        logger.info("Created session %s with groups %s", session.session_id, list(sizes))
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """End a session and forget it. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED
        session.history.clear()
        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """End sessions older than max_age. Returns how many were ended."""
        current_time = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return len(stale)
