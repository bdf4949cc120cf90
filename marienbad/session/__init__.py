"""
Session Module - Hosts games in memory.

A session represents one play-through:
- Created when the host starts a game
- Holds the current snapshot and adopts each new one
- Destroyed when the host ends it

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
