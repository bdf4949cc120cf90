"""
Marienbad - Two-player Nim-style elimination game engine.

Players alternate turns removing tokens from groups. Within one turn every
removal must come from the same group. The game ends when at most one token
is left. The package provides:
- Immutable game state snapshots
- A pure reducer for remove / pass turn / restart commands
- Legal command generation for hosting UIs
- In-memory sessions, pydantic view models and a terminal host
"""

__version__ = "0.1.0"
