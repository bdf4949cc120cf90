"""
Pytest fixtures for Marienbad tests.
"""

import pytest

from ..engine_core.state import GameState, init_state
from ..engine_core.reducer import remove_token
from ..api.service import APIService


@pytest.fixture
def standard_spec() -> tuple[int, ...]:
    """The classic 3/5/7 layout."""
    return (3, 5, 7)


@pytest.fixture
def initial_state(standard_spec) -> GameState:
    """Fresh 3/5/7 game, player 0 to move."""
    return init_state(standard_spec)


@pytest.fixture
def locked_state(initial_state) -> GameState:
    """Player 0 has taken token 2 of group 1, locking group 1."""
    return remove_token(initial_state, 1, 2)


@pytest.fixture
def nearly_over_state() -> GameState:
    """Two tokens left, one in each of two groups."""
    return GameState(
        tokens=(
            (True, False, True),
            (True, True, False),
        ),
        current_player=1,
    )


@pytest.fixture
def service(standard_spec) -> APIService:
    """API service with the 3/5/7 default layout."""
    return APIService(default_groups=standard_spec)
