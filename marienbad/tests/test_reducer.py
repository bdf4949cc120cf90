"""
Tests for the reducer (state transitions).

Tests:
- Remove / pass turn / restart semantics
- Group lock and no-op handling
- Invariants over random command sequences
- ActionResult wrapper
"""

import random

import pytest

from ..engine_core.state import GameState, count_remaining, init_state, is_game_over, winner
from ..engine_core.action import Action, ActionType, PassTurn, Remove, Restart
from ..engine_core.reducer import (
    Reducer,
    apply_action,
    pass_turn,
    reduce,
    remove_token,
    restart,
)
from ..engine_core.validation import GroupSpecError, InvalidMoveError


class TestRemoveToken:
    """Tests for remove_token."""

    def test_marks_slot_and_locks_group(self, initial_state):
        state = remove_token(initial_state, 1, 2)

        assert state.tokens[1][2] is True
        assert state.selected_group == 1
        assert state.current_player == 0
        assert count_remaining(state) == 14

    def test_input_state_untouched(self, initial_state):
        before = initial_state.to_dict()
        remove_token(initial_state, 0, 0)
        assert initial_state.to_dict() == before

    def test_same_group_removals_allowed(self, locked_state):
        state = remove_token(locked_state, 1, 0)
        state = remove_token(state, 1, 4)
        assert state.selected_group == 1
        assert state.remaining_in_group(1) == 2

    def test_other_group_is_noop(self, locked_state):
        """Removing from another group while locked returns the same state."""
        state = remove_token(locked_state, 0, 0)
        assert state is locked_state

    def test_repeat_removal_is_noop(self, locked_state):
        """Second identical removal changes nothing."""
        state = remove_token(locked_state, 1, 2)
        assert state == locked_state
        assert count_remaining(state) == count_remaining(locked_state)

    def test_removed_token_does_not_lock_new_turn(self, locked_state):
        """Taking an already-removed token after a pass locks nothing."""
        passed = pass_turn(locked_state)
        state = remove_token(passed, 1, 2)

        assert state is passed
        assert state.selected_group is None
        # any group is still open for the new player
        assert remove_token(state, 0, 0).selected_group == 0

    def test_removal_after_game_over_is_noop(self):
        state = GameState(tokens=((True, False), (False,)))
        state = remove_token(state, 0, 1)
        assert is_game_over(state)
        state = pass_turn(state)
        assert remove_token(state, 1, 0) is state
        assert count_remaining(state) == 1

    @pytest.mark.parametrize("group,item", [(3, 0), (-1, 0), (0, 3), (2, 7), (0, -1)])
    def test_out_of_range_raises(self, initial_state, group, item):
        with pytest.raises(InvalidMoveError):
            remove_token(initial_state, group, item)

    def test_out_of_range_raises_even_when_locked(self, locked_state):
        with pytest.raises(InvalidMoveError):
            remove_token(locked_state, 9, 0)


class TestPassTurn:
    """Tests for pass_turn."""

    def test_flips_player_and_clears_selection(self, locked_state):
        state = pass_turn(locked_state)
        assert state.current_player == 1
        assert state.selected_group is None
        assert state.tokens == locked_state.tokens

    def test_pass_without_removal(self, initial_state):
        """The engine does not refuse an empty pass."""
        state = pass_turn(initial_state)
        assert state.current_player == 1
        assert pass_turn(state).current_player == 0

    def test_pass_after_game_over(self):
        state = GameState(tokens=((True, False),), selected_group=0)
        state = pass_turn(state)
        assert state.current_player == 1
        assert is_game_over(state)

    def test_new_group_after_pass(self, locked_state):
        state = pass_turn(locked_state)
        state = remove_token(state, 0, 0)
        assert state.selected_group == 0
        assert state.tokens[0][0]


class TestRestart:
    """Tests for restart."""

    def test_restart_equals_init(self, locked_state, standard_spec):
        assert restart(standard_spec) == init_state(standard_spec)

    def test_restart_with_new_layout(self, locked_state):
        state = restart([1, 2])
        assert state.group_sizes == (1, 2)
        assert state.current_player == 0
        assert state.selected_group is None

    def test_restart_rejects_bad_spec(self):
        with pytest.raises(GroupSpecError):
            restart([0])


class TestScenarios:
    """End-to-end scenarios."""

    def test_single_group_of_three(self):
        state = init_state([3])
        state = remove_token(state, 0, 0)
        assert count_remaining(state) == 2
        assert not is_game_over(state)

        state = remove_token(state, 0, 1)
        assert count_remaining(state) == 1
        assert is_game_over(state)

    def test_wrong_group_ignored(self):
        state = init_state([3, 5, 7])
        assert state.current_player == 0

        state = remove_token(state, 1, 2)
        assert state.selected_group == 1

        after = remove_token(state, 0, 0)
        assert after == state
        assert after.selected_group == 1
        assert after.tokens[0][0] is False

    def test_mover_wins(self):
        state = init_state([2])
        state = remove_token(state, 0, 0)
        assert count_remaining(state) == 1
        assert is_game_over(state)
        assert state.current_player == 0
        assert winner(state) == 0

    def test_full_game(self):
        """Two turns ending with player 1 taking the second-to-last token."""
        state = init_state([2, 2])
        state = remove_token(state, 0, 0)
        state = remove_token(state, 0, 1)
        state = pass_turn(state)
        state = remove_token(state, 1, 1)
        assert winner(state) == 1


class TestInvariants:
    """Randomised command sequences keep the engine invariants."""

    def _random_action(self, rng, state, spec):
        roll = rng.random()
        if roll < 0.75:
            group = rng.randrange(state.group_count)
            item = rng.randrange(state.group_sizes[group])
            return Action.remove(group, item)
        if roll < 0.97:
            return Action.pass_turn()
        return Action.restart(spec)

    @pytest.mark.parametrize("seed", range(20))
    def test_random_walk(self, seed):
        rng = random.Random(seed)
        spec = (3, 5, 7)
        state = init_state(spec)
        locked = None
        was_over = False

        for _ in range(200):
            action = self._random_action(rng, state, spec)
            new_state = reduce(state, action)

            # dimensions never change
            assert new_state.group_sizes == spec
            assert new_state.current_player in (0, 1)

            if isinstance(action, Remove):
                assert new_state.current_player == state.current_player
                # removed slots are never restored
                for old_row, new_row in zip(state.tokens, new_state.tokens):
                    for old, new in zip(old_row, new_row):
                        assert new or not old
                if new_state != state:
                    if locked is None:
                        locked = action.group
                    assert action.group == locked
                    assert new_state.selected_group == locked
                # game over is monotonic within a game
                if was_over:
                    assert is_game_over(new_state)
            elif isinstance(action, PassTurn):
                assert new_state.current_player == 1 - state.current_player
                assert new_state.selected_group is None
                locked = None
            else:
                assert new_state == init_state(spec)
                locked = None

            was_over = is_game_over(new_state)
            state = new_state


class TestReduceDispatch:
    """Tests for reduce() dispatch."""

    def test_dispatches_each_command(self, initial_state, standard_spec):
        state = reduce(initial_state, Action.remove(2, 6))
        assert state.selected_group == 2
        state = reduce(state, Action.pass_turn())
        assert state.current_player == 1
        state = reduce(state, Action.restart(standard_spec))
        assert state == initial_state

    def test_unknown_command_raises(self, initial_state):
        with pytest.raises(TypeError):
            reduce(initial_state, Action())

    def test_action_types(self):
        assert Action.remove(0, 1).action_type == ActionType.REMOVE
        assert Action.pass_turn().action_type == ActionType.PASS_TURN
        assert Action.restart([1, 2]).action_type == ActionType.RESTART
        assert Action.restart([1, 2]) == Restart(spec=(1, 2))


class TestReducerResult:
    """Tests for the ActionResult wrapper."""

    def test_successful_remove(self, initial_state):
        result = apply_action(initial_state, Action.remove(0, 0))
        assert result.success
        assert result.changed
        assert result.new_state.tokens[0][0]
        assert "took token 1 from group 1" in result.state_changes[0]

    def test_noop_is_success_without_change(self, locked_state):
        result = apply_action(locked_state, Action.remove(0, 0))
        assert result.success
        assert not result.changed
        assert result.new_state == locked_state

    def test_out_of_range_is_failure(self, initial_state):
        result = Reducer().apply(initial_state, Action.remove(5, 0))
        assert not result.success
        assert result.error_code == "INVALID_ACTION"
        assert result.new_state is None

    def test_bad_restart_is_failure(self, initial_state):
        result = apply_action(initial_state, Action.restart([]))
        assert not result.success
        assert result.error_code == "INVALID_SPEC"

    def test_game_over_reported(self):
        result = apply_action(init_state([2]), Action.remove(0, 1))
        assert any("player 1 wins" in change for change in result.state_changes)

    def test_to_dict(self, initial_state):
        data = apply_action(initial_state, Action.pass_turn()).to_dict()
        assert data["success"] is True
        assert data["new_state"]["current_player"] == 1
