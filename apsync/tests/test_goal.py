"""
Tests for goal reporting.
"""

from ..trackers import GoalTracker
from .conftest import GOAL_FLAG


class TestGoal:

    def test_not_reported_until_flags_set(self, game, session, connection):
        """Nothing is sent while a goal flag is unset."""
        tracker = GoalTracker(game)

        assert not tracker.check(session)
        assert connection.completions == 0

    def test_reported_once(self, game, session, connection):
        """The goal is sent once per tracker."""
        game.event_flags[GOAL_FLAG] = True
        tracker = GoalTracker(game)

        assert tracker.check(session)
        assert not tracker.check(session)
        assert connection.completions == 1

    def test_all_flags_required(self, game, session, connection, slot_data):
        """Every goal flag must be set."""
        slot_data.goal = [GOAL_FLAG, GOAL_FLAG + 1]
        game.event_flags[GOAL_FLAG] = True

        assert not GoalTracker(game).check(session)
        assert connection.completions == 0

    def test_empty_goal_reported_immediately(self, game, session, connection, slot_data):
        """A slot with no goal flags counts as already complete."""
        slot_data.goal = []
        tracker = GoalTracker(game)

        assert tracker.check(session)
        assert not tracker.check(session)
        assert connection.completions == 1

    def test_reported_again_after_restart(self, game, session, connection):
        """A new tracker re-sends the goal."""
        game.event_flags[GOAL_FLAG] = True
        GoalTracker(game).check(session)
        GoalTracker(game).check(session)

        assert connection.completions == 2

    def test_not_ready(self, game, session, connection):
        """Nothing is read or sent while the game isn't loaded."""
        game.event_flags[GOAL_FLAG] = True
        game.loaded = False
        tracker = GoalTracker(game)

        assert not tracker.check(session)
        assert not tracker.sent
