from scoreboard.logic.enums import ScoreActionType
from scoreboard.logic.turn import TurnAccumulator, TurnAction


class TestTurnAccumulator:
    def test_starts_empty(self):
        turn = TurnAccumulator()
        assert turn.total == 0
        assert turn.is_empty

    def test_add_points_updates_total_and_log(self):
        turn = TurnAccumulator()
        turn.add_points(3)
        turn.add_points(10, ScoreActionType.CLEAN_10)

        assert turn.total == 13
        assert turn.actions == [
            TurnAction(points=3),
            TurnAction(points=10, action_type=ScoreActionType.CLEAN_10),
        ]

    def test_undo_restores_previous_total(self):
        turn = TurnAccumulator()
        turn.add_points(4)
        turn.add_points(7)

        undone = turn.undo_last_action()

        assert undone == TurnAction(points=7)
        assert turn.total == 4

    def test_undo_on_empty_log_is_noop(self):
        turn = TurnAccumulator()
        assert turn.undo_last_action() is None
        assert turn.total == 0

    def test_negative_corrections_may_take_total_below_zero(self):
        turn = TurnAccumulator()
        turn.add_points(2)
        turn.add_points(-5)

        assert turn.total == -3
        turn.undo_last_action()
        assert turn.total == 2

    def test_count_by_action_type(self):
        turn = TurnAccumulator()
        turn.add_points(10, ScoreActionType.CLEAN_10)
        turn.add_points(20, ScoreActionType.CLEAN_20)
        turn.add_points(10, ScoreActionType.CLEAN_10)
        turn.add_points(6, ScoreActionType.NUMPAD)

        assert turn.count(ScoreActionType.CLEAN_10) == 2
        assert turn.count(ScoreActionType.CLEAN_20) == 1
        assert turn.count(ScoreActionType.STANDARD) == 0

    def test_reset_clears_everything(self):
        turn = TurnAccumulator()
        turn.add_points(9)
        turn.reset()

        assert turn.total == 0
        assert turn.is_empty
