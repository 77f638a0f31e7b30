"""Live, uncommitted state of the active player's turn."""

from dataclasses import dataclass
from dataclasses import field as dataclass_field

from scoreboard.logic.enums import ScoreActionType


@dataclass(frozen=True)
class TurnAction:
    """A single point addition entered during a turn."""

    points: int
    action_type: ScoreActionType = ScoreActionType.STANDARD


@dataclass
class TurnAccumulator:
    """Track points added during the current turn.

    Semantics: ``total`` is a running sum maintained alongside an ordered log
    of actions. ``undo_last_action`` subtracts exactly the popped delta, so the
    total always returns to its pre-action value. No bounds checking is done:
    negative deltas are score corrections and the running total may go
    negative until the turn is committed.
    """

    total: int = 0
    actions: list[TurnAction] = dataclass_field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.actions

    def add_points(self, delta: int, action_type: ScoreActionType = ScoreActionType.STANDARD) -> None:
        """Append a point delta to the action log and the running total."""
        self.actions.append(TurnAction(points=delta, action_type=action_type))
        self.total += delta

    def undo_last_action(self) -> TurnAction | None:
        """Remove the most recent action. Returns it, or None if the log is empty."""
        if not self.actions:
            return None
        action = self.actions.pop()
        self.total -= action.points
        return action

    def count(self, action_type: ScoreActionType) -> int:
        """Return how many actions of the given type this turn holds."""
        return sum(1 for action in self.actions if action.action_type == action_type)

    def reset(self) -> None:
        """Clear the log and total; called after every commit."""
        self.actions.clear()
        self.total = 0
