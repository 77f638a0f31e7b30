"""
Per-player cumulative score ledger.

The ledger is an immutable value: every update returns a new ledger and the
owner replaces its reference, so snapshots taken for undo never alias the
live scores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from scoreboard.logic.settings import GameConfiguration


class ScoreLedger(BaseModel):
    """Mapping of player id to committed score."""

    model_config = ConfigDict(frozen=True)

    scores: dict[str, int]

    @classmethod
    def initial(cls, config: GameConfiguration) -> ScoreLedger:
        """Create the opening ledger: every participant at 0 plus any handicap bonus."""
        return cls(scores={pid: config.handicap_for(pid) for pid in config.player_ids})

    def score_of(self, player_id: str) -> int:
        return self.scores[player_id]

    def with_score(self, player_id: str, score: int) -> ScoreLedger:
        """
        Return a new ledger with one player's score replaced.

        Raises:
            KeyError: If the player is not in the ledger

        """
        if player_id not in self.scores:
            raise KeyError(player_id)
        return ScoreLedger(scores={**self.scores, player_id: score})

    def players_at_or_above(self, target: int) -> list[str]:
        """Return ids (in ledger order) whose score has reached the target."""
        return [pid for pid, score in self.scores.items() if score >= target]

    def total_for(self, player_ids: list[str] | tuple[str, ...]) -> int:
        return sum(self.scores[pid] for pid in player_ids)
