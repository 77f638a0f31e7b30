"""
Pre-game handicap offers derived from historical points-per-turn averages.
"""

import math

from scoreboard.logic.enums import GameMode
from scoreboard.logic.settings import GameConfiguration
from scoreboard.logic.types import HandicapOffer

HANDICAP_PARTICIPANTS = 2


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity (2.5 -> 3)."""
    return math.floor(value + 0.5)


def compute_offer(
    player_a: str,
    average_a: float,
    player_b: str,
    average_b: float,
    target_score: int,
) -> HandicapOffer | None:
    """
    Compute a start bonus for the weaker of two players.

    Projects how many turns the stronger player needs to reach the target and
    how far the weaker player would get in the same number of turns. The gap,
    rounded half up and kept below the target, is offered to the weaker player
    when it is positive.

    A zero average (no history) or equal averages never produce an offer.
    """
    if average_a <= 0 or average_b <= 0 or average_a == average_b:
        return None

    strong = max(average_a, average_b)
    weak = min(average_a, average_b)
    weaker_player = player_a if average_a < average_b else player_b

    turns_for_stronger = target_score / strong
    weaker_projected_score = turns_for_stronger * weak
    points = min(_round_half_up(target_score - weaker_projected_score), target_score - 1)

    if points <= 0:
        return None
    return HandicapOffer(player_id=weaker_player, points=points)


def is_handicap_eligible(config: GameConfiguration) -> bool:
    """Handicaps are only offered for two-player round-robin games."""
    return config.mode == GameMode.ROUND_ROBIN and config.participant_count == HANDICAP_PARTICIPANTS


def offer_for_configuration(
    config: GameConfiguration,
    averages: dict[str, float],
) -> HandicapOffer | None:
    """
    Compute the handicap offer for a configuration about to start.

    ``averages`` maps player id to historical average; missing players count
    as having no history.
    """
    if not is_handicap_eligible(config):
        return None
    player_a, player_b = config.player_ids
    return compute_offer(
        player_a,
        averages.get(player_a, 0.0),
        player_b,
        averages.get(player_b, 0.0),
        config.target_score,
    )
