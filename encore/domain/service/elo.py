"""Elo rating math.

Pure functions with no I/O or shared state, kept apart from the services
that persist ratings so they are easy to test and reuse.
"""

import math
from typing import Optional

from encore.domain.value import EloUpdate

DEFAULT_K_FACTOR = 32.0


def expected_score(rating: float, opponent_rating: float) -> float:
    """Probability that ``rating`` beats ``opponent_rating``.

    Args:
        rating: Elo rating of the player
        opponent_rating: Elo rating of the opponent

    Returns:
        Expected score in (0, 1)
    """
    return 1.0 / (1.0 + math.pow(10, (opponent_rating - rating) / 400.0))


def update(
    winner_rating: float,
    loser_rating: float,
    k: float = DEFAULT_K_FACTOR,
    loser_k: Optional[float] = None,
) -> EloUpdate:
    """Compute both new ratings after one decisive outcome.

    Each side is rounded to the nearest integer on its own, so the two
    deltas may miss zero-sum by the combined rounding error.

    Args:
        winner_rating: Current rating of the winner
        loser_rating: Current rating of the loser
        k: K factor for the winner (and the loser unless ``loser_k`` is set)
        loser_k: Optional separate K factor for the loser

    Returns:
        The new winner and loser ratings
    """
    expected_winner = expected_score(winner_rating, loser_rating)
    expected_loser = 1.0 - expected_winner
    if loser_k is None:
        loser_k = k

    return EloUpdate(
        new_winner_rating=float(round(winner_rating + k * (1.0 - expected_winner))),
        new_loser_rating=float(round(loser_rating + loser_k * (0.0 - expected_loser))),
    )


def provisional_k_factor(
    base_k: float, comparisons_count: int, provisional_comparisons: int
) -> float:
    """K factor boosted for shows that have barely been compared.

    A show with no comparisons moves twice as fast as an established one;
    the boost fades linearly until ``provisional_comparisons`` is reached.

    Args:
        base_k: K factor for established shows
        comparisons_count: Comparisons the show has taken part in
        provisional_comparisons: Count at which the boost disappears (0 disables it)

    Returns:
        The K factor to use for this show
    """
    if provisional_comparisons <= 0 or comparisons_count >= provisional_comparisons:
        return base_k
    remaining = provisional_comparisons - comparisons_count
    return base_k * (1 + remaining / provisional_comparisons)
