"""Pair scoring helpers for anchor and matchup selection.

Pure functions over ratings and the comparison ledger. Higher scores mean a
comparison is expected to tell us more about the ranking.
"""

from collections import deque
from statistics import median_low
from typing import Iterable, Mapping, Optional

from encore.config import AnchorSettings, MatchupSettings
from encore.domain.model.comparison import ComparisonRecord
from encore.domain.model.rating import RatingRecord
from encore.domain.value import ItemId, NormalizedPair

# winner -> shows it beat directly
BeatsGraph = dict[ItemId, set[ItemId]]


def build_beats_graph(comparisons: Iterable[ComparisonRecord]) -> BeatsGraph:
    """Build the directed "beats" graph from the ledger."""
    graph: BeatsGraph = {}
    for comparison in comparisons:
        graph.setdefault(comparison.winner_id, set()).add(comparison.loser_id)
    return graph


def beats_transitively(
    winner_id: ItemId, loser_id: ItemId, graph: BeatsGraph, max_depth: int = 3
) -> bool:
    """Whether a chain of recorded wins leads from ``winner_id`` to ``loser_id``.

    Breadth-first search limited to ``max_depth`` hops beyond the first.
    """
    queue: deque[tuple[ItemId, int]] = deque([(winner_id, 0)])
    visited = {winner_id}

    while queue:
        current, depth = queue.popleft()
        beaten = graph.get(current, set())
        if loser_id in beaten:
            return True
        if depth >= max_depth:
            continue
        for next_id in beaten:
            if next_id not in visited:
                visited.add(next_id)
                queue.append((next_id, depth + 1))

    return False


def is_implied(
    pair: NormalizedPair, graph: BeatsGraph, max_depth: int = 3
) -> bool:
    """Whether the ledger already implies the outcome of ``pair`` in either direction."""
    return beats_transitively(pair.low, pair.high, graph, max_depth) or beats_transitively(
        pair.high, pair.low, graph, max_depth
    )


def compared_pairs(comparisons: Iterable[ComparisonRecord]) -> set[NormalizedPair]:
    """Every normalized pair present in the ledger."""
    return {comparison.pair for comparison in comparisons}


def median_rating(ratings: Iterable[RatingRecord], default: float) -> float:
    """Lower median Elo of the rated shows, or ``default`` when none are rated."""
    scores = [record.elo_score for record in ratings]
    return median_low(scores) if scores else default


def median_comparisons(ratings: Iterable[RatingRecord]) -> float:
    """Lower median comparison count of the rated shows, 0 when none are rated."""
    counts = [record.comparisons_count for record in ratings]
    return median_low(counts) if counts else 0


def anchor_score(
    record: Optional[RatingRecord],
    median_elo: float,
    median_count: float,
    default_rating: float,
    settings: AnchorSettings,
) -> float:
    """Score a candidate anchor for a new show.

    Candidates close to the median rating with a stable history score
    highest. Never-compared and over-sampled candidates are penalized so the
    same few shows do not end up anchoring every comparison.
    """
    elo = record.elo_score if record else default_rating
    count = record.comparisons_count if record else 0

    proximity = max(0.0, 1 - abs(elo - median_elo) / settings.proximity_window)
    stability = min(1.0, count / settings.stability_comparisons)
    score = proximity * settings.proximity_weight + stability * settings.stability_weight

    if count == 0:
        score -= settings.unrated_penalty
    elif median_count > 0 and count > settings.oversampled_ratio * median_count:
        score -= settings.oversampled_penalty

    return score


def pair_score(
    first: Optional[RatingRecord],
    second: Optional[RatingRecord],
    settings: MatchupSettings,
) -> float:
    """Score a candidate matchup between two shows.

    Returns 0 when either show is unrated, otherwise a value in [0, 1]
    combining rating proximity, uncertainty and an information bonus.
    """
    if first is None or second is None:
        return 0.0

    gap = abs(first.elo_score - second.elo_score)
    proximity = max(0.0, 1 - gap / 400)
    if gap > settings.large_gap:
        # Outcome is predictable
        proximity *= settings.large_gap_multiplier

    average = (first.comparisons_count + second.comparisons_count) / 2
    uncertainty = max(
        0.0, (settings.uncertainty_comparisons - average) / settings.uncertainty_comparisons
    )

    fewest = min(first.comparisons_count, second.comparisons_count)
    information = 0.2 if fewest < settings.min_comparisons_per_item else 0.0

    return proximity * 0.5 + uncertainty * 0.3 + information * 0.2


def rated_or_none(
    ratings: Mapping[ItemId, RatingRecord], item_id: ItemId
) -> Optional[RatingRecord]:
    """Look up a rating, treating never-compared shows as unrated."""
    record = ratings.get(item_id)
    if record is None or record.comparisons_count == 0:
        return None
    return record
