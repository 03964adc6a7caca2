"""Unit tests for the pair scoring helpers."""

from datetime import datetime
from uuid import uuid4

import pytest

from encore.config import AnchorSettings, MatchupSettings
from encore.domain.model import ComparisonRecord, RatingRecord
from encore.domain.service import pairing
from encore.domain.value import ComparisonId, ItemId, NormalizedPair, OwnerId

OWNER = OwnerId(uuid4())


def _ids(n: int) -> list[ItemId]:
    return [ItemId(uuid4()) for _ in range(n)]


def _win(winner: ItemId, loser: ItemId) -> ComparisonRecord:
    pair = NormalizedPair.of(winner, loser)
    return ComparisonRecord(
        id=ComparisonId(uuid4()),
        owner_id=OWNER,
        item_low_id=pair.low,
        item_high_id=pair.high,
        winner_id=winner,
        created_at=datetime.now(),
    )


def _record(elo: float, count: int) -> RatingRecord:
    return RatingRecord(
        owner_id=OWNER, item_id=ItemId(uuid4()), elo_score=elo, comparisons_count=count
    )


class TestBeatsGraph:
    """Tests for the transitive "beats" search."""

    def test_direct_win(self):
        a, b = _ids(2)
        graph = pairing.build_beats_graph([_win(a, b)])

        assert pairing.beats_transitively(a, b, graph)
        assert not pairing.beats_transitively(b, a, graph)

    def test_chain_within_depth(self):
        a, b, c, d = _ids(4)
        graph = pairing.build_beats_graph([_win(a, b), _win(b, c), _win(c, d)])

        assert pairing.beats_transitively(a, d, graph, max_depth=3)

    def test_chain_beyond_depth_is_not_followed(self):
        """The search stops after max_depth hops."""
        chain = _ids(6)
        graph = pairing.build_beats_graph(
            [_win(chain[i], chain[i + 1]) for i in range(len(chain) - 1)]
        )

        assert not pairing.beats_transitively(chain[0], chain[5], graph, max_depth=3)
        assert pairing.beats_transitively(chain[0], chain[5], graph, max_depth=4)

    def test_cycles_terminate(self):
        """Contradictory outcomes do not loop forever."""
        a, b, c = _ids(3)
        graph = pairing.build_beats_graph([_win(a, b), _win(b, a)])

        assert not pairing.beats_transitively(a, c, graph)

    def test_is_implied_checks_both_directions(self):
        a, b, c = _ids(3)
        graph = pairing.build_beats_graph([_win(c, b), _win(b, a)])

        assert pairing.is_implied(NormalizedPair.of(a, c), graph)


class TestScores:
    """Tests for anchor and pair scores."""

    def test_median_rating_defaults_when_nothing_rated(self):
        assert pairing.median_rating([], 1200.0) == 1200.0

    def test_median_rating_takes_lower_middle(self):
        records = [_record(1100, 1), _record(1300, 1), _record(1200, 1), _record(1250, 1)]

        assert pairing.median_rating(records, 1200.0) == 1200

    def test_anchor_score_peaks_at_median_with_full_stability(self):
        record = _record(1200, 5)

        score = pairing.anchor_score(record, 1200, 5, 1200.0, AnchorSettings())

        assert score == pytest.approx(1.0)

    def test_anchor_score_drops_with_distance(self):
        settings = AnchorSettings()
        near = pairing.anchor_score(_record(1250, 5), 1200, 5, 1200.0, settings)
        far = pairing.anchor_score(_record(1600, 5), 1200, 5, 1200.0, settings)

        assert near > far
        assert far == pytest.approx(0.4)  # Only stability is left

    def test_unrated_candidate_is_penalized(self):
        settings = AnchorSettings()
        unrated = pairing.anchor_score(None, 1200, 5, 1200.0, settings)

        assert unrated == pytest.approx(0.6 - 0.3)

    def test_pair_score_is_zero_for_unrated(self):
        assert pairing.pair_score(None, _record(1200, 3), MatchupSettings()) == 0.0

    def test_large_gap_is_penalized(self):
        settings = MatchupSettings()
        close = pairing.pair_score(_record(1200, 10), _record(1300, 10), settings)
        gapped = pairing.pair_score(_record(1200, 10), _record(1450, 10), settings)

        # Proximity only: 0.75 * 0.5 vs 0.375 * 0.3 * 0.5
        assert close == pytest.approx(0.375)
        assert gapped == pytest.approx(0.05625)

    def test_rated_or_none_hides_zero_count_records(self):
        flagged = _record(1200, 0)

        assert pairing.rated_or_none({flagged.item_id: flagged}, flagged.item_id) is None
