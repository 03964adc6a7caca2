"""Application layer DI providers."""

from dishka import Scope, provide

from encore.application.usecase.anchor import NextMatchupUseCase, SelectAnchorUseCase
from encore.application.usecase.comparison import RecordComparisonUseCase
from encore.application.usecase.rank import GetRankUseCase, ListRankingsUseCase
from encore.application.usecase.rating import RecomputeRatingsUseCase
from encore.domain.repository import ShowRepository
from encore.domain.service import (
    AnchorService,
    LedgerService,
    RankService,
    RatingService,
)
from encore.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases are REQUEST-scoped, matching the domain services they orchestrate.
    """

    scope = Scope.REQUEST

    @provide
    def get_record_comparison_use_case(
        self, ledger_service: LedgerService
    ) -> RecordComparisonUseCase:
        """Provide record comparison use case."""
        return RecordComparisonUseCase(ledger_service=ledger_service)

    @provide
    def get_select_anchor_use_case(
        self, anchor_service: AnchorService, show_repository: ShowRepository
    ) -> SelectAnchorUseCase:
        """Provide select anchor use case."""
        return SelectAnchorUseCase(
            anchor_service=anchor_service, show_repository=show_repository
        )

    @provide
    def get_next_matchup_use_case(
        self, anchor_service: AnchorService, show_repository: ShowRepository
    ) -> NextMatchupUseCase:
        """Provide next matchup use case."""
        return NextMatchupUseCase(
            anchor_service=anchor_service, show_repository=show_repository
        )

    @provide
    def get_rank_use_case(
        self, rank_service: RankService, rating_service: RatingService
    ) -> GetRankUseCase:
        """Provide get rank use case."""
        return GetRankUseCase(rank_service=rank_service, rating_service=rating_service)

    @provide
    def get_list_rankings_use_case(self, rank_service: RankService) -> ListRankingsUseCase:
        """Provide list rankings use case."""
        return ListRankingsUseCase(rank_service=rank_service)

    @provide
    def get_recompute_ratings_use_case(
        self, rating_service: RatingService
    ) -> RecomputeRatingsUseCase:
        """Provide recompute ratings use case."""
        return RecomputeRatingsUseCase(rating_service=rating_service)
