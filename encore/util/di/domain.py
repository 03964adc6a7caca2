"""Domain layer DI providers."""

from dishka import Scope, provide

from encore.config import AnchorSettings, AuthSettings, MatchupSettings, RankingSettings
from encore.domain.repository import (
    ComparisonRepository,
    RatingRepository,
    ShowRepository,
)
from encore.domain.service import (
    AnchorService,
    JWTService,
    LedgerService,
    RankService,
    RatingService,
)
from encore.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_rating_service(
        self,
        rating_repository: RatingRepository,
        comparison_repository: ComparisonRepository,
        ranking_settings: RankingSettings,
    ) -> RatingService:
        """Provide rating domain service."""
        return RatingService(
            rating_repository=rating_repository,
            comparison_repository=comparison_repository,
            ranking_settings=ranking_settings,
        )

    @provide
    def get_ledger_service(
        self,
        comparison_repository: ComparisonRepository,
        show_repository: ShowRepository,
        rating_service: RatingService,
    ) -> LedgerService:
        """Provide comparison ledger domain service."""
        return LedgerService(
            comparison_repository=comparison_repository,
            show_repository=show_repository,
            rating_service=rating_service,
        )

    @provide
    def get_anchor_service(
        self,
        rating_repository: RatingRepository,
        comparison_repository: ComparisonRepository,
        anchor_settings: AnchorSettings,
        matchup_settings: MatchupSettings,
        ranking_settings: RankingSettings,
    ) -> AnchorService:
        """Provide anchor selection domain service."""
        return AnchorService(
            rating_repository=rating_repository,
            comparison_repository=comparison_repository,
            anchor_settings=anchor_settings,
            matchup_settings=matchup_settings,
            ranking_settings=ranking_settings,
        )

    @provide
    def get_rank_service(
        self, show_repository: ShowRepository, rating_repository: RatingRepository
    ) -> RankService:
        """Provide rank domain service."""
        return RankService(
            show_repository=show_repository, rating_repository=rating_repository
        )
