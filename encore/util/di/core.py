"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from encore.config import (
    AnchorSettings,
    AuthSettings,
    MatchupSettings,
    RankingSettings,
    Settings,
)
from encore.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_ranking_settings(self, settings: Settings) -> RankingSettings:
        """Provide Elo settings."""
        return settings.ranking

    @provide(scope=Scope.APP)
    def provide_anchor_settings(self, settings: Settings) -> AnchorSettings:
        """Provide anchor scoring settings."""
        return settings.anchor

    @provide(scope=Scope.APP)
    def provide_matchup_settings(self, settings: Settings) -> MatchupSettings:
        """Provide matchup scoring settings."""
        return settings.matchup
