"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from encore.config import Settings
from encore.domain.repository import (
    ComparisonRepository,
    RatingRepository,
    ShowRepository,
)
from encore.persistence.database import create_engine, create_session_factory
from encore.persistence.repository import (
    PostgresComparisonRepository,
    PostgresRatingRepository,
    PostgresShowRepository,
)
from encore.util.di.base import ProviderBase
from encore.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The ledger row and the rating update of a comparison share this
        session. It commits when the request finishes, including requests
        whose domain errors the API mapped to an error response; it is
        rolled back only when an exception escapes the request.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_show_repository(self, session: AsyncSession) -> ShowRepository:
        """Provide Show repository."""
        return PostgresShowRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_rating_repository(self, session: AsyncSession) -> RatingRepository:
        """Provide Rating repository."""
        return PostgresRatingRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comparison_repository(self, session: AsyncSession) -> ComparisonRepository:
        """Provide Comparison repository."""
        return PostgresComparisonRepository(session)
