"""Next matchup use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from encore.application.usecase.anchor.seed import resolve_seed
from encore.application.usecase.base import BaseUseCase
from encore.domain.repository import ShowRepository
from encore.domain.service import AnchorService
from encore.domain.value import OwnerId


class NextMatchupRequest(BaseModel):
    """Next matchup request."""

    owner_id: UUID
    seed: int | None = None


class Matchup(BaseModel):
    """Two shows to compare, in canonical order."""

    item_a: str
    item_b: str


class NextMatchupResponse(BaseModel):
    """Next matchup response."""

    matchup: Matchup | None
    complete: bool
    seed: int


class NextMatchupUseCase(BaseUseCase[NextMatchupRequest, NextMatchupResponse]):
    """Use case for the "keep ranking" flow over all of an owner's shows."""

    def __init__(
        self, anchor_service: AnchorService, show_repository: ShowRepository
    ) -> None:
        """Initialize next matchup use case.

        Args:
            anchor_service: Anchor selection domain service
            show_repository: Show repository
        """
        self.anchor_service = anchor_service
        self.show_repository = show_repository

    async def execute(self, request: NextMatchupRequest) -> NextMatchupResponse:
        """Execute next matchup flow.

        Args:
            request: Owner and optional seed

        Returns:
            The next pair (if any) and whether the rankings look settled
        """
        owner_id = OwnerId(request.owner_id)
        seed = resolve_seed(request.seed)

        with logfire.span("next_matchup.execute", owner_id=str(owner_id), seed=seed):
            shows = await self.show_repository.find_by_owner(owner_id)
            pair = await self.anchor_service.select_matchup(owner_id, shows, seed)
            complete = await self.anchor_service.rankings_complete(owner_id, shows)

            return NextMatchupResponse(
                matchup=Matchup(item_a=str(pair[0]), item_b=str(pair[1])) if pair else None,
                complete=complete,
                seed=seed,
            )
