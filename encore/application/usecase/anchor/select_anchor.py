"""Select anchor use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from encore.application.usecase.anchor.seed import resolve_seed
from encore.application.usecase.base import BaseUseCase
from encore.domain.error import NotFoundError
from encore.domain.repository import ShowRepository
from encore.domain.service import AnchorService
from encore.domain.value import ItemId, OwnerId


class SelectAnchorRequest(BaseModel):
    """Select anchor request."""

    owner_id: UUID
    item_id: UUID  # Show that needs a comparison partner
    seed: int | None = None


class SelectAnchorResponse(BaseModel):
    """Select anchor response."""

    item_id: str
    anchor_id: str | None  # None when the owner has no other show
    seed: int


class SelectAnchorUseCase(BaseUseCase[SelectAnchorRequest, SelectAnchorResponse]):
    """Use case for picking the first comparison partner of a show."""

    def __init__(
        self, anchor_service: AnchorService, show_repository: ShowRepository
    ) -> None:
        """Initialize select anchor use case.

        Args:
            anchor_service: Anchor selection domain service
            show_repository: Show repository, source of the candidate pool
        """
        self.anchor_service = anchor_service
        self.show_repository = show_repository

    async def execute(self, request: SelectAnchorRequest) -> SelectAnchorResponse:
        """Execute select anchor flow.

        The candidate pool is every other show of the owner.

        Args:
            request: Target show and optional seed

        Returns:
            The chosen anchor and the seed used to choose it

        Raises:
            NotFoundError: If the target show is unknown to the owner
        """
        owner_id = OwnerId(request.owner_id)
        item_id = ItemId(request.item_id)
        seed = resolve_seed(request.seed)

        with logfire.span(
            "select_anchor.execute", owner_id=str(owner_id), item_id=str(item_id), seed=seed
        ):
            target = await self.show_repository.find_by_id(item_id)
            if target is None or target.owner_id != owner_id:
                raise NotFoundError("Show", str(item_id))

            pool = await self.show_repository.find_by_owner(owner_id)
            anchor_id = await self.anchor_service.select_anchor(
                owner_id, item_id, pool, seed
            )

            return SelectAnchorResponse(
                item_id=str(item_id),
                anchor_id=str(anchor_id) if anchor_id else None,
                seed=seed,
            )
