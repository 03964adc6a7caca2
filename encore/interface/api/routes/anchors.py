"""Anchor and matchup routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from encore.application.usecase.anchor import (
    NextMatchupRequest,
    NextMatchupResponse,
    NextMatchupUseCase,
    SelectAnchorRequest,
    SelectAnchorResponse,
    SelectAnchorUseCase,
)
from encore.domain.service import JWTService

router = APIRouter(tags=["anchors"], route_class=DishkaRoute)


@router.get("/items/{item_id}/anchor", response_model=SelectAnchorResponse)
async def select_anchor(
    item_id: UUID,
    select_anchor_use_case: FromDishka[SelectAnchorUseCase],
    jwt_service: FromDishka[JWTService],
    seed: int | None = Query(default=None, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> SelectAnchorResponse:
    """Pick the show a newly logged show should be compared against first.

    Passing the returned seed back reproduces the same choice.

    Args:
        item_id: Show UUID
        select_anchor_use_case: Select anchor use case from DI
        jwt_service: JWT service for token verification (injected)
        seed: Optional seed for a reproducible draw
        auth_token: JWT token from cookie

    Returns:
        The anchor (or null if the owner has no other show) and the seed used
    """
    owner_id = jwt_service.require_owner(auth_token)

    request = SelectAnchorRequest(owner_id=owner_id, item_id=item_id, seed=seed)
    return await select_anchor_use_case.execute(request)


@router.get("/matchups/next", response_model=NextMatchupResponse)
async def next_matchup(
    next_matchup_use_case: FromDishka[NextMatchupUseCase],
    jwt_service: FromDishka[JWTService],
    seed: int | None = Query(default=None, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> NextMatchupResponse:
    """Get the next most informative pair to compare.

    Args:
        next_matchup_use_case: Next matchup use case from DI
        jwt_service: JWT service for token verification (injected)
        seed: Optional seed for a reproducible draw
        auth_token: JWT token from cookie

    Returns:
        The pair (or null) and whether rankings look complete
    """
    owner_id = jwt_service.require_owner(auth_token)

    request = NextMatchupRequest(owner_id=owner_id, seed=seed)
    return await next_matchup_use_case.execute(request)
