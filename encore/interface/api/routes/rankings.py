"""Ranking routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from encore.application.usecase.rank import (
    GetRankRequest,
    GetRankResponse,
    GetRankUseCase,
    ListRankingsRequest,
    ListRankingsResponse,
    ListRankingsUseCase,
)
from encore.domain.service import JWTService
from encore.domain.value import RankScope

router = APIRouter(tags=["rankings"], route_class=DishkaRoute)


@router.get("/items/{item_id}/rank", response_model=GetRankResponse)
async def get_rank(
    item_id: UUID,
    get_rank_use_case: FromDishka[GetRankUseCase],
    jwt_service: FromDishka[JWTService],
    scope: RankScope = Query(default=RankScope.ALL_TIME),
    category: str | None = Query(default=None, max_length=50),
    auth_token: str | None = Cookie(default=None),
) -> GetRankResponse:
    """Get the rank of one show within a time scope.

    Args:
        item_id: Show UUID
        get_rank_use_case: Get rank use case from DI
        jwt_service: JWT service for token verification (injected)
        scope: all-time, this-year, last-year or this-month
        category: Optional show type filter
        auth_token: JWT token from cookie

    Returns:
        Position, total and percentile; position is 0 if the show is unranked
    """
    owner_id = jwt_service.require_owner(auth_token)

    request = GetRankRequest(
        owner_id=owner_id, item_id=item_id, scope=scope, category=category
    )
    return await get_rank_use_case.execute(request)


@router.get("/rankings", response_model=ListRankingsResponse)
async def list_rankings(
    list_rankings_use_case: FromDishka[ListRankingsUseCase],
    jwt_service: FromDishka[JWTService],
    scope: RankScope = Query(default=RankScope.ALL_TIME),
    category: str | None = Query(default=None, max_length=50),
    auth_token: str | None = Cookie(default=None),
) -> ListRankingsResponse:
    """List the owner's ranked shows, best first."""
    owner_id = jwt_service.require_owner(auth_token)

    request = ListRankingsRequest(owner_id=owner_id, scope=scope, category=category)
    return await list_rankings_use_case.execute(request)
