"""Rating maintenance routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from encore.application.usecase.rating import (
    RecomputeRatingsRequest,
    RecomputeRatingsResponse,
    RecomputeRatingsUseCase,
)
from encore.domain.service import JWTService

router = APIRouter(tags=["ratings"], route_class=DishkaRoute)


@router.post("/ratings/recompute", response_model=RecomputeRatingsResponse)
async def recompute_ratings(
    recompute_ratings_use_case: FromDishka[RecomputeRatingsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RecomputeRatingsResponse:
    """Rebuild the owner's ratings by replaying their comparison history.

    Use after a failed update left records flagged, or after shows were
    deleted.
    """
    owner_id = jwt_service.require_owner(auth_token)

    return await recompute_ratings_use_case.execute(
        RecomputeRatingsRequest(owner_id=owner_id)
    )
