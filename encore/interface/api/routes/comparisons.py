"""Comparison routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from encore.application.usecase.comparison import (
    RecordComparisonRequest,
    RecordComparisonResponse,
    RecordComparisonUseCase,
)
from encore.domain.service import JWTService

router = APIRouter(tags=["comparisons"], route_class=DishkaRoute)


class RecordComparisonBody(BaseModel):
    """Record comparison request body."""

    item_a: UUID
    item_b: UUID
    winner_id: UUID


@router.post(
    "/comparisons",
    response_model=RecordComparisonResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_comparison(
    body: RecordComparisonBody,
    record_comparison_use_case: FromDishka[RecordComparisonUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RecordComparisonResponse:
    """Record which of two shows was better.

    Requires authentication.

    Args:
        body: The two shows and the winner
        record_comparison_use_case: Record comparison use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Comparison ID and the new ratings of both shows
    """
    owner_id = jwt_service.require_owner(auth_token)

    request = RecordComparisonRequest(
        owner_id=owner_id,
        item_a=body.item_a,
        item_b=body.item_b,
        winner_id=body.winner_id,
    )
    return await record_comparison_use_case.execute(request)
