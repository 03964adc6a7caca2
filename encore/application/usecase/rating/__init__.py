"""Rating use cases."""

from .recompute_ratings import (
    RecomputeRatingsRequest,
    RecomputeRatingsResponse,
    RecomputeRatingsUseCase,
)

__all__ = [
    "RecomputeRatingsRequest",
    "RecomputeRatingsResponse",
    "RecomputeRatingsUseCase",
]
