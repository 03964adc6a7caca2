"""Anchor and matchup use cases."""

from .next_matchup import (
    Matchup,
    NextMatchupRequest,
    NextMatchupResponse,
    NextMatchupUseCase,
)
from .select_anchor import (
    SelectAnchorRequest,
    SelectAnchorResponse,
    SelectAnchorUseCase,
)

__all__ = [
    "Matchup",
    "NextMatchupRequest",
    "NextMatchupResponse",
    "NextMatchupUseCase",
    "SelectAnchorRequest",
    "SelectAnchorResponse",
    "SelectAnchorUseCase",
]
