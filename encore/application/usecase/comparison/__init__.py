"""Comparison use cases."""

from .record_comparison import (
    RecordComparisonRequest,
    RecordComparisonResponse,
    RecordComparisonUseCase,
)

__all__ = [
    "RecordComparisonRequest",
    "RecordComparisonResponse",
    "RecordComparisonUseCase",
]
