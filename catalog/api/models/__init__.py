"""
Pydantic schemas for API request/response validation.
"""

from catalog.api.models.user import CreatorSummary
from catalog.api.models.movie import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieListResponse,
    MovieDetailResponse,
    MovieMutationResponse,
    MessageResponse,
)

__all__ = [
    "CreatorSummary",
    "MovieCreate",
    "MovieUpdate",
    "MovieResponse",
    "MovieListResponse",
    "MovieDetailResponse",
    "MovieMutationResponse",
    "MessageResponse",
]
