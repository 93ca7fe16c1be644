"""
Pydantic schemas for Movie API.
"""

from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from catalog.api.models.user import CreatorSummary
from catalog.core.listing import Page


def _check_genres(value: list[str] | None) -> list[str] | None:
    if value is not None and (not value or not all(g.strip() for g in value)):
        raise ValueError("At least one genre is required")
    return value


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class MovieCreate(BaseModel):
    """Request body for creating a movie."""

    title: str = Field(..., max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    release_date: date
    duration: int = Field(..., ge=1, description="Running time in minutes")
    rating: float = Field(..., ge=0, le=10)
    genre: list[str]
    director: str = Field(..., max_length=200)
    cast: list[str] = Field(default_factory=list)
    poster: str | None = None

    @field_validator("title", "director", mode="before")
    @classmethod
    def strip_text(cls, value):
        # Blank text is rejected later with the field-specific message
        return _strip(value)

    @field_validator("genre")
    @classmethod
    def check_genre(cls, value):
        return _check_genres(value)


class MovieUpdate(BaseModel):
    """Request body for updating a movie (all fields optional)."""

    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=2000)
    release_date: date | None = None
    duration: int | None = Field(None, ge=1)
    rating: float | None = Field(None, ge=0, le=10)
    genre: list[str] | None = None
    director: str | None = Field(None, max_length=200)
    cast: list[str] | None = None
    poster: str | None = None

    @field_validator("title", "director", mode="before")
    @classmethod
    def strip_text(cls, value):
        # Blank text is rejected later with the field-specific message
        return _strip(value)

    @field_validator("genre")
    @classmethod
    def check_genre(cls, value):
        return _check_genres(value)


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    movie_id: int
    title: str
    description: str
    release_date: date
    duration: int
    rating: float
    genre: list[str]
    director: str
    cast: list[str]
    poster: str
    created_by: CreatorSummary = Field(validation_alias=AliasChoices("creator", "created_by"))
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("genre", "cast", mode="before")
    @classmethod
    def coerce_list(cls, value: Any) -> Any:
        # The ORM hands back proxied collections
        return list(value) if value is not None else value


class MovieListResponse(BaseModel):
    """One page of movies with the pagination envelope."""

    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    movies: list[MovieResponse]

    @classmethod
    def from_page(cls, page: Page) -> "MovieListResponse":
        return cls(
            count=page.count,
            total=page.total,
            page=page.page,
            pages=page.pages,
            movies=[MovieResponse.model_validate(m) for m in page.items],
        )


class MovieDetailResponse(BaseModel):
    success: bool = True
    movie: MovieResponse


class MovieMutationResponse(BaseModel):
    success: bool = True
    message: str
    movie: MovieResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str
