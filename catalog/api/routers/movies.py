"""
Movie API endpoints.

Reads need an authenticated caller; create, update and delete need the
admin role.
"""

import logging

from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.orm import Session

from catalog.api.dependencies import get_db, get_current_user, require_role
from catalog.api.models.movie import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieListResponse,
    MovieDetailResponse,
    MovieMutationResponse,
    MessageResponse,
)
from catalog.core.listing import DEFAULT_PAGE_SIZE, DEFAULT_SORT_FIELD
from catalog.database import crud
from catalog.database.models import User, ROLE_ADMIN

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"])

require_admin = require_role(ROLE_ADMIN)

MOVIE_NOT_FOUND = "Movie not found"


def _not_found(movie_id: int) -> HTTPException:
    logger.warning("Movie %s not found", movie_id)
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MOVIE_NOT_FOUND)


@router.get("", response_model=MovieListResponse)
def list_movies(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    sort_by: str = Query(DEFAULT_SORT_FIELD, alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List movies with pagination and sorting."""
    try:
        result = crud.list_movies(db, page=page, page_size=limit, sort_by=sort_by, sort_order=sort_order)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MovieListResponse.from_page(result)


@router.get("/search", response_model=MovieListResponse)
def search_movies(
    q: str = Query(""),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Search title, description, director and genres for `q`."""
    try:
        result = crud.search_movies(db, query=q, page=page, page_size=limit)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.debug("Search %r matched %d movies", q, result.total)
    return MovieListResponse.from_page(result)


@router.get("/{movie_id}", response_model=MovieDetailResponse)
def get_movie(
    movie_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Get movie details by ID."""
    movie = crud.get_movie(db, movie_id)
    if not movie:
        raise _not_found(movie_id)
    return MovieDetailResponse(movie=MovieResponse.model_validate(movie))


@router.post("", response_model=MovieMutationResponse, status_code=status.HTTP_201_CREATED)
def create_movie(
    movie_in: MovieCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Create a movie owned by the calling admin."""
    try:
        movie = crud.create_movie(db, created_by=user.user_id, **movie_in.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MovieMutationResponse(
        message="Movie created successfully",
        movie=MovieResponse.model_validate(movie),
    )


@router.put("/{movie_id}", response_model=MovieMutationResponse)
def update_movie(
    movie_id: int,
    movie_in: MovieUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Replace the supplied fields; the merged movie must still be valid."""
    try:
        movie = crud.update_movie(db, movie_id, **movie_in.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not movie:
        raise _not_found(movie_id)
    return MovieMutationResponse(
        message="Movie updated successfully",
        movie=MovieResponse.model_validate(movie),
    )


@router.delete("/{movie_id}", response_model=MessageResponse)
def delete_movie(
    movie_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    """Delete a movie permanently."""
    if not crud.delete_movie(db, movie_id):
        raise _not_found(movie_id)
    return MessageResponse(message="Movie deleted successfully")
