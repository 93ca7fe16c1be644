"""
CRUD operations for User and Movie models.

This module provides Create, Read, Update, Delete operations plus the
paginated listing and search queries behind the movie endpoints.
"""

import logging
from datetime import date
from typing import List, Optional, Dict, Any
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from catalog.core.listing import (
    Page, DEFAULT_PAGE, DEFAULT_PAGE_SIZE, LIKE_ESCAPE,
    resolve_sort, page_offset, contains_pattern
)
from catalog.database.models import (
    User, Movie, MovieGenre, DEFAULT_POSTER, ROLE_USER, ROLE_ADMIN
)

logger = logging.getLogger(__name__)

# Fields a caller may set on create or update. created_by is not among them.
MOVIE_FIELDS = (
    'title', 'description', 'release_date', 'duration', 'rating',
    'genre', 'director', 'cast', 'poster',
)

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


# ==================== USER CRUD OPERATIONS ====================

def create_user(
    session: Session,
    name: str,
    email: str,
    role: str = ROLE_USER
) -> User:
    """
    Create a new user.

    Args:
        session: Database session
        name: Display name
        email: Unique email address
        role: 'user' or 'admin'

    Returns:
        Created User object

    Raises:
        ValueError: If role is not 'user' or 'admin'
    """
    if role not in (ROLE_USER, ROLE_ADMIN):
        raise ValueError("Role must be 'user' or 'admin'")

    user = User(name=name, email=email, role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: int) -> Optional[User]:
    """Get a user by ID, or None if not found."""
    return session.query(User).filter(User.user_id == user_id).first()


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """Get a user by email, or None if not found."""
    return session.query(User).filter(User.email == email).first()


def get_user_count(session: Session) -> int:
    """Get total count of users."""
    return session.query(func.count(User.user_id)).scalar()


# ==================== MOVIE CRUD OPERATIONS ====================

def _normalize_movie_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Trim text fields and fill list/poster defaults."""
    normalized = dict(fields)
    for key in ('title', 'director'):
        if isinstance(normalized.get(key), str):
            normalized[key] = normalized[key].strip()
    if 'genre' in normalized and normalized['genre'] is not None:
        normalized['genre'] = list(normalized['genre'])
    if normalized.get('cast') is None:
        normalized['cast'] = []
    else:
        normalized['cast'] = list(normalized['cast'])
    if not normalized.get('poster'):
        normalized['poster'] = DEFAULT_POSTER
    return normalized


def validate_movie_fields(fields: Dict[str, Any]) -> None:
    """
    Check a complete set of movie fields against the record invariants.

    Raises:
        ValueError: With a message naming the first violated rule
    """
    title = fields.get('title')
    if not title:
        raise ValueError("Please provide a movie title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

    description = fields.get('description')
    if not description:
        raise ValueError("Please provide a description")
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    if not isinstance(fields.get('release_date'), date):
        raise ValueError("Please provide a release date")

    duration = fields.get('duration')
    if duration is None:
        raise ValueError("Please provide duration in minutes")
    if duration < 1:
        raise ValueError("Duration must be at least 1 minute")

    rating = fields.get('rating')
    if rating is None:
        raise ValueError("Please provide a rating")
    if rating < 0:
        raise ValueError("Rating must be at least 0")
    if rating > 10:
        raise ValueError("Rating cannot exceed 10")

    genre = fields.get('genre')
    if not genre or not all(isinstance(g, str) and g for g in genre):
        raise ValueError("At least one genre is required")

    if not fields.get('director'):
        raise ValueError("Please provide director name")


def _movie_query(session: Session):
    """Movie query with the creator and genres loaded up front."""
    return session.query(Movie).options(
        selectinload(Movie.creator),
        selectinload(Movie.genre_entries)
    )


def create_movie(
    session: Session,
    created_by: int,
    title: str,
    description: str,
    release_date: date,
    duration: int,
    rating: float,
    genre: List[str],
    director: str,
    cast: Optional[List[str]] = None,
    poster: Optional[str] = None
) -> Movie:
    """
    Create a new movie.

    Args:
        session: Database session
        created_by: ID of the user creating the record
        title, description, release_date, duration, rating, genre,
        director, cast, poster: Record fields

    Returns:
        Created Movie object

    Raises:
        ValueError: If any field violates the record invariants
    """
    fields = _normalize_movie_fields({
        'title': title,
        'description': description,
        'release_date': release_date,
        'duration': duration,
        'rating': rating,
        'genre': genre,
        'director': director,
        'cast': cast,
        'poster': poster,
    })
    validate_movie_fields(fields)

    genre_names = fields.pop('genre')
    movie = Movie(created_by=created_by, **fields)
    movie.genre = genre_names
    session.add(movie)
    session.commit()
    session.refresh(movie)
    logger.info("Created movie %s (%s) by user %s", movie.movie_id, movie.title, created_by)
    return movie


def get_movie(session: Session, movie_id: int) -> Optional[Movie]:
    """
    Get a movie by ID.

    Returns:
        Movie object or None if not found
    """
    return _movie_query(session).filter(Movie.movie_id == movie_id).first()


def get_movie_count(session: Session) -> int:
    """Get total count of movies."""
    return session.query(func.count(Movie.movie_id)).scalar()


def list_movies(
    session: Session,
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None
) -> Page:
    """
    Get one page of all movies in the requested order.

    Args:
        session: Database session
        page: 1-based page number
        page_size: Records per page
        sort_by: name, rating, releaseDate, duration or createdAt
        sort_order: 'asc' for ascending, anything else for descending

    Returns:
        Page of Movie objects with the total movie count
    """
    offset = page_offset(page, page_size)
    attribute, descending = resolve_sort(sort_by, sort_order)
    column = getattr(Movie, attribute)

    # movie_id breaks ties so pages never overlap
    if descending:
        ordering = (column.desc(), Movie.movie_id.desc())
    else:
        ordering = (column.asc(), Movie.movie_id.asc())

    movies = (
        _movie_query(session)
        .order_by(*ordering)
        .offset(offset)
        .limit(page_size)
        .all()
    )
    total = get_movie_count(session)
    return Page(items=movies, total=total, page=page, page_size=page_size)


def search_movies(
    session: Session,
    query: str = "",
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE
) -> Page:
    """
    Search for movies whose title, description, director or any genre
    contains `query`, ignoring case.

    An empty query matches every movie. Matches are unranked and come back
    in insertion order.

    Returns:
        Page of matching Movie objects with the total match count
    """
    offset = page_offset(page, page_size)

    criteria = []
    if query:
        pattern = contains_pattern(query)
        criteria.append(or_(
            Movie.title.ilike(pattern, escape=LIKE_ESCAPE),
            Movie.description.ilike(pattern, escape=LIKE_ESCAPE),
            Movie.director.ilike(pattern, escape=LIKE_ESCAPE),
            Movie.genre_entries.any(MovieGenre.name.ilike(pattern, escape=LIKE_ESCAPE)),
        ))

    movies = (
        _movie_query(session)
        .filter(*criteria)
        .order_by(Movie.movie_id)
        .offset(offset)
        .limit(page_size)
        .all()
    )
    total = session.query(func.count(Movie.movie_id)).filter(*criteria).scalar()
    return Page(items=movies, total=total, page=page, page_size=page_size)


def update_movie(
    session: Session,
    movie_id: int,
    **kwargs
) -> Optional[Movie]:
    """
    Replace some fields of a movie.

    The supplied fields are merged over the stored ones and the merged record
    is validated before anything is written. Unknown fields and created_by
    are ignored.

    Returns:
        Updated Movie object or None if not found

    Raises:
        ValueError: If the merged record violates the record invariants
    """
    movie = get_movie(session, movie_id)
    if not movie:
        return None

    current = {name: getattr(movie, name) for name in MOVIE_FIELDS}
    current['genre'] = list(movie.genre)
    changes = {key: value for key, value in kwargs.items() if key in MOVIE_FIELDS}

    merged = _normalize_movie_fields({**current, **changes})
    validate_movie_fields(merged)

    for key in changes:
        setattr(movie, key, merged[key])
    # Genre-only edits touch child rows, not the movie row
    movie.updated_at = func.current_timestamp()
    session.commit()
    session.refresh(movie)
    logger.info("Updated movie %s fields %s", movie_id, sorted(changes))
    return movie


def delete_movie(session: Session, movie_id: int) -> bool:
    """
    Delete a movie.

    Returns:
        True if movie was deleted, False if not found
    """
    movie = session.query(Movie).filter(Movie.movie_id == movie_id).first()
    if movie:
        session.delete(movie)
        session.commit()
        logger.info("Deleted movie %s", movie_id)
        return True
    return False
