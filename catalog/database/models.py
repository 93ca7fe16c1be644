"""
SQLAlchemy ORM models for the movie catalog database.

This module defines the User, Movie, and MovieGenre tables. Movies reference
the user who created them by id; genres are stored as ordered child rows so
that each entry can be matched on its own.
"""

from datetime import date, datetime
from typing import List
from sqlalchemy import (
    Integer, String, Float, Text, Date, JSON, ForeignKey,
    CheckConstraint, Index, TIMESTAMP
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
from sqlalchemy.sql import func


DEFAULT_POSTER = "https://via.placeholder.com/300x450?text=No+Poster"

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class User(Base):
    """
    Account that can browse the catalog and, with the admin role, edit it.

    Attributes:
        user_id: Primary key, auto-incremented
        name: Display name
        email: Unique email address
        role: 'user' or 'admin'
        created_at: Timestamp when record was created
    """
    __tablename__ = 'users'

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(10), nullable=False, default=ROLE_USER)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )

    movies: Mapped[List["Movie"]] = relationship("Movie", back_populates="creator")

    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name='check_role'),
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email='{self.email}', role='{self.role}')>"


class MovieGenre(Base):
    """One genre entry of a movie, kept in the order it was given."""
    __tablename__ = 'movie_genres'

    genre_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('movies.movie_id', ondelete='CASCADE'),
        nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    movie: Mapped["Movie"] = relationship("Movie", back_populates="genre_entries")

    __table_args__ = (
        Index('idx_movie_genres_movie', 'movie_id'),
    )

    def __repr__(self) -> str:
        return f"<MovieGenre(movie_id={self.movie_id}, position={self.position}, name='{self.name}')>"


class Movie(Base):
    """
    Movie table storing catalog records.

    Attributes:
        movie_id: Primary key, auto-incremented
        title: Movie title (1-200 chars)
        description: Synopsis (1-2000 chars)
        release_date: Calendar release date
        duration: Running time in minutes (>= 1)
        rating: Score between 0 and 10
        genre: Ordered list of genre names (proxied through genre_entries)
        director: Director name
        cast: List of cast member names
        poster: Poster image URL
        created_by: Foreign key to the creating user, never reassigned
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """
    __tablename__ = 'movies'

    movie_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    director: Mapped[str] = mapped_column(String(200), nullable=False)
    cast: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    poster: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_POSTER)
    created_by: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('users.user_id'),
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    creator: Mapped["User"] = relationship("User", back_populates="movies")
    genre_entries: Mapped[List["MovieGenre"]] = relationship(
        "MovieGenre",
        back_populates="movie",
        order_by="MovieGenre.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan"
    )

    genre = association_proxy(
        "genre_entries", "name",
        creator=lambda name: MovieGenre(name=name)
    )

    # Constraints and indexes for the sortable fields
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name='check_rating_range'),
        CheckConstraint("duration >= 1", name='check_duration_positive'),
        Index('idx_movies_title', 'title'),
        Index('idx_movies_rating', 'rating'),
        Index('idx_movies_release_date', 'release_date'),
        Index('idx_movies_duration', 'duration'),
        Index('idx_movies_created_at', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Movie(movie_id={self.movie_id}, title='{self.title}', rating={self.rating})>"
