"""
HTTP client for the Movie Catalog API, used by front ends and scripts.
"""

import os
import requests


def get_api_base_url() -> str:
    """Get API base URL from env or default."""
    return os.getenv("API_BASE_URL", "http://localhost:5000").rstrip("/")


def _auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def get_movies(
    token: str,
    page: int = 1,
    limit: int = 12,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> dict:
    """Get one page of movies in the given order."""
    r = requests.get(
        f"{get_api_base_url()}/api/movies",
        params={"page": page, "limit": limit, "sortBy": sort_by, "sortOrder": sort_order},
        headers=_auth_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def search_movies(token: str, q: str, page: int = 1, limit: int = 12) -> dict:
    """Search movies by title, description, director or genre."""
    r = requests.get(
        f"{get_api_base_url()}/api/movies/search",
        params={"q": q, "page": page, "limit": limit},
        headers=_auth_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def get_movie(token: str, movie_id: int) -> dict:
    """Get a single movie."""
    r = requests.get(
        f"{get_api_base_url()}/api/movies/{movie_id}",
        headers=_auth_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def create_movie(token: str, movie: dict) -> dict:
    """Create a movie (admin token required)."""
    r = requests.post(
        f"{get_api_base_url()}/api/movies",
        json=movie,
        headers=_auth_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def update_movie(token: str, movie_id: int, **fields) -> dict:
    """Update a movie (admin token required). Pass changed fields as kwargs."""
    r = requests.put(
        f"{get_api_base_url()}/api/movies/{movie_id}",
        json=fields,
        headers=_auth_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def delete_movie(token: str, movie_id: int) -> dict:
    """Delete a movie (admin token required)."""
    r = requests.delete(
        f"{get_api_base_url()}/api/movies/{movie_id}",
        headers=_auth_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def health_check() -> dict:
    """Check API health."""
    r = requests.get(f"{get_api_base_url()}/api/health", timeout=5)
    r.raise_for_status()
    return r.json()
