"""
API tests for movie endpoints.

Uses FastAPI TestClient with the database dependency pointed at an
in-memory SQLite database (see conftest.py).
"""

import math

import pytest

from conftest import movie_payload


@pytest.fixture
def seeded(client, admin_headers):
    """Create 15 movies through the API and return their ids in creation order."""
    ids = []
    for i in range(15):
        r = client.post(
            "/api/movies",
            json=movie_payload(
                title=f"Movie {i:02d}",
                rating=round(i * 0.6, 1),
                duration=80 + i,
                release_date=f"20{i:02d}-01-01",
                director="Greta Gerwig" if i % 5 == 0 else "Someone Else",
                genre=["Comedy"] if i % 2 else ["Drama", "Indie"],
            ),
            headers=admin_headers,
        )
        assert r.status_code == 201
        ids.append(r.json()["movie"]["movie_id"])
    return ids


class TestCreateMovie:
    """Tests for POST /api/movies."""

    def test_admin_creates_movie(self, client, admin_headers, admin_user):
        payload = movie_payload(title="Inception", rating=8.8, duration=148, genre=["Sci-Fi"])
        r = client.post("/api/movies", json=payload, headers=admin_headers)

        assert r.status_code == 201
        data = r.json()
        assert data["success"] is True
        assert data["message"] == "Movie created successfully"
        movie = data["movie"]
        assert movie["title"] == "Inception"
        assert movie["rating"] == 8.8
        assert movie["duration"] == 148
        assert movie["genre"] == ["Sci-Fi"]
        assert movie["created_by"] == {
            "user_id": admin_user,
            "name": "Ada Admin",
            "email": "admin@example.com",
        }

    def test_non_admin_is_forbidden(self, client, user_headers, admin_headers):
        r = client.post("/api/movies", json=movie_payload(), headers=user_headers)

        assert r.status_code == 403
        assert r.json() == {
            "success": False,
            "message": "User role user is not authorized to access this route",
        }
        listing = client.get("/api/movies", headers=admin_headers).json()
        assert listing["total"] == 0

    def test_anonymous_is_unauthorized(self, client):
        r = client.post("/api/movies", json=movie_payload())
        assert r.status_code == 401
        assert r.json()["success"] is False

    def test_create_then_get_round_trip(self, client, admin_headers):
        payload = movie_payload(
            title="Arrival",
            genre=["Sci-Fi", "Drama"],
            cast=["Amy Adams", "Jeremy Renner"],
            poster="https://example.com/arrival.jpg",
        )
        created = client.post("/api/movies", json=payload, headers=admin_headers).json()["movie"]

        r = client.get(f"/api/movies/{created['movie_id']}", headers=admin_headers)

        assert r.status_code == 200
        fetched = r.json()["movie"]
        for key, value in payload.items():
            assert fetched[key] == value
        assert fetched == created

    def test_default_poster_and_cast(self, client, admin_headers):
        payload = movie_payload()
        del payload["cast"]
        movie = client.post("/api/movies", json=payload, headers=admin_headers).json()["movie"]
        assert movie["cast"] == []
        assert movie["poster"] == "https://via.placeholder.com/300x450?text=No+Poster"

    @pytest.mark.parametrize("overrides", [
        {"rating": 11},
        {"rating": -0.5},
        {"duration": 0},
        {"genre": []},
        {"title": ""},
        {"title": "x" * 201},
        {"release_date": "not-a-date"},
    ])
    def test_invalid_body_is_rejected(self, client, admin_headers, overrides):
        r = client.post("/api/movies", json=movie_payload(**overrides), headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["success"] is False
        assert r.json()["message"]

    def test_missing_field_is_rejected(self, client, admin_headers):
        payload = movie_payload()
        del payload["director"]
        r = client.post("/api/movies", json=payload, headers=admin_headers)
        assert r.status_code == 400
        assert "director" in r.json()["message"]

    def test_title_length_is_checked_after_trim(self, client, admin_headers):
        title = "x" * 200
        r = client.post("/api/movies", json=movie_payload(title=f"  {title}  "), headers=admin_headers)
        assert r.status_code == 201
        assert r.json()["movie"]["title"] == title

    def test_blank_title_after_trim_is_rejected(self, client, admin_headers):
        r = client.post("/api/movies", json=movie_payload(title="   "), headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["message"] == "Please provide a movie title"


class TestGetMovie:
    """Tests for GET /api/movies/{movie_id}."""

    def test_not_found(self, client, user_headers):
        r = client.get("/api/movies/999999", headers=user_headers)
        assert r.status_code == 404
        assert r.json() == {"success": False, "message": "Movie not found"}

    def test_regular_user_can_read(self, client, user_headers, seeded):
        r = client.get(f"/api/movies/{seeded[0]}", headers=user_headers)
        assert r.status_code == 200
        assert r.json()["success"] is True

    def test_requires_authentication(self, client, seeded):
        r = client.get(f"/api/movies/{seeded[0]}")
        assert r.status_code == 401

    def test_response_hides_creator_credentials(self, client, user_headers, seeded):
        movie = client.get(f"/api/movies/{seeded[0]}", headers=user_headers).json()["movie"]
        assert set(movie["created_by"]) == {"user_id", "name", "email"}


class TestListMovies:
    """Tests for GET /api/movies."""

    def test_envelope_defaults(self, client, user_headers, seeded):
        r = client.get("/api/movies", headers=user_headers)

        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["count"] == 12
        assert data["total"] == 15
        assert data["page"] == 1
        assert data["pages"] == 2
        # Newest first
        assert [m["movie_id"] for m in data["movies"]] == list(reversed(seeded))[:12]

    def test_second_page(self, client, user_headers, seeded):
        data = client.get("/api/movies?page=2", headers=user_headers).json()
        assert data["count"] == 3
        assert data["page"] == 2
        assert [m["movie_id"] for m in data["movies"]] == list(reversed(seeded))[12:]

    @pytest.mark.parametrize("limit", [1, 4, 7, 15, 100])
    def test_pages_is_ceiling_of_total(self, client, user_headers, seeded, limit):
        data = client.get(f"/api/movies?limit={limit}", headers=user_headers).json()
        assert data["pages"] == math.ceil(15 / limit)
        assert data["count"] == min(limit, 15)

    def test_sort_by_rating_descending(self, client, user_headers, seeded):
        data = client.get("/api/movies?sortBy=rating&sortOrder=desc&limit=100", headers=user_headers).json()
        ratings = [m["rating"] for m in data["movies"]]
        assert all(a >= b for a, b in zip(ratings, ratings[1:]))

    def test_sort_by_name_ascending(self, client, user_headers, seeded):
        data = client.get("/api/movies?sortBy=name&sortOrder=asc&limit=3", headers=user_headers).json()
        assert [m["title"] for m in data["movies"]] == ["Movie 00", "Movie 01", "Movie 02"]

    def test_sort_by_release_date_ascending(self, client, user_headers, seeded):
        data = client.get("/api/movies?sortBy=releaseDate&sortOrder=asc&limit=100", headers=user_headers).json()
        dates = [m["release_date"] for m in data["movies"]]
        assert dates == sorted(dates)

    def test_unknown_sort_falls_back(self, client, user_headers, seeded):
        default = client.get("/api/movies", headers=user_headers).json()["movies"]
        unknown = client.get("/api/movies?sortBy=budget", headers=user_headers).json()["movies"]
        assert [m["movie_id"] for m in unknown] == [m["movie_id"] for m in default]

    @pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=abc", "page=abc"])
    def test_invalid_paging_is_rejected(self, client, user_headers, query):
        r = client.get(f"/api/movies?{query}", headers=user_headers)
        assert r.status_code == 400
        assert r.json()["success"] is False

    def test_large_limit_returns_every_movie(self, client, user_headers, seeded):
        data = client.get("/api/movies?limit=500", headers=user_headers).json()
        assert data["count"] == 15
        assert data["pages"] == 1

    @pytest.mark.parametrize("path", ["/api/movies", "/api/movies/search"])
    def test_page_beyond_row_range_is_rejected(self, client, user_headers, seeded, path):
        r = client.get(f"{path}?page={2**62}", headers=user_headers)
        assert r.status_code == 400
        assert r.json() == {"success": False, "message": "Page is out of range"}

    def test_far_page_within_range_is_empty(self, client, user_headers, seeded):
        data = client.get(f"/api/movies?page={2**40}", headers=user_headers).json()
        assert data["movies"] == []
        assert data["total"] == 15

    def test_requires_authentication(self, client):
        r = client.get("/api/movies")
        assert r.status_code == 401
        assert r.json() == {"success": False, "message": "Not authorized to access this route"}


class TestSearchMovies:
    """Tests for GET /api/movies/search."""

    def test_empty_query_matches_listing_total(self, client, user_headers, seeded):
        listing = client.get("/api/movies", headers=user_headers).json()
        search = client.get("/api/movies/search?q=", headers=user_headers).json()
        assert search["total"] == listing["total"] == 15

    def test_director_search(self, client, user_headers, seeded):
        data = client.get("/api/movies/search?q=greta gerwig&limit=100", headers=user_headers).json()
        assert data["total"] == 3
        assert all(m["director"] == "Greta Gerwig" for m in data["movies"])

    def test_genre_search(self, client, user_headers, seeded):
        data = client.get("/api/movies/search?q=INDIE&limit=100", headers=user_headers).json()
        assert data["total"] == 8
        assert all("Indie" in m["genre"] for m in data["movies"])

    def test_search_pagination_envelope(self, client, user_headers, seeded):
        data = client.get("/api/movies/search?q=comedy&limit=3&page=2", headers=user_headers).json()
        assert data["total"] == 7
        assert data["pages"] == 3
        assert data["page"] == 2
        assert data["count"] == 3

    def test_requires_authentication(self, client):
        assert client.get("/api/movies/search?q=x").status_code == 401


class TestUpdateMovie:
    """Tests for PUT /api/movies/{movie_id}."""

    def test_partial_update(self, client, admin_headers, seeded):
        r = client.put(f"/api/movies/{seeded[0]}", json={"rating": 9.1, "cast": ["New Face"]}, headers=admin_headers)

        assert r.status_code == 200
        data = r.json()
        assert data["message"] == "Movie updated successfully"
        assert data["movie"]["rating"] == 9.1
        assert data["movie"]["cast"] == ["New Face"]
        assert data["movie"]["title"] == "Movie 00"

    def test_out_of_range_rating_leaves_record_unchanged(self, client, admin_headers, seeded):
        before = client.get(f"/api/movies/{seeded[3]}", headers=admin_headers).json()["movie"]

        r = client.put(f"/api/movies/{seeded[3]}", json={"rating": 11, "title": "Changed"}, headers=admin_headers)

        assert r.status_code == 400
        after = client.get(f"/api/movies/{seeded[3]}", headers=admin_headers).json()["movie"]
        assert after == before

    def test_null_required_field_is_rejected(self, client, admin_headers, seeded):
        r = client.put(f"/api/movies/{seeded[0]}", json={"title": None}, headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["message"] == "Please provide a movie title"

    def test_creator_is_immutable(self, client, admin_headers, admin_user, regular_user, seeded):
        r = client.put(f"/api/movies/{seeded[0]}", json={"created_by": regular_user}, headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["movie"]["created_by"]["user_id"] == admin_user

    def test_padded_title_is_trimmed(self, client, admin_headers, seeded):
        title = "y" * 200
        r = client.put(f"/api/movies/{seeded[1]}", json={"title": f" {title} "}, headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["movie"]["title"] == title

    def test_not_found(self, client, admin_headers):
        r = client.put("/api/movies/999999", json={"rating": 5}, headers=admin_headers)
        assert r.status_code == 404
        assert r.json()["message"] == "Movie not found"

    def test_non_admin_is_forbidden(self, client, user_headers, admin_headers, seeded):
        r = client.put(f"/api/movies/{seeded[0]}", json={"rating": 1}, headers=user_headers)
        assert r.status_code == 403
        movie = client.get(f"/api/movies/{seeded[0]}", headers=admin_headers).json()["movie"]
        assert movie["rating"] == 0.0


class TestDeleteMovie:
    """Tests for DELETE /api/movies/{movie_id}."""

    def test_delete_then_get_is_not_found(self, client, admin_headers, seeded):
        r = client.delete(f"/api/movies/{seeded[0]}", headers=admin_headers)

        assert r.status_code == 200
        assert r.json() == {"success": True, "message": "Movie deleted successfully"}
        assert client.get(f"/api/movies/{seeded[0]}", headers=admin_headers).status_code == 404
        assert client.get("/api/movies", headers=admin_headers).json()["total"] == 14

    def test_delete_missing_movie(self, client, admin_headers):
        r = client.delete("/api/movies/999999", headers=admin_headers)
        assert r.status_code == 404

    def test_non_admin_is_forbidden(self, client, user_headers, seeded):
        r = client.delete(f"/api/movies/{seeded[0]}", headers=user_headers)
        assert r.status_code == 403


class TestBackingStoreFailure:
    """Database faults surface as a generic 500 envelope."""

    def test_listing_store_error(self, client, user_headers, monkeypatch):
        from sqlalchemy.exc import OperationalError
        from catalog.database import crud

        def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(crud, "list_movies", broken)
        r = client.get("/api/movies", headers=user_headers)

        assert r.status_code == 500
        assert r.json() == {"success": False, "message": "Server Error"}
