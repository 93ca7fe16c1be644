"""
End-to-end test of the catalog journey.

1. Admin adds movies
2. A regular user browses, sorts and searches
3. The user is refused edits
4. Admin corrects a movie, then removes one
"""

from conftest import movie_payload


class TestCatalogFlow:

    def test_end_to_end_flow(self, client, admin_headers, user_headers):
        # 1. Admin adds movies
        movies = [
            movie_payload(title="Inception", rating=8.8, duration=148, genre=["Sci-Fi"]),
            movie_payload(title="Lady Bird", rating=7.4, duration=94, genre=["Comedy", "Drama"],
                          director="Greta Gerwig", description="A teenager's senior year in Sacramento."),
            movie_payload(title="Tenet", rating=7.3, duration=150, genre=["Sci-Fi", "Action"]),
        ]
        ids = []
        for payload in movies:
            r = client.post("/api/movies", json=payload, headers=admin_headers)
            assert r.status_code == 201
            ids.append(r.json()["movie"]["movie_id"])

        # 2. User browses by rating and searches
        r = client.get("/api/movies?sortBy=rating&sortOrder=desc", headers=user_headers)
        assert [m["title"] for m in r.json()["movies"]] == ["Inception", "Lady Bird", "Tenet"]

        r = client.get("/api/movies/search?q=nolan", headers=user_headers)
        assert {m["title"] for m in r.json()["movies"]} == {"Inception", "Tenet"}

        r = client.get("/api/movies/search?q=sacramento", headers=user_headers)
        assert [m["title"] for m in r.json()["movies"]] == ["Lady Bird"]

        # 3. User can't edit
        r = client.put(f"/api/movies/{ids[2]}", json={"rating": 10}, headers=user_headers)
        assert r.status_code == 403

        # 4. Admin corrects and removes
        r = client.put(f"/api/movies/{ids[2]}", json={"rating": 7.8}, headers=admin_headers)
        assert r.json()["movie"]["rating"] == 7.8

        r = client.get("/api/movies?sortBy=rating&sortOrder=asc", headers=user_headers)
        assert [m["title"] for m in r.json()["movies"]] == ["Lady Bird", "Tenet", "Inception"]

        assert client.delete(f"/api/movies/{ids[1]}", headers=admin_headers).status_code == 200
        r = client.get("/api/movies/search?q=", headers=user_headers)
        assert r.json()["total"] == 2
        assert client.get(f"/api/movies/{ids[1]}", headers=user_headers).status_code == 404
