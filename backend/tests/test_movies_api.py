"""
Movie API Backend — Movie Endpoint Tests
==========================================

What:  HTTP-level tests for /api/v1/movies.
How:   httpx AsyncClient over ASGITransport, in-memory MongoDB.

What we test:
    ✅ 25 movies, page=2&limit=10 envelope
    ✅ Empty collection envelope
    ✅ Filtering, sorting and field selection through the query string
    ✅ CRUD with authentication
    ✅ 400 / 401 / 404 error bodies
    ✅ Per-movie ratings list
"""

import pytest
from bson import ObjectId

MOVIES = "/api/v1/movies"
BASE = "http://test/api/v1"

NEW_MOVIE = {
    "title": "Heat",
    "releaseYear": 1995,
    "genre": "Crime",
    "description": "A group of professional bank robbers...",
}


class TestListMovies:
    @pytest.mark.asyncio
    async def test_second_page_of_twenty_five(self, test_client, seed_movies):
        await seed_movies(25)

        response = await test_client.get(f"{MOVIES}?page=2&limit=10")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["results"] == 10
        assert len(body["data"]) == 10
        assert body["links"] == {
            "self": {"href": f"{MOVIES}?page=2&limit=10"},
            "first": {"href": f"{MOVIES}?page=1&limit=10"},
            "prev": {"href": f"{MOVIES}?page=1&limit=10"},
            "next": {"href": f"{MOVIES}?page=3&limit=10"},
            "last": {"href": f"{MOVIES}?page=3&limit=10"},
        }

    @pytest.mark.asyncio
    async def test_records_are_decorated(self, test_client, seed_movies):
        [movie_id] = await seed_movies(1)

        body = (await test_client.get(MOVIES)).json()

        [movie] = body["data"]
        assert movie["id"] == movie_id
        assert "_id" not in movie
        assert movie["links"]["self"]["href"] == f"{BASE}/movies/{movie_id}"
        assert movie["links"]["ratings"]["href"] == f"{BASE}/movies/{movie_id}/ratings"

    @pytest.mark.asyncio
    async def test_empty_collection(self, test_client):
        response = await test_client.get(MOVIES)

        body = response.json()
        assert response.status_code == 200
        assert body["results"] == 0
        assert body["data"] == []
        assert body["links"]["prev"] is None
        assert body["links"]["next"] is None
        assert body["links"]["self"]["href"] == MOVIES
        assert body["links"]["last"]["href"] == f"{MOVIES}?page=1&limit=10"

    @pytest.mark.asyncio
    async def test_filter_by_year_range(self, test_client, seed_movies):
        await seed_movies(25)

        body = (await test_client.get(f"{MOVIES}?releaseYear[gte]=2000&releaseYear[lte]=2010&limit=50")).json()

        assert body["results"] == 11
        assert all(2000 <= movie["releaseYear"] <= 2010 for movie in body["data"])
        assert body["links"]["next"] is None

    @pytest.mark.asyncio
    async def test_navigation_links_keep_filters(self, test_client, seed_movies):
        await seed_movies(25)

        body = (await test_client.get(f"{MOVIES}?releaseYear[gte]=1995&limit=5")).json()

        assert body["links"]["next"]["href"] == f"{MOVIES}?page=2&limit=5&releaseYear[gte]=1995"

    @pytest.mark.asyncio
    async def test_sort_descending(self, test_client, seed_movies):
        await seed_movies(5)

        body = (await test_client.get(f"{MOVIES}?sort=-releaseYear")).json()

        years = [movie["releaseYear"] for movie in body["data"]]
        assert years == sorted(years, reverse=True)

    @pytest.mark.asyncio
    async def test_field_selection(self, test_client, seed_movies):
        await seed_movies(3)

        body = (await test_client.get(f"{MOVIES}?fields=title,genre")).json()

        assert all(set(movie) == {"id", "title", "genre", "links"} for movie in body["data"])

    @pytest.mark.asyncio
    async def test_mixed_field_selection_is_rejected(self, test_client):
        response = await test_client.get(f"{MOVIES}?fields=title,-genre")

        assert response.status_code == 400
        assert response.json()["status"] == "fail"

    @pytest.mark.asyncio
    async def test_operator_injection_is_ignored(self, test_client, seed_movies):
        await seed_movies(3)

        body = (await test_client.get(f"{MOVIES}?title[$ne]=x")).json()

        assert body["results"] == 3

    @pytest.mark.asyncio
    async def test_oversized_year_matches_nothing(self, test_client, seed_movies):
        await seed_movies(3)

        response = await test_client.get(f"{MOVIES}?releaseYear=99999999999999999999")

        assert response.status_code == 200
        assert response.json()["results"] == 0

    @pytest.mark.asyncio
    async def test_oversized_page_falls_back_to_first(self, test_client, seed_movies):
        await seed_movies(3)

        response = await test_client.get(f"{MOVIES}?page=99999999999999999999")

        assert response.status_code == 200
        body = response.json()
        assert body["results"] == 3
        assert body["links"]["prev"] is None


class TestGetMovie:
    @pytest.mark.asyncio
    async def test_found(self, test_client, seed_movies):
        [movie_id] = await seed_movies(1)

        response = await test_client.get(f"{MOVIES}/{movie_id}")

        assert response.status_code == 200
        movie = response.json()["data"]["movie"]
        assert movie["id"] == movie_id
        assert movie["title"] == "Movie 01"

    @pytest.mark.asyncio
    async def test_not_found(self, test_client):
        response = await test_client.get(f"{MOVIES}/{ObjectId()}")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "fail"
        assert body["message"] == "No movie found with that ID"

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.get(f"{MOVIES}/xyz")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid _id: xyz."


class TestWriteMovies:
    @pytest.mark.asyncio
    async def test_create_requires_token(self, test_client):
        response = await test_client.post(MOVIES, json=NEW_MOVIE)

        assert response.status_code == 401
        assert response.json()["message"] == "You are not logged in! Please log in to get access."

    @pytest.mark.asyncio
    async def test_create(self, test_client, auth_headers):
        response = await test_client.post(MOVIES, json=NEW_MOVIE, headers=auth_headers)

        assert response.status_code == 201
        movie = response.json()["data"]["movie"]
        assert movie["title"] == "Heat"
        assert movie["releaseYear"] == 1995
        assert movie["links"]["self"]["href"] == f"{BASE}/movies/{movie['id']}"

        fetched = await test_client.get(f"{MOVIES}/{movie['id']}")
        assert fetched.status_code == 200

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_genre(self, test_client, auth_headers):
        response = await test_client.post(MOVIES, json={**NEW_MOVIE, "genre": "Opera"}, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["message"].startswith("Invalid input data.")
        assert "Genre is either" in body["message"]

    @pytest.mark.asyncio
    async def test_create_rejects_future_release(self, test_client, auth_headers):
        response = await test_client.post(MOVIES, json={**NEW_MOVIE, "releaseYear": 3000}, headers=auth_headers)

        assert response.status_code == 400
        assert "Release year cannot be in the future" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_update(self, test_client, auth_headers, seed_movies):
        [movie_id] = await seed_movies(1)

        response = await test_client.put(
            f"{MOVIES}/{movie_id}", json={"title": "Renamed"}, headers=auth_headers,
        )

        assert response.status_code == 200
        movie = response.json()["data"]["movie"]
        assert movie["title"] == "Renamed"
        assert movie["releaseYear"] == 1991

    @pytest.mark.asyncio
    async def test_update_missing_movie(self, test_client, auth_headers):
        response = await test_client.put(f"{MOVIES}/{ObjectId()}", json={"title": "x"}, headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, test_client, auth_headers, seed_movies):
        [movie_id] = await seed_movies(1)

        response = await test_client.delete(f"{MOVIES}/{movie_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Movie deleted successfully", "data": None}
        assert (await test_client.get(f"{MOVIES}/{movie_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_movie(self, test_client, auth_headers):
        response = await test_client.delete(f"{MOVIES}/{ObjectId()}", headers=auth_headers)
        assert response.status_code == 404


class TestMovieRatings:
    @pytest.mark.asyncio
    async def test_lists_every_rating_of_the_movie(self, test_client, mongo_db, seed_movies, user):
        first, second = await seed_movies(2)
        await mongo_db["ratings"].insert_many([
            {"movie": ObjectId(first), "user": ObjectId(user["id"]), "value": 8, "review": "Great"},
            {"movie": ObjectId(first), "user": ObjectId(user["id"]), "value": 6, "review": "Rewatched"},
            {"movie": ObjectId(second), "user": ObjectId(user["id"]), "value": 3, "review": ""},
        ])

        response = await test_client.get(f"{MOVIES}/{first}/ratings")

        assert response.status_code == 200
        body = response.json()
        assert body["results"] == 2
        ratings = body["data"]["ratings"]
        assert {rating["value"] for rating in ratings} == {8, 6}
        for rating in ratings:
            assert rating["movie"]["id"] == first
            assert rating["movie"]["title"] == "Movie 01"
            assert rating["user"] == {"id": user["id"], "name": user["name"]}
            assert rating["links"]["movie"]["href"] == f"{BASE}/movies/{first}"

    @pytest.mark.asyncio
    async def test_unknown_movie(self, test_client):
        response = await test_client.get(f"{MOVIES}/{ObjectId()}/ratings")
        assert response.status_code == 404
