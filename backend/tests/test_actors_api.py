"""
Movie API Backend — Actor Endpoint Tests
==========================================

What:  HTTP-level tests for /api/v1/actors, including moviesPlayed expansion
       and the actor → movies link.
"""

import pytest
from bson import ObjectId

ACTORS = "/api/v1/actors"
BASE = "http://test/api/v1"


class TestActors:
    @pytest.mark.asyncio
    async def test_create_and_read_expands_movies(self, test_client, auth_headers, seed_movies):
        movie_ids = await seed_movies(2)

        created = await test_client.post(
            ACTORS,
            json={"name": "Al Pacino", "moviesPlayed": movie_ids},
            headers=auth_headers,
        )

        assert created.status_code == 201
        actor = created.json()["data"]["actor"]
        assert actor["name"] == "Al Pacino"
        assert [movie["title"] for movie in actor["moviesPlayed"]] == ["Movie 01", "Movie 02"]
        assert actor["links"]["movies"]["href"] == f"{BASE}/movies?actors={actor['id']}"

        fetched = await test_client.get(f"{ACTORS}/{actor['id']}")
        assert fetched.json()["data"]["actor"]["moviesPlayed"][0] == {
            "id": movie_ids[0], "title": "Movie 01", "releaseYear": 1991,
        }

    @pytest.mark.asyncio
    async def test_list_is_paginated_and_linked(self, test_client, mongo_db):
        await mongo_db["actors"].insert_many([{"name": f"Actor {i}", "moviesPlayed": []} for i in range(12)])

        body = (await test_client.get(f"{ACTORS}?limit=5&sort=name")).json()

        assert body["results"] == 5
        assert body["links"]["last"]["href"] == f"{ACTORS}?page=3&limit=5&sort=name"
        assert all(actor["links"]["self"]["href"].startswith(f"{BASE}/actors/") for actor in body["data"])

    @pytest.mark.asyncio
    async def test_movies_link_lists_the_actors_movies(self, test_client, auth_headers, mongo_db):
        actor_id = (await mongo_db["actors"].insert_one({"name": "Val Kilmer", "moviesPlayed": []})).inserted_id
        await mongo_db["movies"].insert_many([
            {"title": "Heat", "releaseYear": 1995, "genre": "Crime", "actors": [actor_id]},
            {"title": "Top Gun", "releaseYear": 1986, "genre": "Action", "actors": [actor_id]},
            {"title": "Alien", "releaseYear": 1979, "genre": "Sci-Fi", "actors": []},
        ])

        body = (await test_client.get(f"/api/v1/movies?actors={actor_id}")).json()

        assert sorted(movie["title"] for movie in body["data"]) == ["Heat", "Top Gun"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, test_client, auth_headers, mongo_db):
        actor_id = str((await mongo_db["actors"].insert_one({"name": "Old", "moviesPlayed": []})).inserted_id)

        updated = await test_client.put(f"{ACTORS}/{actor_id}", json={"name": "New"}, headers=auth_headers)
        assert updated.status_code == 200
        assert updated.json()["data"]["actor"]["name"] == "New"

        deleted = await test_client.delete(f"{ACTORS}/{actor_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Actor deleted successfully"
        assert (await test_client.get(f"{ACTORS}/{actor_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_create_requires_name(self, test_client, auth_headers):
        response = await test_client.post(ACTORS, json={"moviesPlayed": []}, headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_rejects_malformed_movie_ids(self, test_client, auth_headers):
        response = await test_client.post(
            ACTORS, json={"name": "X", "moviesPlayed": ["nope"]}, headers=auth_headers,
        )
        assert response.status_code == 400
        assert "Invalid moviesPlayed: nope." in response.json()["message"]

    @pytest.mark.asyncio
    async def test_writes_require_token(self, test_client):
        assert (await test_client.post(ACTORS, json={"name": "X"})).status_code == 401
        assert (await test_client.delete(f"{ACTORS}/{ObjectId()}")).status_code == 401
