"""
Movie API Backend — MongoDB Repository Tests
==============================================

What:  Executes QuerySpecs and CRUD operations against an in-memory MongoDB.

What we test:
    ✅ Filter round-trip: every result satisfies the predicate
    ✅ Sort determinism for -releaseYear,title
    ✅ Projection exclusivity (inclusion and exclusion)
    ✅ count() ignores the page window
    ✅ Association expansion, including dangling references
    ✅ Error translation (invalid id, duplicate key, driver failure)
"""

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from movie_api.exceptions import DatabaseError, DuplicateFieldError, InvalidIdentifierError
from movie_api.models import ACTOR, MOVIE, RATING, USER
from movie_api.repository import MongoRepository, to_plain
from movie_api.services.query_features import build_query_spec, parse_query_params


def spec_for(pairs, model=MOVIE):
    return build_query_spec(parse_query_params(pairs), model.field_types)


class TestFind:
    @pytest.mark.asyncio
    async def test_filter_round_trip(self, mongo_db, seed_movies):
        """releaseYear[gte]=2000&releaseYear[lte]=2010 returns exactly the matching movies."""
        await seed_movies(25)
        repository = MongoRepository(mongo_db, MOVIE)
        spec = spec_for([("releaseYear[gte]", "2000"), ("releaseYear[lte]", "2010"), ("limit", "100")])

        movies = await repository.find(spec)

        assert movies
        assert all(2000 <= movie["releaseYear"] <= 2010 for movie in movies)
        assert len(movies) == 11
        assert await repository.count(spec.predicate) == 11

    @pytest.mark.asyncio
    async def test_sort_descending_then_ascending(self, mongo_db):
        await mongo_db["movies"].insert_many([
            {"title": "B", "releaseYear": 2000},
            {"title": "A", "releaseYear": 2000},
            {"title": "C", "releaseYear": 2010},
            {"title": "D", "releaseYear": 1990},
        ])
        movies = await MongoRepository(mongo_db, MOVIE).find(spec_for([("sort", "-releaseYear,title")]))

        assert [(m["releaseYear"], m["title"]) for m in movies] == [
            (2010, "C"), (2000, "A"), (2000, "B"), (1990, "D"),
        ]

    @pytest.mark.asyncio
    async def test_inclusion_projection(self, mongo_db, seed_movies):
        await seed_movies(3)
        movies = await MongoRepository(mongo_db, MOVIE).find(spec_for([("fields", "title,genre")]))

        assert len(movies) == 3
        assert all(set(movie) == {"_id", "title", "genre"} for movie in movies)

    @pytest.mark.asyncio
    async def test_exclusion_projection(self, mongo_db, seed_movies):
        await seed_movies(2)
        movies = await MongoRepository(mongo_db, MOVIE).find(spec_for([("fields", "-description")]))

        assert all("description" not in movie and "title" in movie for movie in movies)

    @pytest.mark.asyncio
    async def test_window_and_count(self, mongo_db, seed_movies):
        await seed_movies(25)
        repository = MongoRepository(mongo_db, MOVIE)
        spec = spec_for([("sort", "releaseYear"), ("page", "3"), ("limit", "10")])

        movies = await repository.find(spec)

        assert [m["title"] for m in movies] == [f"Movie {i:02d}" for i in range(21, 26)]
        assert await repository.count(spec.predicate) == 25

    @pytest.mark.asyncio
    async def test_results_are_plain(self, mongo_db, seed_movies):
        await seed_movies(1)
        [movie] = await MongoRepository(mongo_db, MOVIE).find(spec_for([]))
        assert isinstance(movie["_id"], str)


class TestExpansion:
    @pytest.mark.asyncio
    async def test_actor_movies_are_expanded_and_dangling_ids_dropped(self, mongo_db, seed_movies):
        movie_ids = await seed_movies(2)
        missing = ObjectId()
        result = await mongo_db["actors"].insert_one({
            "name": "Al Pacino",
            "moviesPlayed": [ObjectId(movie_ids[0]), missing, ObjectId(movie_ids[1])],
        })

        actor = await MongoRepository(mongo_db, ACTOR).get(result.inserted_id, expand=ACTOR.expansions)

        assert actor["moviesPlayed"] == [
            {"id": movie_ids[0], "title": "Movie 01", "releaseYear": 1991},
            {"id": movie_ids[1], "title": "Movie 02", "releaseYear": 1992},
        ]

    @pytest.mark.asyncio
    async def test_rating_references_are_expanded(self, mongo_db, seed_movies):
        [movie_id] = await seed_movies(1)
        user_id = (await mongo_db["users"].insert_one({"name": "Ada", "email": "a@b.co"})).inserted_id
        await mongo_db["ratings"].insert_one({"movie": ObjectId(movie_id), "user": user_id, "value": 8})

        [rating] = await MongoRepository(mongo_db, RATING).find_all({}, expand=RATING.expansions)

        assert rating["movie"] == {"id": movie_id, "title": "Movie 01", "releaseYear": 1991}
        assert rating["user"] == {"id": str(user_id), "name": "Ada"}

    @pytest.mark.asyncio
    async def test_missing_single_reference_becomes_none(self, mongo_db):
        await mongo_db["ratings"].insert_one({"movie": ObjectId(), "value": 5})
        [rating] = await MongoRepository(mongo_db, RATING).find_all({}, expand=RATING.expansions)
        assert rating["movie"] is None

    @pytest.mark.asyncio
    async def test_projected_away_reference_is_left_alone(self, mongo_db, seed_movies):
        [movie_id] = await seed_movies(1)
        await mongo_db["ratings"].insert_one({"movie": ObjectId(movie_id), "value": 5})

        spec = spec_for([("fields", "value")], RATING)
        [rating] = await MongoRepository(mongo_db, RATING).find(spec, expand=RATING.expansions)

        assert "movie" not in rating


class TestSingleDocumentOperations:
    @pytest.mark.asyncio
    async def test_insert_get_update_delete(self, mongo_db):
        repository = MongoRepository(mongo_db, MOVIE)

        created = await repository.insert({"title": "Heat", "releaseYear": 1995, "genre": "Crime"})
        assert await repository.exists(created["_id"])

        updated = await repository.update(created["_id"], {"title": "Heat (1995)"})
        assert updated["title"] == "Heat (1995)"
        assert updated["releaseYear"] == 1995

        assert await repository.delete(created["_id"]) is True
        assert await repository.get(created["_id"]) is None
        assert await repository.delete(created["_id"]) is False

    @pytest.mark.asyncio
    async def test_update_of_missing_document_returns_none(self, mongo_db):
        assert await MongoRepository(mongo_db, MOVIE).update(ObjectId(), {"title": "x"}) is None

    @pytest.mark.asyncio
    async def test_malformed_id_is_rejected(self, mongo_db):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            await MongoRepository(mongo_db, MOVIE).get("xyz")
        assert exc_info.value.message == "Invalid _id: xyz."

    @pytest.mark.asyncio
    async def test_duplicate_key_is_translated(self, mongo_db):
        await mongo_db["users"].create_index("email", unique=True)
        repository = MongoRepository(mongo_db, USER)
        await repository.insert({"name": "Ada", "email": "ada@example.com"})

        with pytest.raises(DuplicateFieldError) as exc_info:
            await repository.insert({"name": "Ada again", "email": "ada@example.com"})
        assert exc_info.value.status_code == 400
        assert exc_info.value.message.startswith("Duplicate field value:")

    @pytest.mark.asyncio
    async def test_driver_failure_becomes_database_error(self, mongo_db):
        repository = MongoRepository(mongo_db, MOVIE)
        repository.collection.count_documents = AsyncMock(side_effect=OperationFailure("boom"))

        with pytest.raises(DatabaseError) as exc_info:
            await repository.count({})
        assert exc_info.value.status_code == 500
        assert "boom" not in exc_info.value.message


def test_to_plain_converts_nested_object_ids():
    oid = ObjectId()
    assert to_plain({"a": oid, "b": [oid, {"c": oid}], "d": 1}) == {
        "a": str(oid), "b": [str(oid), {"c": str(oid)}], "d": 1,
    }
