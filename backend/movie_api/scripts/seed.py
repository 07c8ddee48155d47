"""
Movie API Backend — Sample Data Seeder
========================================

What:  Wipes the movies, actors, ratings and users collections and fills them
       with generated, cross-referenced sample data.
Why:   Filtering, sorting, pagination and the hypermedia links only show their
       behavior on a populated database.
How:   Documents are built in memory with pre-assigned ObjectIds so both sides
       of the movie ↔ actor association are written consistently, then bulk
       inserted through MongoRepository.

Usage:
    movie-api-seed                          # 100 users, 200 movies, 300 actors, 400 ratings
    movie-api-seed --movies 20 --seed 42    # smaller, reproducible
    movie-api-seed --delete-only

Every generated user logs in with the password SAMPLE_PASSWORD.
"""

import argparse
import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.database import close_client, ensure_indexes, get_database, ping_database
from movie_api.main import setup_logging
from movie_api.models import ACTOR, GENRES, MOVIE, RATING, USER
from movie_api.models.rating import MAX_RATING, MIN_RATING
from movie_api.repository import MongoRepository
from movie_api.security import hash_password

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "test1234"

FIRST_NAMES = (
    "James", "Mary", "John", "Patricia", "Robert", "Jennifer", "Michael", "Linda",
    "William", "Elizabeth", "David", "Susan", "Richard", "Jessica", "Joseph", "Sarah",
    "Thomas", "Karen", "Charles", "Nancy", "Daniel", "Betty", "Matthew", "Margaret",
)
LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Lopez", "Wilson", "Anderson", "Taylor", "Moore", "Jackson",
    "Martin", "Lee", "Thompson", "White", "Harris", "Clark", "Lewis", "Walker",
)

TITLE_PREFIXES = ("The", "A", "Beyond", "Inside", "Eternal", "Last", "First", "Secret")
TITLE_NOUNS = ("Dream", "Night", "Day", "Time", "Life", "Love", "War", "Peace", "Journey", "Destiny")
TITLE_SUFFIXES = ("Returns", "Begins", "Rises", "Falls", "Awakens", "Ends", "Continues", "Reborn")

HEROES = ("a young detective", "a brilliant scientist", "a retired agent", "a reluctant explorer")
QUESTS = ("save the world", "solve a mystery", "find the truth", "face their past")
SETTINGS = ("a dystopian future", "a magical realm", "a small town", "a bustling city")

ADJECTIVES = (
    "amazing", "brilliant", "captivating", "compelling", "engaging", "exceptional",
    "gripping", "impressive", "memorable", "outstanding", "remarkable", "superb",
)
COMMENTS = (
    "The direction was top-notch.",
    "The cinematography was stunning.",
    "The pacing kept me engaged throughout.",
    "The character development was exceptional.",
    "The plot twists were unexpected yet satisfying.",
    "The dialogue was sharp and witty.",
)

RELEASE_YEARS = (1980, 2023)
MOVIES_PER_ACTOR = (1, 5)


@dataclass(frozen=True)
class SeedCounts:
    users: int = 100
    movies: int = 200
    actors: int = 300
    ratings: int = 400


# ── Generators ────────────────────────────────────────────────────────────

def _person_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def _movie_title(rng: random.Random) -> str:
    shape = rng.random()
    if shape > 0.7:
        return f"{rng.choice(TITLE_PREFIXES)} {rng.choice(TITLE_NOUNS)}"
    if shape > 0.35:
        return f"{rng.choice(TITLE_NOUNS)} {rng.choice(TITLE_SUFFIXES)}"
    return f"{rng.choice(TITLE_PREFIXES)} {rng.choice(TITLE_NOUNS)} {rng.choice(TITLE_SUFFIXES)}"


def _description(rng: random.Random, genre: str) -> str:
    return (
        f"Set in {rng.choice(SETTINGS)}, {rng.choice(HEROES)} must "
        f"{rng.choice(QUESTS)} in this {genre.lower()} film."
    )


def _review(rng: random.Random) -> str:
    return f"A {rng.choice(ADJECTIVES)} film with {rng.choice(ADJECTIVES)} performances. {rng.choice(COMMENTS)}"


# ── Seeding ───────────────────────────────────────────────────────────────

async def delete_data(db: AsyncIOMotorDatabase) -> Dict[str, int]:
    """Remove every document from the four collections; returns deleted counts."""
    deleted = {}
    for model in (MOVIE, ACTOR, RATING, USER):
        deleted[model.collection] = await MongoRepository(db, model).delete_many({})
    logger.info("Deleted sample data: %s", deleted)
    return deleted


async def import_data(
    db: AsyncIOMotorDatabase,
    counts: SeedCounts = SeedCounts(),
    rng: Optional[random.Random] = None,
) -> Dict[str, int]:
    """
    Insert generated users, movies, actors and ratings.

    Each actor plays in 1 to 5 movies; the movie's `actors` list and the
    actor's `moviesPlayed` list always agree. Ratings reference existing
    movies and users.
    """
    rng = rng or random.Random()
    now = datetime.now(timezone.utc)

    # One hash for every sample user keeps seeding fast
    password_hash = hash_password(SAMPLE_PASSWORD)
    users = []
    for i in range(counts.users):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        users.append({
            "_id": ObjectId(),
            "name": f"{first} {last}",
            "email": f"{first.lower()}.{last.lower()}{i}@example.com",
            "password": password_hash,
            "createdAt": now,
        })

    movies = []
    for _ in range(counts.movies):
        genre = rng.choice(GENRES)
        movies.append({
            "_id": ObjectId(),
            "title": _movie_title(rng),
            "releaseYear": rng.randint(*RELEASE_YEARS),
            "genre": genre,
            "description": _description(rng, genre),
            "actors": [],
            "createdAt": now,
        })

    actors = []
    if movies:
        for _ in range(counts.actors):
            played = rng.sample(movies, min(rng.randint(*MOVIES_PER_ACTOR), len(movies)))
            actor = {
                "_id": ObjectId(),
                "name": _person_name(rng),
                "moviesPlayed": [movie["_id"] for movie in played],
                "createdAt": now,
            }
            for movie in played:
                movie["actors"].append(actor["_id"])
            actors.append(actor)

    ratings: List[dict] = []
    if movies and users:
        for _ in range(counts.ratings):
            ratings.append({
                "movie": rng.choice(movies)["_id"],
                "user": rng.choice(users)["_id"],
                "value": rng.randint(MIN_RATING, MAX_RATING),
                "review": _review(rng),
                "createdAt": now,
            })

    inserted = {
        USER.collection: len(await MongoRepository(db, USER).insert_many(users)),
        MOVIE.collection: len(await MongoRepository(db, MOVIE).insert_many(movies)),
        ACTOR.collection: len(await MongoRepository(db, ACTOR).insert_many(actors)),
        RATING.collection: len(await MongoRepository(db, RATING).insert_many(ratings)),
    }
    logger.info("Imported sample data: %s", inserted)
    return inserted


async def seed_database(
    db: AsyncIOMotorDatabase,
    counts: SeedCounts = SeedCounts(),
    rng: Optional[random.Random] = None,
) -> Dict[str, int]:
    """Wipe, then import."""
    await delete_data(db)
    return await import_data(db, counts, rng)


# ── Command line ──────────────────────────────────────────────────────────

async def _run(args: argparse.Namespace) -> None:
    await ping_database()
    db = await get_database()
    try:
        await ensure_indexes(db)
        if args.delete_only:
            await delete_data(db)
            return
        counts = SeedCounts(users=args.users, movies=args.movies, actors=args.actors, ratings=args.ratings)
        await seed_database(db, counts, random.Random(args.seed))
    finally:
        await close_client()


def main() -> None:
    defaults = SeedCounts()
    parser = argparse.ArgumentParser(description="Reset the database and load generated sample data")
    parser.add_argument("--users", type=int, default=defaults.users)
    parser.add_argument("--movies", type=int, default=defaults.movies)
    parser.add_argument("--actors", type=int, default=defaults.actors)
    parser.add_argument("--ratings", type=int, default=defaults.ratings)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    parser.add_argument("--delete-only", action="store_true", help="Only delete existing data")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
