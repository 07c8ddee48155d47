"""
Movie API Backend — Resource Linker Tests
===========================================

What:  Tests for link_record (identifier normalization + relation links).
"""

import pytest
from bson import ObjectId

from movie_api.exceptions import LinkResolutionError
from movie_api.services.hateoas import link_record, resolve_identifier

BASE = "http://test/api/v1"


class TestResolveIdentifier:
    def test_bare_values(self):
        oid = ObjectId()
        assert resolve_identifier(oid) == str(oid)
        assert resolve_identifier("abc") == "abc"

    def test_expanded_objects(self):
        assert resolve_identifier({"id": "m1", "title": "Heat"}) == "m1"
        assert resolve_identifier({"_id": "m2"}) == "m2"

    def test_nothing_usable(self):
        assert resolve_identifier(None) is None
        assert resolve_identifier("") is None
        assert resolve_identifier({"title": "Heat"}) is None


class TestLinkRecord:
    def test_movie_links(self):
        record = link_record({"_id": "m1", "title": "Heat"}, "movie", BASE)

        assert record.id == "m1"
        assert record.links["self"].href == f"{BASE}/movies/m1"
        assert record.links["ratings"].href == f"{BASE}/movies/m1/ratings"
        dumped = record.model_dump()
        assert "_id" not in dumped
        assert dumped["title"] == "Heat"

    def test_rating_with_bare_movie_reference(self):
        record = link_record({"_id": "r1", "movie": "m1", "value": 8}, "rating", BASE)
        assert record.links["self"].href == f"{BASE}/ratings/r1"
        assert record.links["movie"].href == f"{BASE}/movies/m1"

    def test_rating_with_expanded_movie(self):
        rating = {"_id": "r1", "movie": {"id": "m1", "title": "Heat", "releaseYear": 1995}}
        record = link_record(rating, "rating", BASE)
        assert record.links["movie"].href == f"{BASE}/movies/m1"

    def test_rating_without_movie_omits_the_link(self):
        projected = link_record({"_id": "r1", "value": 8}, "rating", BASE)
        dangling = link_record({"_id": "r2", "movie": None}, "rating", BASE)
        assert "movie" not in projected.links
        assert "movie" not in dangling.links

    def test_actor_links(self):
        record = link_record({"_id": "a1", "name": "Al Pacino"}, "actor", BASE)
        assert record.links["self"].href == f"{BASE}/actors/a1"
        assert record.links["movies"].href == f"{BASE}/movies?actors=a1"

    def test_trailing_slash_in_base_is_ignored(self):
        record = link_record({"_id": "m1"}, "movie", f"{BASE}/")
        assert record.links["self"].href == f"{BASE}/movies/m1"

    def test_decorating_twice_is_idempotent(self):
        once = link_record({"_id": "m1", "title": "Heat"}, "movie", BASE)
        twice = link_record(once, "movie", BASE)
        assert twice.model_dump() == once.model_dump()

    def test_stale_links_are_replaced(self):
        record = link_record({"_id": "m1", "links": {"bogus": {"href": "x"}}}, "movie", BASE)
        assert set(record.links) == {"self", "ratings"}

    def test_unknown_type_fails(self):
        with pytest.raises(LinkResolutionError):
            link_record({"_id": "x1"}, "director", BASE)

    def test_missing_identifier_fails(self):
        with pytest.raises(LinkResolutionError):
            link_record({"title": "No id"}, "movie", BASE)
