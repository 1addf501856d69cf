import pytest

from course_catalog.models.query import RecordQuery, SortDirection


class TestMemoryRecordStore:
    """Test the in-memory record store."""

    async def test_insert_assigns_unique_ids(self, store):
        """Each insert gets its own identifier."""
        first = await store.insert_one({"title": "A"})
        second = await store.insert_one({"title": "B"})

        assert first != second
        assert (await store.find_one(first))["_id"] == first

    async def test_insert_many_returns_ids_in_order(self, store):
        ids = await store.insert_many([{"n": 1}, {"n": 2}])

        assert len(set(ids)) == 2
        assert [(await store.find_one(record_id))["n"] for record_id in ids] == [1, 2]
        assert await store.count() == 2

    async def test_find_returns_insertion_order(self, store):
        """Without a query, documents come back in store order."""
        await store.insert_many([{"n": 1}, {"n": 2}, {"n": 3}])

        documents = await store.find()
        assert [doc["n"] for doc in documents] == [1, 2, 3]

    async def test_find_one_unknown_id(self, store):
        """Unknown identifiers resolve to None."""
        assert await store.find_one("does-not-exist") is None

    async def test_returned_documents_are_copies(self, store):
        """Mutating a returned document does not change stored state."""
        record_id = await store.insert_one({"tags": ["a"]})

        document = await store.find_one(record_id)
        document["tags"].append("b")

        assert (await store.find_one(record_id))["tags"] == ["a"]

    async def test_update_one_keeps_id(self, store):
        """Updates never replace the identifier."""
        record_id = await store.insert_one({"title": "A"})

        updated = await store.update_one(record_id, {"title": "B", "_id": "other"})

        assert updated["_id"] == record_id
        assert updated["title"] == "B"

    async def test_update_one_unknown_id(self, store):
        assert await store.update_one("missing", {"title": "B"}) is None

    async def test_delete_one(self, store):
        """Deleting twice reports False the second time."""
        record_id = await store.insert_one({"title": "A"})

        assert await store.delete_one(record_id) is True
        assert await store.delete_one(record_id) is False
        assert await store.count() == 0

    async def test_query_filters_sorts_and_limits(self, store):
        """Queries combine filters, multi-key sort and limit."""
        await store.insert_many(
            [
                {"name": "a", "category": "Web Development", "rating": 4, "price": 10},
                {"name": "b", "category": "Data Science", "rating": 5, "price": 10},
                {"name": "c", "category": "web design", "rating": 5, "price": 80},
                {"name": "d", "category": "WEB", "rating": 5, "price": 20},
            ]
        )
        query = RecordQuery(
            contains={"category": "web"},
            at_most={"price": 50},
            sort=[("rating", SortDirection.DESCENDING), ("name", SortDirection.ASCENDING)],
            limit=5,
        )

        documents = await store.find(query)
        assert [doc["name"] for doc in documents] == ["d", "a"]

    async def test_contains_is_literal(self, store):
        """Substring terms are not treated as patterns."""
        await store.insert_many([{"category": "C++"}, {"category": "C"}])

        documents = await store.find(RecordQuery(contains={"category": "c++"}))
        assert [doc["category"] for doc in documents] == ["C++"]

    @pytest.mark.parametrize("limit, expected", [(0, 0), (2, 2), (10, 3)])
    async def test_limit(self, store, limit, expected):
        await store.insert_many([{"n": 1}, {"n": 2}, {"n": 3}])

        assert len(await store.find(RecordQuery(limit=limit))) == expected
