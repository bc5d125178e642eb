"""Unit tests for FindCursor and PipelineCursor."""

from __future__ import annotations

import random

import pytest

from doc_store.application import FindCursor, InMemoryCollection


@pytest.mark.unit
class TestFindCursor:
    """Tests for deferred sort/skip/limit."""

    @pytest.fixture
    def ranked(self, collection: InMemoryCollection) -> InMemoryCollection:
        ranks = list(range(1, 11))
        random.Random(7).shuffle(ranks)
        collection.insert_many([{"rank": r} for r in ranks])
        return collection

    def test_chaining_returns_same_cursor(self, ranked: InMemoryCollection) -> None:
        cursor = ranked.find({})
        assert cursor.sort({"rank": 1}) is cursor
        assert cursor.skip(1) is cursor
        assert cursor.limit(1) is cursor

    def test_sort_before_skip_and_limit(self, ranked: InMemoryCollection) -> None:
        docs = ranked.find({}).sort({"rank": 1}).skip(3).limit(2).to_list()
        assert [d["rank"] for d in docs] == [4, 5]

    def test_configuration_order_does_not_matter(self, ranked: InMemoryCollection) -> None:
        docs = ranked.find({}).limit(2).skip(3).sort({"rank": 1}).to_list()
        assert [d["rank"] for d in docs] == [4, 5]

    def test_descending(self, ranked: InMemoryCollection) -> None:
        docs = ranked.find({}).sort({"rank": -1}).limit(3).to_list()
        assert [d["rank"] for d in docs] == [10, 9, 8]

    def test_only_first_sort_field_used(self, collection: InMemoryCollection) -> None:
        collection.insert_many([{"a": 2, "b": 1}, {"a": 1, "b": 2}])
        docs = collection.find({}).sort({"a": 1, "b": -1}).to_list()
        assert [d["a"] for d in docs] == [1, 2]

    def test_last_configuration_wins(self, ranked: InMemoryCollection) -> None:
        docs = ranked.find({}).sort({"rank": -1}).sort({"rank": 1}).limit(5).limit(2).to_list()
        assert [d["rank"] for d in docs] == [1, 2]

    def test_limit_zero_means_no_limit(self, ranked: InMemoryCollection) -> None:
        assert len(ranked.find({}).limit(0).to_list()) == 10

    def test_skip_past_end(self, ranked: InMemoryCollection) -> None:
        assert ranked.find({}).skip(20).to_list() == []

    def test_unsorted_keeps_insertion_order(self) -> None:
        docs = [{"i": 2}, {"i": 0}, {"i": 1}]
        assert FindCursor(docs).to_list() == docs

    def test_iteration(self, ranked: InMemoryCollection) -> None:
        assert len(list(ranked.find({"rank": {"$lte": 3}}))) == 3

    def test_drain_twice(self, ranked: InMemoryCollection) -> None:
        cursor = ranked.find({}).sort({"rank": 1}).limit(2)
        assert cursor.to_list() == cursor.to_list()


@pytest.mark.unit
class TestPipelineCursor:
    """Tests for the deferred aggregate handle."""

    def test_evaluated_when_drained(self, collection: InMemoryCollection) -> None:
        cursor = collection.aggregate([{"$group": {"_id": None, "n": {"$sum": 1}}}])
        collection.insert_many([{}, {}])
        assert cursor.to_list() == [{"_id": None, "n": 2}]

    def test_iteration(self, collection: InMemoryCollection) -> None:
        collection.insert_many([{"a": 1}, {"a": 2}])
        assert [d["a"] for d in collection.aggregate([{"$sort": {"a": -1}}])] == [2, 1]

    def test_pipeline_must_be_sequence(self, collection: InMemoryCollection) -> None:
        with pytest.raises(TypeError):
            collection.aggregate({"$match": {}})  # type: ignore[arg-type]
