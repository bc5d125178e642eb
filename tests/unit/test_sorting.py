"""Unit tests for first-field sorting."""

from __future__ import annotations

import pytest

from doc_store.domain.entities import SortKey, parse_sort
from doc_store.domain.services import compare_values, sort_documents


@pytest.mark.unit
class TestParseSort:
    def test_first_key_only(self) -> None:
        assert parse_sort({"a": 1, "b": -1}) == SortKey("a", 1)

    def test_descending(self) -> None:
        key = parse_sort({"a": -1})
        assert key is not None and key.descending

    def test_empty(self) -> None:
        assert parse_sort({}) is None
        assert parse_sort(None) is None

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(TypeError):
            parse_sort("a")  # type: ignore[arg-type]


@pytest.mark.unit
class TestCompareValues:
    def test_ordering(self) -> None:
        assert compare_values(1, 2) == -1
        assert compare_values(2, 1) == 1
        assert compare_values(1, 1) == 0

    def test_incomparable_is_tie(self) -> None:
        assert compare_values(1, "a") == 0
        assert compare_values(None, 1) == 0


@pytest.mark.unit
class TestSortDocuments:
    def test_ascending(self) -> None:
        docs = [{"a": 3}, {"a": 1}, {"a": 2}]
        assert [d["a"] for d in sort_documents(docs, SortKey("a"))] == [1, 2, 3]

    def test_descending(self) -> None:
        docs = [{"a": 3}, {"a": 1}, {"a": 2}]
        assert [d["a"] for d in sort_documents(docs, SortKey("a", -1))] == [3, 2, 1]

    def test_returns_new_list(self) -> None:
        docs = [{"a": 2}, {"a": 1}]
        result = sort_documents(docs, SortKey("a"))
        assert result is not docs
        assert [d["a"] for d in docs] == [2, 1]

    def test_no_key_keeps_order(self) -> None:
        docs = [{"a": 2}, {"a": 1}]
        assert sort_documents(docs, None) == docs

    def test_missing_values_do_not_raise(self) -> None:
        docs = [{"a": 2}, {}, {"a": 1}]
        assert len(sort_documents(docs, SortKey("a"))) == 3
