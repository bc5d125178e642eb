"""Unit tests for filter parsing and matching."""

from __future__ import annotations

import pytest

from doc_store.domain.entities import (
    Equals,
    Filter,
    Gt,
    Gte,
    In,
    Lt,
    Lte,
    NoMatch,
    parse_filter,
    parse_predicates,
)
from doc_store.domain.services import FilterMatcher, evaluate_predicate, matches
from doc_store.domain.value_objects import MISSING


@pytest.mark.unit
class TestParseFilter:
    """Tests for parse_filter."""

    def test_none_is_empty(self) -> None:
        assert parse_filter(None).is_empty

    def test_empty_mapping_is_empty(self) -> None:
        assert parse_filter({}).is_empty

    def test_literal_is_equality(self) -> None:
        parsed = parse_filter({"status": "active"})
        assert len(parsed) == 1
        assert parsed.conditions[0].field == "status"
        assert parsed.conditions[0].predicates == (Equals("active"),)

    def test_operator_object(self) -> None:
        assert parse_predicates({"$in": [1, 2]}) == (In((1, 2)),)
        assert parse_predicates({"$gte": 1}) == (Gte(1),)
        assert parse_predicates({"$lte": 1}) == (Lte(1),)
        assert parse_predicates({"$gt": 1}) == (Gt(1),)
        assert parse_predicates({"$lt": 1}) == (Lt(1),)

    def test_multiple_operators_all_kept(self) -> None:
        assert parse_predicates({"$gte": 1, "$lt": 5}) == (Gte(1), Lt(5))

    def test_unrecognized_operator_is_no_match(self) -> None:
        assert parse_predicates({"$ne": 3}) == (NoMatch({"$ne": 3}),)

    def test_in_requires_list(self) -> None:
        assert parse_predicates({"$in": "abc"}) == (NoMatch({"$in": "abc"}),)

    def test_filter_passthrough(self) -> None:
        built = parse_filter({"a": 1})
        assert parse_filter(built) is built

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(TypeError):
            parse_filter(["a", 1])  # type: ignore[arg-type]


@pytest.mark.unit
class TestFilterMatcher:
    """Tests for FilterMatcher."""

    def test_empty_filter_matches_everything(self) -> None:
        matcher = FilterMatcher({})
        assert matcher.matches_all
        assert matcher.matches({})
        assert matcher.matches({"a": 1})

    def test_equality(self) -> None:
        assert matches({"a": 1}, {"a": 1, "b": 2})
        assert not matches({"a": 1}, {"a": 2})

    def test_conjunction(self) -> None:
        spec = {"a": 1, "b": "x"}
        assert matches(spec, {"a": 1, "b": "x"})
        assert not matches(spec, {"a": 1, "b": "y"})

    def test_missing_field_does_not_match(self) -> None:
        assert not matches({"a": 1}, {"b": 1})
        assert not matches({"a": None}, {"b": 1})
        assert not matches({"a": {"$gte": 0}}, {"b": 1})

    def test_null_equality(self) -> None:
        assert matches({"a": None}, {"a": None})

    def test_in(self) -> None:
        spec = {"status": {"$in": ["a", "b"]}}
        assert matches(spec, {"status": "a"})
        assert not matches(spec, {"status": "c"})
        assert not matches(spec, {})

    def test_ranges(self) -> None:
        doc = {"n": 5}
        assert matches({"n": {"$gte": 5}}, doc)
        assert matches({"n": {"$lte": 5}}, doc)
        assert not matches({"n": {"$gt": 5}}, doc)
        assert not matches({"n": {"$lt": 5}}, doc)

    def test_operators_on_same_field_are_anded(self) -> None:
        spec = {"n": {"$gte": 2, "$lt": 4}}
        assert matches(spec, {"n": 3})
        assert not matches(spec, {"n": 4})
        assert not matches(spec, {"n": 1})

    def test_incomparable_types_do_not_match(self) -> None:
        assert not matches({"n": {"$gt": 1}}, {"n": "abc"})
        assert not matches({"n": {"$gt": 1}}, {"n": None})

    def test_unrecognized_operator_never_matches(self) -> None:
        assert not matches({"n": {"$ne": 1}}, {"n": 2})
        assert not matches({"n": {"$ne": 1}}, {"n": {"$ne": 1}})

    def test_string_ranges(self) -> None:
        assert matches({"d": {"$gte": "2024-01-01"}}, {"d": "2024-06-01"})

    def test_select_preserves_order(self) -> None:
        docs = [{"a": 1, "i": 0}, {"a": 2, "i": 1}, {"a": 1, "i": 2}]
        assert [d["i"] for d in FilterMatcher({"a": 1}).select(docs)] == [0, 2]

    def test_first(self) -> None:
        docs = [{"a": 2}, {"a": 1, "i": 1}, {"a": 1, "i": 2}]
        assert FilterMatcher({"a": 1}).first(docs) == {"a": 1, "i": 1}
        assert FilterMatcher({"a": 9}).first(docs) is None

    def test_accepts_parsed_filter(self) -> None:
        assert FilterMatcher(Filter()).matches_all


@pytest.mark.unit
class TestEvaluatePredicate:
    def test_no_match(self) -> None:
        assert not evaluate_predicate(NoMatch(), 1)

    def test_missing_value(self) -> None:
        assert not evaluate_predicate(Equals(1), MISSING)
        assert not evaluate_predicate(In((1,)), MISSING)
        assert not evaluate_predicate(Lt(1), MISSING)
