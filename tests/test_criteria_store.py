"""Unit tests for the criteria store state machine."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List, Type

import pytest

from repositories.Contracts.CriteriaInterface import AnonymousCriteria, Criteria, criteria_key_for, is_criteria
from repositories.Criteria.CriteriaStore import CriteriaStore


class Marker(Criteria):
    def __init__(self, label: str) -> None:
        self.label = label

    def apply(self, query: Any, model: Type[Any]) -> Any:
        return query


class OtherMarker(Marker):
    pass


class DuckCriteria:
    """Satisfies the protocol without inheriting from Criteria."""

    def apply(self, query: Any, model: Type[Any]) -> Any:
        return query


def applied_labels(store: CriteriaStore) -> List[str]:
    labels: List[str] = []
    store.apply(lambda criterion: labels.append(getattr(criterion, 'label', '?')))
    return labels


class TestCriteriaStore:
    """Test suite for CriteriaStore."""

    @pytest.fixture
    def store(self) -> CriteriaStore:
        return CriteriaStore()

    def test_starts_empty_and_enabled(self, store: CriteriaStore) -> None:
        assert store.all() == ()
        assert not store.is_disabled
        assert not store.is_skipped
        assert not store.is_forced

    def test_push_preserves_order_and_duplicates(self, store: CriteriaStore) -> None:
        first, second = Marker('a'), Marker('b')

        store.push(first).push([second, first])

        assert store.persistent_criteria == (first, second, first)
        assert not store.is_forced

    def test_invalid_criteria_are_dropped(self, store: CriteriaStore) -> None:
        valid = [Marker('a'), DuckCriteria()]

        store.push(valid + ['invalid', None, 42, Marker, object()])

        assert len(store.all()) == len(valid)

    def test_criteria_with_non_callable_apply_are_dropped(self, store: CriteriaStore) -> None:
        kept = Marker('a')

        store.push([kept, SimpleNamespace(apply='nope')])
        store.with_criteria(SimpleNamespace(apply=None))

        assert store.all() == (kept,)

    def test_push_accepts_generators(self, store: CriteriaStore) -> None:
        store.push(Marker(label) for label in 'xyz')

        assert [c.label for c in store.persistent_criteria] == ['x', 'y', 'z']

    def test_with_criteria_replaces_transient_and_forces_use(self, store: CriteriaStore) -> None:
        store.with_criteria([Marker('a'), Marker('b')])
        store.skip()
        replacement = Marker('c')

        store.with_criteria(replacement)

        assert store.transient_criteria == (replacement,)
        assert store.is_forced
        assert not store.is_skipped

    def test_all_lists_persistent_before_transient(self, store: CriteriaStore) -> None:
        transient, persistent = Marker('t'), Marker('p')

        store.with_criteria(transient)
        store.push(persistent)

        assert store.all() == (persistent, transient)

    def test_remove_by_instance_matches_its_class_and_subclasses(self, store: CriteriaStore) -> None:
        other = OtherMarker('o')
        store.push([Marker('a'), other, DuckCriteria()])
        store.with_criteria(Marker('b'))

        store.remove(Marker('anything'))

        assert [type(c) for c in store.all()] == [DuckCriteria]

    def test_remove_by_class_matches_exact_type_only(self, store: CriteriaStore) -> None:
        other = OtherMarker('o')
        store.push([Marker('a'), other])
        store.with_criteria(Marker('b'))

        store.remove(Marker)

        assert store.all() == (other,)

    def test_remove_by_key(self, store: CriteriaStore) -> None:
        named = AnonymousCriteria(lambda query, model: query, key='named')
        marker = Marker('a')
        store.push([named, marker, OtherMarker('o')])

        store.remove(['named', criteria_key_for(OtherMarker('x'))])

        assert store.all() == (marker,)

    def test_remove_is_a_no_op_when_nothing_matches(self, store: CriteriaStore) -> None:
        marker = Marker('a')
        store.push(marker)

        store.remove([OtherMarker('o'), 'unknown', 42, None])

        assert store.all() == (marker,)

    def test_remove_ignores_invalid_stored_entries(self, store: CriteriaStore) -> None:
        store._persistent = ['invalid', Marker('a')]  # type: ignore[list-item]

        store.remove(['invalid', Marker])

        assert store.persistent_criteria == ('invalid',)

    def test_reset_clears_collections_but_not_flags(self, store: CriteriaStore) -> None:
        store.push(Marker('a')).with_criteria(Marker('b')).disable().skip()

        store.reset()

        assert store.all() == ()
        assert store.is_disabled
        assert store.is_skipped

    def test_apply_runs_transient_then_persistent_and_clears_transient(self, store: CriteriaStore) -> None:
        store.push([Marker('p1'), Marker('p2')])
        store.with_criteria([Marker('t1'), Marker('t2')])

        assert applied_labels(store) == ['t1', 't2', 'p1', 'p2']
        assert store.transient_criteria == ()
        assert not store.is_forced
        assert applied_labels(store) == ['p1', 'p2']

    def test_skip_bypasses_everything_once(self, store: CriteriaStore) -> None:
        store.push(Marker('p'))
        store.with_criteria(Marker('t'))
        store.skip()

        assert applied_labels(store) == []
        assert not store.is_skipped
        assert not store.is_forced
        assert store.transient_criteria == ()
        assert applied_labels(store) == ['p']

    def test_skip_wins_over_use(self, store: CriteriaStore) -> None:
        store.push(Marker('p')).disable().use().skip()

        assert applied_labels(store) == []
        assert applied_labels(store) == []

    def test_disabled_still_applies_transient_criteria(self, store: CriteriaStore) -> None:
        store.push(Marker('p')).disable()
        store._transient = [Marker('t')]

        assert applied_labels(store) == ['t']

    def test_with_criteria_while_disabled_forces_persistent_once(self, store: CriteriaStore) -> None:
        store.push(Marker('p')).disable()
        store.with_criteria(Marker('t'))

        assert applied_labels(store) == ['t', 'p']
        assert applied_labels(store) == []

    def test_use_overrides_disabled_for_one_cycle(self, store: CriteriaStore) -> None:
        store.push(Marker('p')).disable()

        assert applied_labels(store) == []

        store.use()
        assert applied_labels(store) == ['p']
        assert applied_labels(store) == []
        assert store.is_disabled

        store.enable()
        assert applied_labels(store) == ['p']


class TestCriteriaHelpers:
    """Test suite for criteria detection and keys."""

    def test_classes_are_not_criteria(self) -> None:
        assert is_criteria(Marker('a'))
        assert is_criteria(DuckCriteria())
        assert not is_criteria(Marker)
        assert not is_criteria('Marker')
        assert not is_criteria(SimpleNamespace(apply='x'))

    def test_default_key_is_dotted_class_path(self) -> None:
        assert criteria_key_for(Marker('a')) == f"{__name__}.Marker"

    def test_anonymous_criteria_key(self) -> None:
        criterion = AnonymousCriteria(lambda query, model: query, key='verified')

        assert criteria_key_for(criterion) == 'verified'
        assert criterion.apply('query', object) == 'query'
