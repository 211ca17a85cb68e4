"""Behaviour of the operations layered on top of ``counted_loop``."""

from __future__ import annotations

import operator
import sys

import numpy as np
import pytest

import scratch
from scratch import MISSING, compact, filter, for_each, map, pluck, reduce
from scratch.loops import LOOP_STRATEGIES, max_safe_iterations

STRATEGIES = sorted(LOOP_STRATEGIES)


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_for_each_visits_every_element_in_order(strategy: str) -> None:
    seen = []
    assert for_each(["a", "b", "c"], seen.append, strategy=strategy) is None
    assert seen == ["a", "b", "c"]


def test_for_each_on_empty_sequence_never_calls_back() -> None:
    seen = []
    for_each((), seen.append)
    assert seen == []


def test_for_each_rereads_length_when_callback_grows_the_sequence() -> None:
    items = [1]
    seen = []

    def grow(element: int) -> None:
        seen.append(element)
        if len(items) < 4:
            items.append(element + 1)

    for_each(items, grow)
    assert seen == [1, 2, 3, 4]


def test_for_each_accepts_any_indexable_sequence() -> None:
    seen = []
    for_each(np.arange(3), seen.append)
    for_each("xy", seen.append)
    for_each(range(2), seen.append)
    assert seen == [0, 1, 2, "x", "y", 0, 1]


def test_for_each_propagates_callback_errors() -> None:
    def fail(element: int) -> None:
        if element == 2:
            raise KeyError(element)

    with pytest.raises(KeyError):
        for_each([1, 2, 3], fail)


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_reduce_sums(strategy: str) -> None:
    assert reduce([1, 2, 3], operator.add, 0, strategy=strategy) == 6


def test_reduce_empty_returns_memo_unchanged() -> None:
    memo = object()
    assert reduce([], lambda acc, element: None, memo) is memo


def test_reduce_accumulator_type_may_differ_from_elements() -> None:
    lengths = reduce(["ab", "c", ""], lambda acc, word: {**acc, word: len(word)}, {})
    assert lengths == {"ab": 2, "c": 1, "": 0}


def test_reduce_folds_left_to_right() -> None:
    assert reduce(["a", "b", "c"], lambda acc, element: acc + element, "") == "abc"


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_map_doubles(strategy: str) -> None:
    source = [1, 2, 3]
    result = map(source, lambda x: x * 2, strategy=strategy)
    assert result == [2, 4, 6]
    assert result is not source
    assert source == [1, 2, 3]


def test_map_empty() -> None:
    assert map([], lambda x: pytest.fail("selector called")) == []


def test_map_over_numpy_array() -> None:
    assert map(np.array([1, 2, 3]), lambda x: int(x) ** 2) == [1, 4, 9]


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_filter_keeps_matching_in_order(strategy: str) -> None:
    assert filter([1, 2, 3, 4], lambda x: x % 2 == 0, strategy=strategy) == [2, 4]


def test_filter_nothing_matches() -> None:
    assert filter([1, 2, 3], lambda x: False) == []


def test_filter_uses_truthiness() -> None:
    assert filter([0, 1, "", "a", None, [3]], lambda x: x) == [1, "a", [3]]


def test_pluck_reads_named_field() -> None:
    assert pluck([{"a": 1}, {"a": 2}], "a") == [1, 2]


def test_compact_removes_only_none_and_missing() -> None:
    assert compact([0, None, 1, MISSING, False, 2]) == [0, 1, False, 2]
    assert compact(["", [], None]) == ["", []]


def test_pluck_then_compact_drops_absent_fields() -> None:
    rows = [{"a": 1}, {"b": 2}, {"a": None}, {"a": 0}]
    assert pluck(rows, "a") == [1, MISSING, None, 0]
    assert compact(pluck(rows, "a")) == [1, 0]


@pytest.mark.parametrize(
    "operation, source, args",
    [
        (map, [3, 0, 1, 2], (lambda x: x + 1,)),
        (filter, [3, 0, 1, 2], (lambda x: x > 1,)),
        (compact, [3, None, 1, 2], ()),
    ],
)
def test_operations_are_idempotent_and_leave_input_alone(operation, source, args) -> None:
    snapshot = list(source)
    first = operation(source, *args)
    second = operation(source, *args)
    assert first == second
    assert first is not second
    assert source == snapshot


def test_pluck_is_idempotent() -> None:
    rows = [{"id": 1}, {"id": 2}]
    assert pluck(rows, "id") == pluck(rows, "id") == [1, 2]
    assert rows == [{"id": 1}, {"id": 2}]


def test_trampoline_handles_sequences_past_the_recursion_limit() -> None:
    size = sys.getrecursionlimit() * 2
    numbers = range(size)
    assert reduce(numbers, operator.add, 0, strategy="trampoline") == sum(numbers)
    assert len(map(numbers, str, strategy="trampoline")) == size


def test_recursive_strategy_fails_past_the_recursion_limit() -> None:
    with pytest.raises(RecursionError):
        for_each(range(sys.getrecursionlimit() * 2), lambda element: None)


def test_package_namespace_exposes_every_operation() -> None:
    for name in ("loop", "counted_loop", "for_each", "reduce", "map", "filter", "pluck", "compact"):
        assert callable(getattr(scratch, name))


def test_reduce_at_the_safe_length_from_a_nested_caller() -> None:
    def nested(levels: int, action):
        return action() if levels == 0 else nested(levels - 1, action)

    def fold_at_safe_length():
        size = max_safe_iterations()
        return size, reduce(range(size), operator.add, 0)

    size, total = nested(20, fold_at_safe_length)
    assert size > 0
    assert total == sum(range(size))


def test_pluck_at_the_safe_length() -> None:
    size = max_safe_iterations()
    rows = map(range(size), lambda index: {"id": index}, strategy="trampoline")
    assert compact(pluck(rows, "id")) == list(range(size))
