"""Sequence operations derived, one from the next, from :func:`counted_loop`.

``for_each`` is a counted loop over indices, ``reduce`` is a ``for_each``
that threads an accumulator, ``map`` and ``filter`` are reductions into a
list, and ``pluck`` and ``compact`` are a fixed ``map`` and ``filter``.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, List, Sequence, TypeVar

from .cell import Cell
from .loops import DEFAULT_STRATEGY, Strategy, counted_loop
from .records import get_field, is_missing

T = TypeVar("T")
U = TypeVar("U")
M = TypeVar("M")


def for_each(
    sequence: Sequence[T],
    callback: Callable[[T], Any],
    *,
    strategy: Strategy = DEFAULT_STRATEGY,
) -> None:
    """Call ``callback(sequence[i])`` for each index in ascending order.

    The length is re-read before every step, so a callback that appends to or
    removes from ``sequence`` moves the end of the iteration.
    """

    index: Cell[int] = Cell(0)
    counted_loop(
        partial(index.set, 0),
        lambda: index.value < len(sequence),
        lambda: index.set(index.value + 1),
        lambda: callback(sequence[index.value]),
        strategy=strategy,
    )


def reduce(
    sequence: Sequence[T],
    aggregator: Callable[[M, T], M],
    memo: M,
    *,
    strategy: Strategy = DEFAULT_STRATEGY,
) -> M:
    """Fold ``sequence`` from the left, returning the last accumulator."""

    accumulator: Cell[M] = Cell(memo)
    for_each(
        sequence,
        lambda element: accumulator.set(aggregator(accumulator.value, element)),
        strategy=strategy,
    )
    return accumulator.value


def map(
    sequence: Sequence[T],
    selector: Callable[[T], U],
    *,
    strategy: Strategy = DEFAULT_STRATEGY,
) -> List[U]:
    """Return a new list holding ``selector(element)`` for every element."""

    def append_selected(result: List[U], element: T) -> List[U]:
        result.append(selector(element))
        return result

    return reduce(sequence, append_selected, [], strategy=strategy)


def filter(
    sequence: Sequence[T],
    predicate: Callable[[T], Any],
    *,
    strategy: Strategy = DEFAULT_STRATEGY,
) -> List[T]:
    """Return a new list of the elements for which ``predicate`` is truthy."""

    def append_matching(result: List[T], element: T) -> List[T]:
        if predicate(element):
            result.append(element)
        return result

    return reduce(sequence, append_matching, [], strategy=strategy)


def pluck(sequence: Sequence[Any], name: Any, *, strategy: Strategy = DEFAULT_STRATEGY) -> List[Any]:
    """Return field ``name`` of every element (see :func:`~scratch.records.get_field`)."""

    return map(sequence, lambda element: get_field(element, name), strategy=strategy)


def compact(sequence: Sequence[T], *, strategy: Strategy = DEFAULT_STRATEGY) -> List[T]:
    """Drop ``None`` and ``MISSING``; every other falsy value is kept."""

    return filter(sequence, lambda element: not is_missing(element), strategy=strategy)


__all__ = ["for_each", "reduce", "map", "filter", "pluck", "compact"]
