"""Looping primitives built without ``while`` or ``for``.

:func:`loop` is the recursive stand-in for ``while`` that everything else in
the package is derived from. :func:`trampoline_loop` honours the same contract
in constant stack depth, for sequences longer than the interpreter recursion
limit allows.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Dict, Optional, Union

from .errors import ConfigError, NotCallableError

logger = logging.getLogger(__name__)

Condition = Callable[[], object]
Thunk = Callable[[], None]
LoopFn = Callable[[Condition, Thunk], None]
Strategy = Union[str, LoopFn]

DEFAULT_STRATEGY = "recursive"

# Frames between a caller and the first recursive step, plus those a single
# iteration holds open while running the deepest callback (``pluck``).
_CHAIN_OVERHEAD = 16


def _require_callable(value: object, role: str, caller: str) -> None:
    # Passing ``flag`` instead of ``lambda: flag`` freezes the condition forever.
    if not callable(value):
        raise NotCallableError(
            f"Remember, you need to pass a FUNCTION as the {role} of {caller}; "
            f"got {type(value).__name__}."
        )


def loop(condition: Condition, body: Thunk) -> None:
    """Call ``body`` for as long as ``condition()`` is truthy.

    Each iteration is a tail self-call, so one stack frame is consumed per
    iteration and a long enough loop ends in :class:`RecursionError`. See
    :func:`max_safe_iterations`.
    """

    _require_callable(condition, "condition", "loop")
    _require_callable(body, "body", "loop")
    _recur(condition, body)


def _recur(condition: Condition, body: Thunk) -> None:
    if not condition():
        return
    body()
    _recur(condition, body)


def trampoline_loop(condition: Condition, body: Thunk) -> None:
    """Stack-safe variant of :func:`loop` with identical observable behaviour."""

    _require_callable(condition, "condition", "trampoline_loop")
    _require_callable(body, "body", "trampoline_loop")

    def bounce() -> Optional[Callable[[], object]]:
        if not condition():
            return None
        body()
        return bounce

    iterations = 0
    next_bounce = bounce()
    while next_bounce is not None:
        iterations += 1
        next_bounce = next_bounce()
    logger.debug("trampoline_loop finished after %d iterations", iterations)


LOOP_STRATEGIES: Dict[str, LoopFn] = {
    "recursive": loop,
    "trampoline": trampoline_loop,
}


def resolve_loop(strategy: Strategy = DEFAULT_STRATEGY) -> LoopFn:
    """Return the loop primitive registered under ``strategy``.

    A callable with the signature of :func:`loop` is returned as is, which lets
    callers wrap a primitive (for example to count iterations).
    """

    if callable(strategy):
        return strategy
    try:
        return LOOP_STRATEGIES[strategy]
    except KeyError as exc:
        raise ConfigError(
            f"Unknown loop strategy '{strategy}'; expected one of {sorted(LOOP_STRATEGIES)}."
        ) from exc


def counted_loop(
    init: Thunk,
    condition: Condition,
    update: Thunk,
    body: Thunk,
    *,
    strategy: Strategy = DEFAULT_STRATEGY,
) -> None:
    """The ``for (init; condition; update) body`` statement, built on a loop.

    ``init`` runs exactly once. Each iteration calls ``body`` and then
    ``update``; neither runs when ``condition`` is false from the start.
    """

    run = resolve_loop(strategy)
    init()

    def step() -> None:
        body()
        update()

    run(condition, step)


def _stack_depth() -> int:
    frame = sys._getframe(1)
    depth = 0
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def max_safe_iterations(margin: int = 32) -> int:
    """Longest sequence the recursive strategy can walk from the calling frame.

    The bound is the recursion limit minus the frames already on the stack
    below the caller, minus the frames the operations themselves hold open.
    ``margin`` reserves extra room for callbacks that call deeper still.
    """

    available = sys.getrecursionlimit() - _stack_depth() - _CHAIN_OVERHEAD - margin
    return max(available, 0)


__all__ = [
    "DEFAULT_STRATEGY",
    "Strategy",
    "LOOP_STRATEGIES",
    "loop",
    "trampoline_loop",
    "resolve_loop",
    "counted_loop",
    "max_safe_iterations",
]
