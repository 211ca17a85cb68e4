"""Rich logging setup for the package, plus step counters for the walkthrough."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, TypeVar

from rich.console import Console
from rich.logging import RichHandler

F = TypeVar("F", bound=Callable[..., Any])


def setup_logging(level: str = "INFO", rich_tracebacks: bool = True) -> None:
    """Configure the root logger with optional rich tracebacks."""

    console = Console()
    handler = RichHandler(console=console, rich_tracebacks=rich_tracebacks)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


@dataclass
class StepTally:
    """Count loop iterations and callback invocations."""

    iterations: int = 0
    callbacks: int = 0
    extras: Dict[str, int] = field(default_factory=dict)

    def incr(self, **kwargs: int) -> None:
        for key, value in kwargs.items():
            if key in ("iterations", "callbacks"):
                setattr(self, key, getattr(self, key) + int(value))
            else:
                self.extras[key] = self.extras.get(key, 0) + int(value)

    def as_dict(self) -> Dict[str, int]:
        return {"iterations": self.iterations, "callbacks": self.callbacks, **self.extras}


def instrument(fn: F, tally: StepTally, key: str = "callbacks") -> F:
    """Wrap ``fn`` so every call bumps ``key`` on ``tally`` before running it."""

    @functools.wraps(fn)
    def _wrapped(*args: Any, **kwargs: Any) -> Any:
        tally.incr(**{key: 1})
        return fn(*args, **kwargs)

    return _wrapped  # type: ignore[return-value]


__all__ = ["setup_logging", "StepTally", "instrument"]
