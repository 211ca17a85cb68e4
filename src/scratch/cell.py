"""Explicit mutable state shared between the roles of a counted loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Cell(Generic[T]):
    """A single mutable slot.

    ``init``, ``condition`` and ``update`` all receive the same cell, so the
    value they share is visible in the call signature instead of hiding in a
    closure.
    """

    value: T

    def set(self, value: T) -> None:
        self.value = value


__all__ = ["Cell"]
