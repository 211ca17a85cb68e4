"""Exception types raised by the :mod:`scratch` package."""

from __future__ import annotations


class ScratchError(Exception):
    """Base class for errors raised by :mod:`scratch` itself."""


class NotCallableError(ScratchError, TypeError):
    """Raised when a loop is handed something other than a function."""


class NotRecordLikeError(ScratchError, TypeError):
    """Raised when a named field is read from a value that has no fields."""


class ConfigError(ScratchError, ValueError):
    """Raised for unknown loop strategies or malformed configuration files."""


__all__ = ["ScratchError", "NotCallableError", "NotRecordLikeError", "ConfigError"]
