"""Named-field access on record-like values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from .errors import NotRecordLikeError


class _Missing:
    """Type of :data:`MISSING`, the value of a field a record does not have."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def is_missing(value: object) -> bool:
    """Return ``True`` for ``None`` and :data:`MISSING`."""

    return value is None or value is MISSING


def get_field(record: Any, name: Any) -> Any:
    """Return field ``name`` of ``record``.

    Mappings are subscripted, sequences (lists, tuples) are indexed by an
    integer ``name`` and anything else is read by attribute. A field (or
    index) the record does not carry comes back as :data:`MISSING`; values
    with no fields at all (``None``, numbers, strings) raise
    :class:`~scratch.errors.NotRecordLikeError`.
    """

    if isinstance(record, Mapping):
        return record.get(name, MISSING)
    if record is None or isinstance(record, _SCALARS):
        raise NotRecordLikeError(
            f"Cannot read field {name!r} from {type(record).__name__} value {record!r}."
        )
    if isinstance(record, Sequence) and isinstance(name, int) and not isinstance(name, bool):
        if -len(record) <= name < len(record):
            return record[name]
        return MISSING
    if not isinstance(name, str):
        raise NotRecordLikeError(
            f"Attribute names must be strings; got {type(name).__name__} for {type(record).__name__}."
        )
    return getattr(record, name, MISSING)


__all__ = ["MISSING", "is_missing", "get_field"]
