"""scratch
=======

Higher-order sequence operations built from scratch: a recursive ``loop``
gives ``counted_loop``, which gives ``for_each``, then ``reduce``, then
``map`` and ``filter``, then ``pluck`` and ``compact``.
"""

from .errors import ConfigError, NotCallableError, NotRecordLikeError, ScratchError
from .loops import counted_loop, loop, max_safe_iterations, trampoline_loop
from .records import MISSING, get_field
from .sequences import compact, filter, for_each, map, pluck, reduce

while_ = loop
for_ = counted_loop

__all__ = [
    "loop",
    "counted_loop",
    "for_each",
    "reduce",
    "map",
    "filter",
    "pluck",
    "compact",
    "while_",
    "for_",
    "trampoline_loop",
    "max_safe_iterations",
    "get_field",
    "MISSING",
    "ScratchError",
    "NotCallableError",
    "NotRecordLikeError",
    "ConfigError",
]
