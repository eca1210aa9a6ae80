"""
This module is used as a unified resource for various types that are primarily used for type hints.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing import (
        MutableSequence,
        Union,
    )

    buf = Union[bytes, bytearray, memoryview]
    wordarray = MutableSequence[int]

else:
    buf = Any
    wordarray = Any


__all__ = [
    'asbuffer',
    'buf',
    'wordarray',
]


def asbuffer(obj) -> memoryview | None:
    """
    Attempts to acquire a memoryview of the given object. This works for bytes and bytearrays, or
    memoryview objects themselves. The return value is `None` for objects that do not support the
    buffer protocol.
    """
    try:
        return memoryview(obj)
    except TypeError:
        return None
