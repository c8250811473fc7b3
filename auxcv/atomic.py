"""Atomic read-modify-write operations on the first 32-bit unsigned word of a buffer.

The word is read in native byte order. All operations are serialised by one
process-wide lock, so every memory-ordering variant behaves as sequentially
consistent.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable
from typing import Any

_MASK = 0xFFFFFFFF
_WORD = 4
_LOCK = threading.Lock()


def _check_u32(name: str, value: int) -> int:
    if not 0 <= value <= _MASK:
        raise OverflowError(f"{name} out of range for an unsigned 32-bit integer: {value}")
    return value


def _modify(data: Any, op: Callable[[int], int | None]) -> int:
    """Apply op to the stored word under the lock; store its result unless None. Return the old word."""
    with _LOCK, memoryview(data) as raw:
        if raw.readonly:
            raise TypeError("buffer is read-only")
        with raw.cast("B") as view:
            if len(view) < _WORD:
                raise ValueError(f"buffer holds fewer than {_WORD} bytes")
            old = int.from_bytes(view[:_WORD], sys.byteorder)
            new = op(old)
            if new is not None:
                view[:_WORD] = (new & _MASK).to_bytes(_WORD, sys.byteorder)
            return old


def fetch_add_seq_cst(data: Any, val: int) -> int:
    """Add val (wrapping) to the word and return its previous value."""
    _check_u32("val", val)
    return _modify(data, lambda old: old + val)


def fetch_sub_seq_cst(data: Any, val: int) -> int:
    """Subtract val (wrapping) from the word and return its previous value."""
    _check_u32("val", val)
    return _modify(data, lambda old: old - val)


def fetch_add_release(data: Any, val: int) -> int:
    """Add val (wrapping) to the word and return its previous value."""
    return fetch_add_seq_cst(data, val)


def fetch_sub_release(data: Any, val: int) -> int:
    """Subtract val (wrapping) from the word and return its previous value."""
    return fetch_sub_seq_cst(data, val)


def compare_exchange(data: Any, cur: int, new: int) -> bool:
    """Store new if the word equals cur; return whether the store happened."""
    _check_u32("cur", cur)
    _check_u32("new", new)
    old = _modify(data, lambda old: new if old == cur else None)
    return old == cur


def compare_exchange_add(data: Any, delta: int) -> tuple[bool, int]:
    """Add delta (wrapping) via compare-and-swap; return (success, previous value)."""
    _check_u32("delta", delta)
    return True, _modify(data, lambda old: old + delta)


def compare_exchange_sub(data: Any, delta: int) -> tuple[bool, int]:
    """Subtract delta (wrapping) via compare-and-swap; return (success, previous value)."""
    _check_u32("delta", delta)
    return True, _modify(data, lambda old: old - delta)