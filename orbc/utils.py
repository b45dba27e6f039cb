"""Small numeric helpers shared across the compiler."""

from __future__ import annotations

from typing import TypeVar

_T = TypeVar("_T")

_MASK64 = (1 << 64) - 1
_SIGN64 = 1 << 63


def _to_int64(value: int) -> int:
    """Reinterpret the low 64 bits of ``value`` as a signed integer."""
    value &= _MASK64
    return value - (1 << 64) if value & _SIGN64 else value


def between(x: _T, lo: _T, hi: _T) -> bool:
    """Return True if ``lo <= x <= hi``."""
    return lo <= x <= hi  # type: ignore[operator]


def add_with_wrap(x: int, y: int) -> int:
    """Add two 64-bit signed integers, wrapping around on overflow."""
    return _to_int64((x & _MASK64) + (y & _MASK64))


def sub_with_wrap(x: int, y: int) -> int:
    """Subtract two 64-bit signed integers, wrapping around on overflow."""
    return _to_int64((x & _MASK64) - (y & _MASK64))


def mul_with_wrap(x: int, y: int) -> int:
    """Multiply two 64-bit signed integers, wrapping around on overflow."""
    return _to_int64((x & _MASK64) * (y & _MASK64))


def shl_with_wrap(x: int, y: int) -> int:
    """Shift a 64-bit signed integer left, discarding bits shifted out."""
    return _to_int64((x & _MASK64) << (y & _MASK64))