"""A small printf supporting %d, %u, %x (with l/ll), %p, %s and %%."""

from __future__ import annotations

import operator
import sys
from typing import Any, Iterator, TextIO

_DIGITS = "0123456789ABCDEF"
_INTEGER_CONVERSIONS = {"d": (10, True), "u": (10, False), "x": (16, False)}
_UINT32 = 0xFFFFFFFF
_UINT64 = (1 << 64) - 1


def _as_int32(value: Any) -> int:
    value = operator.index(value) & _UINT32
    return value - (1 << 32) if value >= 1 << 31 else value


def _format_int(value: Any, base: int, signed: bool) -> str:
    # Values are narrowed to 32 bits whatever the length modifier.
    xx = _as_int32(value)
    negative = signed and xx < 0
    x = -xx if negative else xx & _UINT32
    digits = []
    while True:
        digits.append(_DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if negative:
        digits.append("-")
    return "".join(reversed(digits))


def _format_ptr(value: Any) -> str:
    return "0x" + format(operator.index(value) & _UINT64, "016X")


def _take(values: Iterator[Any]) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text."""
    values = iter(args)
    out: list[str] = []
    i, n = 0, len(fmt)
    while i < n:
        c = fmt[i]
        i += 1
        if c != "%":
            out.append(c)
            continue
        if i >= n:
            break
        c0 = fmt[i]
        if c0 in _INTEGER_CONVERSIONS:
            out.append(_format_int(_take(values), *_INTEGER_CONVERSIONS[c0]))
            i += 1
        elif c0 == "l" and fmt[i + 1 : i + 2] in _INTEGER_CONVERSIONS:
            out.append(_format_int(_take(values), *_INTEGER_CONVERSIONS[fmt[i + 1]]))
            i += 2
        elif fmt[i : i + 2] == "ll" and fmt[i + 2 : i + 3] in _INTEGER_CONVERSIONS:
            out.append(_format_int(_take(values), *_INTEGER_CONVERSIONS[fmt[i + 2]]))
            i += 3
        elif c0 == "p":
            out.append(_format_ptr(_take(values)))
            i += 1
        elif c0 == "s":
            s = _take(values)
            out.append("(null)" if s is None else str(s))
            i += 1
        elif c0 == "%":
            out.append("%")
            i += 1
        else:
            # Unknown sequence: echo it to draw attention.
            out.append("%" + c0)
            i += 1
    return "".join(out)


def fprintf(stream: TextIO, fmt: str, *args: Any) -> None:
    """Format and write to ``stream``."""
    stream.write(sprintf(fmt, *args))


def printf(fmt: str, *args: Any) -> None:
    """Format and write to standard output."""
    fprintf(sys.stdout, fmt, *args)