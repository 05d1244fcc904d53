"""Small user-library helpers: number parsing, comparison, line input, stat."""

from __future__ import annotations

import os
import stat as stmod
from typing import IO, AnyStr

from .params import FileType, Stat


def atoi(s: str) -> int:
    """Parse the leading decimal digits of ``s``; anything else yields 0."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + ord(ch) - ord("0")
    return n


def _as_bytes(s: str | bytes) -> bytes:
    return s.encode("utf-8") if isinstance(s, str) else bytes(s)


def strcmp(p: str | bytes, q: str | bytes) -> int:
    """Compare two strings bytewise up to the first NUL.

    Returns the difference of the first pair of bytes that differ,
    so the result is negative, zero or positive.
    """
    a = _as_bytes(p) + b"\0"
    b = _as_bytes(q) + b"\0"
    for x, y in zip(a, b):
        if x == 0 or x != y:
            return x - y
    return 0


def gets(stream: IO[AnyStr], max: int) -> AnyStr:
    """Read one line of at most ``max - 1`` characters.

    Reading stops after a newline or carriage return, which is kept,
    or at end of input.
    """
    empty = stream.read(0)
    chars = []
    while len(chars) + 1 < max:
        c = stream.read(1)
        if not c:
            break
        chars.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    return empty.join(chars)


def _file_type(mode: int) -> FileType:
    if stmod.S_ISDIR(mode):
        return FileType.DIR
    if stmod.S_ISREG(mode):
        return FileType.FILE
    return FileType.DEVICE


def stat(path: str | os.PathLike) -> Stat:
    """Return the status of the file at ``path``; raises OSError if it cannot be opened."""
    st = os.stat(path)
    return Stat(
        dev=st.st_dev,
        ino=st.st_ino,
        type=_file_type(st.st_mode),
        nlink=st.st_nlink,
        size=st.st_size,
    )