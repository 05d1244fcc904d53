"""Count lines, words and bytes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, TextIO

from .fmt import sprintf

_CHUNK = 512
# NUL counts as a separator too.
_SEPARATORS = frozenset(" \r\t\n\v\0")


@dataclass(frozen=True)
class Counts:
    """Line, word and character totals."""

    lines: int
    words: int
    chars: int


def count(stream: IO) -> Counts:
    """Count the lines, words and characters read from ``stream``."""
    lines = words = chars = 0
    inword = False
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        if isinstance(chunk, (bytes, bytearray)):
            chunk = bytes(chunk).decode("latin-1")
        for ch in chunk:
            chars += 1
            if ch == "\n":
                lines += 1
            if ch in _SEPARATORS:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return Counts(lines, words, chars)


def wc(stream: IO, name: str, out: TextIO) -> Counts:
    """Count ``stream`` and write the totals followed by ``name``."""
    counts = count(stream)
    out.write(sprintf("%d %d %d %s\n", counts.lines, counts.words, counts.chars, name))
    return counts


def main(argv: list[str] | None = None) -> int:
    """Run wc with command-line arguments; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        if not args:
            wc(sys.stdin.buffer, "", sys.stdout)
            return 0
        for path in args:
            try:
                f = open(path, "rb")
            except OSError:
                sys.stdout.write(f"wc: cannot open {path}\n")
                return 1
            with f:
                wc(f, path, sys.stdout)
    except OSError:
        sys.stdout.write("wc: read error\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())