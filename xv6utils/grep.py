"""Simple grep supporting only the ^ . * $ operators."""

from __future__ import annotations

import sys
from typing import TextIO

_BUFSIZE = 1024


def _matchhere(re: str, i: int, text: str, j: int) -> bool:
    if i == len(re):
        return True
    if i + 1 < len(re) and re[i + 1] == "*":
        return _matchstar(re[i], re, i + 2, text, j)
    if re[i] == "$" and i + 1 == len(re):
        return j == len(text)
    if j < len(text) and (re[i] == "." or re[i] == text[j]):
        return _matchhere(re, i + 1, text, j + 1)
    return False


def _matchstar(c: str, re: str, i: int, text: str, j: int) -> bool:
    while True:
        if _matchhere(re, i, text, j):
            return True
        if j < len(text) and (text[j] == c or c == "."):
            j += 1
        else:
            return False


def match(re: str, text: str) -> bool:
    """True if the pattern ``re`` matches anywhere in ``text``."""
    if re.startswith("^"):
        return _matchhere(re, 1, text, 0)
    return any(_matchhere(re, 0, text, j) for j in range(len(text) + 1))


def grep(pattern: str, stream: TextIO, out: TextIO) -> None:
    """Write each newline-terminated line of ``stream`` that matches ``pattern``.

    Input is buffered as in a fixed 1024-byte buffer: a line that does not
    fit in it ends the search, and a final line without a newline is ignored.
    """
    pending = ""
    while True:
        chunk = stream.read(_BUFSIZE - 1 - len(pending))
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                out.write(line + "\n")


def main(argv: list[str] | None = None) -> int:
    """Run grep with command-line arguments; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, paths = args[0], args[1:]
    if not paths:
        grep(pattern, sys.stdin, sys.stdout)
        return 0
    for path in paths:
        try:
            f = open(path, encoding="utf-8", errors="replace", newline="")
        except OSError:
            sys.stdout.write(f"grep: cannot open {path}\n")
            return 1
        with f:
            grep(pattern, f, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())