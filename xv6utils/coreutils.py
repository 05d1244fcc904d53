"""Small file utilities: cat, echo, kill, ln, mkdir and rm."""

from __future__ import annotations

import os
import signal
import sys
from typing import BinaryIO

from .ulib import atoi

_CHUNK = 512
_SIGKILL = getattr(signal, "SIGKILL", signal.SIGTERM)


class _CatError(OSError):
    """A read or write failure while copying."""


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def cat(stream: BinaryIO, out: BinaryIO) -> None:
    """Copy ``stream`` to ``out`` until end of input."""
    while True:
        try:
            chunk = stream.read(_CHUNK)
        except OSError as exc:
            raise _CatError("cat: read error") from exc
        if not chunk:
            return
        try:
            written = out.write(chunk)
        except OSError as exc:
            raise _CatError("cat: write error") from exc
        if written is not None and written != len(chunk):
            raise _CatError("cat: write error")


def cat_main(argv: list[str] | None = None) -> int:
    """Concatenate the named files, or standard input, to standard output."""
    args = _args(argv)
    sys.stdout.flush()
    out = sys.stdout.buffer
    try:
        if not args:
            cat(sys.stdin.buffer, out)
            return 0
        for path in args:
            try:
                f = open(path, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {path}\n")
                return 1
            with f:
                cat(f, out)
    except _CatError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    finally:
        out.flush()
    return 0


def echo_main(argv: list[str] | None = None) -> int:
    """Print the arguments separated by spaces."""
    args = _args(argv)
    if args:
        sys.stdout.write(" ".join(args) + "\n")
    return 0


def kill_main(argv: list[str] | None = None) -> int:
    """Kill each process whose id is given."""
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            continue  # there is no such process
        try:
            os.kill(pid, _SIGKILL)
        except OSError:
            pass
    return 0


def ln_main(argv: list[str] | None = None) -> int:
    """Create a hard link ``new`` to ``old``."""
    args = _args(argv)
    if len(args) != 2:
        sys.stderr.write("Usage: ln old new\n")
        return 1
    old, new = args
    try:
        os.link(old, new)
    except OSError:
        sys.stderr.write(f"link {old} {new}: failed\n")
    return 0


def mkdir_main(argv: list[str] | None = None) -> int:
    """Create each named directory, stopping at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: mkdir files...\n")
        return 1
    for path in args:
        try:
            os.mkdir(path)
        except OSError:
            sys.stderr.write(f"mkdir: {path} failed to create\n")
            break
    return 0


def _unlink(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.unlink(path)


def rm_main(argv: list[str] | None = None) -> int:
    """Remove each named file or empty directory, stopping at the first failure."""
    args = _args(argv)
    if not args:
        sys.stderr.write("Usage: rm files...\n")
        return 1
    for path in args:
        try:
            _unlink(path)
        except OSError:
            sys.stderr.write(f"rm: {path} failed to delete\n")
            break
    return 0