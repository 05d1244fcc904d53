"""List files and directories."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from .fmt import sprintf
from .params import FileType
from .ulib import stat

DIRSIZ = 14
_BUFSIZE = 512


def fmtname(path: str) -> str:
    """Return the last path component, blank-padded to ``DIRSIZ``."""
    name = path[path.rfind("/") + 1 :]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _entry_line(path: str, st) -> str:
    return sprintf("%s %d %d %d\n", fmtname(path), st.type, st.ino, st.size)


def ls(path: str, out: TextIO | None = None) -> None:
    """Describe ``path``, or each entry of it if it is a directory."""
    out = sys.stdout if out is None else out
    try:
        st = stat(path)
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    if st.type != FileType.DIR:
        out.write(_entry_line(path, st))
        return
    if len(path) + 1 + DIRSIZ + 1 > _BUFSIZE:
        out.write("ls: path too long\n")
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    for name in [".", "..", *names]:
        full = f"{path}/{name}"
        try:
            entry = stat(full)
        except OSError:
            out.write(f"ls: cannot stat {full}\n")
            continue
        out.write(_entry_line(full, entry))


def main(argv: list[str] | None = None) -> int:
    """List each argument, or the current directory; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    for path in args or ["."]:
        ls(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())