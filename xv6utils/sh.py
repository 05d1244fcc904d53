"""Command shell: parses pipelines, lists, redirections and runs named commands."""

from __future__ import annotations

import io
import os
import shutil
import sys
from contextlib import redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, TextIO, Union

from . import coreutils
from . import grep as grep_mod
from . import ls as ls_mod
from . import wc as wc_mod
from .params import OpenFlag
from .ulib import gets

PROMPT = "$ "
MAXARGS = 10
BANG_LIMIT = 512
_LINE_MAX = 100

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"

_HIGHLIGHT = "\033[34m"
_RESET = "\033[0m"

CommandFunc = Callable[[list, TextIO, TextIO, TextIO], Optional[int]]


class ShellSyntaxError(ValueError):
    """Raised when a command line cannot be parsed."""

    def __init__(self, message: str, leftovers: str | None = None) -> None:
        super().__init__(message)
        self.leftovers = leftovers


@dataclass
class ExecCmd:
    """Run a program with arguments."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with descriptor ``fd`` reopened on ``file``."""

    cmd: "Command"
    file: str
    mode: OpenFlag
    fd: int


@dataclass
class PipeCmd:
    """Feed the output of ``left`` to ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run ``left`` then ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run ``cmd`` without waiting for its status."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _skip(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def peek(self, toks: str) -> bool:
        self._skip()
        return self.pos < len(self.text) and self.text[self.pos] in toks

    def gettoken(self) -> tuple[str, str]:
        """Return ``(kind, word)``; kind is "" at end, "a" for a word, "+" for >>."""
        self._skip()
        text = self.text
        start = self.pos
        if start >= len(text):
            return "", ""
        c = text[start]
        if c in "|();&<":
            kind = c
            self.pos += 1
        elif c == ">":
            kind = ">"
            self.pos += 1
            if self.pos < len(text) and text[self.pos] == ">":
                kind = "+"
                self.pos += 1
        else:
            kind = "a"
            while (
                self.pos < len(text)
                and text[self.pos] not in WHITESPACE
                and text[self.pos] not in SYMBOLS
            ):
                self.pos += 1
        word = text[start : self.pos]
        self._skip()
        return kind, word

    def line(self) -> Command:
        cmd = self.pipe()
        while self.peek("&"):
            self.gettoken()
            cmd = BackCmd(cmd)
        if self.peek(";"):
            self.gettoken()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self) -> Command:
        cmd = self.exec()
        if self.peek("|"):
            self.gettoken()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd: Command) -> Command:
        while self.peek("<>"):
            tok, _ = self.gettoken()
            kind, word = self.gettoken()
            if kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if tok == "<":
                cmd = RedirCmd(cmd, word, OpenFlag.RDONLY, 0)
            elif tok == ">":
                cmd = RedirCmd(
                    cmd, word, OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC, 1
                )
            else:
                cmd = RedirCmd(cmd, word, OpenFlag.WRONLY | OpenFlag.CREATE, 1)
        return cmd

    def block(self) -> Command:
        if not self.peek("("):
            raise ShellSyntaxError("parseblock")
        self.gettoken()
        cmd = self.line()
        if not self.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.gettoken()
        return self.redirs(cmd)

    def exec(self) -> Command:
        if self.peek("("):
            return self.block()
        exec_cmd = ExecCmd()
        ret = self.redirs(exec_cmd)
        while not self.peek("|)&;"):
            kind, word = self.gettoken()
            if kind == "":
                break
            if kind != "a":
                raise ShellSyntaxError("syntax")
            exec_cmd.argv.append(word)
            if len(exec_cmd.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def parse_cmd(s: str) -> Command:
    """Parse a command line into a command tree."""
    parser = _Parser(s)
    cmd = parser.line()
    parser.peek("")
    if parser.pos != len(s):
        raise ShellSyntaxError("syntax", s[parser.pos :])
    return cmd


def render_bang(args: list[str]) -> str:
    """Return the text printed by ``! args...``, with each "os" highlighted."""
    if not args:
        return ""
    parts: list[str] = []
    total = 0
    for i, arg in enumerate(args):
        if i > 0 and total + 1 < BANG_LIMIT:
            parts.append(" ")
            total += 1
        if total + len(arg) >= BANG_LIMIT:
            break
        parts.append(arg)
        total += len(arg)
    message = "".join(parts)
    return message.replace("os", f"{_HIGHLIGHT}os{_RESET}") + "\n"


def _os_flags(mode: OpenFlag) -> int:
    access = {
        OpenFlag.WRONLY: os.O_WRONLY,
        OpenFlag.RDWR: os.O_RDWR,
    }.get(OpenFlag(int(mode) & 0x3), os.O_RDONLY)
    if mode & OpenFlag.CREATE:
        access |= os.O_CREAT
    if mode & OpenFlag.TRUNC:
        access |= os.O_TRUNC
    return access


def _adapt(entry: Callable[[list], int]) -> CommandFunc:
    def run(argv: list, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
        with redirect_stdout(stdout), redirect_stderr(stderr):
            return entry(list(argv[1:]))

    return run


def _echo(argv: list, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    if len(argv) > 1:
        stdout.write(" ".join(argv[1:]) + "\n")
    return 0


def _cat(argv: list, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    if len(argv) < 2:
        shutil.copyfileobj(stdin, stdout)
        return 0
    for path in argv[1:]:
        try:
            f = open(path, encoding="utf-8", errors="replace", newline="")
        except OSError:
            stderr.write(f"cat: cannot open {path}\n")
            return 1
        with f:
            shutil.copyfileobj(f, stdout)
    return 0


def _grep(argv: list, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    if len(argv) == 2:
        grep_mod.grep(argv[1], stdin, stdout)
        return 0
    return _adapt(grep_mod.main)(argv, stdin, stdout, stderr)


def _wc(argv: list, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    if len(argv) < 2:
        wc_mod.wc(stdin, "", stdout)
        return 0
    return _adapt(wc_mod.main)(argv, stdin, stdout, stderr)


def _default_commands() -> dict[str, CommandFunc]:
    return {
        "cat": _cat,
        "echo": _echo,
        "grep": _grep,
        "wc": _wc,
        "ls": _adapt(ls_mod.main),
        "kill": _adapt(coreutils.kill_main),
        "ln": _adapt(coreutils.ln_main),
        "mkdir": _adapt(coreutils.mkdir_main),
        "rm": _adapt(coreutils.rm_main),
    }


class Shell:
    """Interactive shell running commands from a table of callables.

    Each command is called as ``func(argv, stdin, stdout, stderr)`` and
    returns its exit status (``None`` counts as 0).
    """

    def __init__(
        self,
        commands: Mapping[str, CommandFunc] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.commands = dict(_default_commands() if commands is None else commands)
        self.stdin = sys.stdin if stdin is None else stdin
        self.stdout = sys.stdout if stdout is None else stdout
        self.stderr = sys.stderr if stderr is None else stderr

    def getcmd(self) -> str | None:
        """Prompt and read one line; return None at end of input."""
        self.stderr.write(PROMPT)
        self.stderr.flush()
        line = gets(self.stdin, _LINE_MAX)
        return line or None

    def run(self, cmd: Command) -> int:
        """Run a parsed command and return its exit status."""
        return self._run(cmd, self.stdin, self.stdout)

    def loop(self) -> int:
        """Read and run command lines until end of input."""
        while (line := self.getcmd()) is not None:
            if line.startswith("cd "):
                path = line[3:-1]
                try:
                    os.chdir(path)
                except OSError:
                    self.stderr.write(f"cannot cd {path}\n")
                continue
            self._execute(line)
        return 0

    def _execute(self, line: str) -> int:
        try:
            cmd = parse_cmd(line)
        except ShellSyntaxError as exc:
            if exc.leftovers is not None:
                self.stderr.write(f"leftovers: {exc.leftovers}\n")
            self.stderr.write(f"{exc}\n")
            return 1
        return self.run(cmd)

    def _run(self, cmd: Command, stdin: TextIO, stdout: TextIO) -> int:
        if isinstance(cmd, ExecCmd):
            return self._run_exec(cmd, stdin, stdout)
        if isinstance(cmd, RedirCmd):
            return self._run_redir(cmd, stdin, stdout)
        if isinstance(cmd, ListCmd):
            self._run(cmd.left, stdin, stdout)
            return self._run(cmd.right, stdin, stdout)
        if isinstance(cmd, PipeCmd):
            buffer = io.StringIO()
            self._run(cmd.left, stdin, buffer)
            self._run(cmd.right, io.StringIO(buffer.getvalue()), stdout)
            return 0
        if isinstance(cmd, BackCmd):
            self._run(cmd.cmd, stdin, stdout)
            return 0
        raise TypeError(f"runcmd: unknown command {cmd!r}")

    def _run_exec(self, cmd: ExecCmd, stdin: TextIO, stdout: TextIO) -> int:
        if not cmd.argv:
            return 1
        name = cmd.argv[0]
        if name == "!":
            stdout.write(render_bang(cmd.argv[1:]))
            return 0
        func = self.commands.get(name)
        if func is None:
            self.stderr.write(f"exec {name} failed\n")
            return 0
        status = func(list(cmd.argv), stdin, stdout, self.stderr)
        return int(status or 0)

    def _run_redir(self, cmd: RedirCmd, stdin: TextIO, stdout: TextIO) -> int:
        try:
            fd = os.open(cmd.file, _os_flags(cmd.mode), 0o666)
        except OSError:
            self.stderr.write(f"open {cmd.file} failed\n")
            return 1
        mode = "r" if cmd.fd == 0 else "w"
        with os.fdopen(fd, mode, encoding="utf-8", newline="") as f:
            if cmd.fd == 0:
                return self._run(cmd.cmd, f, stdout)
            return self._run(cmd.cmd, stdin, f)


def main(argv: list[str] | None = None) -> int:
    """Run the interactive shell on the standard streams."""
    return Shell().loop()


if __name__ == "__main__":
    sys.exit(main())