import io
import os
import sys

import pytest

from xv6utils.params import OpenFlag
from xv6utils.sh import (
    PROMPT,
    BackCmd,
    ExecCmd,
    ListCmd,
    PipeCmd,
    RedirCmd,
    Shell,
    ShellSyntaxError,
    main,
    parse_cmd,
    render_bang,
)


def say(argv, stdin, stdout, stderr):
    stdout.write(" ".join(argv[1:]) + "\n")
    return 0


def upper(argv, stdin, stdout, stderr):
    stdout.write(stdin.read().upper())
    return 0


def fail(argv, stdin, stdout, stderr):
    return 3


def make_shell(text=""):
    return Shell(
        {"say": say, "upper": upper, "fail": fail},
        io.StringIO(text),
        io.StringIO(),
        io.StringIO(),
    )


def test_parse_simple_exec():
    assert parse_cmd("echo hi there\n") == ExecCmd(["echo", "hi", "there"])


def test_parse_pipe_is_right_nested():
    assert parse_cmd("a | b | c") == PipeCmd(
        ExecCmd(["a"]), PipeCmd(ExecCmd(["b"]), ExecCmd(["c"]))
    )


def test_parse_list_and_back():
    assert parse_cmd("a ; b ; c") == ListCmd(
        ExecCmd(["a"]), ListCmd(ExecCmd(["b"]), ExecCmd(["c"]))
    )
    assert parse_cmd("a &") == BackCmd(ExecCmd(["a"]))


def test_parse_redirections():
    cmd = parse_cmd("cat < in > out")
    assert cmd == RedirCmd(
        RedirCmd(ExecCmd(["cat"]), "in", OpenFlag.RDONLY, 0),
        "out",
        OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC,
        1,
    )
    assert parse_cmd("x >> f") == RedirCmd(
        ExecCmd(["x"]), "f", OpenFlag.WRONLY | OpenFlag.CREATE, 1
    )


def test_parse_block_with_redirection():
    assert parse_cmd("(a ; b) > f") == RedirCmd(
        ListCmd(ExecCmd(["a"]), ExecCmd(["b"])),
        "f",
        OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC,
        1,
    )


@pytest.mark.parametrize(
    "line, message",
    [
        ("a >", "missing file for redirection"),
        ("(a", "syntax - missing \\)"),
        ("a (", "syntax"),
        ("a b c d e f g h i j", "too many args"),
    ],
)
def test_parse_errors(line, message):
    with pytest.raises(ShellSyntaxError, match=message):
        parse_cmd(line)


def test_parse_leftovers():
    with pytest.raises(ShellSyntaxError) as info:
        parse_cmd("a & b\n")
    assert info.value.leftovers == "b\n"


def test_nine_args_allowed():
    assert parse_cmd("a b c d e f g h i").argv == list("abcdefghi")


def test_render_bang():
    assert render_bang(["hello", "world"]) == "hello world\n"
    assert render_bang(["my", "os"]) == "my \033[34mos\033[0m\n"
    assert render_bang([]) == ""
    assert render_bang(["x" * 600]) == "\n"


def test_loop_runs_commands_and_prompts():
    shell = make_shell("say a b\nsay c\n")
    assert shell.loop() == 0
    assert shell.stdout.getvalue() == "a b\nc\n"
    assert shell.stderr.getvalue().count(PROMPT) == 3


def test_unknown_command():
    shell = make_shell()
    assert shell.run(parse_cmd("nope x")) == 0
    assert shell.stderr.getvalue() == "exec nope failed\n"


def test_empty_exec_and_list_status():
    shell = make_shell()
    assert shell.run(ExecCmd([])) == 1
    assert shell.run(parse_cmd("say ; fail")) == 3
    assert shell.run(parse_cmd("fail ; say")) == 0


def test_pipe_in_process():
    shell = make_shell()
    shell.run(parse_cmd("say hello | upper"))
    assert shell.stdout.getvalue() == "HELLO\n"


def test_bang_through_shell():
    shell = make_shell()
    shell.run(parse_cmd("! so cool"))
    assert shell.stdout.getvalue() == render_bang(["so", "cool"])


def test_redirect_output_and_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = make_shell()
    assert shell.run(parse_cmd("say abc > out")) == 0
    assert (tmp_path / "out").read_text() == "abc\n"
    shell.run(parse_cmd("upper < out"))
    assert shell.stdout.getvalue() == "ABC\n"


def test_append_overwrites_without_truncating(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "f").write_text("abcdef")
    shell = make_shell()
    assert shell.run(parse_cmd("say xy >> f")) == 0
    assert shell.stdout.getvalue() == ""
    assert (tmp_path / "f").read_text() == "xy\ndef"


def test_innermost_redirection_wins(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = make_shell()
    assert shell.run(parse_cmd("say hi > a > b")) == 0
    assert shell.stdout.getvalue() == ""
    assert (tmp_path / "a").read_text() == "hi\n"
    assert (tmp_path / "b").read_text() == ""


def test_open_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = make_shell()
    assert shell.run(parse_cmd("upper < missing")) == 1
    assert shell.stderr.getvalue() == "open missing failed\n"


def test_cd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    shell = make_shell("cd sub\ncd missing\n")
    shell.loop()
    assert os.path.samefile(os.getcwd(), tmp_path / "sub")
    assert "cannot cd missing\n" in shell.stderr.getvalue()


def test_default_commands_pipeline():
    shell = Shell(None, io.StringIO(), io.StringIO(), io.StringIO())
    shell.run(parse_cmd("echo foo bar | grep bar"))
    assert shell.stdout.getvalue() == "foo bar\n"


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("echo hi\n"))
    assert main([]) == 0
    captured = capsys.readouterr()
    assert captured.out == "hi\n"
    assert PROMPT in captured.err