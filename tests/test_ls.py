import io
import os

from xv6utils.ls import DIRSIZ, fmtname, ls, main
from xv6utils.params import FileType


def test_fmtname_pads_last_component():
    name = fmtname("a/b/name")
    assert len(name) == DIRSIZ
    assert name.rstrip(" ") == "name"


def test_fmtname_long_name_unchanged():
    long_name = "x" * 20
    assert fmtname("dir/" + long_name) == long_name


def test_fmtname_trailing_slash():
    assert fmtname("dir/") == " " * DIRSIZ


def test_fmtname_no_slash():
    assert fmtname("abc").rstrip(" ") == "abc"


def test_ls_file(tmp_path):
    path = tmp_path / "file"
    path.write_bytes(b"hello")
    out = io.StringIO()
    ls(str(path), out)
    st = os.stat(path)
    expected = f"{fmtname(str(path))} {int(FileType.FILE)} {st.st_ino} 5\n"
    assert out.getvalue() == expected


def test_ls_directory(tmp_path):
    (tmp_path / "beta").write_bytes(b"")
    (tmp_path / "alpha").mkdir()
    out = io.StringIO()
    ls(str(tmp_path), out)
    rows = [line.split() for line in out.getvalue().splitlines()]
    assert [row[0] for row in rows] == [".", "..", "alpha", "beta"]
    types = {row[0]: int(row[1]) for row in rows}
    assert types["."] == FileType.DIR
    assert types["alpha"] == FileType.DIR
    assert types["beta"] == FileType.FILE


def test_ls_missing(tmp_path, capsys):
    missing = tmp_path / "gone"
    ls(str(missing), io.StringIO())
    assert capsys.readouterr().err == f"ls: cannot open {missing}\n"


def test_ls_path_too_long(tmp_path):
    path = str(tmp_path) + "/." * 250
    out = io.StringIO()
    ls(path, out)
    assert out.getvalue() == "ls: path too long\n"


def test_main_defaults_to_current_directory(tmp_path, monkeypatch, capsys):
    (tmp_path / "only").write_bytes(b"ab")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    names = [line.split()[0] for line in capsys.readouterr().out.splitlines()]
    assert names == [".", "..", "only"]