import os

from xvtools.tools import (
    DIRSIZ,
    FileType,
    cat_main,
    echo_main,
    fmtname,
    helloworld_main,
    kill_main,
    ln_main,
    ls_main,
    mkdir_main,
    rm_main,
)


def test_fmtname_pads_short_names():
    name = fmtname("a/b/cat")
    assert len(name) == DIRSIZ
    assert name.rstrip() == "cat"


def test_fmtname_keeps_long_names():
    long_name = "x" * (DIRSIZ + 3)
    assert fmtname("dir/" + long_name) == long_name


def test_echo(capsys):
    assert echo_main(["hello", "world"]) == 0
    assert capsys.readouterr().out == "hello world\n"


def test_echo_without_arguments(capsys):
    assert echo_main([]) == 0
    assert capsys.readouterr().out == ""


def test_helloworld(capsys):
    assert helloworld_main([]) == 0
    assert capsys.readouterr().out == "Hello World xv6\n"


def test_cat_concatenates(tmp_path, capsysbinary):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"first\n" * 200)
    b.write_bytes(b"second\n")
    assert cat_main([str(a), str(b)]) == 0
    assert capsysbinary.readouterr().out == a.read_bytes() + b.read_bytes()


def test_cat_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert cat_main([missing]) == 1
    assert capsys.readouterr().err == f"cat: cannot open {missing}\n"


def test_mkdir_and_rm(tmp_path, capsys):
    d = tmp_path / "d"
    assert mkdir_main([str(d)]) == 0
    assert d.is_dir()
    assert rm_main([str(d)]) == 0
    assert not d.exists()


def test_mkdir_usage(capsys):
    assert mkdir_main([]) == 1
    assert capsys.readouterr().err == "Usage: mkdir files...\n"


def test_mkdir_stops_at_first_failure(tmp_path, capsys):
    existing = tmp_path / "e"
    existing.mkdir()
    later = tmp_path / "later"
    assert mkdir_main([str(existing), str(later)]) == 0
    assert capsys.readouterr().err == f"mkdir: {existing} failed to create\n"
    assert not later.exists()


def test_rm_stops_at_first_failure(tmp_path, capsys):
    missing = tmp_path / "missing"
    keep = tmp_path / "keep"
    keep.write_text("x")
    assert rm_main([str(missing), str(keep)]) == 0
    assert capsys.readouterr().err == f"rm: {missing} failed to delete\n"
    assert keep.exists()


def test_rm_usage(capsys):
    assert rm_main([]) == 1
    assert capsys.readouterr().err == "Usage: rm files...\n"


def test_ln_creates_hard_link(tmp_path):
    old = tmp_path / "old"
    old.write_text("data")
    new = tmp_path / "new"
    assert ln_main([str(old), str(new)]) == 0
    assert os.path.samefile(old, new)


def test_ln_failure_and_usage(tmp_path, capsys):
    old = str(tmp_path / "nope")
    new = str(tmp_path / "new")
    assert ln_main([old, new]) == 0
    assert capsys.readouterr().err == f"link {old} {new}: failed\n"
    assert ln_main([old]) == 1
    assert capsys.readouterr().err == "Usage: ln old new\n"


def test_kill_usage(capsys):
    assert kill_main([]) == 1
    assert capsys.readouterr().err == "usage: kill pid...\n"


def test_kill_skips_non_numeric(capsys):
    assert kill_main(["abc"]) == 0
    assert capsys.readouterr().err == ""


def test_ls_file(tmp_path, capsys):
    f = tmp_path / "hello.txt"
    f.write_bytes(b"abc")
    assert ls_main([str(f)]) == 0
    fields = capsys.readouterr().out.split()
    assert fields[0] == "hello.txt"
    assert int(fields[1]) == FileType.FILE
    assert int(fields[3]) == 3


def test_ls_directory(tmp_path, capsys):
    (tmp_path / "one").write_bytes(b"1")
    (tmp_path / "sub").mkdir()
    assert ls_main([str(tmp_path)]) == 0
    rows = {line.split()[0]: line.split() for line in capsys.readouterr().out.splitlines()}
    assert set(rows) == {".", "..", "one", "sub"}
    assert int(rows["sub"][1]) == FileType.DIR
    assert int(rows["one"][1]) == FileType.FILE


def test_ls_missing(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert ls_main([missing]) == 0
    assert capsys.readouterr().err == f"ls: cannot open {missing}\n"