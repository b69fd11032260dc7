"""Small file and process utilities: cat, echo, ls, mkdir, rm, ln, kill, helloworld."""

import os
import signal
import stat
import sys
from enum import IntEnum

from xvtools.printf import format as _format
from xvtools.ulib import atoi

DIRSIZ = 14
_LS_BUF = 512
_CHUNK = 512


class FileType(IntEnum):
    """Kinds of file reported by ls."""

    DIR = 1
    FILE = 2
    DEVICE = 3


def _args(argv):
    return sys.argv[1:] if argv is None else list(argv)


def fmtname(path):
    """Last path component, blank-padded to the directory entry width."""
    name = path.rsplit("/", 1)[-1]
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _cat(src, out):
    while True:
        try:
            chunk = src.read(_CHUNK)
        except OSError:
            sys.stderr.write("cat: read error\n")
            return False
        if not chunk:
            return True
        try:
            out.write(chunk)
        except OSError:
            sys.stderr.write("cat: write error\n")
            return False


def cat_main(argv=None):
    """Copy files, or standard input, to standard output."""
    args = _args(argv)
    sys.stdout.flush()
    out = sys.stdout.buffer
    try:
        if not args:
            return 0 if _cat(sys.stdin.buffer, out) else 1
        for path in args:
            try:
                f = open(path, "rb")
            except OSError:
                sys.stderr.write(f"cat: cannot open {path}\n")
                return 1
            with f:
                if not _cat(f, out):
                    return 1
        return 0
    finally:
        out.flush()


def echo_main(argv=None):
    """Write the arguments separated by spaces and ended by a newline."""
    args = _args(argv)
    if args:
        sys.stdout.write(" ".join(args) + "\n")
    return 0


def _file_type(st):
    if stat.S_ISDIR(st.st_mode):
        return FileType.DIR
    if stat.S_ISREG(st.st_mode):
        return FileType.FILE
    return FileType.DEVICE


def _ls(path):
    try:
        st = os.stat(path)
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    kind = _file_type(st)
    if kind is not FileType.DIR:
        sys.stdout.write(_format("%s %d %d %l\n", fmtname(path), kind, st.st_ino, st.st_size))
        return
    if len(path) + 1 + DIRSIZ + 1 > _LS_BUF:
        sys.stdout.write("ls: path too long\n")
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        sys.stderr.write(f"ls: cannot open {path}\n")
        return
    for name in [".", "..", *names]:
        full = f"{path}/{name[:DIRSIZ]}"
        try:
            est = os.stat(full)
        except OSError:
            sys.stdout.write(f"ls: cannot stat {full}\n")
            continue
        sys.stdout.write(
            _format("%s %d %d %d\n", fmtname(full), _file_type(est), est.st_ino, est.st_size)
        )


def ls_main(argv=None):
    """List files and directories; the current directory when none is given."""
    args = _args(argv)
    for path in args or ["."]:
        _ls(path)
    return 0


def mkdir_main(argv=None):
    """Create directories, stopping at the first failure."""
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


def _unlink(path):
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.unlink(path)


def rm_main(argv=None):
    """Remove files or empty directories, stopping at the first failure."""
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


def ln_main(argv=None):
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


def kill_main(argv=None):
    """Kill the processes whose ids are given."""
    args = _args(argv)
    if not args:
        sys.stderr.write("usage: kill pid...\n")
        return 1
    sig = getattr(signal, "SIGKILL", signal.SIGTERM)
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            continue
        try:
            os.kill(pid, sig)
        except (OSError, OverflowError):
            pass
    return 0


def helloworld_main(argv=None):
    """Print a greeting."""
    sys.stdout.write("Hello World xv6\n")
    return 0