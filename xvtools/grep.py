"""A small grep supporting only the ^ . * $ operators."""

import sys

_MAX_LINE = 1023  # bytes the line buffer can hold, newline included


def _matchhere(re, text):
    if not re:
        return True
    if len(re) > 1 and re[1] == "*":
        return _matchstar(re[0], re[2:], text)
    if re == "$":
        return not text
    if text and re[0] in (".", text[0]):
        return _matchhere(re[1:], text[1:])
    return False


def _matchstar(c, re, text):
    while True:
        if _matchhere(re, text):
            return True
        if not text or (text[0] != c and c != "."):
            return False
        text = text[1:]


def match(re, text):
    """Whether ``re`` matches anywhere in ``text``."""
    if re.startswith("^"):
        return _matchhere(re[1:], text)
    return any(_matchhere(re, text[i:]) for i in range(len(text) + 1))


def grep(pattern, stream, out):
    """Write the newline-terminated lines of ``stream`` that match ``pattern``."""
    for line in stream:
        if not line.endswith("\n") or len(line) > _MAX_LINE:
            break
        if match(pattern, line[:-1]):
            out.write(line)


def main(argv=None):
    """Run grep over files or standard input; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        sys.stderr.write("usage: grep pattern [file ...]\n")
        return 1
    pattern, *paths = argv
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