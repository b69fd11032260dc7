"""Count lines, words and characters."""

import sys

_SPACE = frozenset(" \r\t\n\v") | frozenset(b" \r\t\n\v")
_NEWLINE = ("\n", 0x0A)
_CHUNK = 512


def _tally(chunks):
    lines = words = chars = 0
    inword = False
    for chunk in chunks:
        for c in chunk:
            chars += 1
            if c in _NEWLINE:
                lines += 1
            if c in _SPACE:
                inword = False
            elif not inword:
                words += 1
                inword = True
    return lines, words, chars


def count(data):
    """Return ``(lines, words, chars)`` for ``data``."""
    return _tally([data])


def _chunks(stream):
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            return
        yield chunk


def wc(stream, name, out):
    """Count ``stream``, write the report line to ``out`` and return the counts."""
    counts = _tally(_chunks(stream))
    lines, words, chars = counts
    out.write(f"{lines} {words} {chars} {name}\n")
    return counts


def main(argv=None):
    """Run wc over files or standard input; returns the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        if not argv:
            wc(sys.stdin.buffer, "", sys.stdout)
            return 0
        for path in argv:
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