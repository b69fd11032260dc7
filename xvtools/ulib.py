"""Small C-string helpers and the open() mode flags."""

O_RDONLY = 0x000
O_WRONLY = 0x001
O_RDWR = 0x002
O_CREATE = 0x200
O_TRUNC = 0x400


def _cstr(s):
    if isinstance(s, str):
        s = s.encode("utf-8")
    return bytes(s).split(b"\0", 1)[0]


def atoi(s):
    """Convert the leading decimal digits of ``s`` to an int; 0 if there are none."""
    n = 0
    for c in _cstr(s):
        if not 0x30 <= c <= 0x39:
            break
        n = n * 10 + (c - 0x30)
    return n


def strcmp(p, q):
    """Compare two strings byte-wise, returning the difference at the first mismatch."""
    for a, b in zip(_cstr(p) + b"\0", _cstr(q) + b"\0"):
        if a != b:
            return a - b
    return 0


def gets(stream, max):
    """Read one line of at most ``max - 1`` characters, keeping the newline or CR."""
    parts = []
    empty = b""
    while len(parts) + 1 < max:
        c = stream.read(1)
        if not c:
            empty = c
            break
        parts.append(c)
        if c in ("\n", "\r", b"\n", b"\r"):
            break
    if parts:
        return parts[0][:0].join(parts)
    return empty[:0] if empty is not None else b""