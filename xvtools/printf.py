"""Minimal formatted output understanding %d, %l, %x, %p, %s, %c and %%."""

import sys

_MASK32 = 0xFFFFFFFF


def _int32(value):
    value = int(value) & _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _next(args):
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _char(value):
    if isinstance(value, (str, bytes)):
        value = value[0] if isinstance(value, bytes) else ord(value[0])
    return chr(int(value) & 0xFF)


def _string(value):
    if value is None:
        return "(null)"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).split(b"\0", 1)[0].decode("latin-1")
    return str(value)


def format(fmt, *args):
    """Render ``fmt`` with ``args`` the way the user-space printf does."""
    values = iter(args)
    out = []
    chars = iter(fmt)
    for c in chars:
        if c != "%":
            out.append(c)
            continue
        spec = next(chars, None)
        if spec is None:
            break
        if spec == "d":
            out.append(str(_int32(_next(values))))
        elif spec == "l":
            # The value travels through a 32-bit int on its way to the printer.
            out.append(str(int(_next(values)) & _MASK32))
        elif spec == "x":
            out.append(f"{int(_next(values)) & _MASK32:X}")
        elif spec == "p":
            out.append(f"0x{int(_next(values)) & ((1 << 64) - 1):016X}")
        elif spec == "s":
            out.append(_string(_next(values)))
        elif spec == "c":
            out.append(_char(_next(values)))
        elif spec == "%":
            out.append("%")
        else:
            out.append("%" + spec)
    return "".join(out)


def fprintf(stream, fmt, *args):
    """Write formatted output to ``stream``."""
    stream.write(format(fmt, *args))


def printf(fmt, *args):
    """Write formatted output to standard output."""
    fprintf(sys.stdout, fmt, *args)