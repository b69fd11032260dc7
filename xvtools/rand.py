"""The Park-Miller minimal standard pseudo-random generator."""

_MODULUS = 0x7FFFFFFF
_UINT64 = (1 << 64) - 1


def do_rand(ctx):
    """Advance state ``ctx`` and return the new state, which is also the result.

    Results lie in ``[0, 0x7ffffffd]``.
    """
    x = ((ctx & _UINT64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += _MODULUS
    return x - 1


class ParkMiller:
    """A generator holding its own state."""

    def __init__(self, seed=1):
        self.state = seed & _UINT64

    def next(self):
        """Return the next value in the sequence."""
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self):
        return self

    def __next__(self):
        return self.next()