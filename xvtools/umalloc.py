"""A first-fit free-list allocator over a growable simulated heap."""

import bisect

HEADER_SIZE = 16
_MIN_GROWTH = 4096
_BASE = -1  # the zero-sized sentinel that sits before every heap block


class OutOfMemory(MemoryError):
    """The heap could not be grown to satisfy a request."""


class Heap:
    """A heap of ``HEADER_SIZE``-byte units that grows like ``sbrk``.

    Pointers returned by :meth:`malloc` are byte addresses offset by ``start``.
    """

    def __init__(self, limit=None, start=0):
        self.limit = limit
        self.start = start
        self._brk = 0
        self._addrs = []
        self._sizes = {}
        self._used = {}
        self._freep = None

    @property
    def size(self):
        """Bytes obtained from the break so far."""
        return self._brk * HEADER_SIZE

    def free_units(self):
        """Total size of the free list in header units."""
        return sum(self._sizes.values())

    def _pointer(self, unit):
        return self.start + (unit + 1) * HEADER_SIZE

    def _unit(self, ap):
        off = ap - self.start
        if off % HEADER_SIZE:
            raise ValueError(f"pointer {ap:#x} was not returned by malloc")
        unit = off // HEADER_SIZE - 1
        if unit not in self._used:
            raise ValueError(f"pointer {ap:#x} is not allocated")
        return unit

    def _succ(self, a):
        idx = bisect.bisect_right(self._addrs, a)
        return self._addrs[idx] if idx < len(self._addrs) else _BASE

    def _pred(self, a):
        idx = bisect.bisect_left(self._addrs, a)
        return self._addrs[idx - 1] if idx else _BASE

    def _size_of(self, a):
        return 0 if a == _BASE else self._sizes[a]

    def _insert(self, a, size):
        bisect.insort(self._addrs, a)
        self._sizes[a] = size

    def _remove(self, a):
        """Take the free block at ``a`` off the list and return its size."""
        self._addrs.pop(bisect.bisect_left(self._addrs, a))
        return self._sizes.pop(a)

    def _morecore(self, nu):
        nu = max(nu, _MIN_GROWTH)
        if self.limit is not None and (self._brk + nu) * HEADER_SIZE > self.limit:
            raise OutOfMemory("heap limit reached")
        hp = self._brk
        self._brk += nu
        self._used[hp] = nu
        self.free(self._pointer(hp))
        return self._freep

    def malloc(self, nbytes):
        """Allocate ``nbytes`` bytes and return the address of the block."""
        if nbytes < 0:
            raise ValueError("negative allocation size")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._freep = _BASE
        prevp = self._freep
        p = self._succ(prevp)
        while True:
            size = self._size_of(p)
            if size >= nunits:
                if size == nunits:
                    self._remove(p)
                else:
                    self._sizes[p] = size - nunits
                    p += size - nunits
                self._used[p] = nunits
                self._freep = prevp
                return self._pointer(p)
            if p == self._freep:
                p = self._morecore(nunits)
            prevp, p = p, self._succ(p)

    def free(self, ap):
        """Return the block at ``ap`` to the free list, merging neighbours."""
        bp = self._unit(ap)
        size = self._used.pop(bp)
        p = self._pred(bp)
        nxt = self._succ(p)
        if nxt != _BASE and bp + size == nxt:
            size += self._remove(nxt)
        if p != _BASE and p + self._sizes[p] == bp:
            self._sizes[p] += size
        else:
            self._insert(bp, size)
        self._freep = p