"""Simulated physical memory and Sv39 page tables for user address spaces."""

import struct
from dataclasses import dataclass

from xvtools.riscv import (
    KERNBASE,
    MAXVA,
    PGSIZE,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    pa2pte,
    pg_round_down,
    pg_round_up,
    pte2pa,
    pte_flags,
    px,
)

_PTE = struct.Struct("<Q")
_PTES_PER_PAGE = PGSIZE // _PTE.size
_UINT64 = (1 << 64) - 1


class VmPanic(RuntimeError):
    """An invariant of the virtual memory system was broken."""


class PhysicalMemory:
    """A range of page-sized physical frames with a free list."""

    def __init__(self, npages=1024, base=KERNBASE):
        if base % PGSIZE:
            raise ValueError("base must be page-aligned")
        self.base = base
        self.npages = npages
        self._data = bytearray(npages * PGSIZE)
        self._free = [base + i * PGSIZE for i in reversed(range(npages))]
        self._allocated = set()

    @property
    def free_pages(self):
        """Number of frames currently on the free list."""
        return len(self._free)

    def kalloc(self):
        """Take a frame from the free list and return its physical address."""
        if not self._free:
            raise MemoryError("out of physical memory")
        pa = self._free.pop()
        self._allocated.add(pa)
        return pa

    def kfree(self, pa):
        """Return an allocated frame to the free list."""
        if pa % PGSIZE or pa not in self._allocated:
            raise VmPanic("kfree")
        self._allocated.remove(pa)
        self._free.append(pa)

    def _offset(self, pa, n):
        off = pa - self.base
        if off < 0 or off + n > len(self._data):
            raise ValueError(f"physical address {pa:#x} out of range")
        return off

    def read(self, pa, n):
        """Read ``n`` bytes starting at physical address ``pa``."""
        off = self._offset(pa, n)
        return bytes(self._data[off:off + n])

    def write(self, pa, data):
        """Write ``data`` starting at physical address ``pa``."""
        off = self._offset(pa, len(data))
        self._data[off:off + len(data)] = data

    def read_pte(self, pa, index):
        """Read entry ``index`` of the page-table page at ``pa``."""
        (value,) = _PTE.unpack(self.read(pa + index * _PTE.size, _PTE.size))
        return value

    def write_pte(self, pa, index, value):
        """Store ``value`` in entry ``index`` of the page-table page at ``pa``."""
        self.write(pa + index * _PTE.size, _PTE.pack(value & _UINT64))

    def _zero(self, pa):
        self.write(pa, bytes(PGSIZE))


@dataclass
class PageTable:
    """A three-level Sv39 page table rooted in a frame of ``mem``."""

    mem: PhysicalMemory
    root: int

    @classmethod
    def create(cls, mem):
        """Allocate an empty page table."""
        root = mem.kalloc()
        mem._zero(root)
        return cls(mem, root)

    def _get(self, slot):
        table, index = slot
        return self.mem.read_pte(table, index)

    def _set(self, slot, value):
        table, index = slot
        self.mem.write_pte(table, index, value)

    def walk(self, va, alloc):
        """Find the leaf PTE slot for ``va`` as ``(table_pa, index)``.

        Missing intermediate tables are created when ``alloc`` is true;
        otherwise, or when memory runs out, ``None`` is returned.
        """
        if va >= MAXVA:
            raise VmPanic("walk")
        table = self.root
        for level in (2, 1):
            index = px(level, va)
            pte = self.mem.read_pte(table, index)
            if pte & PTE_V:
                table = pte2pa(pte)
                continue
            if not alloc:
                return None
            try:
                child = self.mem.kalloc()
            except MemoryError:
                return None
            self.mem._zero(child)
            self.mem.write_pte(table, index, pa2pte(child) | PTE_V)
            table = child
        return table, px(0, va)

    def walkaddr(self, va):
        """Physical address of the user page holding ``va``, or ``None``."""
        if va >= MAXVA:
            return None
        slot = self.walk(va, False)
        if slot is None:
            return None
        pte = self._get(slot)
        if not pte & PTE_V or not pte & PTE_U:
            return None
        return pte2pa(pte)

    def map_pages(self, va, size, pa, perm):
        """Map ``size`` bytes at ``va`` to physical memory starting at ``pa``."""
        if size == 0:
            raise VmPanic("mappages: size")
        a = pg_round_down(va)
        last = pg_round_down(va + size - 1)
        while True:
            slot = self.walk(a, True)
            if slot is None:
                raise MemoryError("no memory for page-table page")
            if self._get(slot) & PTE_V:
                raise VmPanic("mappages: remap")
            self._set(slot, pa2pte(pa) | perm | PTE_V)
            if a == last:
                break
            a += PGSIZE
            pa += PGSIZE

    def unmap(self, va, npages, do_free):
        """Remove ``npages`` existing mappings from the page-aligned ``va``."""
        if va % PGSIZE:
            raise VmPanic("uvmunmap: not aligned")
        for a in range(va, va + npages * PGSIZE, PGSIZE):
            slot = self.walk(a, False)
            if slot is None:
                raise VmPanic("uvmunmap: walk")
            pte = self._get(slot)
            if not pte & PTE_V:
                raise VmPanic("uvmunmap: not mapped")
            if pte_flags(pte) == PTE_V:
                raise VmPanic("uvmunmap: not a leaf")
            if do_free:
                self.mem.kfree(pte2pa(pte))
            self._set(slot, 0)

    def load_first(self, src):
        """Load less than a page of code at address zero."""
        if len(src) >= PGSIZE:
            raise VmPanic("uvmfirst: more than a page")
        frame = self.mem.kalloc()
        self.mem._zero(frame)
        self.map_pages(0, PGSIZE, frame, PTE_W | PTE_R | PTE_X | PTE_U)
        self.mem.write(frame, src)

    def grow(self, oldsz, newsz, xperm):
        """Allocate zeroed user pages to grow from ``oldsz`` to ``newsz``.

        Returns the new size; on exhaustion the pages added so far are
        released and ``MemoryError`` is raised.
        """
        if newsz < oldsz:
            return oldsz
        oldsz = pg_round_up(oldsz)
        for a in range(oldsz, newsz, PGSIZE):
            try:
                frame = self.mem.kalloc()
            except MemoryError:
                self.shrink(a, oldsz)
                raise
            self.mem._zero(frame)
            try:
                self.map_pages(a, PGSIZE, frame, PTE_R | PTE_U | xperm)
            except MemoryError:
                self.mem.kfree(frame)
                self.shrink(a, oldsz)
                raise
        return newsz

    def shrink(self, oldsz, newsz):
        """Release user pages to bring the size from ``oldsz`` down to ``newsz``."""
        if newsz >= oldsz:
            return oldsz
        if pg_round_up(newsz) < pg_round_up(oldsz):
            npages = (pg_round_up(oldsz) - pg_round_up(newsz)) // PGSIZE
            self.unmap(pg_round_up(newsz), npages, True)
        return newsz

    def _freewalk(self, table):
        ptes = struct.unpack(f"<{_PTES_PER_PAGE}Q", self.mem.read(table, PGSIZE))
        for index, pte in enumerate(ptes):
            if pte & PTE_V and not pte & (PTE_R | PTE_W | PTE_X):
                self._freewalk(pte2pa(pte))
                self.mem.write_pte(table, index, 0)
            elif pte & PTE_V:
                raise VmPanic("freewalk: leaf")
        self.mem.kfree(table)

    def free(self, sz):
        """Free ``sz`` bytes of user memory, then every page-table page."""
        if sz > 0:
            self.unmap(0, pg_round_up(sz) // PGSIZE, True)
        self._freewalk(self.root)

    def copy_to(self, other, sz):
        """Copy the first ``sz`` bytes of mappings and memory into ``other``."""
        for i in range(0, sz, PGSIZE):
            slot = self.walk(i, False)
            if slot is None:
                raise VmPanic("uvmcopy: pte should exist")
            pte = self._get(slot)
            if not pte & PTE_V:
                raise VmPanic("uvmcopy: page not present")
            try:
                frame = self.mem.kalloc()
            except MemoryError:
                other.unmap(0, i // PGSIZE, True)
                raise
            self.mem.write(frame, self.mem.read(pte2pa(pte), PGSIZE))
            try:
                other.map_pages(i, PGSIZE, frame, pte_flags(pte))
            except MemoryError:
                self.mem.kfree(frame)
                other.unmap(0, i // PGSIZE, True)
                raise

    def clear_user(self, va):
        """Make the page holding ``va`` inaccessible from user mode."""
        slot = self.walk(va, False)
        if slot is None:
            raise VmPanic("uvmclear")
        self._set(slot, self._get(slot) & ~PTE_U)

    def _user_chunks(self, va, length):
        while length > 0:
            va0 = pg_round_down(va)
            pa0 = self.walkaddr(va0)
            if pa0 is None:
                raise ValueError(f"bad user address {va:#x}")
            n = min(PGSIZE - (va - va0), length)
            yield pa0 + (va - va0), n
            length -= n
            va = va0 + PGSIZE

    def copyout(self, dstva, data):
        """Copy ``data`` into user memory at ``dstva``."""
        data = bytes(data)
        done = 0
        for pa, n in self._user_chunks(dstva, len(data)):
            self.mem.write(pa, data[done:done + n])
            done += n

    def copyin(self, srcva, length):
        """Copy ``length`` bytes out of user memory at ``srcva``."""
        return b"".join(self.mem.read(pa, n) for pa, n in self._user_chunks(srcva, length))

    def copyinstr(self, srcva, max):
        """Read a NUL-terminated string of at most ``max`` bytes from user memory."""
        out = bytearray()
        for pa, n in self._user_chunks(srcva, max):
            chunk = self.mem.read(pa, n)
            end = chunk.find(b"\0")
            if end >= 0:
                out += chunk[:end]
                return bytes(out)
            out += chunk
        raise ValueError("string not terminated within limit")