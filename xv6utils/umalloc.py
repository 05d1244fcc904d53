"""First-fit free-list memory allocator over a simulated, growable heap."""

from __future__ import annotations

HEADER_SIZE = 16  # bytes per block header, and the allocation unit
MIN_CORE_UNITS = 4096  # fewest units requested from sbrk at a time

_BASE = -HEADER_SIZE  # address of the zero-sized sentinel block, below the heap


class Allocator:
    """Allocator that carves blocks out of a heap grown with ``sbrk``.

    Addresses are byte offsets into the simulated heap, which starts at 0.
    Free blocks are kept on a circular list ordered by address and are
    coalesced with their neighbours when released.
    """

    def __init__(self, limit: int = 1 << 24) -> None:
        if limit < 0:
            raise ValueError("limit must not be negative")
        self._limit = limit
        self._brk = 0
        self._next: dict[int, int] = {}
        self._size: dict[int, int] = {}  # in header units
        self._freep: int | None = None
        self._live: set[int] = set()

    def sbrk(self, n: int) -> int:
        """Move the break by ``n`` bytes and return its previous value."""
        new = self._brk + n
        if new < 0 or new > self._limit:
            raise MemoryError(f"cannot move break to {new}")
        old, self._brk = self._brk, new
        return old

    def malloc(self, nbytes: int) -> int:
        """Allocate ``nbytes`` and return the address of the block."""
        if nbytes < 0:
            raise ValueError("size must not be negative")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._next[_BASE] = _BASE
            self._size[_BASE] = 0
            self._freep = _BASE
        prevp = self._freep
        p = self._next[prevp]
        while True:
            size = self._size[p]
            if size >= nunits:
                if size == nunits:
                    self._next[prevp] = self._next.pop(p)
                else:
                    self._size[p] = size - nunits
                    p += self._size[p] * HEADER_SIZE
                    self._size[p] = nunits
                self._freep = prevp
                addr = p + HEADER_SIZE
                self._live.add(addr)
                return addr
            if p == self._freep:
                grown = self._morecore(nunits)
                if grown is None:
                    raise MemoryError(f"cannot allocate {nbytes} bytes")
                p = grown
            prevp, p = p, self._next[p]

    def free(self, addr: int) -> None:
        """Release a block returned by :meth:`malloc`."""
        if addr not in self._live:
            raise ValueError(f"address {addr} is not an allocated block")
        self._live.remove(addr)
        self._release(addr - HEADER_SIZE)

    def free_blocks(self) -> list[tuple[int, int]]:
        """Return ``(header address, size in bytes)`` of each free block, by address."""
        if self._freep is None:
            return []
        blocks = []
        p = self._next[_BASE]
        while p != _BASE:
            blocks.append((p, self._size[p] * HEADER_SIZE))
            p = self._next[p]
        return blocks

    def _morecore(self, nunits: int) -> int | None:
        nunits = max(nunits, MIN_CORE_UNITS)
        try:
            hp = self.sbrk(nunits * HEADER_SIZE)
        except MemoryError:
            return None
        self._size[hp] = nunits
        self._release(hp)
        return self._freep

    def _release(self, bp: int) -> None:
        assert self._freep is not None
        p = self._freep
        while not (p < bp < self._next[p]):
            nxt = self._next[p]
            if p >= nxt and (bp > p or bp < nxt):
                break  # freed block at the start or end of the arena
            p = nxt
        q = self._next[p]
        if bp + self._size[bp] * HEADER_SIZE == q:
            self._size[bp] += self._size.pop(q)
            self._next[bp] = self._next.pop(q)
        else:
            self._next[bp] = q
        if p + self._size[p] * HEADER_SIZE == bp:
            self._size[p] += self._size.pop(bp)
            self._next[p] = self._next.pop(bp)
        else:
            self._next[p] = bp
        self._freep = p