"""System parameters, open flags, file types, memory layout and paging helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

UINT64_MASK = (1 << 64) - 1

# Limits.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 2000
MAXPATH = 128
USERSTACK = 1
NTHREAD = 4


class OpenFlag(enum.IntFlag):
    """Flags accepted by ``open``."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


class FileType(enum.IntEnum):
    """Kinds of inode."""

    DIR = 1
    FILE = 2
    DEVICE = 3


@dataclass(frozen=True)
class Stat:
    """File status as reported by ``fstat``."""

    dev: int
    ino: int
    type: FileType
    nlink: int
    size: int


# Machine status register.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1

MIE_STIE = 1 << 5

SATP_SV39 = 8 << 60

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

MAXVA = 1 << (9 + 9 + 9 + 12 - 1)


def make_satp(pagetable: int) -> int:
    """Return the satp value selecting Sv39 paging with the given root table."""
    return (SATP_SV39 | ((pagetable & UINT64_MASK) >> 12)) & UINT64_MASK


def pg_round_up(sz: int) -> int:
    """Round ``sz`` up to a page boundary."""
    return ((sz + PGSIZE - 1) & ~(PGSIZE - 1)) & UINT64_MASK


def pg_round_down(a: int) -> int:
    """Round ``a`` down to a page boundary."""
    return (a & ~(PGSIZE - 1)) & UINT64_MASK


def pa2pte(pa: int) -> int:
    """Shift a physical address into page-table-entry position."""
    return (((pa & UINT64_MASK) >> 12) << 10) & UINT64_MASK


def pte2pa(pte: int) -> int:
    """Extract the physical address held in a page table entry."""
    return (((pte & UINT64_MASK) >> 10) << 12) & UINT64_MASK


def pte_flags(pte: int) -> int:
    """Return the flag bits of a page table entry."""
    return pte & 0x3FF


def _pxshift(level: int) -> int:
    return PGSHIFT + 9 * level


def px(level: int, va: int) -> int:
    """Return the 9-bit page table index of ``va`` at ``level``."""
    return ((va & UINT64_MASK) >> _pxshift(level)) & PXMASK


# Physical memory layout.
UART0 = 0x10000000
UART0_IRQ = 10
VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1

PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000


def plic_senable(hart: int) -> int:
    """Supervisor interrupt-enable register of a hart."""
    return PLIC + 0x2080 + hart * 0x100


def plic_spriority(hart: int) -> int:
    """Supervisor priority-threshold register of a hart."""
    return PLIC + 0x201000 + hart * 0x2000


def plic_sclaim(hart: int) -> int:
    """Supervisor claim/complete register of a hart."""
    return PLIC + 0x201004 + hart * 0x2000


KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE


def kstack(p: int) -> int:
    """Virtual address of the kernel stack of process slot ``p``."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE