import dataclasses

import pytest

from xv6utils import params
from xv6utils.params import (
    FileType,
    OpenFlag,
    Stat,
    kstack,
    make_satp,
    pa2pte,
    pg_round_down,
    pg_round_up,
    plic_sclaim,
    plic_senable,
    plic_spriority,
    pte2pa,
    pte_flags,
    px,
)


def test_kernel_stacks_fit_for_every_process():
    assert params.LOGSIZE == params.MAXOPBLOCKS * 3
    assert params.NBUF == params.MAXOPBLOCKS * 3
    lowest = kstack(params.NPROC - 1)
    assert lowest > 0
    assert pg_round_down(lowest) == lowest
    assert kstack(0) == params.TRAMPOLINE - 2 * params.PGSIZE


def test_open_flags():
    assert OpenFlag(0) is OpenFlag.RDONLY
    combined = OpenFlag(0x601)
    assert combined == OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC
    assert OpenFlag.CREATE in combined
    assert OpenFlag.RDWR not in combined


def test_file_types():
    assert FileType(1) is FileType.DIR
    assert FileType(3) is FileType.DEVICE


def test_stat_is_frozen():
    st = Stat(dev=1, ino=2, type=FileType.FILE, nlink=1, size=0)
    assert st == Stat(1, 2, FileType.FILE, 1, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        st.size = 5


@pytest.mark.parametrize("n", [0, 1, 4095, 4096, 4097, 123456])
def test_page_rounding(n):
    up = pg_round_up(n)
    down = pg_round_down(n)
    assert up % params.PGSIZE == 0
    assert down % params.PGSIZE == 0
    assert down <= n <= up
    assert up - down in (0, params.PGSIZE)


def test_page_rounding_edges():
    assert pg_round_up(0) == 0
    assert pg_round_up(1) == params.PGSIZE
    assert pg_round_down(params.PGSIZE + 1) == params.PGSIZE


def test_pte_round_trip():
    pte = pa2pte(params.KERNBASE) | params.PTE_V | params.PTE_R
    assert pte2pa(pte) == params.KERNBASE
    assert pte_flags(pte) == params.PTE_V | params.PTE_R


@pytest.mark.parametrize("va", [0, 0x3FFFFFE000, 0x12345678, params.MAXVA - 1])
def test_px_reconstructs_address(va):
    rebuilt = (
        (px(2, va) << 30) | (px(1, va) << 21) | (px(0, va) << 12) | (va & 0xFFF)
    )
    assert rebuilt == va
    assert all(0 <= px(level, va) <= params.PXMASK for level in range(3))


def test_maxva():
    assert params.MAXVA == 1 << 38
    assert px(2, params.MAXVA - 1) == 0xFF
    assert pg_round_down(params.MAXVA - 1) == params.TRAMPOLINE


def test_satp():
    satp = make_satp(params.KERNBASE)
    assert satp >> 60 == 8
    assert satp & ((1 << 44) - 1) == params.KERNBASE >> params.PGSHIFT


def test_layout():
    assert params.PHYSTOP - params.KERNBASE == 128 * 1024 * 1024
    assert params.TRAPFRAME == params.TRAMPOLINE - params.PGSIZE
    assert params.TRAMPOLINE + params.PGSIZE == params.MAXVA
    for p in range(3):
        assert kstack(p) - kstack(p + 1) == 2 * params.PGSIZE
    assert kstack(0) < params.TRAPFRAME


def test_plic_registers():
    for hart in range(params.NCPU):
        assert plic_sclaim(hart) - plic_spriority(hart) == 4
        assert plic_senable(hart + 1) - plic_senable(hart) == 0x100
    assert plic_senable(0) > params.PLIC_PENDING