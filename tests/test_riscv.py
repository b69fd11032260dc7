import pytest

from xvtools import riscv


def test_round_up_values():
    assert riscv.pg_round_up(0) == 0
    assert riscv.pg_round_up(1) == riscv.PGSIZE
    assert riscv.pg_round_up(riscv.PGSIZE) == riscv.PGSIZE
    assert riscv.pg_round_up(riscv.PGSIZE + 1) == 2 * riscv.PGSIZE


@pytest.mark.parametrize("a", [0, 1, 4095, 4096, 12345, 0x80001FFF])
def test_round_down_is_aligned_and_close(a):
    down = riscv.pg_round_down(a)
    assert down % riscv.PGSIZE == 0
    assert down <= a < down + riscv.PGSIZE


@pytest.mark.parametrize("a", [0, 1, 4095, 4096, 12345, 0x80001FFF])
def test_round_up_is_aligned_and_close(a):
    up = riscv.pg_round_up(a)
    assert up % riscv.PGSIZE == 0
    assert up - riscv.PGSIZE < a <= up or (a == 0 and up == 0)


@pytest.mark.parametrize("pa", [0x80000000, 0x80001000, 0x87FFF000, 0x10000000])
def test_pte_round_trip(pa):
    pte = riscv.pa2pte(pa) | riscv.PTE_R | riscv.PTE_V
    assert riscv.pte2pa(pte) == pa
    assert riscv.pte_flags(pte) == riscv.PTE_R | riscv.PTE_V


@pytest.mark.parametrize("va", [0, 0x1234, 0x3FFFFFF000, riscv.MAXVA - 1, 0x12345678])
def test_px_indices_rebuild_address(va):
    rebuilt = va & (riscv.PGSIZE - 1)
    for level in range(3):
        index = riscv.px(level, va)
        assert 0 <= index <= riscv.PXMASK
        rebuilt |= index << (riscv.PGSHIFT + 9 * level)
    assert rebuilt == va


def test_maxva_and_trampoline():
    assert riscv.MAXVA == 1 << 38
    assert riscv.pg_round_down(riscv.MAXVA - 1) == riscv.TRAMPOLINE
    assert riscv.pg_round_down(riscv.TRAMPOLINE - 1) == riscv.TRAPFRAME
    assert riscv.px(2, riscv.MAXVA - 1) == 255
    assert riscv.px(0, riscv.TRAMPOLINE) == riscv.PXMASK


def test_make_satp():
    satp = riscv.make_satp(riscv.KERNBASE)
    assert satp >> 60 == 8
    assert satp & ((1 << 44) - 1) == riscv.KERNBASE >> 12


def test_kstacks_are_separated_by_guard_pages():
    assert riscv.kstack(0) < riscv.TRAMPOLINE
    for p in range(5):
        assert riscv.kstack(p) - riscv.kstack(p + 1) == 2 * riscv.PGSIZE
        assert riscv.kstack(p) % riscv.PGSIZE == 0


def test_device_registers():
    assert riscv.clint_mtimecmp(0) == riscv.CLINT + 0x4000
    assert riscv.clint_mtimecmp(1) - riscv.clint_mtimecmp(0) == 8
    assert riscv.plic_senable(0) == riscv.PLIC + 0x2080
    assert riscv.plic_spriority(0) == riscv.PLIC + 0x201000
    assert riscv.plic_sclaim(1) - riscv.plic_spriority(1) == 4