"""Tests for the counter-based generators of every revision."""

import copy

import numpy as np
import pytest

from mx3 import RandomGenerator, v1, v2, v3
from mx3.tail import MASK64

MODULES = [v1, v2, v3]


def _resume(module, state):
    """Resume a generator from a captured state for any revision."""
    if module is v3:
        return v3.Mx3Rng.resume(state)
    return module.Mx3Rng(state)


@pytest.mark.parametrize(
    "module, first, second",
    [
        (v1, 0x3E1EAD46D36D302B, 0xAAF908C732D70FA6),
        (v2, 0x071894DE00D9981F, 0xEF9D98262A1B46CB),
        (v3, 0xE8EBDBC439DF412A, 0x4D476D5425A174D9),
    ],
)
def test_next_u64_known_answers(module, first, second):
    rng = module.Mx3Rng(1)
    assert rng.next_u64() == first
    assert rng.next_u64() == second


@pytest.mark.parametrize(
    "module, first, second",
    [
        (v1, 0xD36D302B, 0x32D70FA6),
        (v2, 0x00D9981F, 0x2A1B46CB),
        (v3, 0x39DF412A, 0x25A174D9),
    ],
)
def test_next_u32_consumes_full_step(module, first, second):
    """Each next_u32 is the low half of its own 64-bit step."""
    rng = module.Mx3Rng(1)
    assert rng.next_u32() == first
    assert rng.next_u32() == second


@pytest.mark.parametrize("module", [v1, v2])
def test_v1_v2_counter_is_seed(module):
    """v1/v2 use the seed as the counter with no pre-mix."""
    rng = module.Mx3Rng(1000)
    assert rng.state() == 1000
    assert rng.next_u64() == module.mix(1000)
    assert rng.state() == 1001


def test_v3_seed_is_premixed():
    rng = v3.Mx3Rng(1)
    assert rng.state() == v3.mix(1 + v3.PARAMETER_C)
    assert v3.Mx3Rng.resume(5).state() == 5


@pytest.mark.parametrize("module", MODULES)
@pytest.mark.parametrize("advance", [0, 1, 7, 64])
@pytest.mark.parametrize("more", [0, 1, 10])
def test_state_resume_round_trip(module, advance, more):
    """Resuming from state() continues the same sequence exactly."""
    rng = module.Mx3Rng(12345)
    for _ in range(advance):
        rng.next_u64()

    resumed = _resume(module, rng.state())
    assert [resumed.next_u64() for _ in range(more)] == [rng.next_u64() for _ in range(more)]
    assert resumed.state() == rng.state()


@pytest.mark.parametrize("module", MODULES)
def test_counter_wraps(module):
    """The counter advances modulo 2^64."""
    rng = _resume(module, MASK64)
    assert rng.next_u64() == module.mix(MASK64)
    assert rng.state() == 0
    assert rng.next_u64() == module.mix(0)


@pytest.mark.parametrize("module", MODULES)
def test_clone_continues_identically(module):
    rng = module.Mx3Rng(1)
    rng.next_u64()

    for clone in (rng.copy(), copy.copy(rng), copy.deepcopy(rng)):
        assert clone is not rng
        assert clone.state() == rng.state()

    clone = rng.copy()
    assert [clone.next_u64() for _ in range(5)] == [rng.next_u64() for _ in range(5)]


@pytest.mark.parametrize("module", MODULES)
def test_repr_hides_state(module):
    rng = module.Mx3Rng(0xDEADBEEF)
    text = repr(rng)
    assert text == "Mx3Rng(...)"
    assert "deadbeef" not in text.lower()
    assert str(0xDEADBEEF) not in text


@pytest.mark.parametrize("module", MODULES)
@pytest.mark.parametrize("size", [0, 1, 4, 5, 8, 13, 16, 31])
def test_fill_bytes_little_endian_truncated(module, size):
    """fill_bytes writes LE draws and truncates the last one."""
    rng = module.Mx3Rng(3)
    reference = module.Mx3Rng(3)

    dest = bytearray(size)
    rng.fill_bytes(dest)

    expected = b"".join(
        reference.next_u64().to_bytes(8, "little") for _ in range((size + 7) // 8)
    )[:size]
    assert bytes(dest) == expected
    assert rng.state() == reference.state()


def test_fill_bytes_into_numpy_and_memoryview():
    rng = v3.Mx3Rng(9)
    expected = v3.Mx3Rng(9).random_bytes(24)

    arr = np.zeros(24, dtype=np.uint8)
    rng.fill_bytes(arr)
    assert arr.tobytes() == expected

    buf = bytearray(32)
    v3.Mx3Rng(9).fill_bytes(memoryview(buf)[4:28])
    assert bytes(buf[4:28]) == expected
    assert bytes(buf[:4]) == bytes(4) and bytes(buf[28:]) == bytes(4)


def test_fill_bytes_rejects_read_only():
    rng = v2.Mx3Rng(1)
    with pytest.raises(TypeError):
        rng.fill_bytes(b"\x00" * 8)
    with pytest.raises(TypeError):
        rng.fill_bytes(memoryview(b"\x00" * 8))


def test_random_bytes_negative_size():
    with pytest.raises(ValueError):
        v1.Mx3Rng(1).random_bytes(-1)


@pytest.mark.parametrize("module", MODULES)
def test_random_float_range(module):
    rng = module.Mx3Rng(77)
    values = [rng.random() for _ in range(2000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert 0.4 < sum(values) / len(values) < 0.6


def test_random_uses_top_53_bits():
    draw = v3.Mx3Rng(1).next_u64()
    assert v3.Mx3Rng(1).random() == (draw >> 11) / float(1 << 53)


@pytest.mark.parametrize("module", MODULES)
@pytest.mark.parametrize("count", [0, 1, 100])
def test_draw_matches_next_u64(module, count):
    """draw(n) equals n calls to next_u64() and leaves the same state."""
    batch = module.Mx3Rng(21)
    scalar = module.Mx3Rng(21)

    values = batch.draw(count)
    assert values.dtype == np.uint64
    assert values.shape == (count,)
    assert [int(v) for v in values] == [scalar.next_u64() for _ in range(count)]
    assert batch.state() == scalar.state()


def test_draw_wraps_counter():
    rng = v3.Mx3Rng.resume(MASK64 - 1)
    values = rng.draw(4)
    assert [int(v) for v in values] == [v3.mix(x) for x in (MASK64 - 1, MASK64, 0, 1)]
    assert rng.state() == 2


def test_draw_negative_count_leaves_state():
    rng = v2.Mx3Rng(5)
    with pytest.raises(ValueError):
        rng.draw(-1)
    assert rng.state() == 5


@pytest.mark.parametrize("module", MODULES)
def test_iteration(module):
    rng = module.Mx3Rng(4)
    reference = module.Mx3Rng(4)
    taken = [value for _, value in zip(range(6), rng)]
    assert taken == [reference.next_u64() for _ in range(6)]


@pytest.mark.parametrize("module", MODULES)
def test_from_seed_big_endian(module):
    seed = bytes([0, 0, 0, 0, 0, 0, 1, 2])
    assert module.Mx3Rng.from_seed(seed).state() == module.Mx3Rng(0x0102).state()


@pytest.mark.parametrize("bad", [b"", b"1234567", b"123456789"])
def test_from_seed_wrong_length(bad):
    with pytest.raises(ValueError):
        v3.Mx3Rng.from_seed(bad)


@pytest.mark.parametrize("module", MODULES)
def test_generators_satisfy_protocol(module):
    assert isinstance(module.Mx3Rng(1), RandomGenerator)


@pytest.mark.parametrize("module", MODULES)
def test_no_short_range_collisions(module):
    """A window of the sequence has no repeated values."""
    values = module.Mx3Rng(0).draw(1 << 15)
    assert np.unique(values).size == values.size
