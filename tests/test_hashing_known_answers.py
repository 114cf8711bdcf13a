"""Known-answer tests for the one-shot hash of every revision.

Each table holds hash(ALPHABET[:n], 123456789) for n = 0..26, which covers
the empty buffer, tail-only buffers and the first full word. The 89-byte FOX
vector covers the v3 64-byte block path.
"""

import numpy as np
import pytest

from reference_data import ALPHABET, FOX, REFERENCE_SEED
from mx3 import v1, v2, v3
from mx3.tail import MASK64

V1_ALPHABET = [
    0x566319FA1C03230F,
    0x1D4C331D9D3F2049,
    0x491F91A790CC7F0B,
    0x8E574F9A20D15F43,
    0x9CC98E8E7BCB7BAB,
    0x2E014C9A9B41B79B,
    0x90874212C6DBD7D0,
    0xDE1426833C7D882A,
    0x66685094340748CB,
    0xA2CC9F413D39F1BC,
    0x8A44BB7774CC3564,
    0x6E1F1E03075DE002,
    0x76B37093E5D3EC,
    0x2B5350B03536F60B,
    0xCB6DA1B8D49578C,
    0xB839559F09AB5C45,
    0x930B3E15662F1ADB,
    0x8D3C63A40FBE05DD,
    0xB09CF7A6749EF821,
    0xB034E3927754A34,
    0x5FB9E1DE0C1219F3,
    0xE3AC8D6B0D7675B0,
    0x4DC45E937A3111C7,
    0xEA6DF82321394835,
    0x94D8D33B442AF454,
    0x113C64754ECC3AE7,
    0x1E29585A2A634374,
]

V2_ALPHABET = [
    0x95BD1DE6327DAE0A,
    0xDF8558992BFC3F87,
    0x1A21BFAE9DF45B48,
    0x7F3890AEE60A2B23,
    0xE426B02C719DC4A1,
    0x7B18A2F70A8F5B9C,
    0x88ED8EE800C583,
    0x2D6683263A1F05F8,
    0x395CAF6B87F1C933,
    0xE95331BB3B640E1,
    0x663E926235BB5969,
    0x966FBAFE45FF7E50,
    0x98A407A2A3B6C878,
    0x9A161FBD700C5EF6,
    0x13992C04F5EDF5E3,
    0x29A0245C892A71C5,
    0xB617DFDBEA45DEBD,
    0x6F23CA1B5F6A551,
    0x902D9ED019625E75,
    0xACFF8ED243A72810,
    0xD49326D9F1065094,
    0xC04A0CB2B523DF98,
    0x76A6BAE003D7B9CB,
    0xFC98E44E6E2BA3F5,
    0xA54E3589CE94A3D6,
    0x847FE0DAD5593F,
    0xF1673DABA637E36,
]

V3_ALPHABET = [
    0x4E069D451E12CED8,
    0x5EB36AC9592AB1DF,
    0x28AEE35EB05B5E01,
    0xC84BB340AFD4C59C,
    0xEEDED76F960AE7A1,
    0x80A4D25E6705D3BA,
    0x76E1913CB3491D76,
    0xE2A6E400FE57F6C3,
    0x606B49CE1423AE16,
    0x79B96174F8E230A0,
    0x9E602EF1D012BB2D,
    0x9F9709E439DD8999,
    0x1503884EAE03740A,
    0xF208267C7E8A461C,
    0xA08D41054B42CE80,
    0x6129EE7C45F92FFF,
    0x9405C374E7CEC176,
    0x9CC7A2B54B9C4478,
    0x9D0E1FCA25723CAC,
    0xDE4E43505CEDD231,
    0x91462BC2C10A62BA,
    0x1E84991EFAF319C1,
    0x5C41B4A8350C9A0A,
    0xF5D4CE766A91E9BD,
    0x17DCC3722EDEEEE,
    0x224DC0B46DF3F834,
    0x6C16BDF4571E7844,
]

TABLES = {1: (v1, V1_ALPHABET), 2: (v2, V2_ALPHABET), 3: (v3, V3_ALPHABET)}
FOX_DIGESTS = {1: 0x7B519609F3B69338, 2: 0x6FD9E7BCA6D66212, 3: 0x591893507CCDBFDF}
MODULES = {1: v1, 2: v2, 3: v3}


@pytest.mark.parametrize("revision", [1, 2, 3])
@pytest.mark.parametrize("length", range(len(ALPHABET) + 1))
def test_hash_alphabet_prefixes(revision, length):
    """Test every prefix length 0..26 against the reference table."""
    module, table = TABLES[revision]
    result = module.hash(ALPHABET[:length], REFERENCE_SEED)
    assert result == table[length], (
        f"v{revision} hash of {length} bytes: got {result:#x}, expected {table[length]:#x}"
    )


@pytest.mark.parametrize("revision", [1, 2, 3])
def test_hash_fox(revision):
    """Test the 89-byte vector (one full v3 block plus words and a tail)."""
    assert len(FOX) == 89
    assert MODULES[revision].hash(FOX, REFERENCE_SEED) == FOX_DIGESTS[revision]


def test_hash_v1_abcd():
    assert v1.hash(b"abcd", 123456789) == 0x9CC98E8E7BCB7BAB


def test_empty_v1_v2_is_mix_of_seed():
    """For v1/v2 the empty buffer finalizes seed ^ 0 directly."""
    assert v1.hash(b"", REFERENCE_SEED) == v1.mix(REFERENCE_SEED)
    assert v2.hash(b"", REFERENCE_SEED) == v2.mix(REFERENCE_SEED)


def test_empty_v3_is_not_mix_of_seed():
    """v3 folds len + 1 into the seed, so even the empty hash is mixed."""
    assert v3.hash(b"", REFERENCE_SEED) == V3_ALPHABET[0]
    assert v3.hash(b"", REFERENCE_SEED) != v3.mix(REFERENCE_SEED)
    assert v3.hash(b"", REFERENCE_SEED) == v3.mix(v3.mix_stream_2(REFERENCE_SEED, 1))


@pytest.mark.parametrize("revision", [1, 2, 3])
def test_hash_determinism(revision):
    """Test that repeated calls give the same digest."""
    module = MODULES[revision]
    data = bytes(range(256)) * 3
    assert module.hash(data, 42) == module.hash(data, 42)


@pytest.mark.parametrize("revision", [1, 2, 3])
def test_hash_accepts_buffer_types(revision):
    """bytes, bytearray, memoryview and NumPy arrays hash identically."""
    module = MODULES[revision]
    expected = module.hash(FOX, 7)
    assert module.hash(bytearray(FOX), 7) == expected
    assert module.hash(memoryview(FOX), 7) == expected
    assert module.hash(np.frombuffer(FOX, dtype=np.uint8), 7) == expected


@pytest.mark.parametrize("revision", [1, 2, 3])
def test_hash_accepts_strided_buffers(revision):
    """Non-contiguous views hash like their contiguous copy."""
    module = MODULES[revision]
    data = bytes(range(200))

    strided = memoryview(data)[::2]
    assert module.hash(strided, 7) == module.hash(bytes(strided), 7)

    column = np.frombuffer(data, dtype=np.uint8).reshape(20, 10)[:, 3]
    assert not column.flags.c_contiguous
    assert module.hash(column, 7) == module.hash(column.tobytes(), 7)


@pytest.mark.parametrize("revision", [1, 2, 3])
def test_hash_rejects_str(revision):
    with pytest.raises(TypeError):
        MODULES[revision].hash("abc", 1)


@pytest.mark.parametrize("revision", [1, 2, 3])
def test_hash_seed_reduced_mod_2_64(revision):
    """Negative and oversized seeds behave like their 64-bit reduction."""
    module = MODULES[revision]
    assert module.hash(ALPHABET, -1) == module.hash(ALPHABET, MASK64)
    assert module.hash(ALPHABET, (1 << 64) + 3) == module.hash(ALPHABET, 3)


def test_v3_block_is_two_four_lane_steps():
    """A 64-byte v3 input is two mix_stream_5 calls and no word calls."""
    data = bytes(range(64))
    words = [int.from_bytes(data[i:i + 8], "little") for i in range(0, 64, 8)]
    h = v3.mix_stream_2(99, 65)
    h = v3.mix_stream_5(h, *words[:4])
    h = v3.mix_stream_5(h, *words[4:])
    assert v3.hash(data, 99) == v3.mix(h)


def test_revisions_disagree():
    """The revisions are separate digest spaces."""
    digests = {v1.hash(FOX, 1), v2.hash(FOX, 1), v3.hash(FOX, 1)}
    assert len(digests) == 3
