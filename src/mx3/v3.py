"""Revision 3 of the mx3 bit mixer, hash function and generator.

Revision 3 keeps the revision 2 finalizer but hashes 64-byte blocks as two
four-lane steps, seeds the hash with the length plus one, and pre-mixes the
generator seed. Outputs are not compatible with the other revisions.
"""

import numpy as np

from mx3.base import fill_bytes_via_next
from mx3.kernels import numpy_ops
from mx3.tail import (
    MASK64,
    WORD_SIZE,
    as_view,
    iter_words,
    pack_tail,
    read_u64,
    seed_from_bytes,
)

PARAMETER_C = 0xBEA225F9EB34556D

BLOCK_SIZE = 64


def mix(x: int) -> int:
    """Mix the bits of a 64-bit word.

    Args:
        x: Input value (will be masked to 64 bits)

    Returns:
        Mixed 64-bit unsigned integer
    """
    x &= MASK64
    x ^= x >> 32
    x = (x * PARAMETER_C) & MASK64
    x ^= x >> 29
    x = (x * PARAMETER_C) & MASK64
    x ^= x >> 32
    x = (x * PARAMETER_C) & MASK64
    x ^= x >> 29
    return x


def mix_stream_2(h: int, x: int) -> int:
    """Fold a single word x into the running hash h."""
    x = (x * PARAMETER_C) & MASK64
    x ^= x >> 39
    h = (h + x * PARAMETER_C) & MASK64
    return (h * PARAMETER_C) & MASK64


def mix_stream_5(h: int, a: int, b: int, c: int, d: int) -> int:
    """Fold four lanes a, b, c, d into the running hash h.

    Each lane is multiplied and xor-shifted on its own, then the lanes are
    folded into h one after another in order a, b, c, d.
    """
    a = (a * PARAMETER_C) & MASK64
    b = (b * PARAMETER_C) & MASK64
    c = (c * PARAMETER_C) & MASK64
    d = (d * PARAMETER_C) & MASK64

    a ^= a >> 39
    b ^= b >> 39
    c ^= c >> 39
    d ^= d >> 39

    h = ((h + a * PARAMETER_C) * PARAMETER_C) & MASK64
    h = ((h + b * PARAMETER_C) * PARAMETER_C) & MASK64
    h = ((h + c * PARAMETER_C) * PARAMETER_C) & MASK64
    h = ((h + d * PARAMETER_C) * PARAMETER_C) & MASK64
    return h


def hash(buffer, seed: int) -> int:
    """Hash the given buffer.

    The running hash starts as mix_stream_2(seed, len(buffer) + 1), so an
    empty buffer does not simply return mix(seed). Full 64-byte blocks are
    consumed as two mix_stream_5 calls (words 0-3, then 4-7), remaining
    whole words one at a time with mix_stream_2, and the 0-7 byte tail is
    packed into a single word.

    Not cryptographically secure.

    Args:
        buffer: Bytes-like object
        seed: Seed word

    Returns:
        64-bit digest
    """
    view = as_view(buffer)
    length = len(view)
    h = mix_stream_2(seed & MASK64, length + 1)

    blocks_end = length - length % BLOCK_SIZE
    for offset in range(0, blocks_end, BLOCK_SIZE):
        h = mix_stream_5(
            h,
            read_u64(view, offset),
            read_u64(view, offset + 8),
            read_u64(view, offset + 16),
            read_u64(view, offset + 24),
        )
        h = mix_stream_5(
            h,
            read_u64(view, offset + 32),
            read_u64(view, offset + 40),
            read_u64(view, offset + 48),
            read_u64(view, offset + 56),
        )

    aligned = length - length % WORD_SIZE
    for word in iter_words(view[blocks_end:aligned]):
        h = mix_stream_2(h, word)

    if aligned < length:
        h = mix_stream_2(h, pack_tail(view[aligned:]))

    return mix(h)


class Mx3Rng:
    """Pseudo-random number generator with 64 bits of state and cycle of 2^64.

    The constructor avalanches the seed first (counter = mix(seed + C)) so
    that low-entropy seeds such as 0, 1, 2 do not show up in the first
    outputs. Use resume() to continue from a captured state() without that
    pre-mix.

    Not cryptographically secure.

    Example:
        >>> rng = Mx3Rng(1)
        >>> hex(rng.next_u64())
        '0xe8ebdbc439df412a'
    """

    __slots__ = ("_counter",)

    def __init__(self, seed: int):
        self._counter = mix((seed + PARAMETER_C) & MASK64)

    @classmethod
    def resume(cls, state: int) -> "Mx3Rng":
        """Create a generator from an existing state()."""
        rng = cls.__new__(cls)
        rng._counter = state & MASK64
        return rng

    @classmethod
    def from_seed(cls, seed: bytes) -> "Mx3Rng":
        """Create a generator from eight big-endian seed bytes (pre-mixed)."""
        return cls(seed_from_bytes(seed))

    def state(self) -> int:
        """Return the counter; pass it to resume() to continue the sequence."""
        return self._counter

    def next_u64(self) -> int:
        value = mix(self._counter)
        self._counter = (self._counter + 1) & MASK64
        return value

    def next_u32(self) -> int:
        return self.next_u64() & 0xFFFFFFFF

    def fill_bytes(self, dest) -> None:
        fill_bytes_via_next(self, dest)

    def random_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        buf = bytearray(size)
        self.fill_bytes(buf)
        return bytes(buf)

    def random(self) -> float:
        """Return a float in [0, 1) from the top 53 bits of one draw."""
        return (self.next_u64() >> 11) * (1.0 / (1 << 53))

    def draw(self, count: int) -> np.ndarray:
        """Return the next count values as a uint64 array."""
        counters = numpy_ops.counter_range(self._counter, count)
        self._counter = (self._counter + count) & MASK64
        return numpy_ops.mix_v3(counters)

    def copy(self) -> "Mx3Rng":
        return Mx3Rng.resume(self._counter)

    __copy__ = copy

    def __iter__(self) -> "Mx3Rng":
        return self

    def __next__(self) -> int:
        return self.next_u64()

    def __repr__(self) -> str:
        return "Mx3Rng(...)"
