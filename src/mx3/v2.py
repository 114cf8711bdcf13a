"""Revision 2 of the mx3 bit mixer, hash function and generator.

This is the default revision re-exported by the top-level mx3 package.
Outputs are not compatible with the other revisions.
"""

import numpy as np

from mx3.base import fill_bytes_via_next
from mx3.kernels import numpy_ops
from mx3.tail import MASK64, WORD_SIZE, as_view, iter_words, pack_tail, seed_from_bytes

PARAMETER_C = 0xBEA225F9EB34556D


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


def mix_stream(h: int, x: int) -> int:
    """Fold one input word x into the running hash h.

    AlignedStreamHasher relies on this being the exact per-word step of
    hash() below.
    """
    x = (x * PARAMETER_C) & MASK64
    x ^= (x >> 57) ^ (x >> 43)
    x = (x * PARAMETER_C) & MASK64
    return ((h + x) * PARAMETER_C) & MASK64


def hash(buffer, seed: int) -> int:
    """Hash the given buffer.

    Not cryptographically secure. Equivalent to feeding buffer to
    AlignedStreamHasher.with_length(seed, len(buffer)).

    Args:
        buffer: Bytes-like object
        seed: Seed word

    Returns:
        64-bit digest
    """
    view = as_view(buffer)
    length = len(view)
    aligned = length - length % WORD_SIZE

    h = (seed ^ length) & MASK64
    for word in iter_words(view[:aligned]):
        h = mix_stream(h, word)

    if aligned < length:
        h = mix_stream(h, pack_tail(view[aligned:]))

    return mix(h)


class Mx3Rng:
    """Pseudo-random number generator with 64 bits of state and cycle of 2^64.

    Not cryptographically secure.
    """

    __slots__ = ("_counter",)

    def __init__(self, seed: int):
        # Counter starts at the seed itself.
        self._counter = seed & MASK64

    @classmethod
    def from_seed(cls, seed: bytes) -> "Mx3Rng":
        """Create a generator from eight big-endian seed bytes."""
        return cls(seed_from_bytes(seed))

    def state(self) -> int:
        """Return the counter.

        Passing it back to the constructor resumes the sequence.
        """
        return self._counter

    def next_u64(self) -> int:
        value = mix(self._counter)
        self._counter = (self._counter + 1) & MASK64
        return value

    def next_u32(self) -> int:
        """Low 32 bits of a full step; two calls are not one split draw."""
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
        """Return the next count values as a uint64 array.

        Same values and same resulting state as count calls to next_u64().
        """
        counters = numpy_ops.counter_range(self._counter, count)
        self._counter = (self._counter + count) & MASK64
        return numpy_ops.mix_v2(counters)

    def copy(self) -> "Mx3Rng":
        return Mx3Rng(self._counter)

    __copy__ = copy

    def __iter__(self) -> "Mx3Rng":
        return self

    def __next__(self) -> int:
        return self.next_u64()

    def __repr__(self) -> str:
        return "Mx3Rng(...)"
