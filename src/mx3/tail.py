"""Word and tail packing helpers shared by the hash revisions.

Every word read from a buffer is an unsigned 64-bit little-endian integer
held in a Python int. Arithmetic on words is done modulo 2^64 by masking
with MASK64 after each operation.
"""

import struct
from typing import Iterator

from mx3.exceptions import ShortReadError

# 64-bit mask for uint64 wrap semantics
MASK64 = (1 << 64) - 1  # 0xFFFFFFFFFFFFFFFF

WORD_SIZE = 8

_WORD = struct.Struct("<Q")


def u64(x: int) -> int:
    """Force integer into unsigned 64-bit domain.

    Args:
        x: Input integer (can be negative or any size)

    Returns:
        Unsigned 64-bit integer (value modulo 2^64)
    """
    return x & MASK64


def as_view(buffer) -> memoryview:
    """Return a flat unsigned-byte view over a bytes-like object.

    Args:
        buffer: bytes, bytearray, memoryview or any object supporting the
            buffer protocol

    Returns:
        One-dimensional memoryview with format "B"

    Raises:
        TypeError: If buffer is a str or does not support the buffer protocol
    """
    if isinstance(buffer, str):
        raise TypeError("buffer must be bytes-like, not str (encode it first)")
    try:
        view = memoryview(buffer)
    except TypeError as exc:
        raise TypeError(
            f"buffer must be bytes-like, got {type(buffer).__name__}"
        ) from exc
    if not view.c_contiguous:
        # Strided views cannot be cast or unpacked in place
        view = memoryview(view.tobytes())
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def read_u64(view, offset: int = 0) -> int:
    """Read a little-endian uint64 at offset."""
    return _WORD.unpack_from(view, offset)[0]


def iter_words(view) -> Iterator[int]:
    """Yield the little-endian words of a buffer whose length is a multiple of 8."""
    for (word,) in _WORD.iter_unpack(view):
        yield word


def pack_tail(tail) -> int:
    """Pack 0-7 trailing bytes into one word.

    Byte i lands at bits 8*i .. 8*i+7, so the last byte of a seven byte tail
    sits at bits 48-55 and the first byte always occupies the low eight bits.
    An empty tail packs to 0.

    Args:
        tail: Up to seven bytes

    Returns:
        Packed word

    Raises:
        ValueError: If tail holds a full word or more
    """
    if len(tail) >= WORD_SIZE:
        raise ValueError(f"tail must be shorter than {WORD_SIZE} bytes, got {len(tail)}")

    value = 0
    for shift, byte in enumerate(bytes(tail)):
        value |= byte << (8 * shift)
    return value


def seed_from_bytes(seed) -> int:
    """Interpret exactly eight bytes as a big-endian seed word.

    Raises:
        ValueError: If seed is not eight bytes long
    """
    view = as_view(seed)
    if len(view) != WORD_SIZE:
        raise ValueError(f"seed must be {WORD_SIZE} bytes, got {len(view)}")
    return int.from_bytes(view, "big")


class ByteCursor:
    """Bounded reader over a byte buffer.

    Reads never fail on exhaustion: read_into reports how many bytes were
    actually copied so callers can tell a short read from a full one.
    """

    __slots__ = ("_data", "_position")

    def __init__(self, data):
        self._data = as_view(data)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._position

    def read_into(self, dest: bytearray, start: int = 0) -> int:
        """Copy up to len(dest) - start bytes into dest[start:].

        Returns:
            Number of bytes copied (0 once the cursor is exhausted)
        """
        count = min(len(dest) - start, self.remaining)
        if count <= 0:
            return 0
        end = self._position + count
        dest[start:start + count] = self._data[self._position:end]
        self._position = end
        return count

    def read_exact(self, size: int) -> bytes:
        """Read exactly size bytes.

        Whatever is available is consumed even when the read falls short.

        Raises:
            ShortReadError: If fewer than size bytes remained
        """
        available = min(size, self.remaining)
        chunk = bytes(self._data[self._position:self._position + available])
        self._position += available
        if available < size:
            raise ShortReadError(available, size)
        return chunk

    def read_aligned(self) -> memoryview:
        """Consume and return the longest remaining run of whole words."""
        count = self.remaining - self.remaining % WORD_SIZE
        chunk = self._data[self._position:self._position + count]
        self._position += count
        return chunk
