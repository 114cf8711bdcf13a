"""Incremental hashers for byte streams.

Two designs are provided:

- AlignedStreamHasher replays the revision 2 per-word mixing across write()
  calls, carrying at most seven pending bytes. Its digest does not depend on
  how the input is split, and with a length-aware seed it equals v2.hash().
- ChunkedStreamHasher buffers 1024-byte chunks and XOR-folds a revision 3
  digest of each full chunk. It never holds more than one chunk, but its
  digest depends on chunk boundaries and is not v3.hash() of the whole input.
"""

from mx3 import v2, v3
from mx3.tail import MASK64, WORD_SIZE, ByteCursor, iter_words, pack_tail, read_u64

CHUNK_SIZE = 1024


class _DigestMixin:
    """Convenience views of finish() shared by both hashers."""

    __slots__ = ()

    def intdigest(self) -> int:
        return self.finish()

    def digest(self) -> bytes:
        """Digest as eight little-endian bytes."""
        return self.finish().to_bytes(WORD_SIZE, "little")

    def hexdigest(self) -> str:
        return f"{self.finish():016x}"

    def update(self, data) -> None:
        self.write(data)


class AlignedStreamHasher(_DigestMixin):
    """Hasher for a stream of bytes using revision 2 per-word mixing.

    Not cryptographically secure.

    Attributes are private; repr() intentionally shows none of them.
    """

    __slots__ = ("_state", "_pending", "_pending_len")

    def __init__(self, seed: int = 1):
        """
        Construct a hasher for a stream of unknown length.

        The digest is not comparable with v2.hash() because v2.hash()
        folds the length into the seed; see with_length().

        Args:
            seed: Seed word
        """
        self._state = seed & MASK64
        self._pending = bytearray(WORD_SIZE)
        self._pending_len = 0

    @classmethod
    def with_length(cls, seed: int, length: int) -> "AlignedStreamHasher":
        """
        Construct a hasher for a stream whose total length is known upfront.

        Feeding exactly length bytes then produces v2.hash(data, seed).

        Args:
            seed: Seed word
            length: Total number of bytes that will be written

        Returns:
            Hasher seeded with seed ^ length
        """
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        return cls(seed ^ length)

    def write(self, data) -> None:
        cursor = ByteCursor(data)

        if self._pending_len:
            self._pending_len += cursor.read_into(self._pending, self._pending_len)
            if self._pending_len < WORD_SIZE:
                return
            self._state = v2.mix_stream(self._state, read_u64(self._pending))
            self._pending_len = 0

        state = self._state
        for word in iter_words(cursor.read_aligned()):
            state = v2.mix_stream(state, word)
        self._state = state

        self._pending_len = cursor.read_into(self._pending)

    def finish(self) -> int:
        h = self._state
        if self._pending_len:
            h = v2.mix_stream(h, pack_tail(self._pending[:self._pending_len]))
        return v2.mix(h)

    def copy(self) -> "AlignedStreamHasher":
        other = AlignedStreamHasher.__new__(AlignedStreamHasher)
        other._state = self._state
        other._pending = bytearray(self._pending)
        other._pending_len = self._pending_len
        return other

    __copy__ = copy

    def __repr__(self) -> str:
        return "AlignedStreamHasher(...)"


class ChunkedStreamHasher(_DigestMixin):
    """Hasher for a stream of bytes built on revision 3 one-shot hashing.

    Not cryptographically secure, and the digest depends on where the
    1024-byte chunk boundaries fall relative to the stream. Only the
    sequence of bytes fed matters for the chunk boundaries, not how it was
    split across write() calls, but the result is never v3.hash() of the
    concatenated input.
    """

    __slots__ = ("_seed", "_state", "_buf", "_buf_filled")

    def __init__(self, seed: int = 1):
        self._seed = seed & MASK64
        self._state = v3.mix(self._seed)
        self._buf = bytearray(CHUNK_SIZE)
        self._buf_filled = 0

    def write(self, data) -> None:
        # Bytes are consumed front to back, so chunk boundaries depend only on
        # stream offset. Restarting from the front of data after a flush would
        # repeat input and make the digest depend on write() splits.
        cursor = ByteCursor(data)

        while cursor.remaining:
            self._buf_filled += cursor.read_into(self._buf, self._buf_filled)

            if self._buf_filled == CHUNK_SIZE:
                self._state ^= v3.hash(self._buf, self._seed)
                self._buf_filled = 0

    def finish(self) -> int:
        output = self._state
        if self._buf_filled:
            output ^= v3.hash(memoryview(self._buf)[:self._buf_filled], self._seed)
        return output

    def copy(self) -> "ChunkedStreamHasher":
        other = ChunkedStreamHasher.__new__(ChunkedStreamHasher)
        other._seed = self._seed
        other._state = self._state
        other._buf = bytearray(self._buf)
        other._buf_filled = self._buf_filled
        return other

    __copy__ = copy

    def __repr__(self) -> str:
        return "ChunkedStreamHasher(...)"
