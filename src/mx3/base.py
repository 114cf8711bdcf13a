"""Capability interfaces shared by the mx3 revisions."""

from typing import Protocol, runtime_checkable

from mx3.tail import WORD_SIZE


@runtime_checkable
class RandomGenerator(Protocol):
    """
    Protocol for the counter-based generators.

    Each revision ships its own concrete Mx3Rng; they share this surface but
    no implementation.
    """

    def next_u64(self) -> int:
        """Return the next 64-bit value and advance the counter by one."""
        ...

    def next_u32(self) -> int:
        """Return the low 32 bits of one full 64-bit step."""
        ...

    def fill_bytes(self, dest) -> None:
        """Fill a writable buffer with little-endian 64-bit draws."""
        ...

    def state(self) -> int:
        """Return the counter, suitable for resuming the sequence."""
        ...


@runtime_checkable
class StreamHasher(Protocol):
    """
    Protocol for incremental hashers.

    write() may be called any number of times; finish() is a pure read and
    can be called repeatedly.
    """

    def write(self, data) -> None:
        ...

    def finish(self) -> int:
        ...


def fill_bytes_via_next(rng: RandomGenerator, dest) -> None:
    """Fill dest from successive next_u64() draws.

    Each draw is written little-endian. When the length of dest is not a
    multiple of eight the final draw is truncated to the bytes that remain.

    Args:
        rng: Generator to draw from
        dest: Writable bytes-like object (bytearray, writable memoryview, ...)

    Raises:
        TypeError: If dest is read-only or not a buffer
    """
    if isinstance(dest, (bytes, str)):
        raise TypeError(f"dest must be a writable buffer, got {type(dest).__name__}")
    view = memoryview(dest)
    if view.readonly:
        raise TypeError("dest must be a writable buffer")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")

    length = len(view)
    for offset in range(0, length, WORD_SIZE):
        count = min(WORD_SIZE, length - offset)
        view[offset:offset + count] = rng.next_u64().to_bytes(WORD_SIZE, "little")[:count]
