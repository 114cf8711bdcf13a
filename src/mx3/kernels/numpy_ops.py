"""Vectorised mx3 kernels over NumPy uint64 arrays.

NumPy uint64 array arithmetic wraps modulo 2^64, which is exactly the word
arithmetic of the scalar implementations, so no masking is needed here.
Every function is bit-exact with its scalar counterpart in mx3.v1/v2/v3.

Inputs are never modified in place.
"""

from typing import Callable, Dict

import numpy as np

from mx3.exceptions import UnknownRevisionError
from mx3.tail import MASK64, WORD_SIZE

PARAMETER_C = np.uint64(0xBEA225F9EB34556D)

_S29 = np.uint64(29)
_S32 = np.uint64(32)
_S33 = np.uint64(33)
_S39 = np.uint64(39)
_S43 = np.uint64(43)
_S57 = np.uint64(57)

BLOCK_SIZE = 64


def as_uint64(values) -> np.ndarray:
    """Convert array-like values to a flat uint64 array (always a copy).

    Python integers are reduced modulo 2^64 like the scalar mixers do, and
    signed NumPy arrays keep their two's complement bit patterns.
    """
    if isinstance(values, np.ndarray) and values.dtype != object:
        return values.astype(np.uint64).reshape(-1)
    flat = np.asarray(values, dtype=object).reshape(-1)
    return np.array([int(v) & MASK64 for v in flat], dtype=np.uint64)


def _apply(fn: Callable[[np.ndarray], np.ndarray], values) -> np.ndarray:
    # 0-d inputs are widened to 1-d so NumPy treats overflow as array wrap
    shape = np.shape(values)
    return fn(as_uint64(values)).reshape(shape)


def _mix_v1(x: np.ndarray) -> np.ndarray:
    x = x * PARAMETER_C
    x ^= x >> _S33
    x *= PARAMETER_C
    x ^= x >> _S29
    x *= PARAMETER_C
    x ^= x >> _S39
    return x


def _mix_v2(x: np.ndarray) -> np.ndarray:
    x = x ^ (x >> _S32)
    x *= PARAMETER_C
    x ^= x >> _S29
    x *= PARAMETER_C
    x ^= x >> _S32
    x *= PARAMETER_C
    x ^= x >> _S29
    return x


def mix_v1(values) -> np.ndarray:
    """Revision 1 mixer applied elementwise."""
    return _apply(_mix_v1, values)


def mix_v2(values) -> np.ndarray:
    """Revision 2 mixer applied elementwise."""
    return _apply(_mix_v2, values)


def mix_v3(values) -> np.ndarray:
    """Revision 3 mixer applied elementwise (same finalizer as revision 2)."""
    return _apply(_mix_v2, values)


MIXERS: Dict[int, Callable[..., np.ndarray]] = {
    1: mix_v1,
    2: mix_v2,
    3: mix_v3,
}


def mix(values, revision: int = 3) -> np.ndarray:
    """Apply the mixer of the given revision elementwise.

    Raises:
        UnknownRevisionError: If revision is not 1, 2 or 3
    """
    try:
        fn = MIXERS[revision]
    except KeyError:
        raise UnknownRevisionError(revision) from None
    return fn(values)


def counter_range(start: int, count: int) -> np.ndarray:
    """Return start, start+1, ..., start+count-1 modulo 2^64.

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return np.arange(count, dtype=np.uint64) + np.uint64(start & MASK64)


def _mix_stream_v1(h: np.ndarray, x: np.ndarray) -> np.ndarray:
    x = x * PARAMETER_C
    x ^= (x >> _S57) ^ (x >> _S33)
    x *= PARAMETER_C
    return (h + x) * PARAMETER_C


def _mix_stream_v2(h: np.ndarray, x: np.ndarray) -> np.ndarray:
    x = x * PARAMETER_C
    x ^= (x >> _S57) ^ (x >> _S43)
    x *= PARAMETER_C
    return (h + x) * PARAMETER_C


def _mix_stream_2_v3(h: np.ndarray, x: np.ndarray) -> np.ndarray:
    x = x * PARAMETER_C
    x ^= x >> _S39
    return (h + x * PARAMETER_C) * PARAMETER_C


def _mix_stream_5_v3(h, a, b, c, d) -> np.ndarray:
    for lane in (a, b, c, d):
        lane = lane * PARAMETER_C
        lane ^= lane >> _S39
        h = (h + lane * PARAMETER_C) * PARAMETER_C
    return h


def _split_rows(rows: np.ndarray):
    """Split [N, L] uint8 rows into whole little-endian words and packed tails."""
    n, length = rows.shape
    aligned = length - length % WORD_SIZE

    if aligned:
        words = np.ascontiguousarray(rows[:, :aligned]).view("<u8").astype(np.uint64)
    else:
        words = np.zeros((n, 0), dtype=np.uint64)

    tail = np.zeros(n, dtype=np.uint64)
    for i in range(length - aligned):
        tail |= rows[:, aligned + i].astype(np.uint64) << np.uint64(8 * i)

    return words, tail, aligned < length


def hash_rows(rows, seed: int, revision: int = 3) -> np.ndarray:
    """Hash every row of a 2-D byte array in one vectorised pass.

    Row i of the result equals mx3.v<revision>.hash(bytes(rows[i]), seed).
    All rows share one length, which is what makes the lockstep evaluation
    possible.

    Args:
        rows: Array-like of shape [N, L] convertible to uint8
        seed: Seed word shared by all rows
        revision: Algorithm revision (1, 2 or 3)

    Returns:
        Digests of shape [N] (uint64)

    Raises:
        ValueError: If rows is not two-dimensional
        UnknownRevisionError: If revision is not 1, 2 or 3
    """
    if revision not in MIXERS:
        raise UnknownRevisionError(revision)

    rows = np.ascontiguousarray(rows, dtype=np.uint8)
    if rows.ndim != 2:
        raise ValueError(f"rows must be 2-D [N, L], got shape {rows.shape}")

    n, length = rows.shape
    words, tail, has_tail = _split_rows(rows)
    num_words = words.shape[1]

    if revision in (1, 2):
        stream = _mix_stream_v1 if revision == 1 else _mix_stream_v2
        h = np.full(n, (seed ^ length) & MASK64, dtype=np.uint64)
        for j in range(num_words):
            h = stream(h, words[:, j])
        if has_tail:
            h = stream(h, tail)
        return _mix_v1(h) if revision == 1 else _mix_v2(h)

    h = _mix_stream_2_v3(
        np.full(n, seed & MASK64, dtype=np.uint64),
        np.full(n, (length + 1) & MASK64, dtype=np.uint64),
    )

    lanes_per_block = BLOCK_SIZE // WORD_SIZE
    num_blocks = length // BLOCK_SIZE
    for block in range(num_blocks):
        base = block * lanes_per_block
        h = _mix_stream_5_v3(h, *(words[:, base + k] for k in range(4)))
        h = _mix_stream_5_v3(h, *(words[:, base + k] for k in range(4, 8)))

    for j in range(num_blocks * lanes_per_block, num_words):
        h = _mix_stream_2_v3(h, words[:, j])

    if has_tail:
        h = _mix_stream_2_v3(h, tail)

    return _mix_v2(h)
