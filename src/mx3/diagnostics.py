"""Diagnostic functions for mixer quality analysis.

These operate on the vectorised NumPy kernels. They are statistical sanity
checks, not proofs: the 2^64 generator period rests on the mixers being
bijections, which is assumed rather than shown here.
"""

from typing import Dict, Optional

import numpy as np

from mx3 import v3
from mx3.kernels import numpy_ops


def _bits(values: np.ndarray) -> np.ndarray:
    """Expand uint64 values to a [N, 64] 0/1 matrix, column j = bit j."""
    as_bytes = np.ascontiguousarray(values, dtype="<u8").view(np.uint8)
    return np.unpackbits(as_bytes.reshape(-1, 8), axis=1, bitorder="little")


def bit_balance(values) -> np.ndarray:
    """
    Fraction of ones at each of the 64 bit positions.

    Args:
        values: Array-like of uint64 words

    Returns:
        Array of shape [64]; an unbiased source sits near 0.5 everywhere
    """
    values = numpy_ops.as_uint64(values)
    if values.size == 0:
        return np.zeros(64, dtype=np.float64)
    return _bits(values).mean(axis=0)


def collision_count(values) -> int:
    """Number of values that repeat an earlier one."""
    values = numpy_ops.as_uint64(values)
    return int(values.size - np.unique(values).size)


def counter_collisions(revision: int = 3, start: int = 0, count: int = 1 << 16) -> int:
    """
    Count collisions among mix(start), mix(start + 1), ..., the exact
    sequence the generator emits from counter start.

    A bijective mixer always returns 0.
    """
    counters = numpy_ops.counter_range(start, count)
    return collision_count(numpy_ops.mix(counters, revision))


def avalanche_matrix(
    revision: int = 3, samples: int = 4096, seed: int = 0
) -> np.ndarray:
    """
    Estimate the avalanche matrix of a mixer.

    Entry [i, j] is the probability that flipping input bit i flips output
    bit j, estimated over random inputs drawn from a revision 3 generator.

    Args:
        revision: Mixer revision (1, 2 or 3)
        samples: Number of random inputs
        seed: Seed for the input generator

    Returns:
        Array of shape [64, 64] (float64)
    """
    if samples <= 0:
        raise ValueError(f"samples must be positive, got {samples}")

    inputs = v3.Mx3Rng(seed).draw(samples)
    base = numpy_ops.mix(inputs, revision)

    matrix = np.empty((64, 64), dtype=np.float64)
    for i in range(64):
        flipped = numpy_ops.mix(inputs ^ np.uint64(1 << i), revision)
        matrix[i] = _bits(base ^ flipped).mean(axis=0)
    return matrix


def avalanche_summary(matrix: np.ndarray) -> Dict:
    """
    Compact summary of an avalanche matrix.

    Returns:
        Dictionary with:
        - mean_flip: float (ideal 0.5)
        - max_bias: float, largest |p - 0.5|
        - rms_bias: float
        - worst_pair: (input_bit, output_bit) with the largest bias
    """
    bias = np.abs(np.asarray(matrix, dtype=np.float64) - 0.5)
    worst = np.unravel_index(int(np.argmax(bias)), bias.shape)
    return {
        "mean_flip": float(np.mean(matrix)),
        "max_bias": float(bias.max()),
        "rms_bias": float(np.sqrt(np.mean(bias ** 2))),
        "worst_pair": (int(worst[0]), int(worst[1])),
    }


def mixer_report(
    revision: int = 3,
    samples: int = 4096,
    seed: int = 0,
    counter_span: Optional[int] = None,
) -> Dict:
    """
    Run all diagnostics for one revision.

    Args:
        revision: Mixer revision (1, 2 or 3)
        samples: Inputs for the avalanche and balance estimates
        seed: Seed for the input generator
        counter_span: Consecutive counters checked for collisions
            (defaults to samples)

    Returns:
        Dictionary with avalanche summary fields plus
        - revision: int
        - bit_balance_max_bias: float
        - counter_collisions: int
    """
    span = samples if counter_span is None else counter_span
    report = {"revision": revision}
    report.update(avalanche_summary(avalanche_matrix(revision, samples, seed)))

    outputs = numpy_ops.mix(numpy_ops.counter_range(seed, samples), revision)
    report["bit_balance_max_bias"] = float(np.abs(bit_balance(outputs) - 0.5).max())
    report["counter_collisions"] = counter_collisions(revision, seed, span)
    return report
