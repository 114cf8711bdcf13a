"""Vectorised mx3 mixers over PyTorch int64 tensors.

PyTorch has no uint64 arithmetic, so words travel as int64 tensors holding
the same bit pattern (two's complement). Multiplication and XOR are
identical on both interpretations; right shifts are not, so every shift
goes through logical_right_shift.
"""

from typing import Iterable, List

import numpy as np
import torch

from mx3.exceptions import UnknownRevisionError
from mx3.tail import MASK64
from mx3.utils.device import DeviceLike, resolve_device

_PARAMETER_C = 0xBEA225F9EB34556D


def to_int64(u64_val: int) -> int:
    """Reinterpret an unsigned 64-bit value as signed int64 (same bits)."""
    u64_val &= MASK64
    if u64_val < 2**63:
        return u64_val
    return u64_val - 2**64


PARAMETER_C = to_int64(_PARAMETER_C)


def to_tensor(
    values: Iterable[int], device: DeviceLike = None
) -> torch.Tensor:
    """Pack Python words into an int64 tensor.

    Args:
        values: Unsigned 64-bit integers
        device: Target device, anything resolve_device() accepts (default CPU)

    Returns:
        int64 tensor holding the same bit patterns
    """
    return torch.tensor(
        [to_int64(v) for v in values], dtype=torch.long, device=resolve_device(device)
    )


def to_words(x: torch.Tensor) -> List[int]:
    """Unpack an int64 tensor back into unsigned Python words."""
    return [v & MASK64 for v in x.flatten().tolist()]


def from_numpy(values: np.ndarray) -> torch.Tensor:
    """Share a uint64 NumPy array as an int64 tensor without copying bits."""
    values = np.ascontiguousarray(values, dtype=np.uint64)
    return torch.from_numpy(values.view(np.int64))


def to_numpy(x: torch.Tensor) -> np.ndarray:
    """Return an int64 tensor's bit patterns as a uint64 NumPy array."""
    return x.detach().cpu().contiguous().numpy().view(np.uint64)


def logical_right_shift(x: torch.Tensor, shift: int) -> torch.Tensor:
    """Perform logical right shift on int64 tensor (simulating uint64).

    Arithmetic shift sign-extends values >= 2^63 (negative as int64);
    masking the top `shift` bits afterwards gives zero-fill semantics.

    Args:
        x: Input tensor (int64, treated as uint64)
        shift: Shift amount, 1 <= shift < 64

    Returns:
        Logically right-shifted tensor
    """
    if not 0 < shift < 64:
        raise ValueError(f"shift must be in [1, 64), got {shift}")
    return (x >> shift) & ((1 << (64 - shift)) - 1)


def _check(x: torch.Tensor) -> torch.Tensor:
    if not isinstance(x, torch.Tensor):
        raise TypeError(f"x must be torch.LongTensor, got {type(x)}")
    if x.dtype != torch.long:
        raise TypeError(f"x must be torch.long dtype, got {x.dtype}")
    return x


def mix_v1(x: torch.Tensor) -> torch.Tensor:
    """Revision 1 mixer, elementwise."""
    x = _check(x) * PARAMETER_C
    x = x ^ logical_right_shift(x, 33)
    x = x * PARAMETER_C
    x = x ^ logical_right_shift(x, 29)
    x = x * PARAMETER_C
    return x ^ logical_right_shift(x, 39)


def mix_v2(x: torch.Tensor) -> torch.Tensor:
    """Revision 2 mixer, elementwise."""
    x = _check(x)
    x = x ^ logical_right_shift(x, 32)
    x = x * PARAMETER_C
    x = x ^ logical_right_shift(x, 29)
    x = x * PARAMETER_C
    x = x ^ logical_right_shift(x, 32)
    x = x * PARAMETER_C
    return x ^ logical_right_shift(x, 29)


# Revision 3 reuses the revision 2 finalizer.
mix_v3 = mix_v2

MIXERS = {
    1: mix_v1,
    2: mix_v2,
    3: mix_v3,
}


def mix(x: torch.Tensor, revision: int = 3) -> torch.Tensor:
    """Apply the mixer of the given revision elementwise.

    Raises:
        UnknownRevisionError: If revision is not 1, 2 or 3
    """
    try:
        fn = MIXERS[revision]
    except KeyError:
        raise UnknownRevisionError(revision) from None
    return fn(x)


def counter_range(
    start: int, count: int, device: DeviceLike = None
) -> torch.Tensor:
    """Return start, start+1, ..., start+count-1 modulo 2^64 as int64 bits."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return torch.arange(count, dtype=torch.long, device=resolve_device(device)) + to_int64(start)
