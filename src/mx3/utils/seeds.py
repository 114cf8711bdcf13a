"""Seed derivation and management for determinism."""

import random
from typing import List

import numpy as np

from mx3 import v3
from mx3.tail import u64


def derive_seed(base: int, salt: int) -> int:
    """Derive a seed from base and salt using the revision 3 mixer.

    Args:
        base: Base seed value
        salt: Salt value to mix with base

    Returns:
        Mixed seed value (64-bit unsigned)
    """
    return v3.mix(u64(base) ^ u64(salt))


def make_salts(n: int, master_seed: int) -> List[int]:
    """Generate deterministic list of salts from master seed.

    Each salt is the mix of the previous one, starting from master_seed.

    Args:
        n: Number of salts to generate
        master_seed: Master seed value

    Returns:
        List of n 64-bit unsigned salts
    """
    salts = []
    state = u64(master_seed)
    for _ in range(n):
        state = v3.mix(state)
        salts.append(state)
    return salts


def seed_everything(seed: int) -> None:
    """Seed Python random, NumPy and PyTorch (CPU and CUDA).

    The libraries receive decorrelated seeds derived from seed with
    make_salts, so they do not produce related streams.

    Args:
        seed: Seed value (any integer, reduced to 64 bits)
    """
    import torch

    python_salt, numpy_salt, torch_salt = make_salts(3, seed)

    random.seed(python_salt)

    # NumPy's legacy seeding only accepts 32-bit values
    np.random.seed(numpy_salt & 0xFFFFFFFF)

    torch.manual_seed(torch_salt)

    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(torch_salt)
        torch.backends.cudnn.deterministic = True
        torch.backends.cudnn.benchmark = False
