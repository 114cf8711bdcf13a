"""Vectorised mx3 kernels.

NumPy kernels are re-exported here. PyTorch kernels live in
mx3.kernels.torch_ops and are imported on demand so that importing mx3 does
not pull in torch.
"""

from .numpy_ops import counter_range, hash_rows, mix, mix_v1, mix_v2, mix_v3

__all__ = [
    "mix",
    "mix_v1",
    "mix_v2",
    "mix_v3",
    "counter_range",
    "hash_rows",
]
