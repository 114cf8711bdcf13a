"""Device selection for the PyTorch kernels."""

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    import torch

DeviceLike = Union[str, "torch.device", None]


def resolve_device(device: DeviceLike = None) -> "torch.device":
    """Turn a device spec into a torch.device for the kernels.

    Args:
        device: None (CPU), "auto" (CUDA when available), a string torch
            understands such as "cpu", "cuda" or "cuda:1", or a torch.device

    Returns:
        torch.device object

    Raises:
        ValueError: If the string is not a device torch recognises
        RuntimeError: If a CUDA device is requested but CUDA is unavailable
    """
    import torch

    if device is None:
        return torch.device("cpu")
    if device == "auto":
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")

    if isinstance(device, torch.device):
        resolved = device
    else:
        try:
            resolved = torch.device(device)
        except RuntimeError as exc:
            raise ValueError(f"unknown device {device!r}") from exc

    if resolved.type == "cuda" and not torch.cuda.is_available():
        raise RuntimeError(f"{resolved} requested but CUDA is not available")
    return resolved


def device_type(device: DeviceLike = None) -> str:
    """Device type string ("cpu", "cuda", ...) as Timer expects it."""
    return resolve_device(device).type
