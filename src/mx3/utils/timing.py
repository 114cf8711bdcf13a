"""Timing utilities."""

import logging
import time
from contextlib import contextmanager
from typing import Generator, Optional

from mx3.utils.device import device_type

logger = logging.getLogger(__name__)


class Timer:
    """Context manager for timing code blocks with CUDA synchronization support."""

    def __init__(
        self,
        name: str = "Operation",
        device: str = "cpu",
        num_bytes: Optional[int] = None,
    ):
        """
        Initialize timer.

        Args:
            name: Name/description of the operation being timed
            device: Device string ("cpu", "cuda", or "auto"). With CUDA, GPU
                    work is synchronized before and after timing.
            num_bytes: Optional amount of data processed, enables throughput
        """
        self.name = name
        self.num_bytes = num_bytes
        self.start_time: Optional[float] = None
        self.elapsed_time: Optional[float] = None

        self.device = device_type(device) if device == "auto" else device

    def _sync(self) -> None:
        if self.device == "cuda":
            import torch

            torch.cuda.synchronize()

    def __enter__(self) -> "Timer":
        """Start timing."""
        self._sync()
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Stop timing and record elapsed time."""
        if self.start_time is not None:
            self._sync()
            self.elapsed_time = time.perf_counter() - self.start_time
            if self.num_bytes is None:
                logger.info("%s took %.4f seconds", self.name, self.elapsed_time)
            else:
                logger.info(
                    "%s took %.4f seconds (%.1f MB/s)",
                    self.name,
                    self.elapsed_time,
                    throughput_mb_s(self.num_bytes, self.elapsed_time),
                )

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.elapsed_time is None:
            raise ValueError("Timer has not been used as context manager yet")
        return self.elapsed_time

    @property
    def throughput(self) -> float:
        """Megabytes per second; requires num_bytes."""
        if self.num_bytes is None:
            raise ValueError("Timer was created without num_bytes")
        return throughput_mb_s(self.num_bytes, self.elapsed)


@contextmanager
def timer(
    name: str = "Operation", device: str = "cpu", num_bytes: Optional[int] = None
) -> Generator[Timer, None, None]:
    """
    Context manager for timing code blocks (convenience function).

    Yields:
        Timer instance
    """
    with Timer(name, device=device, num_bytes=num_bytes) as t:
        yield t


def throughput_mb_s(num_bytes: int, elapsed_seconds: float) -> float:
    """Calculate megabytes (10^6 bytes) per second.

    Returns:
        Throughput (0.0 if elapsed_seconds <= 0)
    """
    if elapsed_seconds <= 0:
        return 0.0
    return num_bytes / elapsed_seconds / 1e6
