"""Utilities module for mx3."""

from mx3.utils.device import resolve_device
from mx3.utils.log import get_logger
from mx3.utils.seeds import derive_seed, make_salts, seed_everything
from mx3.utils.timing import Timer, throughput_mb_s, timer

__all__ = [
    "get_logger",
    "resolve_device",
    "derive_seed",
    "make_salts",
    "seed_everything",
    "Timer",
    "timer",
    "throughput_mb_s",
]
