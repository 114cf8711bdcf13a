"""mx3: bit mixer, pseudo-random number generator and hash function.

Three incompatible revisions live in mx3.v1, mx3.v2 and mx3.v3. The
top-level mix, hash and Mx3Rng are revision 2, and Mx3Hasher is the
revision 2 stream hasher. None of it is cryptographically secure.
"""

import logging

from . import v1, v2, v3
from .base import RandomGenerator, StreamHasher, fill_bytes_via_next
from .config import DigestConfig, load_config
from .digest import digest_file, digest_stream
from .exceptions import ConfigError, Mx3Error, ShortReadError, UnknownRevisionError
from .hasher import AlignedStreamHasher, ChunkedStreamHasher
from .revisions import get_revision
from .tail import seed_from_bytes
from .utils import get_logger, seed_everything
from .v2 import Mx3Rng, hash, mix

Mx3Hasher = AlignedStreamHasher

__version__ = "1.0.1"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Revisions
    "v1",
    "v2",
    "v3",
    "get_revision",
    # Default revision
    "mix",
    "hash",
    "Mx3Rng",
    "Mx3Hasher",
    # Streaming
    "AlignedStreamHasher",
    "ChunkedStreamHasher",
    # Interfaces
    "RandomGenerator",
    "StreamHasher",
    "fill_bytes_via_next",
    "seed_from_bytes",
    # Tools
    "DigestConfig",
    "load_config",
    "digest_file",
    "digest_stream",
    # Errors
    "Mx3Error",
    "UnknownRevisionError",
    "ShortReadError",
    "ConfigError",
    # Utils
    "get_logger",
    "seed_everything",
]
