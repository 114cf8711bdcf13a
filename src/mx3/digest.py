"""Digest files and binary streams according to a DigestConfig."""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from mx3.base import StreamHasher
from mx3.config import DigestConfig
from mx3.hasher import AlignedStreamHasher, ChunkedStreamHasher
from mx3.revisions import get_revision

logger = logging.getLogger(__name__)


def new_stream_hasher(config: DigestConfig, length: Optional[int] = None) -> StreamHasher:
    """
    Create the incremental hasher selected by config.mode.

    Args:
        config: Digest settings; mode must be "aligned" or "chunked"
        length: Total stream length if known. Only the aligned hasher uses
            it, and then its digest equals v2.hash() of the stream.

    Returns:
        A fresh StreamHasher
    """
    if config.mode == "aligned":
        if length is None:
            return AlignedStreamHasher(config.seed)
        return AlignedStreamHasher.with_length(config.seed, length)
    if config.mode == "chunked":
        return ChunkedStreamHasher(config.seed)
    raise ValueError(f"mode {config.mode!r} has no stream hasher")


def digest_stream(
    reader: BinaryIO,
    config: Optional[DigestConfig] = None,
    length: Optional[int] = None,
) -> int:
    """
    Digest everything readable from a binary stream.

    Args:
        reader: Object with a read(size) method returning bytes
        config: Digest settings (defaults to DigestConfig())
        length: Total stream length if known (see new_stream_hasher)

    Returns:
        64-bit digest
    """
    config = config or DigestConfig()

    if config.mode == "oneshot":
        data = bytearray()
        while True:
            chunk = reader.read(config.read_size)
            if not chunk:
                break
            data += chunk
        logger.debug("oneshot digest of %d bytes (revision %d)", len(data), config.revision)
        return get_revision(config.revision).hash(data, config.seed)

    hasher = new_stream_hasher(config, length)
    total = 0
    while True:
        chunk = reader.read(config.read_size)
        if not chunk:
            break
        hasher.write(chunk)
        total += len(chunk)

    if length is not None and total != length:
        logger.warning("expected %d bytes, stream produced %d", length, total)
    logger.debug("%s digest of %d bytes", config.mode, total)
    return hasher.finish()


def digest_file(path: Union[str, Path], config: Optional[DigestConfig] = None) -> int:
    """
    Digest a file.

    The file size is passed as the stream length, so "aligned" mode gives
    the same value as v2.hash() of the file contents.

    Raises:
        FileNotFoundError: If path does not exist
    """
    path = Path(path)
    with open(path, "rb") as f:
        return digest_stream(f, config, length=path.stat().st_size)
