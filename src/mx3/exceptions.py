"""Exception types raised by mx3."""


class Mx3Error(Exception):
    """Base class for mx3 errors."""


class UnknownRevisionError(Mx3Error, ValueError):
    """Raised when an algorithm revision other than 1, 2 or 3 is requested."""

    def __init__(self, revision: object):
        self.revision = revision
        super().__init__(f"revision must be one of 1, 2, 3, got {revision!r}")


class ShortReadError(Mx3Error):
    """Raised by ByteCursor.read_exact when fewer bytes remain than requested.

    Attributes:
        bytes_read: Number of bytes that were available and consumed
        requested: Number of bytes asked for
    """

    def __init__(self, bytes_read: int, requested: int):
        self.bytes_read = bytes_read
        self.requested = requested
        super().__init__(f"short read: got {bytes_read} of {requested} bytes")


class ConfigError(Mx3Error, ValueError):
    """Raised for invalid digest configuration values."""
