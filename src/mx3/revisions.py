"""Lookup of the mx3 algorithm revisions by number."""

from types import ModuleType
from typing import Dict, Union

from mx3 import v1, v2, v3
from mx3.exceptions import UnknownRevisionError

REVISIONS: Dict[int, ModuleType] = {
    1: v1,
    2: v2,
    3: v3,
}


def normalize_revision(revision: Union[int, str]) -> int:
    """Accept 1, 2, 3 or "v1", "v2", "v3" (case-insensitive) and return the number.

    Raises:
        UnknownRevisionError: For anything else
    """
    value = revision
    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("v"):
            text = text[1:]
        if not text.isdigit():
            raise UnknownRevisionError(revision)
        value = int(text)
    if isinstance(value, bool) or not isinstance(value, int) or value not in REVISIONS:
        raise UnknownRevisionError(revision)
    return value


def get_revision(revision: Union[int, str]) -> ModuleType:
    """Return the module (v1, v2 or v3) implementing a revision.

    The module exposes mix(), hash() and Mx3Rng.

    Example:
        >>> get_revision("v3").mix(123456789) == v3.mix(123456789)
        True
    """
    return REVISIONS[normalize_revision(revision)]
