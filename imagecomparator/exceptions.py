"""
Exception types raised by Image Comparator.

All errors surface to the immediate caller; nothing is retried or suppressed.
"""

from __future__ import annotations

import os
from typing import Any, Hashable, Optional


def describe_ref(ref: Any) -> str:
    """Return a short human-readable description of an image reference."""
    if isinstance(ref, (str, os.PathLike)):
        return os.fspath(ref)
    if isinstance(ref, (bytes, bytearray)):
        return f"<{len(ref)} bytes>"
    name = getattr(ref, 'filename', None) or getattr(ref, 'name', None)
    if isinstance(name, str) and name:
        return name
    return repr(ref)


class ImageComparatorError(Exception):
    """Base class for all Image Comparator errors."""


class ResourceError(ImageComparatorError):
    """
    An image reference could not be resolved to a raster.

    Attributes:
        ref: Description of the reference that failed (path, byte count, ...)
        key: Batch key of the failing candidate, or None outside batches
    """

    def __init__(self, message: str, ref: Any = None, key: Optional[Hashable] = None):
        super().__init__(message)
        self.ref = describe_ref(ref) if ref is not None else None
        self.key = key

    def __str__(self) -> str:
        message = super().__str__()
        if self.key is not None:
            return f"{message} (candidate {self.key!r})"
        return message


class PreconditionViolation(ImageComparatorError, ValueError):
    """Inputs violate a documented precondition (length mismatch, bad grid size, ...)."""


class UnknownStrategyError(ImageComparatorError, KeyError):
    """No hash strategy is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''
