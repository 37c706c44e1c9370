"""
Raster package for Image Comparator.

Decoding, resampling and pixel access, backed by Pillow.

Public API:
- PillowRasterProvider: Default RasterProvider implementation
- RasterProvider: Protocol grid reduction depends on
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .provider import RasterProvider, PillowRasterProvider
from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    'RasterProvider',
    'PillowRasterProvider',
    'has_heif_support',
]
