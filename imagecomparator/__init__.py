"""
Image Comparator
================
Perceptual image hashing and rotation-tolerant similarity scoring.

Features:
- Reduces any image to a small grayscale grid (default 8x8 -> 64-bit hash)
- Pluggable hash strategies: average (default), median, difference, DCT
- Emulates 90/180/270 degree rotations without rotating the image
- Normalized Hamming similarity as a percentage
- Batch comparison over many candidates on a thread pool
- Supports every format Pillow can decode, plus HEIC/HEIF via pillow-heif
"""

__version__ = "1.0.0"
__author__ = "Zedidence"

from .models import RotationAngle, rotate_pixel
from .config import DEFAULT_GRID_SIZE, DEFAULT_PRECISION
from .exceptions import (
    ImageComparatorError,
    ResourceError,
    PreconditionViolation,
    UnknownStrategyError,
)
from .raster import PillowRasterProvider, RasterProvider, has_heif_support
from .hashing import (
    reduce_to_grid,
    HashStrategy,
    AverageHashStrategy,
    MedianHashStrategy,
    DifferenceHashStrategy,
    DctHashStrategy,
    register_strategy,
    get_strategy,
    available_strategies,
)
from .fingerprints import (
    hamming_distance,
    compare_bits,
    compare_hash_strings,
    fingerprint_to_string,
    fingerprint_from_string,
    fingerprint_to_hex,
    fingerprint_from_hex,
    to_image_hash,
)
from .comparator import (
    ImageComparator,
    hash_image,
    compare,
    compare_many,
    detect,
    detect_many,
)

__all__ = [
    "RotationAngle",
    "rotate_pixel",
    "DEFAULT_GRID_SIZE",
    "DEFAULT_PRECISION",
    "ImageComparatorError",
    "ResourceError",
    "PreconditionViolation",
    "UnknownStrategyError",
    "PillowRasterProvider",
    "RasterProvider",
    "has_heif_support",
    "reduce_to_grid",
    "HashStrategy",
    "AverageHashStrategy",
    "MedianHashStrategy",
    "DifferenceHashStrategy",
    "DctHashStrategy",
    "register_strategy",
    "get_strategy",
    "available_strategies",
    "hamming_distance",
    "compare_bits",
    "compare_hash_strings",
    "fingerprint_to_string",
    "fingerprint_from_string",
    "fingerprint_to_hex",
    "fingerprint_from_hex",
    "to_image_hash",
    "ImageComparator",
    "hash_image",
    "compare",
    "compare_many",
    "detect",
    "detect_many",
]
