"""
Configuration constants for Image Comparator.

This module contains all default settings including:
- Grid size and rounding precision used when hashing and scoring
- Grayscale conversion weights and blend strength for grid reduction
- Batch worker count and Pillow decoding limits
"""

# Side of the square grid an image is reduced to before hashing.
# The fingerprint length is the square of this (8 -> 64 bits)
DEFAULT_GRID_SIZE = 8

# Decimal digits kept in similarity percentages
DEFAULT_PRECISION = 1

# ITU-R 601 luma weights for RGB -> grayscale conversion
GRAYSCALE_WEIGHTS = (0.299, 0.587, 0.114)

# Weight of the original image when merged onto the resized grid
# (reduces artifacts from naive resampling)
BLEND_ALPHA = 0.5

# Fill colour used when padding an image to a square
SQUARE_FILL_COLOR = (255, 255, 255)

# Default number of parallel workers for batch comparisons
DEFAULT_WORKERS = 4

# Pillow's decompression bomb limit, raised for large scans and panoramas
MAX_IMAGE_PIXELS = 500_000_000  # 500 megapixels

# Hash strategy used when none is given
DEFAULT_STRATEGY = 'average'
