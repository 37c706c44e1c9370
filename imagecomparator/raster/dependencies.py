"""
Dependency initialization for the raster package.

Handles PIL and HEIC/HEIF support imports with proper
error handling and configuration.
"""

from __future__ import annotations

import warnings
import logging

from ..config import MAX_IMAGE_PIXELS

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image, UnidentifiedImageError
except ImportError:
    raise ImportError(
        "Required package not found!\n"
        "Install with: pip install Pillow"
    )

# Register HEIC/HEIF support via pillow-heif
# This must be done before opening any HEIC files
HAS_HEIF_SUPPORT = False
try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
    HAS_HEIF_SUPPORT = True
    _logger.debug("HEIC/HEIF support enabled via pillow-heif")
except ImportError:
    _logger.warning(
        "pillow-heif not installed - HEIC/HEIF images cannot be loaded. "
        "Install with: pip install pillow-heif"
    )

Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

# Images below the limit above are expected, don't warn about them
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)


__all__ = [
    'Image',
    'UnidentifiedImageError',
    'HAS_HEIF_SUPPORT',
    '_logger',
]
