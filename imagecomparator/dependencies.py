"""
Optional dependencies for Image Comparator.

tqdm provides progress bars for batch comparisons when installed.
"""

from __future__ import annotations

from typing import Optional, Any

# Store as Optional[Any] to satisfy type checkers when tqdm is not installed
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass


__all__ = [
    'HAS_TQDM',
    '_tqdm_class',
]
