"""
Hashing package for Image Comparator.

Public API:
- reduce_to_grid: Reduce an image to a grid of grayscale intensities
- HashStrategy: Protocol for intensity -> fingerprint strategies
- AverageHashStrategy, MedianHashStrategy, DifferenceHashStrategy,
  DctHashStrategy: Built-in strategies
- register_strategy, get_strategy, available_strategies: Strategy registry
"""

from __future__ import annotations

from .strategies import (
    HashStrategy,
    AverageHashStrategy,
    MedianHashStrategy,
    DifferenceHashStrategy,
    DctHashStrategy,
    register_strategy,
    get_strategy,
    available_strategies,
)
from .reducer import reduce_to_grid

__all__ = [
    'reduce_to_grid',
    'HashStrategy',
    'AverageHashStrategy',
    'MedianHashStrategy',
    'DifferenceHashStrategy',
    'DctHashStrategy',
    'register_strategy',
    'get_strategy',
    'available_strategies',
]
