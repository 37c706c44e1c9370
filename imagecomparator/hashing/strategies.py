"""
Hash strategies for the hashing package.

A strategy turns an ordered sequence of grid intensities into a fingerprint
of the same length. Strategies hold no mutable state, so one instance can be
shared by every comparator and thread.

Based on the classic "Looks Like It" family of perceptual hashes:
http://www.hackerfactor.com/blog/index.php?/archives/432-Looks-Like-It.html
"""

from __future__ import annotations

import math
from typing import Callable, Protocol, Sequence, runtime_checkable

import numpy as np

from ..exceptions import PreconditionViolation, UnknownStrategyError
from ..models import Fingerprint


@runtime_checkable
class HashStrategy(Protocol):
    """Anything with a name and a hash(pixels) -> fingerprint method."""

    name: str

    def hash(self, pixels: Sequence[int]) -> Fingerprint: ...


def _as_array(pixels: Sequence[int]) -> np.ndarray:
    values = np.asarray(pixels, dtype=np.float64).ravel()
    if values.size == 0:
        raise PreconditionViolation("Cannot hash an empty intensity sequence")
    return values


def _as_grid(pixels: Sequence[int]) -> np.ndarray:
    values = _as_array(pixels)
    side = math.isqrt(values.size)
    if side * side != values.size:
        raise PreconditionViolation(
            f"Expected a square grid of intensities, got {values.size} values"
        )
    return values.reshape(side, side)


def _dct_matrix(n: int) -> np.ndarray:
    """Return an orthonormal DCT-II matrix of size n."""
    k = np.arange(n)[:, None]
    grid = np.arange(n)[None, :]
    mat = np.cos(np.pi * (grid + 0.5) * k / n)
    mat[0, :] *= np.sqrt(1 / n)
    mat[1:, :] *= np.sqrt(2 / n)
    return mat


class AverageHashStrategy:
    """
    Threshold every intensity against the mean of the sequence.

    A pixel at or above the (unrounded) mean gives 1, anything below gives 0.
    """

    name = 'average'

    def hash(self, pixels: Sequence[int]) -> Fingerprint:
        values = _as_array(pixels)
        mean = values.mean()
        return [1 if value >= mean else 0 for value in values]


class MedianHashStrategy:
    """Like the average hash but thresholds strictly above the median."""

    name = 'median'

    def hash(self, pixels: Sequence[int]) -> Fingerprint:
        values = _as_array(pixels)
        median = np.median(values)
        return [1 if value > median else 0 for value in values]


class DifferenceHashStrategy:
    """
    Gradient hash: compare each cell with its right-hand neighbour.

    Emits 1 where a cell is brighter than the next one in its row. The last
    column is compared with the first of the same row, so the fingerprint
    keeps one bit per cell.
    """

    name = 'difference'

    def hash(self, pixels: Sequence[int]) -> Fingerprint:
        grid = _as_grid(pixels)
        diff = grid > np.roll(grid, -1, axis=1)
        return [int(bit) for bit in diff.ravel()]


class DctHashStrategy:
    """
    Frequency-domain hash over the 2-D DCT of the grid.

    Each coefficient is compared with the median of the coefficients,
    ignoring the DC term which only carries overall brightness.
    """

    name = 'dct'

    def hash(self, pixels: Sequence[int]) -> Fingerprint:
        grid = _as_grid(pixels)
        basis = _dct_matrix(grid.shape[0])
        coefficients = (basis @ grid @ basis.T).ravel()
        if coefficients.size > 1:
            median = np.median(coefficients[1:])
        else:
            median = coefficients[0]
        return [1 if value > median else 0 for value in coefficients]


# Registry of strategy factories by name
_REGISTRY: dict[str, Callable[[], HashStrategy]] = {
    AverageHashStrategy.name: AverageHashStrategy,
    MedianHashStrategy.name: MedianHashStrategy,
    DifferenceHashStrategy.name: DifferenceHashStrategy,
    DctHashStrategy.name: DctHashStrategy,
}


def register_strategy(name: str, factory: Callable[[], HashStrategy], replace: bool = False) -> None:
    """
    Make a hash strategy available by name.

    Args:
        name: Registry key (case-insensitive)
        factory: Zero-argument callable returning a strategy, usually the class
        replace: Allow overwriting an existing registration

    Raises:
        ValueError: If name is already registered and replace is False
    """
    key = name.lower()
    if key in _REGISTRY and not replace:
        raise ValueError(f"Hash strategy '{name}' is already registered")
    _REGISTRY[key] = factory


def get_strategy(name: str) -> HashStrategy:
    """
    Create the strategy registered under name.

    Raises:
        UnknownStrategyError: If nothing is registered under name
    """
    try:
        factory = _REGISTRY[name.lower()]
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown hash strategy '{name}'. Available: {', '.join(available_strategies())}"
        ) from None
    return factory()


def available_strategies() -> list[str]:
    """Return registered strategy names, sorted."""
    return sorted(_REGISTRY)


__all__ = [
    'HashStrategy',
    'AverageHashStrategy',
    'MedianHashStrategy',
    'DifferenceHashStrategy',
    'DctHashStrategy',
    'register_strategy',
    'get_strategy',
    'available_strategies',
]
