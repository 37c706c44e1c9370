"""
Image comparison facade.

ImageComparator ties grid reduction, a hash strategy and fingerprint scoring
together. Its strategy is fixed when it is constructed, so one comparator can
be shared freely between threads.
"""

from __future__ import annotations

import logging
from typing import Hashable, Optional, Union

from .batch import Candidates, run_batch
from .config import (
    DEFAULT_GRID_SIZE,
    DEFAULT_PRECISION,
    DEFAULT_STRATEGY,
    DEFAULT_WORKERS,
    SQUARE_FILL_COLOR,
)
from . import fingerprints
from .hashing import HashStrategy, get_strategy, reduce_to_grid
from .models import Fingerprint, ImageRef, RotationAngle
from .raster import PillowRasterProvider, RasterProvider
from .raster.dependencies import Image

_logger = logging.getLogger(__name__)


class ImageComparator:
    """
    Hash images and score their similarity.

    Usage:
        comparator = ImageComparator()
        comparator.compare('a.jpg', 'b.jpg')            # 0..100
        comparator.detect('a.jpg', 'b_rotated.jpg')     # best of 4 rotations
        comparator.detect_many('a.jpg', {'x': 'x.jpg', 'y': 'y.jpg'})

        dct = comparator.set_hash_strategy('dct')      # new comparator
    """

    def __init__(
        self,
        strategy: Union[HashStrategy, str, None] = None,
        provider: Optional[RasterProvider] = None,
        grid_size: int = DEFAULT_GRID_SIZE,
        max_workers: int = DEFAULT_WORKERS,
        show_progress: bool = False,
    ):
        """
        Initialize the comparator.

        Args:
            strategy: Hash strategy instance or registered name (default: average)
            provider: Raster provider (default: Pillow)
            grid_size: Side of the hashing grid used by compare/detect
            max_workers: Thread pool size for compare_many/detect_many
            show_progress: Show a tqdm progress bar during batches
        """
        if strategy is None:
            strategy = DEFAULT_STRATEGY
        if isinstance(strategy, str):
            strategy = get_strategy(strategy)

        self._strategy = strategy
        self._provider = provider or PillowRasterProvider()
        self._grid_size = grid_size
        self._max_workers = max_workers
        self._show_progress = show_progress

    def __repr__(self) -> str:
        name = getattr(self._strategy, 'name', type(self._strategy).__name__)
        return f"ImageComparator(strategy={name!r}, grid_size={self._grid_size})"

    @property
    def strategy(self) -> HashStrategy:
        """The hash strategy used by this comparator."""
        return self._strategy

    @property
    def grid_size(self) -> int:
        return self._grid_size

    def set_hash_strategy(self, strategy: Union[HashStrategy, str]) -> 'ImageComparator':
        """
        Return a comparator using another hash strategy.

        This comparator is left unchanged; all other settings are copied.
        """
        return ImageComparator(
            strategy=strategy,
            provider=self._provider,
            grid_size=self._grid_size,
            max_workers=self._max_workers,
            show_progress=self._show_progress,
        )

    def hash_image(
        self,
        image: ImageRef,
        angle: RotationAngle = RotationAngle.D0,
        grid_size: Optional[int] = None,
    ) -> Fingerprint:
        """
        Build a perceptual hash of an image.

        Args:
            image: Image reference
            angle: Build the hash as if the image were rotated by this much
            grid_size: Grid side (default: the comparator's); the fingerprint
                       has grid_size ** 2 bits

        Returns:
            List of 0/1 bits

        Raises:
            ResourceError: If the image cannot be loaded
        """
        pixels = reduce_to_grid(
            image,
            angle=angle,
            grid_size=self._grid_size if grid_size is None else grid_size,
            provider=self._provider,
        )
        return self._strategy.hash(pixels)

    def compare(
        self,
        source: ImageRef,
        candidate: ImageRef,
        angle: RotationAngle = RotationAngle.D0,
        precision: int = DEFAULT_PRECISION,
    ) -> float:
        """
        Similarity of two images as a percentage.

        The source is never rotated; the candidate is hashed at angle.

        Raises:
            ResourceError: If either image cannot be loaded
            PreconditionViolation: If angle is not 0, 90, 180 or 270
        """
        angle = RotationAngle.parse(angle)
        source_hash = self.hash_image(source)
        return self._score(source_hash, candidate, angle, precision)

    def compare_many(
        self,
        source: ImageRef,
        candidates: Candidates,
        angle: RotationAngle = RotationAngle.D0,
        precision: int = DEFAULT_PRECISION,
    ) -> dict[Hashable, float]:
        """
        Compare the source with every candidate.

        Args:
            source: Reference image
            candidates: Mapping of key -> image, or a sequence (keys = indices)
            angle: Rotation applied to every candidate
            precision: Decimal digits in each score

        Returns:
            Dict of key -> similarity, in input order

        Raises:
            ResourceError: For the source or the first failing candidate
                           (fail-fast, error.key names the candidate)
        """
        angle = RotationAngle.parse(angle)
        source_hash = self.hash_image(source)
        return run_batch(
            lambda candidate: self._score(source_hash, candidate, angle, precision),
            candidates,
            max_workers=self._max_workers,
            show_progress=self._show_progress,
        )

    def compare_hash_strings(self, s1: str, s2: str, precision: int = DEFAULT_PRECISION) -> float:
        """Similarity of two stored hash strings (no rotation)."""
        return fingerprints.compare_hash_strings(s1, s2, precision)

    def detect(
        self,
        source: ImageRef,
        candidate: ImageRef,
        precision: int = DEFAULT_PRECISION,
    ) -> float:
        """
        Best similarity over all four rotations of the candidate.

        Rotations are tried in order 0, 90, 180, 270; the first maximum wins.

        Raises:
            ResourceError: If either image cannot be loaded
        """
        return self._detect(self.hash_image(source), candidate, precision)

    def detect_many(
        self,
        source: ImageRef,
        candidates: Candidates,
        precision: int = DEFAULT_PRECISION,
    ) -> dict[Hashable, float]:
        """
        detect() for every candidate.

        Same key and error contract as compare_many.
        """
        source_hash = self.hash_image(source)
        return run_batch(
            lambda candidate: self._detect(source_hash, candidate, precision),
            candidates,
            max_workers=self._max_workers,
            show_progress=self._show_progress,
            desc="Detecting rotations",
        )

    def square_image(self, image: ImageRef, fill: tuple[int, int, int] = SQUARE_FILL_COLOR) -> Image.Image:
        """Load an image and pad it to a square with fill colour."""
        return self._provider.square(self._provider.load(image), fill)

    @staticmethod
    def fingerprint_to_string(fp: Fingerprint) -> str:
        """Return the binary string form of a fingerprint."""
        return fingerprints.fingerprint_to_string(fp)

    def _score(
        self,
        source_hash: Fingerprint,
        candidate: ImageRef,
        angle: RotationAngle,
        precision: int,
    ) -> float:
        candidate_hash = self.hash_image(candidate, RotationAngle.parse(angle))
        return fingerprints.compare_bits(source_hash, candidate_hash, precision)

    def _detect(self, source_hash: Fingerprint, candidate: ImageRef, precision: int) -> float:
        # Load once; every rotation samples the same raster
        raster = self._provider.load(candidate)

        best: Optional[float] = None
        best_angle = RotationAngle.D0
        for angle in RotationAngle:
            similarity = self._score(source_hash, raster, angle, precision)
            if best is None or similarity > best:
                best, best_angle = similarity, angle

        _logger.debug(f"Best match at {int(best_angle)} degrees: {best}")
        return best


def hash_image(
    image: ImageRef,
    angle: RotationAngle = RotationAngle.D0,
    grid_size: int = DEFAULT_GRID_SIZE,
    strategy: Union[HashStrategy, str, None] = None,
) -> Fingerprint:
    """Hash an image with a default comparator (see ImageComparator.hash_image)."""
    return ImageComparator(strategy, grid_size=grid_size).hash_image(image, angle)


def compare(
    source: ImageRef,
    candidate: ImageRef,
    angle: RotationAngle = RotationAngle.D0,
    precision: int = DEFAULT_PRECISION,
    strategy: Union[HashStrategy, str, None] = None,
) -> float:
    """Compare two images with a default comparator (see ImageComparator.compare)."""
    return ImageComparator(strategy).compare(source, candidate, angle, precision)


def compare_many(
    source: ImageRef,
    candidates: Candidates,
    angle: RotationAngle = RotationAngle.D0,
    precision: int = DEFAULT_PRECISION,
    strategy: Union[HashStrategy, str, None] = None,
) -> dict[Hashable, float]:
    """Batch compare with a default comparator (see ImageComparator.compare_many)."""
    return ImageComparator(strategy).compare_many(source, candidates, angle, precision)


def detect(
    source: ImageRef,
    candidate: ImageRef,
    precision: int = DEFAULT_PRECISION,
    strategy: Union[HashStrategy, str, None] = None,
) -> float:
    """Rotation-tolerant compare with a default comparator (see ImageComparator.detect)."""
    return ImageComparator(strategy).detect(source, candidate, precision)


def detect_many(
    source: ImageRef,
    candidates: Candidates,
    precision: int = DEFAULT_PRECISION,
    strategy: Union[HashStrategy, str, None] = None,
) -> dict[Hashable, float]:
    """Batch detect with a default comparator (see ImageComparator.detect_many)."""
    return ImageComparator(strategy).detect_many(source, candidates, precision)


__all__ = [
    'ImageComparator',
    'hash_image',
    'compare',
    'compare_many',
    'detect',
    'detect_many',
]
