"""
Data models for Image Comparator.

Contains the rotation enum used to emulate rotated images and the type
aliases shared by the hashing and comparison modules.
"""

from __future__ import annotations

import os
from enum import IntEnum
from typing import IO, Any, Union

from PIL import Image

from .exceptions import PreconditionViolation

# A loaded raster, a path, raw encoded bytes or an open binary file
ImageRef = Union[Image.Image, str, os.PathLike, bytes, bytearray, IO[bytes]]

# Grayscale values in [0, 255], grid row-major
IntensitySequence = list[int]

# One 0/1 entry per sampled grid cell
Fingerprint = list[int]


class RotationAngle(IntEnum):
    """
    Axis-aligned rotations an image can be compared under.

    Instead of rotating the image, the position of each sampled pixel is
    rotated. This lets a hash be built "as if" the image were rotated without
    creating another raster. Only 90 degree multiples are supported.

    Attributes:
        D0: No rotation
        D90: Quarter turn
        D180: Half turn
        D270: Three-quarter turn
    """
    D0 = 0
    D90 = 90
    D180 = 180
    D270 = 270

    def rotate_pixel(self, x: int, y: int, height: int, width: int) -> tuple[int, int]:
        """
        Map a logical grid coordinate to the physical one to sample.

        Args:
            x: Column in the logical (rotated) grid
            y: Row in the logical (rotated) grid
            height: Grid height
            width: Grid width

        Returns:
            Tuple of (rx, ry) to read from the unrotated raster
        """
        if self is RotationAngle.D0:
            return x, y
        if self is RotationAngle.D90:
            return height - 1 - y, x
        if self is RotationAngle.D180:
            return width - 1 - x, height - 1 - y
        if self is RotationAngle.D270:
            return y, height - 1 - x
        raise AssertionError(f"Unhandled rotation: {self!r}")

    @classmethod
    def parse(cls, value: Any) -> 'RotationAngle':
        """
        Coerce degrees (0, 90, 180, 270, also as strings) into a RotationAngle.

        Raises:
            PreconditionViolation: For any other value, including fractional
                                   degrees such as 90.5
        """
        if isinstance(value, cls):
            return value
        try:
            degrees = int(value)
            if not isinstance(value, str) and degrees != value:
                raise ValueError(value)
            return cls(degrees)
        except (TypeError, ValueError, OverflowError):
            raise PreconditionViolation(
                f"Unsupported rotation {value!r}; expected one of "
                f"{', '.join(str(int(a)) for a in cls)}"
            ) from None


def rotate_pixel(x: int, y: int, height: int, width: int, angle: RotationAngle) -> tuple[int, int]:
    """Functional form of RotationAngle.rotate_pixel."""
    return RotationAngle.parse(angle).rotate_pixel(x, y, height, width)
