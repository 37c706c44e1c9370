"""
Grid reduction for the hashing package.

Shrinks an arbitrary-size image to a small square grid and reads one
grayscale intensity per cell, optionally as if the image were rotated.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import BLEND_ALPHA, DEFAULT_GRID_SIZE
from ..exceptions import PreconditionViolation
from ..models import ImageRef, IntensitySequence, RotationAngle
from ..raster import PillowRasterProvider, RasterProvider

_logger = logging.getLogger(__name__)

_DEFAULT_PROVIDER = PillowRasterProvider()


def reduce_to_grid(
    image: ImageRef,
    angle: RotationAngle = RotationAngle.D0,
    grid_size: int = DEFAULT_GRID_SIZE,
    provider: Optional[RasterProvider] = None,
) -> IntensitySequence:
    """
    Reduce an image to grid_size x grid_size grayscale intensities.

    Steps:
    1. Resolve the reference to a raster
    2. Resample into a grid_size x grid_size working raster
    3. Blend the original in at 50% to soften resampling noise
    4. Sample each cell row by row, through the rotation remap

    Args:
        image: Image reference (PIL image, path, bytes or file object)
        angle: Rotation to emulate while sampling
        grid_size: Side of the grid; the result has grid_size ** 2 values
        provider: Raster provider to use (default: Pillow)

    Returns:
        List of intensities in [0, 255], row-major

    Raises:
        ResourceError: If the image cannot be loaded
        PreconditionViolation: If grid_size is below 1
    """
    if grid_size < 1:
        raise PreconditionViolation(f"Grid size must be at least 1, got {grid_size}")

    angle = RotationAngle.parse(angle)
    provider = provider or _DEFAULT_PROVIDER

    raster = provider.load(image)
    working = provider.resize_into(grid_size, raster)
    working = provider.blend_average(working, raster, BLEND_ALPHA)
    width, height = provider.dimensions(working)

    pixels: IntensitySequence = []
    for y in range(grid_size):
        for x in range(grid_size):
            rx, ry = angle.rotate_pixel(x, y, height, width)
            pixels.append(provider.sample_gray(working, rx, ry))

    _logger.debug(f"Reduced image to {grid_size}x{grid_size} grid at {int(angle)} degrees")
    return pixels


__all__ = ['reduce_to_grid']
