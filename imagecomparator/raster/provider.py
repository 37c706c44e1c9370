"""
Pillow-backed raster provider.

Resolves image references into RGB rasters and supplies the handful of
raster operations grid reduction needs: resize, 50% blend, grayscale
sampling and square padding.
"""

from __future__ import annotations

import io
import math
import os
from typing import Any, Protocol, runtime_checkable

from ..config import BLEND_ALPHA, GRAYSCALE_WEIGHTS, SQUARE_FILL_COLOR
from ..exceptions import ResourceError, describe_ref
from ..models import ImageRef
from .dependencies import Image, UnidentifiedImageError, HAS_HEIF_SUPPORT, _logger


@runtime_checkable
class RasterProvider(Protocol):
    """Raster operations consumed by grid reduction."""

    def load(self, ref: ImageRef) -> Image.Image: ...

    def dimensions(self, raster: Image.Image) -> tuple[int, int]: ...

    def resize_into(self, size: int, source: Image.Image) -> Image.Image: ...

    def blend_average(self, dest: Image.Image, source: Image.Image, alpha: float = BLEND_ALPHA) -> Image.Image: ...

    def sample_gray(self, raster: Image.Image, x: int, y: int) -> int: ...

    def square(self, raster: Image.Image, fill: tuple[int, int, int] = SQUARE_FILL_COLOR) -> Image.Image: ...


class PillowRasterProvider:
    """
    RasterProvider implementation on top of Pillow.

    Stateless; a single instance can be shared between threads.
    """

    def load(self, ref: ImageRef) -> Image.Image:
        """
        Resolve an image reference to a decoded RGB raster.

        Args:
            ref: PIL image, path, encoded bytes or binary file object

        Returns:
            RGB PIL image. A PIL image passed in is never modified.

        Raises:
            ResourceError: If the reference cannot be read or decoded
        """
        if isinstance(ref, Image.Image):
            return ref if ref.mode == 'RGB' else ref.convert('RGB')

        if isinstance(ref, (bytes, bytearray)):
            source: Any = io.BytesIO(ref)
        elif isinstance(ref, (str, os.PathLike)):
            source = os.fspath(ref)
            ext = os.path.splitext(str(source))[1].lower()
            if ext in {'.heic', '.heif'} and not HAS_HEIF_SUPPORT:
                raise ResourceError(
                    f"HEIC/HEIF support not installed (pip install pillow-heif): {describe_ref(ref)}",
                    ref=ref,
                )
        elif hasattr(ref, 'read'):
            source = ref
        else:
            raise ResourceError(
                f"Unsupported image reference type: {type(ref).__name__}", ref=ref
            )

        try:
            with Image.open(source) as img:
                # Force load to detect truncated images early
                img.load()
                raster = img.convert('RGB')
        except FileNotFoundError as e:
            raise ResourceError(f"Image file not found: {describe_ref(ref)}", ref=ref) from e
        except UnidentifiedImageError as e:
            raise ResourceError(f"Not a valid image: {describe_ref(ref)}", ref=ref) from e
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ResourceError(
                f"Could not create an image resource from {describe_ref(ref)}: {e}", ref=ref
            ) from e

        _logger.debug(f"Loaded {describe_ref(ref)} ({raster.width}x{raster.height})")
        return raster

    def dimensions(self, raster: Image.Image) -> tuple[int, int]:
        """Return (width, height) of a raster."""
        return raster.size

    def resize_into(self, size: int, source: Image.Image) -> Image.Image:
        """Resample source into a new size x size raster."""
        return source.resize((size, size), Image.Resampling.BICUBIC)

    def blend_average(
        self,
        dest: Image.Image,
        source: Image.Image,
        alpha: float = BLEND_ALPHA,
    ) -> Image.Image:
        """
        Merge the top-left region of source onto dest.

        The region is dest's size, clipped to source's bounds; pixels of dest
        outside it are kept as-is.

        Args:
            dest: Raster to merge onto (not modified)
            source: Raster to take the region from
            alpha: Weight of source in the result (0.5 = plain average)

        Returns:
            New raster of dest's size
        """
        width = min(dest.width, source.width)
        height = min(dest.height, source.height)
        box = (0, 0, width, height)

        merged = dest.copy()
        blended = Image.blend(dest.crop(box), source.crop(box), alpha)
        merged.paste(blended, (0, 0))
        return merged

    def sample_gray(self, raster: Image.Image, x: int, y: int) -> int:
        """Return the floored grayscale intensity of the pixel at (x, y)."""
        r, g, b = raster.getpixel((x, y))[:3]
        wr, wg, wb = GRAYSCALE_WEIGHTS
        return int(math.floor(r * wr + g * wg + b * wb))

    def square(
        self,
        raster: Image.Image,
        fill: tuple[int, int, int] = SQUARE_FILL_COLOR,
    ) -> Image.Image:
        """
        Pad a raster to a 1:1 aspect ratio.

        The canvas side is the longer dimension; the image is centered along
        the shorter one and the rest is filled with fill.
        """
        width, height = raster.size
        side = max(width, height)
        canvas = Image.new('RGB', (side, side), fill)
        canvas.paste(raster, ((side - width) // 2, (side - height) // 2))
        return canvas


__all__ = ['RasterProvider', 'PillowRasterProvider']
