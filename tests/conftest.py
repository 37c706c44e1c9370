"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import numpy as np
from PIL import Image


def make_pattern(size=8, seed=1234, width=None):
    """Build a reproducible grayscale-valued RGB image with no symmetry."""
    rng = np.random.default_rng(seed)
    height = size
    width = width or size
    values = rng.integers(0, 256, size=(height, width), dtype=np.uint8)
    rgb = np.stack([values, values, values], axis=-1)
    return Image.fromarray(rgb)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def pattern():
    """8x8 asymmetric image; reduces to a grid equal to itself."""
    return make_pattern()


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (exact duplicates)
        - unique.png (unique image)
        - red_large.png (higher resolution red square)
        - gradient.png (non-square, non-uniform image)
        - pattern.png (8x8 asymmetric pattern)
        - corrupted.txt (not an image)
    """
    images = {}

    # Create identical images (100x100 red square)
    img1 = Image.new('RGB', (100, 100), color='red')
    path1 = temp_dir / "identical1.png"
    img1.save(path1, 'PNG')
    images['identical1'] = str(path1)

    # Exact copy
    path2 = temp_dir / "identical2.png"
    img1.save(path2, 'PNG')
    images['identical2'] = str(path2)

    # Unique image (100x100 blue square)
    img3 = Image.new('RGB', (100, 100), color='blue')
    path3 = temp_dir / "unique.png"
    img3.save(path3, 'PNG')
    images['unique'] = str(path3)

    # Higher resolution version of red square (perceptually similar)
    img4 = Image.new('RGB', (200, 200), color='red')
    path4 = temp_dir / "red_large.png"
    img4.save(path4, 'PNG')
    images['red_large'] = str(path4)

    # Horizontal gradient, wider than tall
    ramp = np.tile(np.linspace(0, 255, 64, dtype=np.uint8), (40, 1))
    img5 = Image.fromarray(np.stack([ramp, ramp // 2, 255 - ramp], axis=-1))
    path5 = temp_dir / "gradient.png"
    img5.save(path5, 'PNG')
    images['gradient'] = str(path5)

    path6 = temp_dir / "pattern.png"
    make_pattern().save(path6, 'PNG')
    images['pattern'] = str(path6)

    # Corrupted file
    path7 = temp_dir / "corrupted.txt"
    path7.write_text("not an image")
    images['corrupted'] = str(path7)

    return images
