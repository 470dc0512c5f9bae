"""
Pytest fixtures for imageblur tests
"""

import numpy as np
import pytest

from imageblur import Raster


@pytest.fixture
def white_raster() -> Raster:
    """A 4x4 opaque white raster."""
    return Raster.solid(4, 4, (255, 255, 255, 255))


@pytest.fixture
def noise_raster() -> Raster:
    """A 31x23 opaque raster with random colors."""
    rng = np.random.default_rng(42)
    data = rng.integers(0, 256, size=(23, 31, 4), dtype=np.uint8)
    data[:, :, 3] = 255
    return Raster.from_rgba_array(data)


@pytest.fixture
def translucent_raster() -> Raster:
    """A 12x9 raster with random colors and random alpha."""
    rng = np.random.default_rng(7)
    data = rng.integers(0, 256, size=(9, 12, 4), dtype=np.uint8)
    return Raster.from_rgba_array(data)
