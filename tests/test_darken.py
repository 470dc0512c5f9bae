"""
Tests for the black overlay compositing
"""

import numpy as np
import pytest

from imageblur import Raster, darken


def test_zero_alpha_is_identity(noise_raster, translucent_raster):
    assert darken(noise_raster, 0.0) == noise_raster
    assert darken(translucent_raster, 0.0) == translucent_raster


def test_full_alpha_is_black(translucent_raster):
    result = darken(translucent_raster, 1.0)
    alpha, red, green, blue = result.channels()
    assert not red.any() and not green.any() and not blue.any()
    assert np.array_equal(alpha, translucent_raster.channels()[0])


def test_white_darkened(white_raster):
    """255 * 0.82 = 209.1 rounds to 209, alpha stays opaque."""
    result = darken(white_raster, 0.18)
    assert result == Raster.solid(4, 4, (255, 209, 209, 209))


def test_single_pixel_half():
    result = darken(Raster(1, 1, [0xFF0A141E]), 0.5)
    assert result.pixel(0, 0) == (255, 5, 10, 15)


def test_rounds_half_up():
    result = darken(Raster.solid(1, 1, (255, 1, 3, 5)), 0.5)
    assert result.pixel(0, 0) == (255, 1, 2, 3)


@pytest.mark.parametrize("alpha", [0.1, 0.18, 0.5, 0.9])
def test_alpha_channel_preserved(noise_raster, alpha):
    result = darken(noise_raster, alpha)
    assert result.is_opaque()
    assert result.size == noise_raster.size


@pytest.mark.parametrize("alpha", [0.1, 0.5])
def test_never_brightens(translucent_raster, alpha):
    before = np.stack(translucent_raster.channels()[1:])
    after = np.stack(darken(translucent_raster, alpha).channels()[1:])
    assert (after <= before).all()


def test_input_unchanged(noise_raster):
    before = noise_raster.pixels.copy()
    darken(noise_raster, 0.7)
    assert (noise_raster.pixels == before).all()


@pytest.mark.parametrize("alpha", [-0.1, 1.01])
def test_invalid_alpha(noise_raster, alpha):
    with pytest.raises(ValueError):
        darken(noise_raster, alpha)
