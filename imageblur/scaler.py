# imageblur - Scaler
"""
Bilinear resizing of rasters.

Sample positions use pixel-center alignment, so scaling a raster to its own
size returns it unchanged.
"""

from __future__ import annotations

import logging

import numpy as np

from .raster import Raster

logger = logging.getLogger(__name__)


def _sample_positions(source_size: int, target_size: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Source index pairs and interpolation weights for one axis.

    :param source_size: Number of source samples along the axis
    :param target_size: Number of target samples along the axis
    :return: (lower index, upper index, weight of the upper sample)
    """
    pos = (np.arange(target_size, dtype=np.float64) + 0.5) * (source_size / target_size) - 0.5
    pos = np.clip(pos, 0.0, source_size - 1)
    lower = np.floor(pos).astype(np.intp)
    upper = np.minimum(lower + 1, source_size - 1)
    return lower, upper, pos - lower


def scale(raster: Raster, target_width: int, target_height: int) -> Raster:
    """Resize a raster using bilinear interpolation.

    All four channels are interpolated from the four nearest source samples,
    rounded half-up and clamped to 0-255.

    Args:
        raster: The source raster
        target_width: Width of the result, values below 1 are treated as 1
        target_height: Height of the result, values below 1 are treated as 1

    Returns:
        A new raster of exactly (target_width, target_height)
    """
    target_width = max(1, int(target_width))
    target_height = max(1, int(target_height))
    logger.debug("scale %dx%d -> %dx%d", raster.width, raster.height, target_width, target_height)

    x0, x1, fx = _sample_positions(raster.width, target_width)
    y0, y1, fy = _sample_positions(raster.height, target_height)

    # gather the needed samples as uint8 first, float buffers are only target sized
    planes = np.stack(raster.channels(), axis=-1)  # (H, W, 4) ARGB
    top = planes[y0]
    bottom = planes[y1]
    fx = fx[np.newaxis, :, np.newaxis]
    fy = fy[:, np.newaxis, np.newaxis]

    top = top[:, x0].astype(np.float64) * (1.0 - fx) + top[:, x1].astype(np.float64) * fx
    bottom = bottom[:, x0].astype(np.float64) * (1.0 - fx) + bottom[:, x1].astype(np.float64) * fx
    result = top * (1.0 - fy) + bottom * fy

    result = np.clip(np.floor(result + 0.5), 0, 255).astype(np.uint8)
    return Raster.from_channels(result[..., 0], result[..., 1], result[..., 2], result[..., 3])
