# imageblur - Stack Blur
"""
Stack blur: a fast approximation of a Gaussian blur.

The filter is separable. A horizontal pass over all rows is followed by a
vertical pass over all columns of the intermediate result. Each pass
convolves with a triangular kernel of weights ``radius + 1 - |i|`` for
``i`` in ``[-radius, radius]``, the convolution of two box filters of width
``radius + 1``. The kernel's total weight is ``(radius + 1) ** 2``.

Instead of evaluating the kernel for every pixel, a pass slides a window
along the line and keeps three running sums per channel:

- ``total``: the weighted sum of the window
- ``sum_in``: the plain sum of the samples right of the center
- ``sum_out``: the plain sum of the samples left of and at the center

Moving the window by one pixel subtracts ``sum_out`` and adds ``sum_in``,
which shifts every weight by one. The samples themselves live in a circular
buffer (the "stack") of ``2 * radius + 1`` entries. Each output sample
therefore costs O(1), independent of the radius.

Samples outside the line are replaced by the nearest edge sample. Every
index is clamped, so radii larger than the image are valid and produce the
exact edge-replicated convolution.

The per-pixel loop of the classic implementation runs here along the pass
direction only; the accumulators hold all lines of the image at once.

Usage:
    from imageblur.stack_blur import stack_blur

    blurred = stack_blur(raster, radius=8)
"""

from __future__ import annotations

import logging

import numpy as np

from .raster import Raster, pack_argb

logger = logging.getLogger(__name__)

MIN_RADIUS = 1
MAX_RADIUS = 25


def kernel_weight(radius: int) -> int:
    """Total weight of the triangular kernel of the given radius."""
    return (radius + 1) ** 2


def build_division_table(radius: int) -> np.ndarray:
    """Lookup table mapping a weighted channel sum to its normalized value.

    ``table[s]`` equals ``s / kernel_weight(radius)`` rounded half-up. Weighted
    sums of 8-bit samples never exceed ``255 * kernel_weight(radius)``, so every
    entry is a valid channel value (0-255).

    :param radius: The blur radius
    :return: int64 array of ``255 * kernel_weight(radius) + 1`` entries
    """
    divsum = kernel_weight(radius)
    sums = np.arange(255 * divsum + 1, dtype=np.int64)
    return (sums + divsum // 2) // divsum


def blur_lines(lines: np.ndarray, radius: int, table: np.ndarray | None = None) -> np.ndarray:
    """Run one stack blur pass along axis 1.

    :param lines: int array of shape (lines, length, channels)
    :param radius: The blur radius, at least 1
    :param table: Division table for ``radius``, built if omitted
    :return: The blurred lines, an int64 array of the same shape
    """
    if radius < 1:
        raise ValueError(f"Radius must be at least 1, got {radius}")
    if table is None:
        table = build_division_table(radius)
    lines = np.asarray(lines, dtype=np.int64)
    count, length, depth = lines.shape
    last = length - 1
    div = 2 * radius + 1

    stack = np.empty((div, count, depth), dtype=np.int64)
    total = np.zeros((count, depth), dtype=np.int64)
    sum_in = np.zeros((count, depth), dtype=np.int64)
    sum_out = np.zeros((count, depth), dtype=np.int64)

    for i in range(-radius, radius + 1):
        sample = lines[:, min(max(i, 0), last)]
        stack[i + radius] = sample
        total += sample * (radius + 1 - abs(i))
        if i > 0:
            sum_in += sample
        else:
            sum_out += sample

    result = np.empty_like(lines)
    pointer = radius
    for x in range(length):
        result[:, x] = table[total]

        total -= sum_out
        # oldest entry leaves the window, its slot takes the new right edge
        start = (pointer - radius + div) % div
        sum_out -= stack[start]
        sample = lines[:, min(x + radius + 1, last)]
        stack[start] = sample
        sum_in += sample
        total += sum_in

        # the entry right of the center becomes the new center
        pointer = (pointer + 1) % div
        center = stack[pointer]
        sum_out += center
        sum_in -= center

    return result


def stack_blur(raster: Raster, radius: int) -> Raster:
    """Blur the color channels of a raster.

    Alpha is carried through unchanged, only red, green and blue are blurred.

    Args:
        raster: The source raster
        radius: Blur radius in pixels (1-25)

    Returns:
        A new raster with the input's dimensions
    """
    radius = int(radius)
    if not MIN_RADIUS <= radius <= MAX_RADIUS:
        raise ValueError(f"Radius must be in [{MIN_RADIUS}, {MAX_RADIUS}], got {radius}")
    logger.debug("stack_blur %dx%d, radius=%d", raster.width, raster.height, radius)

    table = build_division_table(radius)
    alpha, red, green, blue = raster.channels()
    rgb = np.stack([red, green, blue], axis=-1).astype(np.int64)  # (H, W, 3)

    horizontal = blur_lines(rgb, radius, table)
    vertical = blur_lines(horizontal.transpose(1, 0, 2), radius, table).transpose(1, 0, 2)

    return Raster(raster.width, raster.height, pack_argb(alpha, vertical[..., 0], vertical[..., 1], vertical[..., 2]))
