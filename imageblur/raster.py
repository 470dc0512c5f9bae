# imageblur - Raster
"""
The Raster data model: a width x height grid of packed 8-bit ARGB samples.

Each pixel is stored as a single ``uint32`` in ``0xAARRGGBB`` layout, in
row-major order. A Raster is immutable once created - its pixel buffer is a
read-only numpy array - so stages always build a fresh Raster.

Usage:
    from imageblur.raster import Raster, pack_argb

    raster = Raster.solid(4, 4, pack_argb(255, 255, 255, 255))
    alpha, red, green, blue = raster.channels()
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

PackedColor = int
ColorTypes = Union[PackedColor, tuple[int, int, int, int]]


def pack_argb(alpha, red, green, blue):
    """Pack four 8-bit channels into ``0xAARRGGBB``.

    Works with plain integers as well as numpy arrays of equal shape.

    :param alpha: Alpha channel (0-255)
    :param red: Red channel (0-255)
    :param green: Green channel (0-255)
    :param blue: Blue channel (0-255)
    :return: The packed color(s), ``int`` for scalars, ``uint32`` array otherwise
    """
    if all(isinstance(c, (int, np.integer)) for c in (alpha, red, green, blue)):
        for value in (alpha, red, green, blue):
            if not 0 <= int(value) <= 255:
                raise ValueError(f"Channel value out of range: {value}")
        return (int(alpha) << 24) | (int(red) << 16) | (int(green) << 8) | int(blue)
    return (
        (np.asarray(alpha, dtype=np.uint32) << 24)
        | (np.asarray(red, dtype=np.uint32) << 16)
        | (np.asarray(green, dtype=np.uint32) << 8)
        | np.asarray(blue, dtype=np.uint32)
    )


def unpack_argb(packed):
    """Split packed ``0xAARRGGBB`` color(s) into ``(alpha, red, green, blue)``.

    :param packed: A packed color or an array of packed colors
    :return: Tuple of four ints, or four ``uint8`` arrays for array input
    """
    if isinstance(packed, (int, np.integer)):
        packed = int(packed)
        return (packed >> 24) & 0xFF, (packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF
    packed = np.asarray(packed, dtype=np.uint32)
    return (
        ((packed >> 24) & 0xFF).astype(np.uint8),
        ((packed >> 16) & 0xFF).astype(np.uint8),
        ((packed >> 8) & 0xFF).astype(np.uint8),
        (packed & 0xFF).astype(np.uint8),
    )


class Raster:
    """
    Immutable width x height buffer of packed ARGB colors.

    ``pixels`` always holds exactly ``width * height`` entries. Two rasters
    compare equal if they have the same size and bit-identical pixels.
    """

    __slots__ = ("width", "height", "pixels")

    def __init__(self, width: int, height: int, pixels: Sequence[int] | np.ndarray):
        """
        :param width: The width in pixels, at least 1
        :param height: The height in pixels, at least 1
        :param pixels: ``width * height`` packed ``0xAARRGGBB`` colors in row-major order.
            The data is copied, later changes to the source do not affect the raster.

        Raises a ValueError if the dimensions and the pixel count do not match
        """
        width = int(width)
        height = int(height)
        if width < 1 or height < 1:
            raise ValueError(f"Raster dimensions must be at least 1x1, got {width}x{height}")
        data = np.array(pixels, dtype=np.uint32).reshape(-1)
        if data.size != width * height:
            raise ValueError(
                f"Expected {width * height} pixels for a {width}x{height} raster, got {data.size}"
            )
        data.flags.writeable = False
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "pixels", data)

    def __setattr__(self, key, value):
        raise AttributeError(f"{key} can not be modified after initialization")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __hash__(self):
        return hash((self.width, self.height, self.pixels.tobytes()))

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height})"

    @property
    def size(self) -> tuple[int, int]:
        """
        Returns the raster's size in pixels

        :return: The size as tuple (width, height)
        """
        return self.width, self.height

    @classmethod
    def from_channels(cls, alpha, red, green, blue) -> Raster:
        """
        Creates a raster from four 2-D channel planes of shape (height, width)

        :param alpha: Alpha plane
        :param red: Red plane
        :param green: Green plane
        :param blue: Blue plane
        :return: The new raster
        """
        planes = [np.asarray(c) for c in (alpha, red, green, blue)]
        shape = planes[0].shape
        if len(shape) != 2 or any(p.shape != shape for p in planes):
            raise ValueError(f"Expected four 2-D planes of equal shape, got {[p.shape for p in planes]}")
        planes = [np.clip(p, 0, 255).astype(np.uint32) for p in planes]
        height, width = shape
        return cls(width, height, pack_argb(*planes))

    @classmethod
    def from_rgba_array(cls, array: np.ndarray) -> Raster:
        """
        Creates a raster from a numpy array as used by Pillow and OpenCV

        :param array: uint8 array of shape (H, W, 4) in RGBA order or (H, W, 3)
            in RGB order. RGB data is treated as fully opaque.
        :return: The new raster
        """
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected image (H, W, 3|4), got shape {array.shape}")
        if array.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {array.dtype}")
        if array.shape[2] == 4:
            alpha = array[:, :, 3]
        else:
            alpha = np.full(array.shape[:2], 255, dtype=np.uint8)
        return cls.from_channels(alpha, array[:, :, 0], array[:, :, 1], array[:, :, 2])

    @classmethod
    def solid(cls, width: int, height: int, color: ColorTypes) -> Raster:
        """
        Creates a raster filled with a single color

        :param width: The width in pixels
        :param height: The height in pixels
        :param color: Packed ``0xAARRGGBB`` color or an ``(a, r, g, b)`` tuple
        :return: The new raster
        """
        if isinstance(color, tuple):
            color = pack_argb(*color)
        return cls(width, height, np.full(int(width) * int(height), color, dtype=np.uint32))

    def channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Returns the raster's channels as separate planes

        :return: (alpha, red, green, blue), each a uint8 array of shape (height, width)
        """
        grid = self.pixels.reshape(self.height, self.width)
        return unpack_argb(grid)

    def to_rgba_array(self) -> np.ndarray:
        """
        Returns the pixel data in the numpy layout used by Pillow

        :return: uint8 array of shape (height, width, 4) in RGBA order
        """
        alpha, red, green, blue = self.channels()
        return np.dstack([red, green, blue, alpha])

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """
        Returns a single pixel

        :param x: Column
        :param y: Row
        :return: The color as (alpha, red, green, blue)
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self.width}x{self.height}")
        return unpack_argb(int(self.pixels[y * self.width + x]))

    def is_opaque(self) -> bool:
        """Returns True if every pixel has alpha 255."""
        return bool(np.all((self.pixels >> 24) == 0xFF))
