# imageblur - Codec
"""
Bridge between encoded image files and rasters, backed by Pillow.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
import PIL.Image

from .raster import Raster

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """Raised if image data could not be decoded."""


def from_pil(image: PIL.Image.Image) -> Raster:
    """
    Converts a PIL image of any mode into a raster

    :param image: The PIL image
    :return: The raster, images without alpha become fully opaque
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return Raster.from_rgba_array(np.asarray(image, dtype=np.uint8))


def to_pil(raster: Raster) -> PIL.Image.Image:
    """
    Converts a raster into an RGBA PIL image

    :param raster: The raster
    :return: The PIL image
    """
    return PIL.Image.fromarray(raster.to_rgba_array())


def decode(data: bytes) -> Raster:
    """
    Decodes PNG, JPEG or any other format Pillow understands

    :param data: The encoded image
    :return: The decoded raster

    Raises an ImageDecodeError if the data is invalid or damaged
    """
    try:
        with PIL.Image.open(io.BytesIO(data)) as image:
            image.load()
            return from_pil(image)
    except (PIL.UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageDecodeError("Invalid or damaged image data") from e


def load(path: str | Path) -> Raster:
    """
    Loads and decodes an image file

    :param path: The file's path
    :return: The decoded raster

    Raises a FileNotFoundError if the file does not exist and an
    ImageDecodeError if it can not be decoded
    """
    path = Path(path)
    data = path.read_bytes()
    logger.debug("loaded %s (%d bytes)", path, len(data))
    return decode(data)


def encode(raster: Raster, format: str = "PNG", quality: int = 95) -> bytes:
    """
    Encodes a raster

    :param raster: The raster
    :param format: Pillow format name, e.g. "PNG", "JPEG" or "WEBP"
    :param quality: Quality for lossy formats (1-100)
    :return: The encoded data
    """
    format = format.upper()
    image = to_pil(raster)
    params = {}
    if format in ("JPEG", "JPG"):
        format = "JPEG"
        image = image.convert("RGB")
        params["quality"] = quality
    elif format == "WEBP":
        params["quality"] = quality
    output = io.BytesIO()
    image.save(output, format=format, **params)
    return output.getvalue()
