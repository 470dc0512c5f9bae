# imageblur - Storage
"""
Output naming and writing.

Processed images are stored next to each other as ``<name>_blur<ext>``. If
that name is taken, a counter is appended: ``<name>_blur_1<ext>``,
``<name>_blur_2<ext>`` and so on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .codec import encode
from .config import settings
from .raster import Raster

logger = logging.getLogger(__name__)

# extension -> (Pillow format, MIME type)
FORMATS: dict[str, tuple[str, str]] = {
    ".png": ("PNG", "image/png"),
    ".jpg": ("JPEG", "image/jpeg"),
    ".jpeg": ("JPEG", "image/jpeg"),
    ".webp": ("WEBP", "image/webp"),
}


def output_name(
    original_name: str,
    suffix: str | None = None,
    default_extension: str | None = None,
) -> tuple[str, str]:
    """
    Derives the output base name and extension from the source's file name

    "photo.jpg" becomes ("photo_blur", ".jpg"). Names without an extension,
    and dot files such as ".hidden", get the default extension.

    :param original_name: The source's file name
    :param suffix: Appended to the base name, ``settings.OUTPUT_SUFFIX`` by default
    :param default_extension: Used if the name has no extension,
        ``settings.DEFAULT_EXTENSION`` by default
    :return: Tuple of base name and extension (including the dot)
    """
    suffix = settings.OUTPUT_SUFFIX if suffix is None else suffix
    default_extension = settings.DEFAULT_EXTENSION if default_extension is None else default_extension
    dot_index = original_name.rfind(".")
    if dot_index > 0:
        return original_name[:dot_index] + suffix, original_name[dot_index:]
    return original_name + suffix, default_extension


def image_format(file_name: str) -> str:
    """Pillow format for a file name, PNG for unknown extensions."""
    return FORMATS.get(Path(file_name).suffix.lower(), FORMATS[".png"])[0]


def mime_type(file_name: str) -> str:
    """MIME type for a file name, image/png for unknown extensions."""
    return FORMATS.get(Path(file_name).suffix.lower(), FORMATS[".png"])[1]


def _candidates(directory: Path, base: str, ext: str):
    yield directory / f"{base}{ext}"
    counter = 1
    while True:
        yield directory / f"{base}_{counter}{ext}"
        counter += 1


def unique_path(directory: str | Path, base: str, ext: str) -> Path:
    """
    Returns the first path in ``directory`` that does not exist yet

    :param directory: The target directory
    :param base: The base name
    :param ext: The extension including the dot
    :return: ``base + ext`` or ``base_<n> + ext`` with the lowest free n
    """
    for path in _candidates(Path(directory), base, ext):
        if not path.exists():
            return path
        logger.debug("file exists, trying next name: %s", path.name)


class OutputWriter:
    """Writes processed rasters into a directory without overwriting files."""

    def __init__(self, directory: str | Path, quality: int | None = None):
        """
        :param directory: The target directory, created if missing
        :param quality: Quality for JPEG/WEBP output, ``settings.JPEG_QUALITY`` by default
        """
        self.directory = Path(directory)
        self.quality = settings.JPEG_QUALITY if quality is None else quality

    def save(self, raster: Raster, original_name: str) -> Path:
        """
        Encodes and stores a raster under a name derived from ``original_name``

        :param raster: The processed raster
        :param original_name: The source's file name
        :return: The path the raster was written to
        """
        base, ext = output_name(original_name)
        data = encode(raster, image_format(base + ext), self.quality)
        self.directory.mkdir(parents=True, exist_ok=True)
        for path in _candidates(self.directory, base, ext):
            try:
                # exclusive create, never overwrite a file created meanwhile
                with open(path, "xb") as f:
                    f.write(data)
            except FileExistsError:
                logger.debug("file exists, trying next name: %s", path.name)
                continue
            logger.debug("saved %s (%d bytes, %s)", path, len(data), mime_type(path.name))
            return path
