"""
Tests for output naming and writing
"""

import pytest

from imageblur import Raster, decode
from imageblur.storage import OutputWriter, image_format, mime_type, output_name, unique_path


@pytest.mark.parametrize(
    "name,expected",
    [
        ("photo.jpg", ("photo_blur", ".jpg")),
        ("Screenshot 2025.PNG", ("Screenshot 2025_blur", ".PNG")),
        ("archive.tar.gz", ("archive.tar_blur", ".gz")),
        ("README", ("README_blur", ".png")),
        (".hidden", (".hidden_blur", ".png")),
    ],
)
def test_output_name(name, expected):
    assert output_name(name) == expected


def test_output_name_custom():
    assert output_name("a", suffix="_frost", default_extension=".jpg") == ("a_frost", ".jpg")


@pytest.mark.parametrize(
    "name,fmt,mime",
    [
        ("a.png", "PNG", "image/png"),
        ("a.JPG", "JPEG", "image/jpeg"),
        ("a.jpeg", "JPEG", "image/jpeg"),
        ("a.webp", "WEBP", "image/webp"),
        ("a.bmp", "PNG", "image/png"),
        ("a", "PNG", "image/png"),
    ],
)
def test_format_by_extension(name, fmt, mime):
    assert image_format(name) == fmt
    assert mime_type(name) == mime


def test_unique_path(tmp_path):
    assert unique_path(tmp_path, "photo_blur", ".png") == tmp_path / "photo_blur.png"
    (tmp_path / "photo_blur.png").touch()
    (tmp_path / "photo_blur_1.png").touch()
    assert unique_path(tmp_path, "photo_blur", ".png") == tmp_path / "photo_blur_2.png"


class TestOutputWriter:
    """Tests for writing processed rasters."""

    def test_save_never_overwrites(self, tmp_path, noise_raster):
        writer = OutputWriter(tmp_path)
        first = writer.save(noise_raster, "noise.png")
        second = writer.save(noise_raster, "noise.png")
        assert first == tmp_path / "noise_blur.png"
        assert second == tmp_path / "noise_blur_1.png"
        assert decode(first.read_bytes()) == noise_raster

    def test_save_jpeg(self, tmp_path):
        raster = Raster.solid(8, 8, (255, 50, 100, 150))
        path = OutputWriter(tmp_path, quality=100).save(raster, "photo.jpeg")
        assert path.name == "photo_blur.jpeg"
        assert path.read_bytes().startswith(b"\xff\xd8")

    def test_creates_directory(self, tmp_path, white_raster):
        target = tmp_path / "nested" / "out"
        path = OutputWriter(target).save(white_raster, "white")
        assert path == target / "white_blur.png"
        assert path.exists()
