"""
Tests for the command line interface
"""

import pytest

from imageblur import Raster, encode
from imageblur.cli import main


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(encode(Raster.solid(12, 12, (255, 10, 20, 30))))
    return path


def test_process_file(source_file, tmp_path, capsys):
    out = tmp_path / "out"
    assert main([str(source_file), "-o", str(out), "--radius", "3"]) == 0
    assert (out / "photo_blur.png").exists()
    output = capsys.readouterr().out
    assert "Applying blur..." in output
    assert "Saved:" in output


def test_failure_continues(source_file, tmp_path, capsys):
    missing = tmp_path / "missing.png"
    assert main([str(missing), str(source_file)]) == 1
    assert (tmp_path / "photo_blur.png").exists()
    assert "Failed" in capsys.readouterr().err


@pytest.mark.parametrize(
    "option",
    [["--darken-alpha", "2"], ["--scale-factor", "0"], ["--radius", "inf"], ["--radius", "nan"]],
)
def test_invalid_options(source_file, option):
    with pytest.raises(SystemExit) as exc:
        main([str(source_file), *option])
    assert exc.value.code == 2
