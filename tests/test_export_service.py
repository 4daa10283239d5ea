import io
import os
import sys
from pathlib import Path

import pytest
from PIL import Image

from finalpic.services.export_service import ExportService, export_format_for


@pytest.mark.parametrize(
    "path, expected",
    [
        ("out.JPG", "JPEG"),
        ("out.jpeg", "JPEG"),
        ("out.JpEg", "JPEG"),
        ("out.png", "PNG"),
        ("out.bmp", "PNG"),
        ("out", "PNG"),
    ],
)
def test_export_format_for(path, expected):
    assert export_format_for(path) == expected


def test_save_png(tmp_path: Path, rgba_image):
    dest = tmp_path / "edited_image.png"
    result = ExportService().save(rgba_image, dest)

    assert result.ok
    assert result.file_name == "edited_image.png"
    assert "edited_image.png" in result.message
    with Image.open(dest) as saved:
        assert saved.format == "PNG"
        assert saved.size == rgba_image.size
        assert saved.convert("RGBA").tobytes() == rgba_image.tobytes()


def test_save_rgba_as_jpeg_uppercase_extension(tmp_path: Path, rgba_image):
    dest = tmp_path / "out.JPG"
    result = ExportService().save(rgba_image, dest)

    assert result.ok
    with Image.open(dest) as saved:
        assert saved.format == "JPEG"
        assert saved.mode == "RGB"


def test_unknown_extension_defaults_to_png(tmp_path: Path, rgba_image):
    dest = tmp_path / "out.bmp"
    assert ExportService().save(rgba_image, dest).ok
    assert dest.read_bytes().startswith(b"\x89PNG")


def test_save_leaves_no_temp_files(tmp_path: Path, rgba_image):
    ExportService().save(rgba_image, tmp_path / "a.png")
    assert [p.name for p in tmp_path.iterdir()] == ["a.png"]


def test_save_failure_reports_reason(tmp_path: Path, rgba_image):
    dest = tmp_path / "no_such_dir" / "out.png"
    result = ExportService().save(rgba_image, dest)

    assert not result.ok
    assert result.error
    assert result.message.startswith("Не удалось сохранить изображение")
    assert not dest.exists()


def test_save_overwrites_existing_file(tmp_path: Path, rgba_image):
    dest = tmp_path / "out.png"
    dest.write_bytes(b"old")
    assert ExportService().save(rgba_image, dest).ok
    assert dest.read_bytes().startswith(b"\x89PNG")


def test_jpeg_uses_fixed_quality(tmp_path: Path, rgba_image):
    dest = tmp_path / "out.jpg"
    assert ExportService().save(rgba_image, dest).ok

    expected = io.BytesIO()
    rgba_image.convert("RGB").save(expected, format="JPEG", quality=80)
    assert dest.read_bytes() == expected.getvalue()


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    yield
    os.umask(old)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_new_file_respects_umask(tmp_path: Path, rgba_image, umask_022):
    dest = tmp_path / "out.png"
    assert ExportService().save(rgba_image, dest).ok
    assert dest.stat().st_mode & 0o777 == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_overwrite_keeps_existing_mode(tmp_path: Path, rgba_image, umask_022):
    dest = tmp_path / "out.png"
    dest.write_bytes(b"old")
    os.chmod(dest, 0o640)
    assert ExportService().save(rgba_image, dest).ok
    assert dest.stat().st_mode & 0o777 == 0o640
