from __future__ import annotations

import io
import os
import time

import pytest
from PIL import Image

from classroom_attendance.core.exceptions import ValidationError
from classroom_attendance.media.image_store import ImageStore, format_file_size


@pytest.fixture
def store(tmp_path):
    return ImageStore(tmp_path / "photos", tmp_path / "temp")


def _png_bytes(size):
    buf = io.BytesIO()
    Image.new("RGBA", size, (10, 120, 200, 255)).save(buf, format="PNG")
    return buf.getvalue()


def test_large_image_is_scaled_to_fit_and_saved_as_jpeg(store):
    path = store.save_image(_png_bytes((2048, 1024)))

    assert os.path.basename(path).startswith("photo_")
    assert path.endswith(".jpg")
    with Image.open(path) as img:
        assert img.format == "JPEG"
        assert img.size == (1024, 512)


def test_small_image_keeps_its_size(store, tmp_path):
    src = tmp_path / "small.png"
    src.write_bytes(_png_bytes((300, 200)))

    path = store.save_image(src)

    with Image.open(path) as img:
        assert img.size == (300, 200)
    assert store.image_exists(path)
    assert store.image_size(path) > 0


def test_unreadable_image_is_a_validation_error(store):
    with pytest.raises(ValidationError):
        store.save_image(b"not an image")


def test_delete_image(store):
    path = store.save_image(_png_bytes((10, 10)))

    assert store.delete_image(path) is True
    assert store.image_exists(path) is False
    assert store.delete_image(path) is False
    assert store.image_exists(None) is False


def test_clean_temp_files_removes_only_old_files(store):
    old = store.create_temp_path()
    fresh = store.create_temp_path()
    day_ago = time.time() - 25 * 3600
    os.utime(old, (day_ago, day_ago))

    assert store.clean_temp_files() == 1
    assert not old.exists()
    assert fresh.exists()


@pytest.mark.parametrize(
    "size, text",
    [(512, "512 B"), (2048, "2.00 KB"), (3 * 1024 * 1024, "3.00 MB")],
)
def test_format_file_size(size, text):
    assert format_file_size(size) == text
