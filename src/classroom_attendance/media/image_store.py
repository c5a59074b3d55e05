from __future__ import annotations

import io
import logging
import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, UnidentifiedImageError

from ..common.datetime_utils import now_local
from ..core.constants import MAX_PHOTO_HEIGHT, MAX_PHOTO_WIDTH, PHOTO_QUALITY, TEMP_PHOTO_MAX_AGE_HOURS
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, BinaryIO]


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


class ImageStore:
    """Durable storage for teacher and student photos.

    Images larger than 1024x1024 are scaled down keeping their aspect ratio
    and every photo is re-encoded as JPEG.
    """

    def __init__(self, photos_dir: Union[str, Path], temp_dir: Union[str, Path]):
        self.photos_dir = Path(photos_dir)
        self.temp_dir = Path(temp_dir)

    def _next_path(self, directory: Path, prefix: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        millis = int(now_local().timestamp() * 1000)
        path = directory / f"{prefix}_{millis}.jpg"
        while path.exists():
            millis += 1
            path = directory / f"{prefix}_{millis}.jpg"
        return path

    def save_image(self, source: ImageSource) -> str:
        """Store ``source`` (a path, raw bytes or a binary stream) and return its absolute path."""
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        try:
            with Image.open(source) as img:
                img = img.convert("RGB")
                if img.width > MAX_PHOTO_WIDTH or img.height > MAX_PHOTO_HEIGHT:
                    ratio = min(MAX_PHOTO_WIDTH / img.width, MAX_PHOTO_HEIGHT / img.height)
                    size = (round(img.width * ratio), round(img.height * ratio))
                    img = img.resize(size, Image.Resampling.LANCZOS)
                path = self._next_path(self.photos_dir, "photo")
                img.save(path, format="JPEG", quality=PHOTO_QUALITY)
        except (UnidentifiedImageError, OSError) as exc:
            raise ValidationError("Could not read the image file", {"photo": str(exc)}) from exc

        logger.info("Stored photo %s", path)
        return str(path.resolve())

    def create_temp_path(self) -> Path:
        path = self._next_path(self.temp_dir, "temp")
        path.touch()
        return path

    def delete_image(self, image_path: str) -> bool:
        path = Path(image_path)
        if not path.is_file():
            return False
        try:
            path.unlink()
        except OSError:
            logger.warning("Could not delete image %s", image_path)
            return False
        return True

    def image_exists(self, image_path: Optional[str]) -> bool:
        if not image_path or not image_path.strip():
            return False
        return Path(image_path).is_file()

    def image_size(self, image_path: str) -> int:
        path = Path(image_path)
        return path.stat().st_size if path.is_file() else 0

    def clean_temp_files(self, *, max_age_hours: float = TEMP_PHOTO_MAX_AGE_HOURS) -> int:
        """Delete temp files older than ``max_age_hours``; returns how many were removed."""
        if not self.temp_dir.is_dir():
            return 0
        cutoff = time.time() - max_age_hours * 3600
        removed = 0
        for path in self.temp_dir.iterdir():
            if path.is_file() and path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        return removed
