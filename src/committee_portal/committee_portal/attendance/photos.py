from __future__ import annotations

import base64
import binascii
import io
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import StorageUnavailable, ValidationError

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = "data:image/"


def is_inline_image(value) -> bool:
    return isinstance(value, str) and value.startswith(_DATA_URL_PREFIX)


def decode_data_url(value: str) -> bytes:
    """Bytes of a `data:image/...;base64,...` URL."""

    header, sep, encoded = value.partition(",")
    if not sep or not header.startswith(_DATA_URL_PREFIX) or ";base64" not in header:
        raise ValidationError("Photo must be a base64 encoded image")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Photo must be a base64 encoded image")


def _key_prefix(attendance_date, member_id: int) -> str:
    return f"{attendance_date.isoformat()}/{int(member_id)}_"


def photo_key(attendance_date, member_id: int, taken_at) -> str:
    return f"{_key_prefix(attendance_date, member_id)}{int(taken_at.timestamp() * 1000)}.jpg"


def is_own_photo(url: str, attendance_date, member_id: int) -> bool:
    """True if url was stored under this member's key for this date."""

    return f"/{_key_prefix(attendance_date, member_id)}" in url


class PhotoStorage(Protocol):
    def upload(self, data: bytes, key: str) -> str:
        """Store image bytes under key and return a durable public URL."""

        raise NotImplementedError

    def delete(self, url: str) -> None:
        raise NotImplementedError


class LocalPhotoStorage(PhotoStorage):
    """Check-in photos on the local filesystem, re-encoded as JPEG.

    Files are served back by the attendance controller under `public_base_url`.
    """

    def __init__(self, root_dir: str | Path, *, public_base_url: str = "/attendance-photos", quality: int = 85):
        self._root = Path(root_dir)
        self._base_url = public_base_url.rstrip("/")
        self._quality = int(quality)

    @property
    def root_dir(self) -> Path:
        return self._root

    def _path_for_key(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if self._root.resolve() not in path.parents:
            raise ValidationError("Invalid photo key")
        return path

    def upload(self, data: bytes, key: str) -> str:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError):
            raise ValidationError("Photo is not a valid image")

        path = self._path_for_key(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            img.convert("RGB").save(path, "JPEG", quality=self._quality)
        except OSError as e:
            logger.error("photo upload failed for %s: %s", key, e)
            raise StorageUnavailable("Could not store the attendance photo")
        return f"{self._base_url}/{key}"

    def delete(self, url: str) -> None:
        prefix = self._base_url + "/"
        if not url or not url.startswith(prefix):
            return
        path = self._path_for_key(url[len(prefix):])
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageUnavailable(f"Could not delete photo: {e}")
