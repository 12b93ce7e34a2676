from __future__ import annotations

import base64
import io
from datetime import date, datetime

import pytest
import requests
from PIL import Image

from src.committee_portal.committee_portal.attendance.geocoding import ReverseGeocoder
from src.committee_portal.committee_portal.attendance.photos import (
    LocalPhotoStorage,
    decode_data_url,
    is_inline_image,
    photo_key,
)
from src.committee_portal.committee_portal.core.exceptions import ValidationError


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (8, 6), color=(10, 120, 200, 255)).save(buf, "PNG")
    return buf.getvalue()


def test_decode_data_url():
    raw = _png_bytes()
    url = "data:image/png;base64," + base64.b64encode(raw).decode("ascii")

    assert is_inline_image(url)
    assert decode_data_url(url) == raw
    assert not is_inline_image("https://photos.test/x.jpg")
    assert not is_inline_image(None)


@pytest.mark.parametrize("value", ["data:image/png,plain", "data:text/plain;base64,aGk=", "data:image/png;base64,@@@"])
def test_decode_data_url_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        decode_data_url(value)


def test_photo_key_is_namespaced_by_date_and_member():
    taken_at = datetime(2026, 3, 14, 9, 30, 0)
    assert photo_key(date(2026, 3, 14), 7, taken_at) == f"2026-03-14/7_{int(taken_at.timestamp() * 1000)}.jpg"


def test_local_storage_reencodes_as_jpeg_and_deletes(tmp_path):
    storage = LocalPhotoStorage(tmp_path, public_base_url="/attendance-photos/")

    url = storage.upload(_png_bytes(), "2026-03-14/7_1.jpg")

    assert url == "/attendance-photos/2026-03-14/7_1.jpg"
    saved = tmp_path / "2026-03-14" / "7_1.jpg"
    with Image.open(saved) as img:
        assert img.format == "JPEG"
        assert img.size == (8, 6)

    storage.delete(url)
    assert not saved.exists()
    # Deleting twice or deleting a foreign URL is a no-op.
    storage.delete(url)
    storage.delete("https://elsewhere.test/a.jpg")


def test_local_storage_rejects_non_images_and_escaping_keys(tmp_path):
    storage = LocalPhotoStorage(tmp_path)

    with pytest.raises(ValidationError):
        storage.upload(b"not an image", "2026-03-14/1_1.jpg")
    with pytest.raises(ValidationError):
        storage.upload(_png_bytes(), "../outside.jpg")


class _Response:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def test_geocoder_keeps_first_three_parts_of_display_name():
    session = _Session(_Response({"display_name": "Gedung Sate, Jalan Diponegoro, Bandung, West Java, Indonesia"}))
    geocoder = ReverseGeocoder("https://geo.test/reverse", timeout=2, session=session)

    assert geocoder.address_for(-6.9025, 107.6188) == "Gedung Sate, Jalan Diponegoro, Bandung"
    url, kwargs = session.calls[0]
    assert url == "https://geo.test/reverse"
    assert kwargs["params"]["lat"] == -6.9025
    assert kwargs["timeout"] == 2


@pytest.mark.parametrize(
    "session",
    [
        _Session(error=requests.ConnectionError("offline")),
        _Session(_Response({}, status=503)),
        _Session(_Response({"error": "Unable to geocode"})),
    ],
)
def test_geocoder_failures_fall_back_to_coordinates(session):
    geocoder = ReverseGeocoder("https://geo.test/reverse", session=session)

    assert geocoder.lookup(-6.9, 107.6) is None
    assert geocoder.address_for(-6.9, 107.6) == "-6.900000, 107.600000"
