from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/reverse"


def coordinates_text(latitude: float, longitude: float) -> str:
    return f"{latitude:.6f}, {longitude:.6f}"


class ReverseGeocoder:
    """Best-effort address lookup for check-in coordinates (OpenStreetMap Nominatim)."""

    def __init__(
        self,
        url: str = DEFAULT_GEOCODER_URL,
        *,
        timeout: float = 5,
        session: Optional[requests.Session] = None,
        user_agent: str = "committee-portal/1.0",
    ):
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._headers = {"User-Agent": user_agent, "Accept-Language": "en"}

    def lookup(self, latitude: float, longitude: float) -> Optional[str]:
        """Short address (first three parts of the display name), or None."""

        try:
            resp = self._session.get(
                self._url,
                params={"format": "json", "lat": latitude, "lon": longitude, "zoom": 18, "addressdetails": 1},
                headers=self._headers,
                timeout=self._timeout,
            )
            resp.raise_for_status()
            display_name = (resp.json() or {}).get("display_name")
        except (requests.RequestException, ValueError) as e:
            logger.warning("reverse geocoding failed for %s,%s: %s", latitude, longitude, e)
            return None

        if not display_name:
            return None
        parts = [p.strip() for p in display_name.split(",") if p.strip()]
        return ", ".join(parts[:3]) or None

    def address_for(self, latitude: float, longitude: float) -> str:
        return self.lookup(latitude, longitude) or coordinates_text(latitude, longitude)
