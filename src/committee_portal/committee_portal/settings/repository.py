from __future__ import annotations

from typing import Optional, Protocol

from .model import SiteSetting


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[SiteSetting]:
        raise NotImplementedError

    def put(self, key: str, value: str, *, updated_by: Optional[int]) -> None:
        """Insert or overwrite a setting."""

        raise NotImplementedError
