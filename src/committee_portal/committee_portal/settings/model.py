from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SiteSetting:
    key: str
    value: str
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class MaintenanceStatus:
    enabled: bool
    message: str
