from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Department


@dataclass(frozen=True)
class CommitteeMember:
    """Roster entry. Independent of login accounts."""

    member_id: int
    name: str
    department: Department
    created_at: Optional[datetime] = None
