from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.constants import MAX_MEMBERS_PER_TEAM


@dataclass(frozen=True)
class Group:
    group_id: int
    name: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Participant:
    """Event participant placed into a team at registration."""

    participant_id: int
    name: str
    group_id: Optional[int]
    registered_at: Optional[datetime] = None
    registered_by: Optional[int] = None


@dataclass(frozen=True)
class TeamView:
    group: Group
    participants: tuple[Participant, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.participants)

    @property
    def is_full(self) -> bool:
        return self.size >= MAX_MEMBERS_PER_TEAM

    @property
    def available_slots(self) -> int:
        return max(0, MAX_MEMBERS_PER_TEAM - self.size)


@dataclass(frozen=True)
class TeamStats:
    total_participants: int
    total_teams: int
    full_teams: int
    available_slots: int
