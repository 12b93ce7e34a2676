from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Department
from .model import CommitteeMember


class MemberRepository(Protocol):
    def get_by_id(self, member_id: int) -> Optional[CommitteeMember]:
        raise NotImplementedError

    def list_all(self, *, department: Optional[Department] = None) -> Sequence[CommitteeMember]:
        """Roster ordered by name."""

        raise NotImplementedError

    def create(self, *, name: str, department: Department) -> int:
        raise NotImplementedError

    def delete_by_id(self, member_id: int) -> bool:
        """Delete a member; their attendance rows cascade in the store."""

        raise NotImplementedError
