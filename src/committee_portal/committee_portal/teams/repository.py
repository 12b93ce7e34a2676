from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import Group, Participant


class TeamRepository(Protocol):
    def list_groups(self) -> Sequence[Group]:
        """Groups ordered by id."""

        raise NotImplementedError

    def get_group(self, group_id: int) -> Optional[Group]:
        raise NotImplementedError

    def create_group(self, name: str) -> int:
        raise NotImplementedError

    def delete_group_with_participants(self, group_id: int) -> int:
        """Delete the group's participants, then the group. Returns participants removed."""

        raise NotImplementedError

    def participant_counts(self) -> Mapping[int, int]:
        """group_id -> number of participants (groups without participants may be missing)."""

        raise NotImplementedError

    def list_participants(self) -> Sequence[Participant]:
        raise NotImplementedError

    def get_participant(self, participant_id: int) -> Optional[Participant]:
        raise NotImplementedError

    def create_participant(self, *, name: str, group_id: int, registered_by: Optional[int]) -> int:
        raise NotImplementedError

    def set_participant_group(self, participant_id: int, group_id: int) -> None:
        raise NotImplementedError

    def delete_participant(self, participant_id: int) -> bool:
        raise NotImplementedError
