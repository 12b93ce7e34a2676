from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TEAM_COUNT, MAX_MEMBERS_PER_TEAM, TEAM_NAME_TEMPLATE
from ..core.exceptions import NotFound, ValidationError
from .model import Group, Participant, TeamStats, TeamView
from .repository import TeamRepository

logger = logging.getLogger(__name__)


class TeamAllocator:
    """Use case: place registered participants into teams of at most five.

    Capacity is checked against a snapshot of the counts, so two registrations
    racing for the last slot can both land in the same team. Admins fix that
    by moving someone.
    """

    def __init__(self, teams: TeamRepository, *, rng: Optional[random.Random] = None):
        self._teams = teams
        self._rng = rng or random.Random()

    def _next_team_name(self) -> str:
        return TEAM_NAME_TEMPLATE.format(n=len(self._teams.list_groups()) + 1)

    def register_participant(self, name: str, registered_by: Optional[int] = None) -> tuple[Participant, Group]:
        name = require_non_empty(name, "Participant name")

        counts = self._teams.participant_counts()
        available = [g for g in self._teams.list_groups() if counts.get(g.group_id, 0) < MAX_MEMBERS_PER_TEAM]

        if available:
            group = self._rng.choice(available)
        else:
            group_name = self._next_team_name()
            group = Group(group_id=self._teams.create_group(group_name), name=group_name)
            logger.info("all teams full; created %s", group_name)

        participant_id = self._teams.create_participant(name=name, group_id=group.group_id, registered_by=registered_by)
        logger.info("registered participant %s into %s", participant_id, group.name)
        participant = Participant(
            participant_id=participant_id,
            name=name,
            group_id=group.group_id,
            registered_by=registered_by,
        )
        return participant, group

    def move_participant(self, participant_id: int, from_group_id: int, to_group_id: int) -> None:
        """Manual reassignment; may push the target team past capacity."""

        if int(from_group_id) == int(to_group_id):
            raise ValidationError("Participant is already in that team")
        participant = self._teams.get_participant(int(participant_id))
        if not participant:
            raise NotFound("Participant not found")
        if participant.group_id != int(from_group_id):
            raise ValidationError("Participant is not in the source team")
        if not self._teams.get_group(int(to_group_id)):
            raise NotFound("Target team not found")

        self._teams.set_participant_group(participant.participant_id, int(to_group_id))
        logger.info("moved participant %s from team %s to team %s", participant_id, from_group_id, to_group_id)

    def delete_group(self, group_id: int) -> int:
        group = self._teams.get_group(int(group_id))
        if not group:
            raise NotFound("Team not found")
        removed = self._teams.delete_group_with_participants(group.group_id)
        logger.warning("deleted %s with %s participants", group.name, removed)
        return removed

    def add_group(self) -> Group:
        name = self._next_team_name()
        group = Group(group_id=self._teams.create_group(name), name=name)
        logger.info("added %s", name)
        return group

    def delete_participant(self, participant_id: int) -> None:
        if not self._teams.delete_participant(int(participant_id)):
            raise NotFound("Participant not found")
        logger.info("deleted participant %s", participant_id)

    def list_teams(self) -> Sequence[TeamView]:
        by_group: dict[int, list[Participant]] = {}
        for p in self._teams.list_participants():
            if p.group_id is not None:
                by_group.setdefault(p.group_id, []).append(p)
        return [TeamView(group=g, participants=tuple(by_group.get(g.group_id, ()))) for g in self._teams.list_groups()]

    def team_stats(self) -> TeamStats:
        teams = self.list_teams()
        return TeamStats(
            total_participants=sum(t.size for t in teams),
            total_teams=len(teams),
            full_teams=sum(1 for t in teams if t.is_full),
            available_slots=sum(t.available_slots for t in teams),
        )

    def ensure_default_teams(self) -> int:
        """Create Team 1..8 when no team exists yet. Returns the number created."""

        if self._teams.list_groups():
            return 0
        for n in range(1, DEFAULT_TEAM_COUNT + 1):
            self._teams.create_group(TEAM_NAME_TEMPLATE.format(n=n))
        logger.info("created %s default teams", DEFAULT_TEAM_COUNT)
        return DEFAULT_TEAM_COUNT
