from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_enum, require_non_empty
from ..core.enums import Department
from ..core.exceptions import NotFound, ValidationError
from .model import CommitteeMember
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use case: maintain the committee roster."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def add_member(self, *, name: str, department) -> int:
        name = require_non_empty(name, "Name")
        department = require_enum(department, Department, "department")
        if department == Department.ADMINISTRATOR:
            raise ValidationError("Committee members cannot belong to the administrator department")

        member_id = self._members.create(name=name, department=department)
        logger.info("added committee member %s (%s)", member_id, department.value)
        return member_id

    def delete_member(self, member_id: int) -> None:
        if not self._members.delete_by_id(int(member_id)):
            raise NotFound("Committee member not found")
        logger.info("deleted committee member %s", member_id)

    def list_members(self, *, department=None) -> Sequence[CommitteeMember]:
        dept: Optional[Department] = require_enum(department, Department, "department") if department else None
        return self._members.list_all(department=dept)
