from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for page permissions."""

    ADMIN = "admin"
    CHAIRPERSON = "chairperson"
    PROTOCOL = "protocol"
    REGISTRATION_COORDINATOR = "registration_coordinator"
    COMMITTEE = "committee"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Department(str, Enum):
    """Event committee departments as stored in the database."""

    ADMINISTRATOR = "administrator"
    PR_COMMUNICATION = "pr_communication"
    PROTOCOL_CEREMONIAL = "protocol_ceremonial"
    FNB = "fnb"
    SPONSORSHIP_FINANCE = "sponsorship_finance"
    LOGISTICS_OPERATIONS = "logistics_operations"
    TECHNICAL_IT_SUPPORT = "technical_it_support"
    EVALUATION_RESEARCH_DOCUMENTATION = "evaluation_research_documentation"
    HEALTH_SAFETY_WELFARE = "health_safety_welfare"
    EXECUTIVE = "executive"
    PROGRAM_ACTIVITIES = "program_activities"

    @property
    def display_name(self) -> str:
        return DEPARTMENT_DISPLAY_NAMES[self]


DEPARTMENT_DISPLAY_NAMES = {
    Department.ADMINISTRATOR: "Administrator",
    Department.PR_COMMUNICATION: "PR & Communication",
    Department.PROTOCOL_CEREMONIAL: "Protocol & Ceremonial",
    Department.FNB: "Food & Beverage",
    Department.SPONSORSHIP_FINANCE: "Sponsorship & Finance",
    Department.LOGISTICS_OPERATIONS: "Logistics & Operations",
    Department.TECHNICAL_IT_SUPPORT: "Technical & IT Support",
    Department.EVALUATION_RESEARCH_DOCUMENTATION: "Evaluation, Research & Documentation",
    Department.HEALTH_SAFETY_WELFARE: "Health, Safety & Welfare",
    Department.EXECUTIVE: "Executive",
    Department.PROGRAM_ACTIVITIES: "Program & Activities",
}


class AttendanceStatus(str, Enum):
    """Status stored on an attendance row.

    A member with no row for a date is shown as absent but has no stored status.
    """

    ATTEND = "attend"
    ABSENT = "absent"
