from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

import pandas as pd

from ..attendance.model import AttendanceStats, LedgerEntry
from ..attendance.service import AttendanceLedgerService, stats_for
from ..common.validators import require_enum
from ..core.constants import REPORT_PAGE_SIZE
from ..core.enums import AttendanceStatus, Department

EXPORT_COLUMNS = [
    "no",
    "name",
    "department",
    "status",
    "check_in_time",
    "address",
    "photo_url",
]


@dataclass(frozen=True)
class Report:
    """Read-only view of one day's attendance.

    `stats` always covers the whole roster; `rows` are the entries left after filtering.
    """

    report_date: date
    rows: tuple[LedgerEntry, ...]
    stats: AttendanceStats
    department: Optional[Department] = None
    status: Optional[AttendanceStatus] = None
    search: str = ""

    @property
    def filtered_stats(self) -> AttendanceStats:
        return stats_for(self.rows)


def _matches_search(entry: LedgerEntry, needle: str) -> bool:
    dept = entry.member.department
    haystack = (entry.member.name, dept.value, dept.display_name)
    return any(needle in h.lower() for h in haystack)


def filter_entries(
    entries: Sequence[LedgerEntry],
    *,
    department: Optional[Department] = None,
    status: Optional[AttendanceStatus] = None,
    search: str = "",
) -> list[LedgerEntry]:
    needle = (search or "").strip().lower()
    out = []
    for e in entries:
        if department is not None and e.member.department != department:
            continue
        if status is not None and e.status != status:
            continue
        if needle and not _matches_search(e, needle):
            continue
        out.append(e)
    return out


def paginate(rows: Sequence, page_size: int = REPORT_PAGE_SIZE) -> list[list]:
    """Split rows into printable pages; no rows means no pages."""

    if page_size <= 0:
        raise ValueError("page_size must be positive")
    rows = list(rows)
    return [rows[i : i + page_size] for i in range(0, len(rows), page_size)]


def export_rows(report: Report) -> list[dict]:
    rows = []
    for i, e in enumerate(report.rows, start=1):
        r = e.record
        rows.append(
            {
                "no": i,
                "name": e.member.name,
                "department": e.member.department.display_name,
                "status": e.status.value,
                "check_in_time": r.check_in_time.strftime("%H:%M:%S") if r and r.check_in_time else "",
                "address": (r.location.address or "") if r and r.location else "",
                "photo_url": (r.photo_url or "") if r else "",
            }
        )
    return rows


class ReportProjector:
    """Joins the roster with a date's ledger for display and export. Never writes."""

    def __init__(self, ledger: AttendanceLedgerService):
        self._ledger = ledger

    def build(self, report_date: date, *, department=None, status=None, search: str = "") -> Report:
        dept = require_enum(department, Department, "department") if department else None
        wanted = None
        if status and status != "all":
            wanted = require_enum(status, AttendanceStatus, "status")

        entries = self._ledger.get_attendance_for_date(report_date)
        return Report(
            report_date=report_date,
            rows=tuple(filter_entries(entries, department=dept, status=wanted, search=search)),
            stats=stats_for(entries),
            department=dept,
            status=wanted,
            search=search or "",
        )

    @staticmethod
    def to_csv(report: Report) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        for row in export_rows(report):
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")

    @staticmethod
    def to_excel(report: Report) -> bytes:
        df = pd.DataFrame(export_rows(report), columns=EXPORT_COLUMNS)
        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=report.report_date.isoformat())
        return buf.getvalue()
