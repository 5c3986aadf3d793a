"""Mapping baris spreadsheet ke typed records."""

import json
import logging
from typing import Dict, List, Optional, Sequence

from src.models.enums import ActivityType, FundingType, ReportStatus, ScheduleLayout, SourceKind
from src.models.pegawai import DEFAULT_NAME, DEFAULT_TEXT
from src.schemas.records import DisciplineRecord, ReportRecord, RosterRecord, ScheduleRecord
from src.utils.dates import parse_sheet_date
from src.utils.discipline_calculator import DisciplineScoreCalculator

logger = logging.getLogger(__name__)


# Column index per field, 0-based. A field absent from a layout uses its default.
ROSTER_LAYOUT: Dict[str, int] = {
    "nip": 0,
    "name": 1,
    "position": 2,
    "unit": 3,
}

SCHEDULE_LAYOUTS: Dict[ScheduleLayout, Dict[str, int]] = {
    ScheduleLayout.COMPACT: {
        "nip": 0,
        "letter_number": 1,
        "activity_type": 2,
        "description": 3,
        "location": 4,
        "start_date": 5,
        "end_date": 6,
        "signee": 7,
        "funding_type": 8,
        "basis": 9,
    },
    # Column B holds the employee name, which the roster already provides.
    ScheduleLayout.JADWAL_TUGAS: {
        "nip": 0,
        "letter_number": 2,
        "activity_type": 3,
        "description": 4,
        "location": 5,
        "start_date": 6,
        "end_date": 7,
        "signee": 8,
        "funding_type": 9,
        "basis": 10,
    },
}

DISCIPLINE_LAYOUT: Dict[str, int] = {
    "nip": 0,
    "attendance": 1,
    "assembly": 2,
    "daily_log": 3,
    "report": 4,
}

REPORT_LAYOUT: Dict[str, int] = {
    "letter_number": 0,
    "details": 1,
    "report_date": 2,
    "creator_nip": 3,
    "photos": 4,
    "status": 5,
}


def _cell(row: Sequence[str], layout: Dict[str, int], field: str) -> str:
    index = layout.get(field)
    if index is None or index >= len(row):
        return ""
    value = row[index]
    return str(value).strip() if value is not None else ""


def _text(row: Sequence[str], layout: Dict[str, int], field: str, default: str) -> str:
    return _cell(row, layout, field) or default


def parse_photos(value: str) -> List[str]:
    """JSON array of images, or a single link/data URL."""
    value = (value or "").strip()
    if not value:
        return []
    if value.startswith("["):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.debug("Photo cell is not valid JSON, keeping it as one link")
            return [value]
        if isinstance(parsed, list):
            return [str(item) for item in parsed if item]
    return [value]


class RowMapper:
    """Pure positional mapping with default substitution."""

    def __init__(self, schedule_layout: ScheduleLayout = ScheduleLayout.COMPACT):
        self.schedule_layout = ScheduleLayout(schedule_layout)

    def map_roster(self, row: Sequence[str]) -> Optional[RosterRecord]:
        nip = _cell(row, ROSTER_LAYOUT, "nip")
        if not nip:
            return None
        return RosterRecord(
            nip=nip,
            name=_text(row, ROSTER_LAYOUT, "name", DEFAULT_NAME),
            position=_text(row, ROSTER_LAYOUT, "position", DEFAULT_TEXT),
            unit=_text(row, ROSTER_LAYOUT, "unit", DEFAULT_TEXT),
        )

    def map_schedule(self, row: Sequence[str]) -> Optional[ScheduleRecord]:
        layout = SCHEDULE_LAYOUTS[self.schedule_layout]
        nip = _cell(row, layout, "nip")
        letter_number = _cell(row, layout, "letter_number")
        if not nip or not letter_number:
            return None
        return ScheduleRecord(
            nip=nip,
            letter_number=letter_number,
            activity_type=ActivityType.normalize(_cell(row, layout, "activity_type")),
            description=_text(row, layout, "description", DEFAULT_TEXT),
            location=_text(row, layout, "location", DEFAULT_TEXT),
            start_date=parse_sheet_date(_cell(row, layout, "start_date")),
            end_date=parse_sheet_date(_cell(row, layout, "end_date")),
            signee=_text(row, layout, "signee", DEFAULT_TEXT),
            basis=_text(row, layout, "basis", DEFAULT_TEXT),
            funding_type=FundingType.normalize(_cell(row, layout, "funding_type")),
        )

    def map_discipline(self, row: Sequence[str]) -> Optional[DisciplineRecord]:
        nip = _cell(row, DISCIPLINE_LAYOUT, "nip")
        if not nip:
            return None
        parse = DisciplineScoreCalculator.parse_component
        return DisciplineRecord(
            nip=nip,
            attendance=parse(_cell(row, DISCIPLINE_LAYOUT, "attendance")),
            assembly=parse(_cell(row, DISCIPLINE_LAYOUT, "assembly")),
            daily_log=parse(_cell(row, DISCIPLINE_LAYOUT, "daily_log")),
            report=parse(_cell(row, DISCIPLINE_LAYOUT, "report")),
        )

    def map_report(self, row: Sequence[str]) -> Optional[ReportRecord]:
        letter_number = _cell(row, REPORT_LAYOUT, "letter_number")
        if not letter_number:
            return None
        return ReportRecord(
            letter_number=letter_number,
            details_raw=_cell(row, REPORT_LAYOUT, "details"),
            report_date=_cell(row, REPORT_LAYOUT, "report_date") or None,
            creator_nip=_cell(row, REPORT_LAYOUT, "creator_nip") or None,
            photos=parse_photos(_cell(row, REPORT_LAYOUT, "photos")),
            status=ReportStatus.from_sheet(_cell(row, REPORT_LAYOUT, "status")),
        )

    def map_rows(self, kind: SourceKind, rows: Sequence[Sequence[str]], skip_header: bool = True) -> list:
        """Map every body row of one source, dropping rows without a key."""
        mapper = {
            SourceKind.ROSTER: self.map_roster,
            SourceKind.SCHEDULE: self.map_schedule,
            SourceKind.DISCIPLINE: self.map_discipline,
            SourceKind.REPORTS: self.map_report,
        }[SourceKind(kind)]

        body = rows[1:] if skip_header else rows
        records = []
        for row in body:
            record = mapper(row)
            if record is not None:
                records.append(record)
        return records
