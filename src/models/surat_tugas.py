"""Surat tugas (assignment task) domain model."""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from src.models.enums import ActivityType, FundingType, ReportStatus


class ReportDetails(BaseModel):
    """Isi laporan pelaksanaan tugas."""

    uraian: str
    hasil: str
    kendala: Optional[str] = None
    solusi: Optional[str] = None


class AssignmentTask(BaseModel):
    """Surat tugas keyed by letter number.

    Members are stored as NIP keys and resolved through the employee
    registry of the snapshot that owns this task.
    """

    letter_number: str
    basis: str = "-"
    description: str = "-"
    location: str = "-"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    signee: str = "-"
    activity_type: ActivityType = ActivityType.LURING
    funding_type: Optional[FundingType] = None
    employee_nips: List[str] = Field(default_factory=list)

    report_status: ReportStatus = ReportStatus.PENDING
    report_date: Optional[str] = None
    report_creator_nip: Optional[str] = None
    report_summary: Optional[str] = None
    report_details: Optional[ReportDetails] = None
    documentation_photos: List[str] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return f"task-{self.letter_number}"

    @property
    def has_report(self) -> bool:
        return self.report_status != ReportStatus.PENDING

    def add_member(self, nip: str) -> bool:
        """Add a NIP with set semantics. Returns False when already present."""
        if nip in self.employee_nips:
            return False
        self.employee_nips.append(nip)
        return True

    def covers(self, day: date) -> bool:
        """Inclusive day-granularity containment; null dates never match."""
        if self.start_date is None or self.end_date is None:
            return False
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        if self.start_date is None or self.end_date is None:
            return False
        return start <= self.end_date and end >= self.start_date

    def clear_report(self):
        """Back to Pending; assignment attributes are left untouched."""
        self.report_status = ReportStatus.PENDING
        self.report_date = None
        self.report_creator_nip = None
        self.report_summary = None
        self.report_details = None
        self.documentation_photos = []
