"""Schemas untuk dashboard, kalender dan rekap."""

from datetime import date
from typing import Dict, List, Optional
from pydantic import BaseModel

from src.models.enums import ActivityType
from src.schemas.pegawai import EmployeeSummary
from src.schemas.surat_tugas import AssignmentResponse


class DashboardStats(BaseModel):
    assigned: int
    unassigned: int
    active_surat: int
    avg_discipline: float


class DashboardSummaryResponse(BaseModel):
    """Ringkasan dashboard sesuai role user."""

    stats: DashboardStats
    discipline_distribution: Dict[str, int]
    units: List[str]
    pending_reports: List[AssignmentResponse] = []


class CalendarTask(BaseModel):
    letter_number: str
    description: str
    activity_type: ActivityType
    employees: List[EmployeeSummary]


class CalendarDay(BaseModel):
    """Status satu hari kalender."""

    day: date
    active_tasks: List[CalendarTask]
    unassigned_count: int
    all_assigned: bool


class CalendarDayDetail(CalendarDay):
    unassigned: List[EmployeeSummary]


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    days: List[CalendarDay]


class RecapItem(BaseModel):
    surat_tugas: AssignmentResponse
    timeline_status: str
    days_remaining: Optional[int] = None


class RecapResponse(BaseModel):
    items: List[RecapItem]
    total: int
