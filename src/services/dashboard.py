"""Service untuk dashboard, kalender dan rekap penugasan."""

import logging
from datetime import MAXYEAR, MINYEAR, date
from typing import Dict, List, Optional

from src.auth.permissions import visible_tasks
from src.core.exceptions import ValidationFailed
from src.core.store import SnapshotStore
from src.models.enums import ActivityType, EmployeeStatus, ReportStatus, UserRole
from src.schemas.dashboard import (
    CalendarDay, CalendarDayDetail, CalendarMonthResponse, CalendarTask,
    DashboardStats, DashboardSummaryResponse, RecapItem, RecapResponse
)
from src.schemas.pegawai import EmployeeSummary
from src.schemas.surat_tugas import AssignmentResponse
from src.services.availability import AvailabilityEvaluator, DayAvailability
from src.services.pegawai import filter_employees
from src.services.reconciler import ReconciliationResult
from src.utils.dates import timeline_status, today_local
from src.utils.discipline_calculator import discipline_calculator

logger = logging.getLogger(__name__)


class DashboardService:
    """Service untuk tampilan agregat di atas snapshot."""

    def __init__(self, store: SnapshotStore):
        self.store = store

    # ===== DASHBOARD =====

    async def get_summary(
        self,
        current_user: Dict,
        unit: Optional[str] = None,
        search: Optional[str] = None,
    ) -> DashboardSummaryResponse:
        """
        Ringkasan dashboard.

        Statistik pegawai dihitung atas hasil filter unit/search; jumlah surat
        tugas mengikuti tugas yang boleh dilihat user.
        """
        snapshot = self.store.require()
        employees = filter_employees(snapshot.employee_list(), search, unit)
        tasks = visible_tasks(current_user, snapshot)

        finals = [emp.discipline_score.final for emp in employees]
        if employees:
            stats = DashboardStats(
                assigned=sum(1 for emp in employees if emp.status == EmployeeStatus.ASSIGNED),
                unassigned=sum(1 for emp in employees if emp.status == EmployeeStatus.UNASSIGNED),
                active_surat=len(tasks),
                avg_discipline=round(sum(finals) / len(finals), 2),
            )
        else:
            stats = DashboardStats(assigned=0, unassigned=0, active_surat=0, avg_discipline=0.0)

        pending_reports: List[AssignmentResponse] = []
        if current_user.get("role") != UserRole.SUPER_ADMIN.value:
            pending_reports = [
                AssignmentResponse.from_task(task, snapshot.members_of(task))
                for task in tasks
                if current_user.get("nip") in task.employee_nips
                and task.report_status == ReportStatus.PENDING
            ]

        return DashboardSummaryResponse(
            stats=stats,
            discipline_distribution=discipline_calculator.distribution(finals),
            units=self.distinct_units(snapshot),
            pending_reports=pending_reports,
        )

    @staticmethod
    def distinct_units(snapshot: ReconciliationResult) -> List[str]:
        """Unit kerja unik dalam urutan roster; placeholder ``-`` diabaikan."""
        units: List[str] = []
        for emp in snapshot.employee_list():
            if emp.unit and emp.unit != "-" and emp.unit not in units:
                units.append(emp.unit)
        return units

    # ===== REKAP =====

    async def get_recap(
        self,
        current_user: Dict,
        name: Optional[str] = None,
        unit: Optional[str] = None,
        activity_type: Optional[ActivityType] = None,
        today: Optional[date] = None,
    ) -> RecapResponse:
        snapshot = self.store.require()
        today = today or today_local()

        items: List[RecapItem] = []
        for task in visible_tasks(current_user, snapshot):
            members = snapshot.members_of(task)
            if name and not any(name.lower() in emp.name.lower() for emp in members):
                continue
            if unit and not any(emp.unit == unit for emp in members):
                continue
            if activity_type and task.activity_type != activity_type:
                continue

            badge = timeline_status(task.end_date, today)
            items.append(RecapItem(
                surat_tugas=AssignmentResponse.from_task(task, members),
                timeline_status=badge["status"],
                days_remaining=badge["days_remaining"],
            ))

        # Newest first; undated tasks sink to the bottom
        items.sort(key=lambda item: item.surat_tugas.start_date or date.min, reverse=True)
        return RecapResponse(items=items, total=len(items))

    # ===== KALENDER =====

    async def get_calendar_month(self, year: int, month: int) -> CalendarMonthResponse:
        if not 1 <= month <= 12:
            raise ValidationFailed("Bulan harus antara 1 dan 12")
        if not MINYEAR <= year <= MAXYEAR:
            raise ValidationFailed(f"Tahun harus antara {MINYEAR} dan {MAXYEAR}")

        snapshot = self.store.require()
        overview = AvailabilityEvaluator(snapshot).month_overview(year, month)
        return CalendarMonthResponse(
            year=year,
            month=month,
            days=[self._to_calendar_day(snapshot, day) for day in overview],
        )

    async def get_calendar_day(self, day: date) -> CalendarDayDetail:
        snapshot = self.store.require()
        availability = AvailabilityEvaluator(snapshot).availability_on(day)
        base = self._to_calendar_day(snapshot, availability)
        return CalendarDayDetail(
            **base.model_dump(),
            unassigned=[EmployeeSummary.model_validate(emp) for emp in availability.free_employees],
        )

    @staticmethod
    def _to_calendar_day(snapshot: ReconciliationResult, availability: DayAvailability) -> CalendarDay:
        active_tasks = [
            CalendarTask(
                letter_number=task.letter_number,
                description=task.description,
                activity_type=task.activity_type,
                employees=[EmployeeSummary.model_validate(emp) for emp in snapshot.members_of(task)],
            )
            for task in availability.active_tasks
        ]
        return CalendarDay(
            day=availability.day,
            active_tasks=active_tasks,
            unassigned_count=len(availability.free_employees),
            all_assigned=not availability.free_employees,
        )
