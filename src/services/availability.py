"""Ketersediaan pegawai dan deteksi bentrok jadwal tugas luring."""

import calendar
from datetime import date
from typing import Iterable, List, NamedTuple

from src.models.enums import ActivityType, EmployeeStatus
from src.models.pegawai import Employee
from src.models.surat_tugas import AssignmentTask
from src.services.reconciler import ReconciliationResult


class DayAvailability(NamedTuple):
    day: date
    active_tasks: List[AssignmentTask]
    free_employees: List[Employee]
    busy_nips: List[str]


class AvailabilityEvaluator:
    """Queries over one snapshot. Nothing is cached; every call rescans the tasks."""

    def __init__(self, snapshot: ReconciliationResult):
        self.snapshot = snapshot

    def availability_on(self, day: date) -> DayAvailability:
        """Tasks whose inclusive range contains ``day`` and the employees left free."""
        active_tasks: List[AssignmentTask] = []
        busy: List[str] = []
        busy_set = set()

        for task in self.snapshot.task_list():
            if not task.covers(day):
                continue
            active_tasks.append(task)
            for nip in task.employee_nips:
                if nip not in busy_set:
                    busy_set.add(nip)
                    busy.append(nip)

        free = [emp for emp in self.snapshot.employee_list() if emp.nip not in busy_set]
        return DayAvailability(day, active_tasks, free, busy)

    def month_overview(self, year: int, month: int) -> List[DayAvailability]:
        """Availability for every day of a calendar month."""
        days_in_month = calendar.monthrange(year, month)[1]
        return [self.availability_on(date(year, month, d)) for d in range(1, days_in_month + 1)]

    def find_conflicts(
        self,
        nips: Iterable[str],
        start: date,
        end: date,
        activity_type: ActivityType = ActivityType.LURING,
    ) -> List[str]:
        """
        Names of candidates already holding an overlapping in-person task.

        Remote candidates never conflict, and existing remote tasks are never
        counted against an in-person candidate. Employees missing from the
        roster are reported by NIP.
        """
        if ActivityType(activity_type) != ActivityType.LURING:
            return []

        luring_tasks = [
            task for task in self.snapshot.task_list()
            if task.activity_type == ActivityType.LURING and task.overlaps(start, end)
        ]

        conflicts: List[str] = []
        seen = set()
        for nip in nips:
            if nip in seen:
                continue
            seen.add(nip)
            if any(nip in task.employee_nips for task in luring_tasks):
                employee = self.snapshot.get_employee(nip)
                conflicts.append(employee.name if employee else nip)
        return conflicts

    def unassigned_today(self) -> List[Employee]:
        """Employees whose status from the last sync is Tidak Bertugas."""
        return [emp for emp in self.snapshot.employee_list() if emp.status == EmployeeStatus.UNASSIGNED]
