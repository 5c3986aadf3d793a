"""Rekonsiliasi empat sumber spreadsheet menjadi registry pegawai dan surat tugas."""

import json
import logging
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from src.models.enums import EmployeeStatus, ReportStatus, SourceKind
from src.models.pegawai import DisciplineScore, Employee
from src.models.surat_tugas import AssignmentTask, ReportDetails
from src.schemas.records import DisciplineRecord, ReportRecord, RosterRecord, ScheduleRecord
from src.services.row_mapper import RowMapper

logger = logging.getLogger(__name__)


class ReconciliationResult:
    """
    Employee and task registries of one sync pass.

    Tasks keep member NIPs; ``members_of`` resolves them through the employee
    registry so every view shares the same Employee objects. Task order is
    first-seen order of the schedule sheet.
    """

    def __init__(
        self,
        employees: Dict[str, Employee],
        tasks: Dict[str, AssignmentTask],
        evaluated_on: date,
        degraded_sources: Iterable[SourceKind] = (),
    ):
        self.employees = employees
        self.tasks = tasks
        self.evaluated_on = evaluated_on
        self.degraded_sources = sorted({SourceKind(s) for s in degraded_sources}, key=lambda s: s.value)
        self.loaded_at = datetime.now(timezone.utc)

    @classmethod
    def empty(cls, evaluated_on: date, degraded_sources: Iterable[SourceKind] = ()) -> "ReconciliationResult":
        return cls({}, {}, evaluated_on, degraded_sources)

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded_sources)

    def employee_list(self) -> List[Employee]:
        return list(self.employees.values())

    def task_list(self) -> List[AssignmentTask]:
        return list(self.tasks.values())

    def get_employee(self, nip: str) -> Optional[Employee]:
        return self.employees.get(nip)

    def get_task(self, letter_number: str) -> Optional[AssignmentTask]:
        return self.tasks.get(letter_number)

    def members_of(self, task: AssignmentTask) -> List[Employee]:
        return [self.employees[nip] for nip in task.employee_nips if nip in self.employees]

    def tasks_for(self, nip: str) -> List[AssignmentTask]:
        return [task for task in self.tasks.values() if nip in task.employee_nips]

    def clone(self) -> "ReconciliationResult":
        """Deep copy for copy-on-write updates of a published snapshot."""
        return ReconciliationResult(
            {nip: emp.model_copy(deep=True) for nip, emp in self.employees.items()},
            {key: task.model_copy(deep=True) for key, task in self.tasks.items()},
            self.evaluated_on,
            self.degraded_sources,
        )

    def same_content(self, other: "ReconciliationResult") -> bool:
        """Registry equality, ignoring load timestamps."""
        return (
            self.employee_list() == other.employee_list()
            and list(self.tasks.keys()) == list(other.tasks.keys())
            and self.task_list() == other.task_list()
        )


class EntityReconciler:
    """Builds registries from mapped records. Same inputs always give equal registries."""

    def __init__(self, mapper: Optional[RowMapper] = None):
        self.mapper = mapper or RowMapper()

    def reconcile(
        self,
        raw_tables: Dict[SourceKind, Sequence[Sequence[str]]],
        today: date,
        degraded_sources: Iterable[SourceKind] = (),
    ) -> ReconciliationResult:
        """
        Reconcile raw header-first tables.

        A source missing from ``raw_tables`` (failed fetch) contributes no rows.
        """
        def records(kind: SourceKind) -> list:
            rows = raw_tables.get(kind) or []
            return self.mapper.map_rows(kind, rows)

        return self.reconcile_records(
            roster=records(SourceKind.ROSTER),
            schedule=records(SourceKind.SCHEDULE),
            discipline=records(SourceKind.DISCIPLINE),
            reports=records(SourceKind.REPORTS),
            today=today,
            degraded_sources=degraded_sources,
        )

    def reconcile_records(
        self,
        roster: Iterable[RosterRecord],
        schedule: Iterable[ScheduleRecord],
        discipline: Iterable[DisciplineRecord],
        reports: Iterable[ReportRecord],
        today: date,
        degraded_sources: Iterable[SourceKind] = (),
    ) -> ReconciliationResult:
        employees = self._build_employees(roster)
        tasks = self._build_tasks(schedule, employees, today)
        self._apply_reports(reports, tasks)
        self._apply_discipline(discipline, employees)

        logger.info(
            f"Reconciled {len(employees)} pegawai and {len(tasks)} surat tugas for {today.isoformat()}"
        )
        return ReconciliationResult(employees, tasks, today, degraded_sources)

    # ===== STEPS =====

    def _build_employees(self, roster: Iterable[RosterRecord]) -> Dict[str, Employee]:
        employees: Dict[str, Employee] = {}
        for record in roster:
            if record.nip in employees:
                logger.debug(f"Duplicate NIP {record.nip} in roster, later row wins")
            employees[record.nip] = Employee(
                nip=record.nip,
                name=record.name,
                position=record.position,
                unit=record.unit,
                status=EmployeeStatus.UNASSIGNED,
                discipline_score=DisciplineScore(),
            )
        return employees

    def _build_tasks(
        self,
        schedule: Iterable[ScheduleRecord],
        employees: Dict[str, Employee],
        today: date,
    ) -> Dict[str, AssignmentTask]:
        tasks: Dict[str, AssignmentTask] = {}
        unknown_nips = set()

        for record in schedule:
            employee = employees.get(record.nip)
            if employee is None:
                unknown_nips.add(record.nip)

            task = tasks.get(record.letter_number)
            if task is None:
                task = AssignmentTask(
                    letter_number=record.letter_number,
                    basis=record.basis,
                    description=record.description,
                    location=record.location,
                    start_date=record.start_date,
                    end_date=record.end_date,
                    signee=record.signee,
                    activity_type=record.activity_type,
                    funding_type=record.funding_type,
                )
                tasks[record.letter_number] = task

            if employee is not None:
                task.add_member(employee.nip)

            # Availability "today" follows this row's own date range
            if employee is not None and _row_covers(record, today):
                employee.mark_assigned(record.description)

        if unknown_nips:
            logger.warning(
                f"Schedule references {len(unknown_nips)} NIP(s) missing from roster: "
                f"{', '.join(sorted(unknown_nips))}"
            )
        return tasks

    def _apply_reports(self, reports: Iterable[ReportRecord], tasks: Dict[str, AssignmentTask]):
        for record in reports:
            task = tasks.get(record.letter_number)
            if task is None:
                logger.debug(f"Report for unknown letter {record.letter_number} ignored")
                continue

            task.report_status = (
                ReportStatus.VERIFIED if record.status == ReportStatus.VERIFIED else ReportStatus.SUBMITTED
            )
            task.report_date = record.report_date
            task.report_creator_nip = record.creator_nip
            task.report_summary = record.details_raw or None
            task.report_details = parse_report_details(record.details_raw)
            task.documentation_photos = list(record.photos)

    def _apply_discipline(self, discipline: Iterable[DisciplineRecord], employees: Dict[str, Employee]):
        for record in discipline:
            employee = employees.get(record.nip)
            if employee is None:
                continue
            employee.discipline_score = DisciplineScore(
                attendance=record.attendance,
                assembly=record.assembly,
                daily_log=record.daily_log,
                report=record.report,
            )


def _row_covers(record: ScheduleRecord, day: date) -> bool:
    if record.start_date is None or record.end_date is None:
        return False
    return record.start_date <= day <= record.end_date


def parse_report_details(raw: str) -> ReportDetails:
    """Structured details from JSON, or the raw text kept as the narrative."""
    raw = (raw or "").strip()
    if raw.startswith("{"):
        try:
            return ReportDetails.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError):
            logger.debug("Report details are not structured JSON, using raw text")
    return ReportDetails(uraian=raw or "-", hasil="-")
