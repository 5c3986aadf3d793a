"""Service untuk surat tugas: daftar, cek bentrok dan penerbitan."""

import logging
from typing import Any, Dict, List, Optional

from src.auth.permissions import Action, ResourceOwner, ensure_can, visible_tasks
from src.core.config import settings
from src.core.exceptions import NotFound, ScheduleConflict, ValidationFailed
from src.core.store import SnapshotStore
from src.models.enums import ActivityType, ReportStatus
from src.models.surat_tugas import AssignmentTask
from src.repositories.script_host import ScriptHostRepository
from src.schemas.surat_tugas import (
    AssignmentCreate, AssignmentCreateResponse, AssignmentListResponse,
    AssignmentResponse, ConflictCheckRequest, ConflictCheckResponse
)
from src.services.availability import AvailabilityEvaluator
from src.services.reconciler import ReconciliationResult
from src.services.sync import SyncService

logger = logging.getLogger(__name__)


class AssignmentService:
    """Service untuk surat tugas."""

    def __init__(
        self,
        store: SnapshotStore,
        sync_service: SyncService,
        script_host_repo: ScriptHostRepository,
    ):
        self.store = store
        self.sync_service = sync_service
        self.script_host_repo = script_host_repo

    # ===== READ OPERATIONS =====

    async def list_tasks(
        self,
        current_user: Dict,
        search: Optional[str] = None,
        activity_type: Optional[ActivityType] = None,
    ) -> AssignmentListResponse:
        snapshot = self.store.require()
        tasks = visible_tasks(current_user, snapshot)

        if activity_type:
            tasks = [t for t in tasks if t.activity_type == activity_type]
        if search:
            needle = search.lower()
            tasks = [
                t for t in tasks
                if needle in t.description.lower() or needle in t.letter_number.lower()
            ]

        items = [AssignmentResponse.from_task(t, snapshot.members_of(t)) for t in tasks]
        return AssignmentListResponse(items=items, total=len(items))

    async def get_task(self, letter_number: str, current_user: Dict) -> AssignmentResponse:
        snapshot = self.store.require()
        task = self._get_task_or_404(snapshot, letter_number)
        ensure_can(current_user, Action.VIEW_TASK, ResourceOwner.of_task(task, snapshot))
        return AssignmentResponse.from_task(task, snapshot.members_of(task))

    async def check_conflicts(self, request: ConflictCheckRequest) -> ConflictCheckResponse:
        snapshot = self.store.require()
        conflicts = AvailabilityEvaluator(snapshot).find_conflicts(
            request.employee_nips, request.start_date, request.end_date, request.activity_type
        )
        return ConflictCheckResponse(has_conflict=bool(conflicts), conflicts=conflicts)

    # ===== CREATE =====

    async def create_assignment(
        self,
        data: AssignmentCreate,
        current_user: Dict,
    ) -> AssignmentCreateResponse:
        """
        Terbitkan surat tugas baru.

        Workflow:
        1. Validate semua NIP ada di roster
        2. Check permission untuk pegawai terpilih
        3. Validate nomor surat unique
        4. Tolak jika ada bentrok jadwal luring
        5. Simpan ke script host lalu refresh penuh (demo mode: simpan lokal)
        """
        snapshot = self.store.require()

        # 1. Validate NIP
        unknown = [nip for nip in data.employee_nips if nip not in snapshot.employees]
        if unknown:
            raise ValidationFailed(
                f"NIP tidak ditemukan: {', '.join(unknown)}",
                details={"unknown_nips": unknown},
            )

        # 2. Permission
        ensure_can(
            current_user,
            Action.CREATE_ASSIGNMENT,
            ResourceOwner.of_employees(data.employee_nips, snapshot),
        )

        # 3. Nomor surat unique
        if snapshot.get_task(data.letter_number) is not None:
            raise ValidationFailed("Nomor surat sudah ada")

        # 4. Bentrok jadwal
        conflicts = AvailabilityEvaluator(snapshot).find_conflicts(
            data.employee_nips, data.start_date, data.end_date, data.activity_type
        )
        if conflicts:
            raise ScheduleConflict(conflicts)

        # 5. Simpan
        if settings.IS_DEMO_MODE:
            self.store.update(lambda s: self._apply_locally(s, data))
            message = "Mode Demo: Surat Tugas disimpan"
        else:
            await self.script_host_repo.save_assignment(self._to_record(data, snapshot))
            await self.sync_service.refresh(timeout=settings.FETCH_TIMEOUT_SECONDS, after_write=True)
            message = "Surat Tugas Berhasil Diterbitkan"

        logger.info(
            f"Surat tugas {data.letter_number} issued by {current_user.get('nip')} "
            f"for {len(data.employee_nips)} pegawai"
        )

        current = self.store.require()
        task = current.get_task(data.letter_number)
        return AssignmentCreateResponse(
            message=message,
            surat_tugas=AssignmentResponse.from_task(task, current.members_of(task)) if task else None,
        )

    # ===== HELPERS =====

    def _get_task_or_404(self, snapshot: ReconciliationResult, letter_number: str) -> AssignmentTask:
        task = snapshot.get_task(letter_number)
        if task is None:
            raise NotFound("Surat tugas tidak ditemukan")
        return task

    @staticmethod
    def _apply_locally(snapshot: ReconciliationResult, data: AssignmentCreate):
        task = AssignmentTask(
            letter_number=data.letter_number,
            basis=data.basis,
            description=data.description,
            location=data.location,
            start_date=data.start_date,
            end_date=data.end_date,
            signee=data.signee,
            activity_type=data.activity_type,
            funding_type=data.funding_type,
            report_status=ReportStatus.PENDING,
        )
        for nip in data.employee_nips:
            task.add_member(nip)
        snapshot.tasks[task.letter_number] = task

        if task.covers(snapshot.evaluated_on):
            for employee in snapshot.members_of(task):
                employee.mark_assigned(task.description)

    @staticmethod
    def _to_record(data: AssignmentCreate, snapshot: ReconciliationResult) -> Dict[str, Any]:
        employees: List[Dict[str, str]] = []
        for nip in data.employee_nips:
            employee = snapshot.get_employee(nip)
            employees.append({"nip": nip, "name": employee.name if employee else nip})

        return {
            "letterNumber": data.letter_number,
            "basis": data.basis,
            "description": data.description,
            "location": data.location,
            "startDate": data.start_date.isoformat(),
            "endDate": data.end_date.isoformat(),
            "signee": data.signee,
            "activityType": data.activity_type.value,
            "fundingType": data.funding_type.value if data.funding_type else None,
            "employees": employees,
        }
