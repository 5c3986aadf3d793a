"""Service untuk laporan tugas: upload, edit, hapus dan verifikasi."""

import json
import logging
from typing import Dict, Optional

from src.auth.permissions import Action, ResourceOwner, ensure_can, visible_tasks
from src.core.config import settings
from src.core.exceptions import NotFound, ValidationFailed
from src.core.store import SnapshotStore
from src.models.enums import ReportStatus
from src.models.surat_tugas import AssignmentTask, ReportDetails
from src.repositories.script_host import ScriptHostRepository
from src.schemas.common import SuccessResponse
from src.schemas.laporan import ReportListResponse, ReportStats, ReportSubmit
from src.schemas.surat_tugas import AssignmentResponse
from src.services.reconciler import ReconciliationResult
from src.services.sync import SyncService
from src.utils.dates import today_local

logger = logging.getLogger(__name__)

COMPLETED_STATUSES = (ReportStatus.SUBMITTED, ReportStatus.VERIFIED)


def validate_report(data: ReportSubmit) -> None:
    """Reject incomplete reports before anything is written."""
    if not data.uraian.strip() or not data.hasil.strip():
        raise ValidationFailed("Mohon lengkapi Uraian Pelaksanaan dan Hasil yang Dicapai.")

    minimum = settings.MIN_DOCUMENTATION_PHOTOS
    if len(data.documentation_photos) < minimum:
        raise ValidationFailed(
            f"Wajib mengunggah minimal {minimum} foto dokumentasi kegiatan.",
            details={"photo_count": len(data.documentation_photos), "minimum": minimum},
        )


class ReportService:
    """Service untuk laporan tugas."""

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

    async def list_reports(
        self,
        current_user: Dict,
        tab: str = "all",
        search: Optional[str] = None,
    ) -> ReportListResponse:
        snapshot = self.store.require()
        tasks = visible_tasks(current_user, snapshot)

        if tab == "pending":
            tasks = [t for t in tasks if t.report_status == ReportStatus.PENDING]
        elif tab == "completed":
            tasks = [t for t in tasks if t.report_status in COMPLETED_STATUSES]

        if search:
            needle = search.lower()
            tasks = [
                t for t in tasks
                if needle in t.description.lower() or needle in t.letter_number.lower()
            ]

        items = [AssignmentResponse.from_task(t, snapshot.members_of(t)) for t in tasks]
        return ReportListResponse(items=items, total=len(items), tab=tab)

    async def get_stats(self, current_user: Dict) -> ReportStats:
        tasks = visible_tasks(current_user, self.store.require())
        return ReportStats(
            total=len(tasks),
            pending=sum(1 for t in tasks if t.report_status == ReportStatus.PENDING),
            completed=sum(1 for t in tasks if t.report_status in COMPLETED_STATUSES),
        )

    # ===== WRITE OPERATIONS =====

    async def submit_report(
        self,
        letter_number: str,
        data: ReportSubmit,
        current_user: Dict,
    ) -> AssignmentResponse:
        """Upload laporan baru, atau edit laporan yang sudah ada."""
        snapshot = self.store.require()
        task = self._get_task_or_404(snapshot, letter_number)

        is_edit = task.has_report
        action = Action.EDIT_REPORT if is_edit else Action.SUBMIT_REPORT
        ensure_can(current_user, action, ResourceOwner.of_task(task, snapshot))

        validate_report(data)

        details = ReportDetails(
            uraian=data.uraian.strip(),
            hasil=data.hasil.strip(),
            kendala=data.kendala,
            solusi=data.solusi,
        )
        summary = json.dumps(details.model_dump(exclude_none=True))
        report_date = today_local().isoformat()
        creator_nip = task.report_creator_nip if is_edit and task.report_creator_nip else current_user["nip"]

        if settings.IS_DEMO_MODE:
            def _apply(s: ReconciliationResult):
                target = s.tasks[letter_number]
                target.report_status = ReportStatus.SUBMITTED
                target.report_date = report_date
                target.report_creator_nip = creator_nip
                target.report_summary = summary
                target.report_details = details
                target.documentation_photos = list(data.documentation_photos)

            self.store.update(_apply)
        else:
            await self.script_host_repo.save_report({
                "letterNumber": letter_number,
                "summary": summary,
                "reportDate": report_date,
                "nip": creator_nip,
                "documentationPhotos": list(data.documentation_photos),
            })
            await self.sync_service.refresh(timeout=settings.FETCH_TIMEOUT_SECONDS, after_write=True)

        logger.info(
            f"Laporan {letter_number} {'updated' if is_edit else 'submitted'} by {current_user.get('nip')}"
        )
        return self._current_response(letter_number)

    async def delete_report(self, letter_number: str, current_user: Dict) -> SuccessResponse:
        """Hapus laporan; surat tugas kembali ke status Belum Upload."""
        snapshot = self.store.require()
        task = self._get_task_or_404(snapshot, letter_number)
        if not task.has_report:
            raise ValidationFailed("Surat tugas ini belum memiliki laporan")

        ensure_can(current_user, Action.DELETE_REPORT, ResourceOwner.of_task(task, snapshot))

        if settings.IS_DEMO_MODE:
            self.store.update(lambda s: s.tasks[letter_number].clear_report())
        else:
            target_nip = task.report_creator_nip or current_user["nip"]
            await self.script_host_repo.delete_report(letter_number, target_nip)
            await self.sync_service.refresh(timeout=settings.FETCH_TIMEOUT_SECONDS, after_write=True)

        logger.info(f"Laporan {letter_number} deleted by {current_user.get('nip')}", extra={"letter_number": letter_number})
        return SuccessResponse(
            message="Laporan berhasil dihapus",
            data={"letter_number": letter_number, "report_status": ReportStatus.PENDING.value},
        )

    async def verify_report(self, letter_number: str, current_user: Dict) -> AssignmentResponse:
        """Verifikasi laporan yang sudah diupload."""
        snapshot = self.store.require()
        task = self._get_task_or_404(snapshot, letter_number)
        ensure_can(current_user, Action.VERIFY_REPORT, ResourceOwner.of_task(task, snapshot))

        if task.report_status != ReportStatus.SUBMITTED:
            raise ValidationFailed("Hanya laporan berstatus Sudah Upload yang dapat diverifikasi")

        if settings.IS_DEMO_MODE:
            def _apply(s: ReconciliationResult):
                s.tasks[letter_number].report_status = ReportStatus.VERIFIED

            self.store.update(_apply)
        else:
            await self.script_host_repo.verify_report(letter_number, current_user["nip"])
            await self.sync_service.refresh(timeout=settings.FETCH_TIMEOUT_SECONDS, after_write=True)

        logger.info(f"Laporan {letter_number} verified by {current_user.get('nip')}", extra={"letter_number": letter_number})
        return self._current_response(letter_number)

    # ===== HELPERS =====

    def _get_task_or_404(self, snapshot: ReconciliationResult, letter_number: str) -> AssignmentTask:
        task = snapshot.get_task(letter_number)
        if task is None:
            raise NotFound("Surat tugas tidak ditemukan")
        return task

    def _current_response(self, letter_number: str) -> AssignmentResponse:
        snapshot = self.store.require()
        task = self._get_task_or_404(snapshot, letter_number)
        return AssignmentResponse.from_task(task, snapshot.members_of(task))
