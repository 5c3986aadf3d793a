"""API endpoints untuk laporan tugas."""

from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query

from src.api.endpoints.sync import get_script_host_repository, get_sync_service
from src.auth.permissions import get_current_user
from src.core.store import SnapshotStore, get_store
from src.repositories.script_host import ScriptHostRepository
from src.schemas.common import SuccessResponse
from src.schemas.laporan import ReportListResponse, ReportStats, ReportSubmit
from src.schemas.surat_tugas import AssignmentResponse
from src.services.laporan import ReportService
from src.services.sync import SyncService

router = APIRouter()


async def get_report_service(
    store: SnapshotStore = Depends(get_store),
    sync_service: SyncService = Depends(get_sync_service),
    script_host_repo: ScriptHostRepository = Depends(get_script_host_repository),
) -> ReportService:
    """Dependency untuk ReportService."""
    return ReportService(store, sync_service, script_host_repo)


@router.get("/", response_model=ReportListResponse)
async def get_all_laporan(
    tab: Literal["all", "pending", "completed"] = Query("all"),
    search: Optional[str] = Query(None, description="Cari nama kegiatan atau nomor surat"),
    current_user: dict = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
):
    """
    Daftar laporan.

    Tab ``completed`` mencakup laporan Sudah Upload dan Terverifikasi.
    """
    return await report_service.list_reports(current_user, tab, search)


@router.get("/stats", response_model=ReportStats)
async def get_laporan_stats(
    current_user: dict = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
):
    return await report_service.get_stats(current_user)


@router.post("/{letter_number:path}/verify", response_model=AssignmentResponse)
async def verify_laporan(
    letter_number: str,
    current_user: dict = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
):
    """Verifikasi laporan berstatus Sudah Upload."""
    return await report_service.verify_report(letter_number, current_user)


@router.put("/{letter_number:path}", response_model=AssignmentResponse)
async def submit_laporan(
    letter_number: str,
    data: ReportSubmit,
    current_user: dict = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
):
    """
    Upload atau edit laporan.

    **Validasi**: uraian dan hasil wajib diisi, minimal 3 foto dokumentasi.
    """
    return await report_service.submit_report(letter_number, data, current_user)


@router.delete("/{letter_number:path}", response_model=SuccessResponse)
async def delete_laporan(
    letter_number: str,
    current_user: dict = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
):
    """Hapus laporan; status kembali ke Belum Upload."""
    return await report_service.delete_report(letter_number, current_user)
