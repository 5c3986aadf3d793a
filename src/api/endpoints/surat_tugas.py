"""API endpoints untuk surat tugas."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from src.api.endpoints.sync import get_script_host_repository, get_sync_service
from src.auth.permissions import get_current_user
from src.core.store import SnapshotStore, get_store
from src.models.enums import ActivityType
from src.repositories.script_host import ScriptHostRepository
from src.schemas.surat_tugas import (
    AssignmentCreate, AssignmentCreateResponse, AssignmentListResponse,
    AssignmentResponse, ConflictCheckRequest, ConflictCheckResponse
)
from src.services.surat_tugas import AssignmentService
from src.services.sync import SyncService

router = APIRouter()


async def get_assignment_service(
    store: SnapshotStore = Depends(get_store),
    sync_service: SyncService = Depends(get_sync_service),
    script_host_repo: ScriptHostRepository = Depends(get_script_host_repository),
) -> AssignmentService:
    """Dependency untuk AssignmentService."""
    return AssignmentService(store, sync_service, script_host_repo)


# ===== READ OPERATIONS =====

@router.get("/", response_model=AssignmentListResponse)
async def get_all_surat_tugas(
    search: Optional[str] = Query(None, description="Cari nama kegiatan atau nomor surat"),
    activity_type: Optional[ActivityType] = Query(None, description="Luring atau Daring"),
    current_user: dict = Depends(get_current_user),
    assignment_service: AssignmentService = Depends(get_assignment_service),
):
    """
    Daftar surat tugas dengan scope per role:
    - **Super admin**: semua surat tugas
    - **Admin tim**: surat tugas dengan anggota dari unitnya
    - **Pegawai**: surat tugas miliknya
    """
    return await assignment_service.list_tasks(current_user, search, activity_type)


@router.post("/check-conflicts", response_model=ConflictCheckResponse)
async def check_conflicts(
    request: ConflictCheckRequest,
    current_user: dict = Depends(get_current_user),
    assignment_service: AssignmentService = Depends(get_assignment_service),
):
    """Cek bentrok jadwal luring sebelum menerbitkan surat tugas."""
    return await assignment_service.check_conflicts(request)


@router.get("/{letter_number:path}", response_model=AssignmentResponse)
async def get_surat_tugas(
    letter_number: str,
    current_user: dict = Depends(get_current_user),
    assignment_service: AssignmentService = Depends(get_assignment_service),
):
    return await assignment_service.get_task(letter_number, current_user)


# ===== CREATE =====

@router.post("/", response_model=AssignmentCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_surat_tugas(
    data: AssignmentCreate,
    current_user: dict = Depends(get_current_user),
    assignment_service: AssignmentService = Depends(get_assignment_service),
):
    """
    Terbitkan surat tugas.

    Ditolak dengan 409 jika ada pegawai yang sudah bertugas luring pada
    rentang tanggal yang beririsan.
    """
    return await assignment_service.create_assignment(data, current_user)
