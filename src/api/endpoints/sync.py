"""API endpoints untuk sinkronisasi data spreadsheet."""

from fastapi import APIRouter, Depends

from src.auth.permissions import Action, require_action
from src.core.config import settings
from src.core.store import SnapshotStore, get_store
from src.repositories.script_host import ScriptHostRepository
from src.repositories.spreadsheet import SpreadsheetRepository
from src.schemas.sync import SyncStatusResponse
from src.services.sync import SyncService

router = APIRouter()


def get_spreadsheet_repository() -> SpreadsheetRepository:
    """Dependency untuk SpreadsheetRepository."""
    return SpreadsheetRepository()


def get_script_host_repository() -> ScriptHostRepository:
    """Dependency untuk ScriptHostRepository."""
    return ScriptHostRepository()


async def get_sync_service(
    spreadsheet_repo: SpreadsheetRepository = Depends(get_spreadsheet_repository),
    store: SnapshotStore = Depends(get_store),
) -> SyncService:
    """Dependency untuk SyncService."""
    return SyncService(spreadsheet_repo, store)


@router.post("/refresh", response_model=SyncStatusResponse)
async def refresh_data(
    current_user: dict = Depends(require_action(Action.REFRESH_DATA)),
    sync_service: SyncService = Depends(get_sync_service),
):
    """
    Fetch ulang keempat sheet dan rekonsiliasi.

    Sumber yang gagal tercantum di ``degraded_sources``; jika roster atau
    jadwal gagal, snapshot terakhir yang valid tetap dipakai.
    """
    return await sync_service.refresh(timeout=settings.FETCH_TIMEOUT_SECONDS)


@router.get("/status", response_model=SyncStatusResponse)
async def get_sync_status(
    sync_service: SyncService = Depends(get_sync_service),
):
    """Status snapshot saat ini. Tidak memerlukan login."""
    return sync_service.build_status()
