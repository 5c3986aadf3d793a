"""API endpoints untuk dashboard dan rekap penugasan."""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from src.auth.permissions import get_current_user
from src.core.store import SnapshotStore, get_store
from src.models.enums import ActivityType
from src.schemas.dashboard import DashboardSummaryResponse, RecapResponse
from src.services.dashboard import DashboardService

router = APIRouter()


async def get_dashboard_service(store: SnapshotStore = Depends(get_store)) -> DashboardService:
    """Dependency untuk DashboardService."""
    return DashboardService(store)


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_dashboard_summary(
    unit: Optional[str] = Query(None, description="Filter unit kerja"),
    search: Optional[str] = Query(None, description="Cari nama atau NIP"),
    current_user: dict = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
):
    """
    Ringkasan dashboard:
    - Jumlah pegawai bertugas / tidak bertugas
    - Jumlah surat tugas yang terlihat oleh user
    - Rata-rata dan distribusi skor disiplin
    - Laporan yang belum diupload (pegawai)
    """
    return await dashboard_service.get_summary(current_user, unit=unit, search=search)


@router.get("/rekap", response_model=RecapResponse)
async def get_rekap(
    name: Optional[str] = Query(None, description="Cari nama pegawai"),
    unit: Optional[str] = Query(None, description="Filter unit kerja"),
    activity_type: Optional[ActivityType] = Query(None, alias="type"),
    current_user: dict = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
):
    """Rekap penugasan, terbaru lebih dulu, dengan status timeline."""
    return await dashboard_service.get_recap(current_user, name=name, unit=unit, activity_type=activity_type)
