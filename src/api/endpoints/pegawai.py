"""API endpoints untuk data pegawai."""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from src.auth.permissions import Action, get_current_user, require_action
from src.core.store import SnapshotStore, get_store
from src.schemas.pegawai import EmployeeListResponse, EmployeeResponse
from src.services.pegawai import PegawaiService

router = APIRouter()


async def get_pegawai_service(store: SnapshotStore = Depends(get_store)) -> PegawaiService:
    """Dependency untuk PegawaiService."""
    return PegawaiService(store)


@router.get("/", response_model=EmployeeListResponse)
async def get_all_pegawai(
    search: Optional[str] = Query(None, description="Cari nama atau NIP"),
    unit: Optional[str] = Query(None, description="Filter unit kerja"),
    current_user: dict = Depends(get_current_user),
    pegawai_service: PegawaiService = Depends(get_pegawai_service),
):
    """Database personil dengan status penugasan hari ini."""
    return await pegawai_service.list_employees(search=search, unit=unit)


@router.get("/tidak-bertugas", response_model=EmployeeListResponse)
async def get_pegawai_tidak_bertugas(
    current_user: dict = Depends(require_action(Action.VIEW_OPERATIONS)),
    pegawai_service: PegawaiService = Depends(get_pegawai_service),
):
    """
    Daftar pegawai standby untuk operasional.

    **Accessible by**: Super admin dan admin tim.
    """
    return await pegawai_service.list_unassigned()


@router.get("/{nip}", response_model=EmployeeResponse)
async def get_pegawai(
    nip: str,
    current_user: dict = Depends(get_current_user),
    pegawai_service: PegawaiService = Depends(get_pegawai_service),
):
    return await pegawai_service.get_employee(nip)
