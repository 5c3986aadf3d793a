"""API endpoints untuk skor disiplin pegawai."""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from src.api.endpoints.pegawai import get_pegawai_service
from src.auth.permissions import get_current_user
from src.schemas.pegawai import EmployeeListResponse, EmployeeResponse
from src.services.pegawai import PegawaiService

router = APIRouter()


@router.get("/", response_model=EmployeeListResponse)
async def get_discipline_ranking(
    search: Optional[str] = Query(None, description="Cari nama atau NIP"),
    current_user: dict = Depends(get_current_user),
    pegawai_service: PegawaiService = Depends(get_pegawai_service),
):
    """Ranking skor disiplin, tertinggi lebih dulu."""
    return await pegawai_service.list_discipline(search=search)


@router.get("/{nip}", response_model=EmployeeResponse)
async def get_discipline_detail(
    nip: str,
    current_user: dict = Depends(get_current_user),
    pegawai_service: PegawaiService = Depends(get_pegawai_service),
):
    """Rincian empat komponen dan skor akhir satu pegawai."""
    return await pegawai_service.get_employee(nip)
