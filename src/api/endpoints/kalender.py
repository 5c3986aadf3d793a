"""API endpoints untuk kalender ketersediaan pegawai."""

from datetime import date
from fastapi import APIRouter, Depends

from src.api.endpoints.dashboard import get_dashboard_service
from src.auth.permissions import get_current_user
from src.schemas.dashboard import CalendarDayDetail, CalendarMonthResponse
from src.services.dashboard import DashboardService

router = APIRouter()


@router.get("/tanggal/{day}", response_model=CalendarDayDetail)
async def get_calendar_day(
    day: date,
    current_user: dict = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
):
    """Tugas aktif dan pegawai standby pada satu tanggal."""
    return await dashboard_service.get_calendar_day(day)


@router.get("/{year}/{month}", response_model=CalendarMonthResponse)
async def get_calendar_month(
    year: int,
    month: int,
    current_user: dict = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
):
    return await dashboard_service.get_calendar_month(year, month)
