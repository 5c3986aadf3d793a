"""Utility tanggal untuk jadwal tugas."""

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from src.core.config import settings


def parse_sheet_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a spreadsheet date cell.

    Accepts ``YYYY-MM-DD`` and ``DD/MM/YYYY``. Anything else, including
    impossible calendar dates, yields None so callers can skip range checks.
    """
    if not value:
        return None
    text = str(value).strip()
    if not text:
        return None

    try:
        if "-" in text:
            year, month, day = (int(part) for part in text.split("-")[:3])
        elif "/" in text:
            day, month, year = (int(part) for part in text.split("/")[:3])
        else:
            return None
        return date(year, month, day)
    except ValueError:
        return None


def today_local() -> date:
    """Current calendar date in the office timezone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def timeline_status(end_date: Optional[date], today: date) -> dict:
    """
    Status badge untuk rekap penugasan.

    Returns:
        dict dengan ``status`` (Selesai / Akan Selesai / Masih Aktif)
        dan ``days_remaining``. Badge "Akan Selesai" dipakai bila sisa
        hari kalender (termasuk hari berakhir) paling banyak 3.
    """
    if end_date is None:
        return {"status": "Tanggal Tidak Valid", "days_remaining": None}

    days_remaining = (end_date - today).days
    if days_remaining < 0:
        label = "Selesai"
    elif days_remaining <= 2:
        label = "Akan Selesai"
    else:
        label = "Masih Aktif"
    return {"status": label, "days_remaining": days_remaining}
