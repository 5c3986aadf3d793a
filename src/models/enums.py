"""Enums untuk domain models - values match spreadsheet text."""

from enum import Enum
from typing import Optional


class EmployeeStatus(str, Enum):
    """Status keberadaan pegawai, recomputed on every sync."""
    ASSIGNED = "Bertugas"
    UNASSIGNED = "Tidak Bertugas"


class ReportStatus(str, Enum):
    """Status laporan tugas."""
    PENDING = "Belum Upload"
    SUBMITTED = "Sudah Upload"
    VERIFIED = "Terverifikasi"

    @classmethod
    def from_sheet(cls, value: str) -> Optional["ReportStatus"]:
        """Match a status cell case-insensitively; unknown text returns None."""
        value = (value or "").strip().lower()
        for item in cls:
            if item.value.lower() == value or item.name.lower() == value:
                return item
        return None


class UserRole(str, Enum):
    """User role enum."""
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN_TIM = "ADMIN_TIM"
    PEGAWAI = "PEGAWAI"


class ActivityType(str, Enum):
    """Jenis kegiatan. Only LURING takes part in double-booking checks."""
    LURING = "Luring"
    DARING = "Daring"

    @classmethod
    def normalize(cls, value: str, default: "ActivityType" = None) -> "ActivityType":
        """Case-insensitive lookup falling back to ``default`` (LURING)."""
        value = (value or "").strip().lower()
        for item in cls:
            if item.value.lower() == value:
                return item
        return default or cls.LURING


class FundingType(str, Enum):
    """Sumber pembiayaan kegiatan."""
    TANPA_BIAYA = "Tanpa Biaya"
    BIAYA_BPMP = "Biaya BPMP"
    BIAYA_PENYELENGGARA = "Biaya Penyelenggara"

    @classmethod
    def normalize(cls, value: str) -> Optional["FundingType"]:
        value = (value or "").strip().lower()
        for item in cls:
            if item.value.lower() == value:
                return item
        return None


class SourceKind(str, Enum):
    """The four spreadsheet tables a sync pulls."""
    ROSTER = "roster"
    SCHEDULE = "schedule"
    DISCIPLINE = "discipline"
    REPORTS = "reports"


class ScheduleLayout(str, Enum):
    """Observed column layouts of the schedule sheet."""
    COMPACT = "compact"
    JADWAL_TUGAS = "jadwal_tugas"
