"""Models initialization."""

from .enums import (
    EmployeeStatus, ReportStatus, UserRole, ActivityType,
    FundingType, SourceKind, ScheduleLayout
)
from .pegawai import Employee, DisciplineScore
from .surat_tugas import AssignmentTask, ReportDetails

__all__ = [
    "EmployeeStatus",
    "ReportStatus",
    "UserRole",
    "ActivityType",
    "FundingType",
    "SourceKind",
    "ScheduleLayout",
    "Employee",
    "DisciplineScore",
    "AssignmentTask",
    "ReportDetails",
]
