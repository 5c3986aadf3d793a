"""Schemas untuk surat tugas."""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.models.enums import ActivityType, FundingType, ReportStatus
from src.models.surat_tugas import AssignmentTask, ReportDetails
from src.schemas.pegawai import EmployeeSummary


def _unique_nips(nips: List[str]) -> List[str]:
    """Strip, drop empties and duplicates, keep first-seen order."""
    unique: List[str] = []
    for nip in nips:
        nip = nip.strip()
        if nip and nip not in unique:
            unique.append(nip)
    return unique


# ===== REQUEST SCHEMAS =====

class AssignmentCreate(BaseModel):
    """Schema untuk menerbitkan surat tugas baru."""

    letter_number: str = Field(..., min_length=1, max_length=100, description="Nomor surat tugas")
    basis: str = Field(..., min_length=1, description="Dasar penugasan")
    description: str = Field(..., min_length=1, description="Nama kegiatan")
    location: str = Field(..., min_length=1, description="Lokasi kegiatan")
    start_date: date = Field(..., description="Tanggal mulai")
    end_date: date = Field(..., description="Tanggal selesai")
    signee: str = Field(..., min_length=1, description="Pejabat penandatangan")
    activity_type: ActivityType = ActivityType.LURING
    funding_type: Optional[FundingType] = None
    employee_nips: List[str] = Field(..., min_length=1, description="NIP pegawai yang ditugaskan")

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, end_date: date, info) -> date:
        """Validate tanggal selesai tidak sebelum tanggal mulai."""
        start_date = info.data.get("start_date")
        if start_date and end_date < start_date:
            raise ValueError("Tanggal selesai harus setelah tanggal mulai")
        return end_date

    @field_validator("letter_number")
    @classmethod
    def validate_letter_number(cls, letter_number: str) -> str:
        letter_number = letter_number.strip()
        if not letter_number:
            raise ValueError("Nomor surat tidak boleh kosong")
        return letter_number

    @field_validator("employee_nips")
    @classmethod
    def validate_employee_nips(cls, employee_nips: List[str]) -> List[str]:
        unique = _unique_nips(employee_nips)
        if not unique:
            raise ValueError("Pilih setidaknya satu pegawai")
        return unique


class ConflictCheckRequest(BaseModel):
    """Schema untuk cek bentrok jadwal sebelum menerbitkan surat tugas."""

    employee_nips: List[str] = Field(..., min_length=1)
    start_date: date
    end_date: date
    activity_type: ActivityType = ActivityType.LURING

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, end_date: date, info) -> date:
        start_date = info.data.get("start_date")
        if start_date and end_date < start_date:
            raise ValueError("Tanggal selesai harus setelah tanggal mulai")
        return end_date

    @field_validator("employee_nips")
    @classmethod
    def validate_employee_nips(cls, employee_nips: List[str]) -> List[str]:
        return _unique_nips(employee_nips)


# ===== RESPONSE SCHEMAS =====

class ConflictCheckResponse(BaseModel):
    has_conflict: bool
    conflicts: List[str] = []


class AssignmentResponse(BaseModel):
    """Schema untuk response surat tugas."""

    id: str
    letter_number: str
    basis: str
    description: str
    location: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    signee: str
    activity_type: ActivityType
    funding_type: Optional[FundingType] = None
    employees: List[EmployeeSummary] = []

    report_status: ReportStatus
    report_date: Optional[str] = None
    report_creator_nip: Optional[str] = None
    report_details: Optional[ReportDetails] = None
    documentation_photos: List[str] = []

    @classmethod
    def from_task(cls, task: AssignmentTask, members) -> "AssignmentResponse":
        return cls(
            id=task.id,
            letter_number=task.letter_number,
            basis=task.basis,
            description=task.description,
            location=task.location,
            start_date=task.start_date,
            end_date=task.end_date,
            signee=task.signee,
            activity_type=task.activity_type,
            funding_type=task.funding_type,
            employees=[EmployeeSummary.model_validate(emp) for emp in members],
            report_status=task.report_status,
            report_date=task.report_date,
            report_creator_nip=task.report_creator_nip,
            report_details=task.report_details,
            documentation_photos=list(task.documentation_photos),
        )


class AssignmentListResponse(BaseModel):
    items: List[AssignmentResponse]
    total: int


class AssignmentCreateResponse(BaseModel):
    success: bool = True
    message: str
    surat_tugas: Optional[AssignmentResponse] = None
