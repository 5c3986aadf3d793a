"""Schemas untuk pegawai dan skor disiplin."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict

from src.models.enums import EmployeeStatus
from src.models.pegawai import Employee


class DisciplineScoreResponse(BaseModel):
    attendance: float
    assembly: float
    daily_log: float
    report: float
    final: float
    rating: str


class EmployeeSummary(BaseModel):
    """Ringkasan pegawai untuk di-embed pada response lain."""

    nip: str
    name: str
    position: str
    unit: str

    model_config = ConfigDict(from_attributes=True)


class EmployeeResponse(BaseModel):
    """Schema untuk response pegawai."""

    id: str
    nip: str
    name: str
    position: str
    unit: str
    status: EmployeeStatus
    active_activity: Optional[str] = None
    discipline_score: DisciplineScoreResponse

    @classmethod
    def from_employee(cls, employee: Employee) -> "EmployeeResponse":
        score = employee.discipline_score
        return cls(
            id=employee.id,
            nip=employee.nip,
            name=employee.name,
            position=employee.position,
            unit=employee.unit,
            status=employee.status,
            active_activity=employee.active_activity,
            discipline_score=DisciplineScoreResponse(
                attendance=score.attendance,
                assembly=score.assembly,
                daily_log=score.daily_log,
                report=score.report,
                final=round(score.final, 2),
                rating=score.rating,
            ),
        )


class EmployeeListResponse(BaseModel):
    items: List[EmployeeResponse]
    total: int
