"""Pegawai domain model."""

from typing import Optional
from pydantic import BaseModel, Field, computed_field

from src.models.enums import EmployeeStatus
from src.utils.discipline_calculator import discipline_calculator


DEFAULT_NAME = "Pegawai"
DEFAULT_TEXT = "-"


class DisciplineScore(BaseModel):
    """Skor kedisiplinan. ``final`` is always derived, never stored."""

    attendance: float = 0.0
    assembly: float = 0.0
    daily_log: float = 0.0
    report: float = 0.0

    @computed_field
    @property
    def final(self) -> float:
        return discipline_calculator.calculate_final(
            self.attendance, self.assembly, self.daily_log, self.report
        )

    @property
    def rating(self) -> str:
        return discipline_calculator.rate(self.final)


class Employee(BaseModel):
    """Pegawai keyed by NIP (opaque text)."""

    nip: str
    name: str = DEFAULT_NAME
    position: str = DEFAULT_TEXT
    unit: str = DEFAULT_TEXT
    status: EmployeeStatus = EmployeeStatus.UNASSIGNED
    active_activity: Optional[str] = None
    discipline_score: DisciplineScore = Field(default_factory=DisciplineScore)

    @property
    def id(self) -> str:
        return f"emp-{self.nip}"

    def mark_assigned(self, activity: str):
        self.status = EmployeeStatus.ASSIGNED
        self.active_activity = activity
