"""Service untuk data pegawai dan skor disiplin."""

import logging
from typing import List, Optional

from src.core.exceptions import NotFound
from src.core.store import SnapshotStore
from src.models.pegawai import Employee
from src.schemas.pegawai import EmployeeListResponse, EmployeeResponse
from src.services.availability import AvailabilityEvaluator

logger = logging.getLogger(__name__)


def filter_employees(
    employees: List[Employee],
    search: Optional[str] = None,
    unit: Optional[str] = None,
) -> List[Employee]:
    """Search matches name (case-insensitive) or NIP substring."""
    if unit:
        employees = [emp for emp in employees if emp.unit == unit]
    if search:
        needle = search.lower()
        employees = [
            emp for emp in employees
            if needle in emp.name.lower() or search in emp.nip
        ]
    return employees


class PegawaiService:
    """Service untuk pegawai."""

    def __init__(self, store: SnapshotStore):
        self.store = store

    async def list_employees(
        self,
        search: Optional[str] = None,
        unit: Optional[str] = None,
    ) -> EmployeeListResponse:
        snapshot = self.store.require()
        employees = filter_employees(snapshot.employee_list(), search, unit)
        return self._to_list(employees)

    async def list_unassigned(self) -> EmployeeListResponse:
        """Pegawai berstatus Tidak Bertugas pada sinkronisasi terakhir."""
        snapshot = self.store.require()
        return self._to_list(AvailabilityEvaluator(snapshot).unassigned_today())

    async def get_employee(self, nip: str) -> EmployeeResponse:
        employee = self.store.require().get_employee(nip)
        if employee is None:
            raise NotFound("Pegawai tidak ditemukan")
        return EmployeeResponse.from_employee(employee)

    async def list_discipline(self, search: Optional[str] = None) -> EmployeeListResponse:
        """Ranking disiplin, skor akhir tertinggi lebih dulu."""
        snapshot = self.store.require()
        employees = filter_employees(snapshot.employee_list(), search)
        employees = sorted(employees, key=lambda emp: emp.discipline_score.final, reverse=True)
        return self._to_list(employees)

    @staticmethod
    def _to_list(employees: List[Employee]) -> EmployeeListResponse:
        items = [EmployeeResponse.from_employee(emp) for emp in employees]
        return EmployeeListResponse(items=items, total=len(items))
