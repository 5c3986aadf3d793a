"""Authorization policy - one predicate consulted by every endpoint and service."""

import logging
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional

from fastapi import Depends, Header, HTTPException, status

from src.core.config import settings
from src.core.store import SnapshotStore, get_store
from src.models.enums import UserRole
from src.models.surat_tugas import AssignmentTask
from src.services.reconciler import ReconciliationResult

logger = logging.getLogger(__name__)


class Action(str, Enum):
    VIEW_TASK = "view_task"
    CREATE_ASSIGNMENT = "create_assignment"
    VIEW_OPERATIONS = "view_operations"
    SUBMIT_REPORT = "submit_report"
    EDIT_REPORT = "edit_report"
    DELETE_REPORT = "delete_report"
    VERIFY_REPORT = "verify_report"
    REFRESH_DATA = "refresh_data"


class ResourceOwner(NamedTuple):
    """Who a task (or a candidate task) belongs to."""

    member_nips: FrozenSet[str] = frozenset()
    member_units: FrozenSet[str] = frozenset()
    creator_nip: Optional[str] = None

    @classmethod
    def of_task(cls, task: AssignmentTask, snapshot: ReconciliationResult) -> "ResourceOwner":
        members = snapshot.members_of(task)
        return cls(
            member_nips=frozenset(task.employee_nips),
            member_units=frozenset(emp.unit for emp in members),
            creator_nip=task.report_creator_nip,
        )

    @classmethod
    def of_employees(cls, nips: Iterable[str], snapshot: ReconciliationResult) -> "ResourceOwner":
        nips = frozenset(nips)
        units = frozenset(
            snapshot.employees[nip].unit for nip in nips if nip in snapshot.employees
        )
        return cls(member_nips=nips, member_units=units)


def can(user: Dict, action: Action, owner: Optional[ResourceOwner] = None) -> bool:
    """
    Access rules:
    - SUPER_ADMIN: everything
    - ADMIN_TIM: everything scoped to tasks with a member from their unit;
      reports can be edited or deleted only by their creator
    - PEGAWAI: tasks they belong to; edit/delete only reports they created
    """
    role = user.get("role")
    nip = user.get("nip")
    unit = user.get("unit")
    owner = owner or ResourceOwner()

    if role == UserRole.SUPER_ADMIN.value:
        return True

    is_member = nip in owner.member_nips
    is_creator = owner.creator_nip is not None and owner.creator_nip == nip
    in_unit = bool(unit) and unit in owner.member_units

    if action == Action.REFRESH_DATA:
        return True

    if role == UserRole.ADMIN_TIM.value:
        if action == Action.VIEW_OPERATIONS:
            return True
        if action == Action.CREATE_ASSIGNMENT:
            # Every selected employee must come from the admin's unit
            return bool(owner.member_units) and owner.member_units == frozenset({unit})
        if action in (Action.VIEW_TASK, Action.SUBMIT_REPORT, Action.VERIFY_REPORT):
            return is_member or in_unit
        if action in (Action.EDIT_REPORT, Action.DELETE_REPORT):
            return is_creator
        return False

    if role == UserRole.PEGAWAI.value:
        if action in (Action.VIEW_TASK, Action.SUBMIT_REPORT):
            return is_member
        if action in (Action.EDIT_REPORT, Action.DELETE_REPORT):
            return is_creator
        return False

    return False


def ensure_can(user: Dict, action: Action, owner: Optional[ResourceOwner] = None):
    """Raise 403 when ``can`` says no."""
    if not can(user, action, owner):
        logger.warning(f"Access denied: nip={user.get('nip')} role={user.get('role')} action={action.value}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied for action {action.value}",
        )


def visible_tasks(user: Dict, snapshot: ReconciliationResult) -> List[AssignmentTask]:
    """Tasks the user may see, in snapshot order."""
    return [
        task for task in snapshot.task_list()
        if can(user, Action.VIEW_TASK, ResourceOwner.of_task(task, snapshot))
    ]


def resolve_user(nip: str, snapshot: Optional[ReconciliationResult]) -> Optional[Dict]:
    """Build the user dict for a NIP; the super admin does not live in the roster."""
    if nip == settings.SUPER_ADMIN_USERNAME:
        return {
            "nip": nip,
            "name": "Administrator",
            "role": UserRole.SUPER_ADMIN.value,
            "unit": "BPMP Malut",
        }

    if snapshot is None:
        return None
    employee = snapshot.get_employee(nip)
    if employee is None:
        return None

    role = UserRole.ADMIN_TIM if nip in settings.ADMIN_TIM_NIPS_LIST else UserRole.PEGAWAI
    return {
        "nip": employee.nip,
        "name": employee.name,
        "role": role.value,
        "unit": employee.unit,
    }


async def get_current_user(
    x_user_nip: Optional[str] = Header(None, alias="X-User-Nip"),
    store: SnapshotStore = Depends(get_store),
) -> Dict:
    """Identify the caller by the NIP the session was opened with."""
    if not x_user_nip or not x_user_nip.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. X-User-Nip header required.",
        )

    user = resolve_user(x_user_nip.strip(), store.snapshot)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="NIP tidak ditemukan.",
        )
    return user


def require_action(action: Action):
    """Dependency factory for actions that need no resource owner."""
    async def _check_action(current_user: Dict = Depends(get_current_user)) -> Dict:
        ensure_can(current_user, action)
        return current_user

    return _check_action
