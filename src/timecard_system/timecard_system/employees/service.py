from __future__ import annotations

from typing import Any, Callable, Sequence

from ..common.datetime_utils import to_iso, utc_now
from ..common.ids import new_employee_id
from ..common.validators import require_non_empty
from ..core.enums import EntityType
from ..core.logging import get_logger
from ..tenancy.access import DataAccessGate
from .model import Employee
from .repository import EmployeeRepository

log = get_logger(__name__)


class EmployeeService:
    """Use case: manage the employees of an organization."""

    def __init__(self, gate: DataAccessGate, employees: EmployeeRepository, *, clock: Callable[[], Any] = utc_now):
        self._gate = gate
        self._employees = employees
        self._clock = clock

    def add_employee(self, organization_id: str, *, created_by: str, employee_name: str) -> Employee:
        name = require_non_empty(employee_name, "Employee name")
        now = self._clock()

        employee = self._employees.insert(
            Employee(
                id=new_employee_id(now),
                clerk_id=created_by,
                organization_id=organization_id,
                user_nice_name=name,
                email="",
                phone="",
                date_hired=to_iso(now),
                date_added_to_cb=to_iso(now),
                img="",
            )
        )
        log.info("employee_added", tenant=organization_id, employee_id=employee.id)
        return employee

    def list_employees(self, organization_id: str) -> Sequence[Employee]:
        return self._gate.list(EntityType.EMPLOYEE, organization_id)
