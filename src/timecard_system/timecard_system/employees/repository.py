from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def list_for_tenant(self, organization_id: str) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, organization_id: str, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def insert(self, employee: Employee) -> Employee:
        raise NotImplementedError
