from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from src.timecard_system.timecard_system.core.enums import EntityType
from src.timecard_system.timecard_system.core.exceptions import ValidationError
from src.timecard_system.timecard_system.employees.service import EmployeeService
from src.timecard_system.timecard_system.tenancy.access import DataAccessGate
from tests.fakes import InMemoryEmployees, employee

NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def _service(repo):
    return EmployeeService(DataAccessGate({EntityType.EMPLOYEE: repo}), repo, clock=lambda: NOW)


def test_add_employee_generates_id_and_links_creator():
    repo = InMemoryEmployees()
    created = _service(repo).add_employee("org123", created_by="user_admin", employee_name="  Dana  ")

    assert re.fullmatch(rf"EMP-{int(NOW.timestamp() * 1000)}-[a-z0-9]{{5}}", created.id)
    assert created.clerk_id == "user_admin"
    assert created.user_nice_name == "Dana"
    assert created.date_added_to_cb == "2026-03-01T08:00:00.000Z"
    assert repo.rows[created.id] == created


@pytest.mark.parametrize("name", [None, "", "   ", 12])
def test_employee_name_is_required(name):
    with pytest.raises(ValidationError):
        _service(InMemoryEmployees()).add_employee("org123", created_by="user_admin", employee_name=name)


def test_list_employees_is_tenant_scoped():
    repo = InMemoryEmployees([employee("EMP-a", "org123"), employee("EMP-b", "org456")])
    assert [e.id for e in _service(repo).list_employees("org123")] == ["EMP-a"]
