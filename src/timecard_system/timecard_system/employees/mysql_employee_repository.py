from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    id, clerk_id, organization_id, user_nice_name, email, phone,
    date_hired, date_added_to_cb, img
"""


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        id=r["id"],
        clerk_id=r["clerk_id"],
        organization_id=r["organization_id"],
        user_nice_name=r["user_nice_name"],
        email=r.get("email") or "",
        phone=r.get("phone") or "",
        date_hired=r.get("date_hired") or "",
        date_added_to_cb=r.get("date_added_to_cb") or "",
        img=r.get("img"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_tenant(self, organization_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE organization_id=%s ORDER BY user_nice_name",
                (organization_id,),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, organization_id: str, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE organization_id=%s AND id=%s",
                (organization_id, employee_id),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def insert(self, employee: Employee) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(
                    id, clerk_id, organization_id, user_nice_name, email, phone,
                    date_hired, date_added_to_cb, img
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.id,
                    employee.clerk_id,
                    employee.organization_id,
                    employee.user_nice_name,
                    employee.email,
                    employee.phone,
                    employee.date_hired,
                    employee.date_added_to_cb,
                    employee.img,
                ),
            )
        return employee
