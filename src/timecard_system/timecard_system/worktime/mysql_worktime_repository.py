from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkTimeShift
from .repository import WorkTimeShiftRepository

_COLUMNS = """
    id, organization_id, user_id, route_id, shift_worked, day_scheduled,
    summary, occupied, date_added_to_cb
"""


def _row_to_shift(r: Dict[str, Any]) -> WorkTimeShift:
    return WorkTimeShift(
        id=r["id"],
        organization_id=r["organization_id"],
        user_id=r["user_id"],
        route_id=r["route_id"],
        shift_worked=r.get("shift_worked") or "",
        day_scheduled=r["day_scheduled"],
        summary=r.get("summary"),
        occupied=bool(r.get("occupied")),
        date_added_to_cb=r.get("date_added_to_cb") or "",
    )


class MySQLWorkTimeShiftRepository(WorkTimeShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_tenant(self, organization_id: str) -> Sequence[WorkTimeShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_time_shift
                WHERE organization_id=%s
                ORDER BY day_scheduled, id
                """,
                (organization_id,),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, organization_id: str, shift_id: str) -> Optional[WorkTimeShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_time_shift WHERE organization_id=%s AND id=%s",
                (organization_id, shift_id),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def find_for_day(
        self,
        organization_id: str,
        *,
        user_id: str,
        route_id: str,
        day_scheduled: str,
        shift_worked: Optional[str] = None,
    ) -> Optional[WorkTimeShift]:
        clauses = ["organization_id=%s", "user_id=%s", "route_id=%s", "day_scheduled=%s"]
        params: list[object] = [organization_id, user_id, route_id, day_scheduled]
        if shift_worked is not None:
            clauses.append("shift_worked=%s")
            params.append(shift_worked)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_time_shift WHERE {' AND '.join(clauses)} LIMIT 1",
                tuple(params),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def insert(self, shift: WorkTimeShift) -> WorkTimeShift:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_time_shift(
                    id, organization_id, user_id, route_id, shift_worked,
                    day_scheduled, summary, occupied, date_added_to_cb
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift.id,
                    shift.organization_id,
                    shift.user_id,
                    shift.route_id,
                    shift.shift_worked,
                    shift.day_scheduled,
                    shift.summary,
                    1 if shift.occupied else 0,
                    shift.date_added_to_cb,
                ),
            )
        return shift

    def update(
        self,
        organization_id: str,
        shift_id: str,
        *,
        summary: Optional[str],
        shift_worked: str,
        occupied: bool,
        day_scheduled: str,
    ) -> Optional[WorkTimeShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_time_shift
                SET summary=%s, shift_worked=%s, occupied=%s, day_scheduled=%s
                WHERE organization_id=%s AND id=%s
                """,
                (summary, shift_worked, 1 if occupied else 0, day_scheduled, organization_id, shift_id),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_time_shift WHERE organization_id=%s AND id=%s",
                (organization_id, shift_id),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None
