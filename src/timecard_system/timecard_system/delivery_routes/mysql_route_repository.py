from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Route, RouteShiftInfo
from .repository import RouteRepository, RouteShiftInfoRepository

_ROUTE_COLUMNS = """
    id, organization_id, route_nice_name, route_id_from_post_office,
    date_route_acquired, date_added_to_cb, img
"""
_SHIFT_COLUMNS = "id, organization_id, route_id, shift_name, start_time, end_time, date_added_to_cb"


def _row_to_route(r: Dict[str, Any]) -> Route:
    return Route(
        id=r["id"],
        organization_id=r["organization_id"],
        route_nice_name=r["route_nice_name"],
        route_id_from_post_office=r.get("route_id_from_post_office") or "",
        date_route_acquired=r.get("date_route_acquired") or "",
        date_added_to_cb=r.get("date_added_to_cb") or "",
        img=r.get("img"),
    )


def _row_to_shift_info(r: Dict[str, Any]) -> RouteShiftInfo:
    return RouteShiftInfo(
        id=r["id"],
        organization_id=r["organization_id"],
        route_id=r["route_id"],
        shift_name=r["shift_name"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        date_added_to_cb=r.get("date_added_to_cb") or "",
    )


class MySQLRouteRepository(RouteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_tenant(self, organization_id: str) -> Sequence[Route]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ROUTE_COLUMNS} FROM routes WHERE organization_id=%s ORDER BY route_nice_name",
                (organization_id,),
            )
            return [_row_to_route(r) for r in fetchall(cur)]

    def get_by_id(self, organization_id: str, route_id: str) -> Optional[Route]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ROUTE_COLUMNS} FROM routes WHERE organization_id=%s AND id=%s",
                (organization_id, route_id),
            )
            r = fetchone(cur)
            return _row_to_route(r) if r else None

    def get_by_name(self, organization_id: str, route_nice_name: str) -> Optional[Route]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ROUTE_COLUMNS} FROM routes WHERE organization_id=%s AND route_nice_name=%s",
                (organization_id, route_nice_name),
            )
            r = fetchone(cur)
            return _row_to_route(r) if r else None

    def insert(self, route: Route) -> Route:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO routes(
                    id, organization_id, route_nice_name, route_id_from_post_office,
                    date_route_acquired, date_added_to_cb, img
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    route.id,
                    route.organization_id,
                    route.route_nice_name,
                    route.route_id_from_post_office,
                    route.date_route_acquired,
                    route.date_added_to_cb,
                    route.img,
                ),
            )
        return route


class MySQLRouteShiftInfoRepository(RouteShiftInfoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_tenant(self, organization_id: str) -> Sequence[RouteShiftInfo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SHIFT_COLUMNS} FROM route_shift_info WHERE organization_id=%s ORDER BY route_id, start_time",
                (organization_id,),
            )
            return [_row_to_shift_info(r) for r in fetchall(cur)]

    def list_for_route(self, organization_id: str, route_id: str) -> Sequence[RouteShiftInfo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHIFT_COLUMNS}
                FROM route_shift_info
                WHERE organization_id=%s AND route_id=%s
                ORDER BY start_time
                """,
                (organization_id, route_id),
            )
            return [_row_to_shift_info(r) for r in fetchall(cur)]

    def get_by_id(self, organization_id: str, shift_id: str) -> Optional[RouteShiftInfo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SHIFT_COLUMNS} FROM route_shift_info WHERE organization_id=%s AND id=%s",
                (organization_id, shift_id),
            )
            r = fetchone(cur)
            return _row_to_shift_info(r) if r else None

    def insert(self, shift: RouteShiftInfo) -> RouteShiftInfo:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO route_shift_info(
                    id, organization_id, route_id, shift_name, start_time, end_time, date_added_to_cb
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    shift.id,
                    shift.organization_id,
                    shift.route_id,
                    shift.shift_name,
                    shift.start_time,
                    shift.end_time,
                    shift.date_added_to_cb,
                ),
            )
        return shift
