from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..common.datetime_utils import to_iso, utc_now
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import EntityType
from ..core.exceptions import DomainError, ValidationError
from ..core.logging import get_logger
from ..tenancy.access import DataAccessGate
from .model import AllocatedShift, Route, RouteShiftInfo
from .repository import RouteRepository, RouteShiftInfoRepository

log = get_logger(__name__)


def parse_allocated_shifts(raw: Any) -> List[AllocatedShift]:
    """Accept the JSON string the route form posts, or an already decoded list."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise ValidationError("Invalid allocatedShifts format")
    if not isinstance(raw, list):
        raise ValidationError("Invalid allocatedShifts format")

    shifts: List[AllocatedShift] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Invalid allocatedShifts format")
        shifts.append(
            AllocatedShift(
                name=require_non_empty(item.get("name"), "Shift name"),
                start_time=require_non_empty(item.get("startTime"), "Shift start time"),
                end_time=require_non_empty(item.get("endTime"), "Shift end time"),
            )
        )
    return shifts


class RouteService:
    """Use cases: create routes and their shift definitions for a tenant."""

    def __init__(
        self,
        gate: DataAccessGate,
        routes: RouteRepository,
        shift_infos: RouteShiftInfoRepository,
        *,
        clock: Callable[[], Any] = utc_now,
    ):
        self._gate = gate
        self._routes = routes
        self._shift_infos = shift_infos
        self._clock = clock

    def find_or_create_route(
        self,
        organization_id: str,
        *,
        route_nice_name: str,
        route_id_from_post_office: Optional[str],
        img: Optional[str] = None,
    ) -> Tuple[Route, bool]:
        """Return ``(route, created)``; routes are unique by name within a tenant."""
        name = require_non_empty(route_nice_name, "routeNiceName")

        existing = self._routes.get_by_name(organization_id, name)
        if existing:
            return existing, False

        now = to_iso(self._clock())
        route = self._routes.insert(
            Route(
                id=new_id(),
                organization_id=organization_id,
                route_nice_name=name,
                route_id_from_post_office=str(route_id_from_post_office or "").strip(),
                date_route_acquired=now,
                date_added_to_cb=now,
                img=img or "",
            )
        )
        log.info("route_created", tenant=organization_id, route_id=route.id)
        return route, True

    def add_route_with_shifts(
        self,
        organization_id: str,
        *,
        route_nice_name: str,
        route_id_from_post_office: Optional[str],
        allocated_shifts: Sequence[AllocatedShift],
        img: Optional[str] = None,
    ) -> Tuple[Route, Sequence[RouteShiftInfo]]:
        route, _ = self.find_or_create_route(
            organization_id,
            route_nice_name=route_nice_name,
            route_id_from_post_office=route_id_from_post_office,
            img=img,
        )

        for shift in allocated_shifts:
            try:
                self._shift_infos.insert(
                    RouteShiftInfo(
                        id=new_id(),
                        organization_id=organization_id,
                        route_id=route.id,
                        shift_name=shift.name,
                        start_time=shift.start_time,
                        end_time=shift.end_time,
                        date_added_to_cb=to_iso(self._clock()),
                    )
                )
            except DomainError as exc:
                # One bad shift must not undo the route or the other shifts.
                log.warning("route_shift_insert_failed", tenant=organization_id, route_id=route.id, error=repr(exc))

        return route, self._shift_infos.list_for_route(organization_id, route.id)

    def list_routes_with_shifts(self, organization_id: str) -> List[Dict[str, Any]]:
        routes = self._gate.list(EntityType.ROUTE, organization_id)
        infos = self._gate.list(EntityType.ROUTE_SHIFT_INFO, organization_id)

        by_route: Dict[str, List[RouteShiftInfo]] = {}
        for info in infos:
            by_route.setdefault(info.route_id, []).append(info)

        return [
            {**route.to_json(), "shiftInfo": [i.to_json() for i in by_route.get(route.id, [])]}
            for route in routes
        ]
