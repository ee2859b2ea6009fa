from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Route:
    """Domain entity: a delivery route owned by one organization."""

    id: str
    organization_id: str
    route_nice_name: str
    route_id_from_post_office: str
    date_route_acquired: str
    date_added_to_cb: str
    img: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "img": self.img or "",
            "organizationID": self.organization_id,
            "dateRouteAcquired": self.date_route_acquired,
            "dateAddedToCB": self.date_added_to_cb,
            "routeNiceName": self.route_nice_name,
            "routeIDFromPostOffice": self.route_id_from_post_office,
        }


@dataclass(frozen=True)
class RouteShiftInfo:
    """Domain entity: a named shift defined on a route."""

    id: str
    organization_id: str
    route_id: str
    shift_name: str
    start_time: str
    end_time: str
    date_added_to_cb: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "organizationID": self.organization_id,
            "routeId": self.route_id,
            "shiftName": self.shift_name,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "dateAddedToCB": self.date_added_to_cb,
        }


@dataclass(frozen=True)
class AllocatedShift:
    name: str
    start_time: str
    end_time: str
