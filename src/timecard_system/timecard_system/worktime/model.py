from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WorkTimeShift:
    """Domain entity: one employee scheduled on one route shift for one day."""

    id: str
    organization_id: str
    user_id: str
    route_id: str
    shift_worked: str
    day_scheduled: str
    summary: Optional[str]
    occupied: bool
    date_added_to_cb: str

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "organizationID": self.organization_id,
            "userId": self.user_id,
            "routeId": self.route_id,
            "shiftWorked": self.shift_worked,
            "dayScheduled": self.day_scheduled,
            "summary": self.summary,
            "occupied": self.occupied,
            "dateAddedToCB": self.date_added_to_cb,
        }


@dataclass(frozen=True)
class WorkTimeInput:
    """One record of a scheduling request, as sent by the client."""

    user_id: str
    route_id: str
    day_scheduled: str
    shift_worked: Optional[str]
    summary: Optional[str] = None
    occupied: bool = True
