from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..common.datetime_utils import normalize_day_scheduled, to_iso, utc_now
from ..common.ids import new_id
from ..common.validators import optional_str, require_json_object, require_non_empty
from ..core.enums import EntityType
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..tenancy.access import DataAccessGate
from .model import WorkTimeInput, WorkTimeShift
from .repository import WorkTimeShiftRepository

log = get_logger(__name__)


def parse_work_time_input(payload: Any) -> WorkTimeInput:
    body = require_json_object(payload)
    occupied = body.get("occupied", True)
    if not isinstance(occupied, bool):
        raise ValidationError("occupied must be a boolean")
    return WorkTimeInput(
        user_id=require_non_empty(body.get("userId"), "userId"),
        route_id=require_non_empty(body.get("routeId"), "routeId"),
        day_scheduled=require_non_empty(body.get("dayScheduled"), "dayScheduled"),
        shift_worked=optional_str(body.get("shiftWorked")) or None,
        summary=optional_str(body.get("summary")),
        occupied=occupied,
    )


def parse_work_time_batch(payload: Any) -> List[WorkTimeInput]:
    items = payload if isinstance(payload, list) else [payload]
    return [parse_work_time_input(item) for item in items]


class WorkTimeService:
    """Use cases: read and schedule work time shifts inside one tenant."""

    def __init__(
        self,
        gate: DataAccessGate,
        shifts: WorkTimeShiftRepository,
        *,
        clock: Callable[[], Any] = utc_now,
    ):
        self._gate = gate
        self._shifts = shifts
        self._clock = clock

    def list_for_tenant(self, organization_id: str) -> Sequence[WorkTimeShift]:
        return self._gate.list(EntityType.WORK_TIME_SHIFT, organization_id)

    def record_shift(self, organization_id: str, record: WorkTimeInput) -> WorkTimeShift:
        """Create or update the shift of one employee on one route and day."""
        if self._gate.get(EntityType.ROUTE, organization_id, record.route_id) is None:
            raise ValidationError("Invalid route ID")

        if record.shift_worked is not None:
            if self._gate.get(EntityType.ROUTE_SHIFT_INFO, organization_id, record.shift_worked) is None:
                raise ValidationError("Invalid shift ID")

        existing = self._shifts.find_for_day(
            organization_id,
            user_id=record.user_id,
            route_id=record.route_id,
            day_scheduled=record.day_scheduled,
        )
        if existing:
            log.info("work_time_updated", tenant=organization_id, shift_id=existing.id)
            return self._shifts.update(
                organization_id,
                existing.id,
                summary=record.summary,
                shift_worked=record.shift_worked or existing.shift_worked,
                occupied=existing.occupied,
                day_scheduled=existing.day_scheduled,
            )

        created = self._shifts.insert(
            WorkTimeShift(
                id=new_id(),
                organization_id=organization_id,
                user_id=record.user_id,
                route_id=record.route_id,
                shift_worked=record.shift_worked or "",
                day_scheduled=record.day_scheduled,
                summary=record.summary,
                occupied=True,
                date_added_to_cb=to_iso(self._clock()),
            )
        )
        log.info("work_time_created", tenant=organization_id, shift_id=created.id)
        return created

    @staticmethod
    def _group(records: Sequence[WorkTimeInput]) -> Dict[Tuple[str, Optional[str], str], List[WorkTimeInput]]:
        groups: Dict[Tuple[str, Optional[str], str], List[WorkTimeInput]] = {}
        for record in records:
            day = normalize_day_scheduled(record.day_scheduled)
            groups.setdefault((record.route_id, record.shift_worked, day), []).append(record)
        return groups

    def _shift_defined_on_route(self, organization_id: str, route_id: str, shift_id: Optional[str]) -> bool:
        if shift_id is None:
            return False
        info = self._gate.get(EntityType.ROUTE_SHIFT_INFO, organization_id, shift_id)
        return info is not None and info.route_id == route_id

    def schedule_shifts(self, organization_id: str, records: Sequence[WorkTimeInput]) -> List[WorkTimeShift]:
        """Schedule several employees at once.

        Records are grouped by route, shift and normalized day; groups whose
        shift is missing or not defined on the route are skipped.
        """
        results: List[WorkTimeShift] = []

        for (route_id, shift_id, day), group in self._group(records).items():
            if not self._shift_defined_on_route(organization_id, route_id, shift_id):
                log.warning("work_time_group_skipped", tenant=organization_id, route_id=route_id, shift_id=shift_id)
                continue

            for record in group:
                existing = self._shifts.find_for_day(
                    organization_id,
                    user_id=record.user_id,
                    route_id=route_id,
                    day_scheduled=day,
                    shift_worked=shift_id,
                )
                if existing:
                    saved: Optional[WorkTimeShift] = self._shifts.update(
                        organization_id,
                        existing.id,
                        summary=record.summary,
                        shift_worked=shift_id,
                        occupied=record.occupied,
                        day_scheduled=day,
                    )
                else:
                    saved = self._shifts.insert(
                        WorkTimeShift(
                            id=new_id(),
                            organization_id=organization_id,
                            user_id=record.user_id,
                            route_id=route_id,
                            shift_worked=shift_id,
                            day_scheduled=day,
                            summary=record.summary,
                            occupied=record.occupied,
                            date_added_to_cb=to_iso(self._clock()),
                        )
                    )
                if saved is not None:
                    results.append(saved)

        log.info("work_time_scheduled", tenant=organization_id, requested=len(records), saved=len(results))
        return results
