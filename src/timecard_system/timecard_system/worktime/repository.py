from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkTimeShift


class WorkTimeShiftRepository(Protocol):
    """Repository interface for work time shifts.

    Every method takes the owning organization; implementations must filter on it.
    """

    def list_for_tenant(self, organization_id: str) -> Sequence[WorkTimeShift]:
        raise NotImplementedError

    def get_by_id(self, organization_id: str, shift_id: str) -> Optional[WorkTimeShift]:
        raise NotImplementedError

    def find_for_day(
        self,
        organization_id: str,
        *,
        user_id: str,
        route_id: str,
        day_scheduled: str,
        shift_worked: Optional[str] = None,
    ) -> Optional[WorkTimeShift]:
        """Match on user/route/day, and on the shift too when one is given."""

        raise NotImplementedError

    def insert(self, shift: WorkTimeShift) -> WorkTimeShift:
        raise NotImplementedError

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
        raise NotImplementedError
