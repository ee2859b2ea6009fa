from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Route, RouteShiftInfo


class RouteRepository(Protocol):
    def list_for_tenant(self, organization_id: str) -> Sequence[Route]:
        raise NotImplementedError

    def get_by_id(self, organization_id: str, route_id: str) -> Optional[Route]:
        raise NotImplementedError

    def get_by_name(self, organization_id: str, route_nice_name: str) -> Optional[Route]:
        raise NotImplementedError

    def insert(self, route: Route) -> Route:
        raise NotImplementedError


class RouteShiftInfoRepository(Protocol):
    def list_for_tenant(self, organization_id: str) -> Sequence[RouteShiftInfo]:
        raise NotImplementedError

    def list_for_route(self, organization_id: str, route_id: str) -> Sequence[RouteShiftInfo]:
        raise NotImplementedError

    def get_by_id(self, organization_id: str, shift_id: str) -> Optional[RouteShiftInfo]:
        raise NotImplementedError

    def insert(self, shift: RouteShiftInfo) -> RouteShiftInfo:
        raise NotImplementedError
