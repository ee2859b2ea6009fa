"""Route Timecard package.

Multi-tenant scheduling API for delivery routes: organizations, employees,
routes and work time shifts. Organized by feature modules (worktime,
delivery_routes, employees, billing, ...) with a thin Flask controller layer
on top of service/repository layers. Every read and write is scoped to the
organization resolved for the request.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
