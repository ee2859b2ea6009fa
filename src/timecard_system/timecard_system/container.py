from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .billing.gateway import StripeGateway
from .billing.service import SubscriptionService
from .core.enums import EntityType
from .database.connection import DBConfig, DatabaseConnection
from .delivery_routes.mysql_route_repository import MySQLRouteRepository, MySQLRouteShiftInfoRepository
from .delivery_routes.repository import RouteRepository, RouteShiftInfoRepository
from .delivery_routes.service import RouteService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .identity.adapter import IdentityProviderAdapter, SessionVerifier, UserDirectory
from .identity.clerk_client import DEFAULT_API_URL, ClerkBackendClient
from .identity.session import ClerkSessionVerifier
from .tenancy.access import DataAccessGate
from .worktime.mysql_worktime_repository import MySQLWorkTimeShiftRepository
from .worktime.repository import WorkTimeShiftRepository
from .worktime.service import WorkTimeService


@dataclass(frozen=True)
class Container:
    identity: IdentityProviderAdapter
    gate: DataAccessGate

    work_time_repo: WorkTimeShiftRepository
    routes_repo: RouteRepository
    shift_info_repo: RouteShiftInfoRepository
    employees_repo: EmployeeRepository

    work_time_service: WorkTimeService
    route_service: RouteService
    employee_service: EmployeeService
    subscription_service: SubscriptionService


def assemble(
    *,
    verifier: SessionVerifier,
    users: UserDirectory,
    billing: Any,
    work_time_repo: WorkTimeShiftRepository,
    routes_repo: RouteRepository,
    shift_info_repo: RouteShiftInfoRepository,
    employees_repo: EmployeeRepository,
) -> Container:
    """Wire services on top of already built repositories and providers."""
    identity = IdentityProviderAdapter(verifier, users)
    gate = DataAccessGate(
        {
            EntityType.WORK_TIME_SHIFT: work_time_repo,
            EntityType.ROUTE: routes_repo,
            EntityType.ROUTE_SHIFT_INFO: shift_info_repo,
            EntityType.EMPLOYEE: employees_repo,
        }
    )

    return Container(
        identity=identity,
        gate=gate,
        work_time_repo=work_time_repo,
        routes_repo=routes_repo,
        shift_info_repo=shift_info_repo,
        employees_repo=employees_repo,
        work_time_service=WorkTimeService(gate, work_time_repo),
        route_service=RouteService(gate, routes_repo, shift_info_repo),
        employee_service=EmployeeService(gate, employees_repo),
        subscription_service=SubscriptionService(identity, billing),
    )


def _clerk_verifier(identity_config: Mapping[str, Any]) -> ClerkSessionVerifier:
    issuer = identity_config.get("issuer") or None
    signing_key = identity_config.get("jwt_key") or None
    jwks_url = identity_config.get("jwks_url") or None
    if not jwks_url and not signing_key and issuer:
        jwks_url = f"{issuer.rstrip('/')}/.well-known/jwks.json"
    return ClerkSessionVerifier(issuer=issuer, jwks_url=jwks_url, signing_key=signing_key)


def build_container(
    *,
    db_config: dict,
    identity_config: Mapping[str, Any],
    billing_config: Mapping[str, Any],
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        verifier=_clerk_verifier(identity_config),
        users=ClerkBackendClient(
            str(identity_config.get("secret_key") or ""),
            api_url=str(identity_config.get("api_url") or DEFAULT_API_URL),
        ),
        billing=StripeGateway(
            billing_config.get("secret_key") or None,
            webhook_secret=billing_config.get("webhook_secret") or None,
        ),
        work_time_repo=MySQLWorkTimeShiftRepository(conn),
        routes_repo=MySQLRouteRepository(conn),
        shift_info_repo=MySQLRouteShiftInfoRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
    )
