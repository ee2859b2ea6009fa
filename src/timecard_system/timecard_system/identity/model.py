from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Principal:
    """The authenticated identity of a request. Never persisted."""

    user_id: str
    organization_id: Optional[str] = None
    org_role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return True


class _Unauthenticated:
    """Marker returned when a request has no valid session."""

    user_id = None
    organization_id = None
    org_role = None
    is_authenticated = False

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAUTHENTICATED"


UNAUTHENTICATED = _Unauthenticated()

AuthResult = Union[Principal, _Unauthenticated]


@dataclass(frozen=True)
class ProviderUser:
    """The slice of an identity-provider user record this app reads."""

    user_id: str
    updated_at: Optional[int]
    private_metadata: Dict[str, Any] = field(default_factory=dict)
