from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Protocol

import jwt

from ..common.datetime_utils import to_iso, utc_now
from ..core.constants import SESSION_COOKIE_NAME, SUBSCRIPTION_METADATA_KEY
from ..core.exceptions import ConcurrentModification, IdentityProviderError, MetadataUpdateFailed
from ..core.logging import get_logger
from .model import UNAUTHENTICATED, AuthResult, Principal, ProviderUser

log = get_logger(__name__)


class SessionVerifier(Protocol):
    def verify(self, token: str) -> Dict[str, Any]:
        raise NotImplementedError


class UserDirectory(Protocol):
    def get_user(self, user_id: str) -> ProviderUser:
        raise NotImplementedError

    def merge_private_metadata(self, user_id: str, private_metadata: Dict[str, Any]) -> ProviderUser:
        raise NotImplementedError


def extract_session_token(request) -> Optional[str]:
    """Bearer header first (API clients), then the session cookie (browser)."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    return cookie or None


class IdentityProviderAdapter:
    """Everything the app asks of the external identity service.

    ``authenticate`` never raises for a missing or bad session. Metadata calls
    wrap upstream failures into a single domain error and never retry.
    """

    def __init__(
        self,
        verifier: SessionVerifier,
        users: UserDirectory,
        *,
        clock: Callable[[], Any] = utc_now,
    ):
        self._verifier = verifier
        self._users = users
        self._clock = clock

    def authenticate(self, request) -> AuthResult:
        token = extract_session_token(request)
        if not token:
            return UNAUTHENTICATED

        try:
            claims = self._verifier.verify(token)
        except jwt.PyJWTError as exc:
            log.warning("session_token_rejected", reason=type(exc).__name__)
            return UNAUTHENTICATED

        user_id = claims.get("sub")
        if not user_id:
            log.warning("session_token_rejected", reason="missing_sub")
            return UNAUTHENTICATED

        return Principal(
            user_id=str(user_id),
            organization_id=claims.get("org_id") or None,
            org_role=claims.get("org_role") or None,
        )

    def get_private_metadata(self, user_id: str) -> Dict[str, Any]:
        return dict(self._users.get_user(user_id).private_metadata)

    def merge_subscription_metadata(
        self,
        user_id: str,
        patch: Mapping[str, Any],
        *,
        expected_version: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Merge ``patch`` into the user's subscription metadata.

        The provider deep-merges the write, so fields other writers stored in
        between are kept and ``updatedAt`` is stamped on every merge. When
        ``expected_version`` is given the user's ``updated_at`` must still
        match it, otherwise ``ConcurrentModification`` is raised and nothing
        is written.
        """
        stamped = {**dict(patch), "updatedAt": to_iso(self._clock())}
        try:
            if expected_version is not None:
                user = self._users.get_user(user_id)
                if user.updated_at != expected_version:
                    raise ConcurrentModification(f"Metadata of {user_id} changed since version {expected_version}")

            updated = self._users.merge_private_metadata(user_id, {SUBSCRIPTION_METADATA_KEY: stamped})
        except ConcurrentModification:
            log.warning("subscription_metadata_conflict", user_id=user_id, expected_version=expected_version)
            raise
        except IdentityProviderError as exc:
            log.error("subscription_metadata_update_failed", user_id=user_id, exc_info=exc)
            raise MetadataUpdateFailed("Failed to update subscription metadata") from exc

        log.info("subscription_metadata_merged", user_id=user_id, fields=sorted(patch))
        return dict(updated.private_metadata.get(SUBSCRIPTION_METADATA_KEY) or stamped)
