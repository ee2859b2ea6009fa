from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..core.constants import IDENTITY_HTTP_TIMEOUT_SECONDS
from ..core.exceptions import IdentityProviderError
from .model import ProviderUser

DEFAULT_API_URL = "https://api.clerk.com/v1"


class ClerkBackendClient:
    """Thin wrapper over the Clerk Backend API user endpoints."""

    def __init__(
        self,
        secret_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        http: Optional[httpx.Client] = None,
    ):
        self._http = http or httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={"Authorization": f"Bearer {secret_key}"},
            timeout=IDENTITY_HTTP_TIMEOUT_SECONDS,
        )

    @staticmethod
    def _to_user(payload: Dict[str, Any]) -> ProviderUser:
        try:
            return ProviderUser(
                user_id=str(payload["id"]),
                updated_at=payload.get("updated_at"),
                private_metadata=dict(payload.get("private_metadata") or {}),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise IdentityProviderError("Malformed user payload") from exc

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            resp = self._http.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            raise IdentityProviderError(
                f"Identity provider returned {exc.response.status_code} for {method} {path}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise IdentityProviderError(f"Identity provider request failed: {method} {path}") from exc

    def get_user(self, user_id: str) -> ProviderUser:
        return self._to_user(self._request("GET", f"/users/{user_id}"))

    def merge_private_metadata(self, user_id: str, private_metadata: Dict[str, Any]) -> ProviderUser:
        """Deep-merge into the stored private metadata on the provider side.

        Keys absent from ``private_metadata`` are left untouched by Clerk, so
        concurrent writers of other keys are not overwritten.
        """
        payload = self._request("PATCH", f"/users/{user_id}/metadata", json={"private_metadata": private_metadata})
        return self._to_user(payload)

    def close(self) -> None:
        self._http.close()
