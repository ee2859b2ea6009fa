from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import jwt
from jwt import PyJWKClient


class ClerkSessionVerifier:
    """Verifies Clerk session tokens.

    Keys come from the instance JWKS endpoint (cached by ``PyJWKClient``) unless
    a PEM/static key is configured, which also lets tests sign their own tokens.
    """

    def __init__(
        self,
        *,
        issuer: Optional[str],
        jwks_url: Optional[str] = None,
        signing_key: Optional[str] = None,
        algorithms: Sequence[str] = ("RS256",),
        leeway_seconds: int = 5,
    ):
        if not jwks_url and not signing_key:
            raise ValueError("Either jwks_url or signing_key is required")
        self._issuer = issuer.rstrip("/") if issuer else None
        self._signing_key = signing_key
        self._jwks_client = PyJWKClient(jwks_url) if jwks_url and not signing_key else None
        self._algorithms = list(algorithms)
        self._leeway = leeway_seconds

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the verified claims; raises ``jwt.PyJWTError`` subclasses."""
        if self._jwks_client is not None:
            key: Any = self._jwks_client.get_signing_key_from_jwt(token).key
        else:
            key = self._signing_key

        return jwt.decode(
            token,
            key,
            algorithms=self._algorithms,
            issuer=self._issuer,
            leeway=self._leeway,
            options={
                "verify_aud": False,
                "verify_iss": self._issuer is not None,
                "require": ["sub", "exp"],
            },
        )
