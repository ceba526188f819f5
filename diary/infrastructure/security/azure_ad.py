"""Azure AD (Entra ID) bearer token validation.

Signing keys come from the tenant's JWKS endpoint, fetched with httpx and
cached for `azure_ad_jwks_cache_seconds`. An unknown `kid` triggers one
refresh so key rollover does not need a restart.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
from jose import JWTError, jwt

from diary.core.config import Settings
from diary.domain.exceptions import AuthenticationException
from diary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ALLOWED_ALGORITHMS = ["RS256"]


class AzureAdTokenValidator:
    """Validates signature, issuer, audience and expiry of Azure AD v2.0 tokens."""

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        authority = settings.azure_ad_authority.rstrip("/")
        self.jwks_url = f"{authority}/{settings.azure_ad_tenant_id}/discovery/v2.0/keys"
        self.issuer = settings.azure_ad_issuer
        self.audience = settings.azure_ad_client_id
        self._cache_seconds = settings.azure_ad_jwks_cache_seconds
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=10.0)
        self._owns_http = http_client is None
        self._keys: list[dict[str, Any]] = []
        self._fetched_at: float | None = None
        self._lock = asyncio.Lock()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _cache_fresh(self) -> bool:
        return (
            self._fetched_at is not None
            and time.monotonic() - self._fetched_at < self._cache_seconds
        )

    async def _refresh_keys(self) -> None:
        async with self._lock:
            resp = await self._http.get(self.jwks_url)
            resp.raise_for_status()
            self._keys = list(resp.json().get("keys") or [])
            self._fetched_at = time.monotonic()
            logger.info("Fetched %d Azure AD signing keys", len(self._keys))

    async def _get_key(self, kid: str | None) -> dict[str, Any] | None:
        if not self._cache_fresh():
            await self._refresh_keys()
        key = next((k for k in self._keys if k.get("kid") == kid), None)
        if key is None:
            await self._refresh_keys()
            key = next((k for k in self._keys if k.get("kid") == kid), None)
        return key

    async def validate(self, token: str) -> dict[str, Any]:
        """Return the verified claims.

        Raises:
            AuthenticationException: If the token is malformed, signed by an
                unknown key, expired, or issued for another tenant/audience.
            httpx.HTTPError: If the signing keys cannot be fetched.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise AuthenticationException("Malformed bearer token") from e
        key = await self._get_key(header.get("kid"))
        if key is None:
            raise AuthenticationException("Unknown token signing key")
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=ALLOWED_ALGORITHMS,
                audience=self.audience,
                issuer=self.issuer,
                options={"require_exp": True},
            )
        except JWTError as e:
            raise AuthenticationException(f"Invalid token: {e!s}") from e
        if not (claims.get("oid") or claims.get("sub")):
            raise AuthenticationException("Token has no user identifier")
        return claims
