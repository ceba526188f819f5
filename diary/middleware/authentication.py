"""Bearer authentication: personal access tokens, then Azure AD JWTs.

Each scheme inspects the Authorization header and returns NoResult (not
mine), Fail, or Success. The middleware runs them in order and the first
outcome other than NoResult wins. The principal (or failure message) is
placed in request state; endpoints decide whether authentication is
required through dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from diary.application.services.personal_access_token_service import (
    PersonalAccessTokenService,
    is_pat_shaped,
)
from diary.domain.enums import AuthMethod, AuthOutcome
from diary.domain.exceptions import AuthenticationException
from diary.infrastructure.security.azure_ad import AzureAdTokenValidator
from diary.middleware.request_id import get_header
from diary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"
INVALID_TOKEN_MESSAGE = "Invalid token"
AUTHENTICATION_ERROR_MESSAGE = "Authentication error"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller. `claims` mirrors what the scheme established."""

    user_id: str
    name: str
    auth_method: AuthMethod
    scopes: tuple[str, ...] = ()
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def pat_id(self) -> str | None:
        return self.claims.get("pat_id")

    @property
    def email(self) -> str | None:
        """Email from claims: `email`, else `upn` or `preferred_username` if they look like one."""
        email = self.claims.get("email")
        if email:
            return email
        for claim in ("upn", "preferred_username"):
            value = self.claims.get(claim)
            if value and "@" in value:
                return value
        return None

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes


@dataclass(frozen=True)
class AuthenticateResult:
    outcome: AuthOutcome
    principal: Principal | None = None
    failure: str | None = None

    @classmethod
    def no_result(cls) -> AuthenticateResult:
        return cls(AuthOutcome.NO_RESULT)

    @classmethod
    def success(cls, principal: Principal) -> AuthenticateResult:
        return cls(AuthOutcome.SUCCESS, principal=principal)

    @classmethod
    def fail(cls, message: str) -> AuthenticateResult:
        return cls(AuthOutcome.FAIL, failure=message)

    @property
    def succeeded(self) -> bool:
        return self.outcome is AuthOutcome.SUCCESS


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the credential of a `Bearer <token>` header, or None.

    The scheme is matched case-insensitively; surrounding whitespace is ignored.
    """
    if not authorization or not authorization.strip():
        return None
    parts = authorization.strip().split(None, 1)
    if parts[0].lower() != BEARER_SCHEME or len(parts) < 2:
        return None
    token = parts[1].strip()
    return token or None


class AuthenticationHandler(Protocol):
    async def authenticate(self, authorization: str | None) -> AuthenticateResult: ...


class PatAuthenticationHandler:
    """Authenticates `Bearer p_...` headers against stored personal access tokens."""

    def __init__(self, token_service: PersonalAccessTokenService, scopes: list[str]) -> None:
        self.token_service = token_service
        self.scopes = tuple(scopes)

    async def authenticate(self, authorization: str | None) -> AuthenticateResult:
        token = extract_bearer_token(authorization)
        if token is None or not is_pat_shaped(token):
            return AuthenticateResult.no_result()
        try:
            record = await self.token_service.validate_token(token)
        except Exception:
            logger.exception("Error validating personal access token")
            return AuthenticateResult.fail(AUTHENTICATION_ERROR_MESSAGE)
        if record is None:
            logger.warning("Invalid or revoked personal access token presented")
            return AuthenticateResult.fail(INVALID_TOKEN_MESSAGE)

        claims = {
            "name": f"PAT-{record.token_prefix}",
            "sub": record.user_id,
            "nameidentifier": record.user_id,
            "oid": record.user_id,
            "pat_id": record.id,
            "auth_method": AuthMethod.PAT.value,
            "scp": " ".join(self.scopes),
        }
        return AuthenticateResult.success(
            Principal(
                user_id=record.user_id,
                name=claims["name"],
                auth_method=AuthMethod.PAT,
                scopes=self.scopes,
                claims=claims,
            )
        )


class AzureAdAuthenticationHandler:
    """Authenticates non-PAT bearer tokens as Azure AD access tokens."""

    def __init__(self, validator: AzureAdTokenValidator) -> None:
        self.validator = validator

    async def authenticate(self, authorization: str | None) -> AuthenticateResult:
        token = extract_bearer_token(authorization)
        if token is None or is_pat_shaped(token):
            return AuthenticateResult.no_result()
        try:
            claims = await self.validator.validate(token)
        except AuthenticationException as e:
            logger.warning("Azure AD token rejected: %s", e.message)
            return AuthenticateResult.fail(INVALID_TOKEN_MESSAGE)
        except Exception:
            logger.exception("Error validating Azure AD token")
            return AuthenticateResult.fail(AUTHENTICATION_ERROR_MESSAGE)

        user_id = claims.get("oid") or claims["sub"]
        scopes = tuple((claims.get("scp") or "").split())
        return AuthenticateResult.success(
            Principal(
                user_id=user_id,
                name=claims.get("name") or claims.get("preferred_username") or user_id,
                auth_method=AuthMethod.OAUTH,
                scopes=scopes,
                claims={**claims, "auth_method": AuthMethod.OAUTH.value},
            )
        )


async def authenticate_header(
    handlers: list[AuthenticationHandler], authorization: str | None
) -> AuthenticateResult:
    """Run handlers in order; first non-NoResult outcome wins."""
    for handler in handlers:
        result = await handler.authenticate(authorization)
        if result.outcome is not AuthOutcome.NO_RESULT:
            return result
    return AuthenticateResult.no_result()


def AuthenticationMiddleware(app: Callable) -> Callable:
    """Populate request state with `principal` / `auth_failure`. Raw ASGI.

    Handlers are read from `app.state.authentication_handlers` (set in the
    lifespan); without them every request is anonymous.
    """

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        state = scope.setdefault("state", {})
        state["principal"] = None
        state["auth_failure"] = None
        application = scope.get("app")
        handlers = getattr(getattr(application, "state", None), "authentication_handlers", None)
        if handlers:
            result = await authenticate_header(handlers, get_header(scope, "authorization"))
            if result.succeeded:
                state["principal"] = result.principal
            elif result.outcome is AuthOutcome.FAIL:
                state["auth_failure"] = result.failure
        await app(scope, receive, send)

    return asgi_app
