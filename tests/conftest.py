"""Pytest configuration and fixtures for the diary service.

Environment is set before diary.main is imported: the in-memory store, the
log-only email sender, no Azure AD, and no background scheduler. Each API
test gets a fresh app (and therefore an empty store) with its lifespan run.
"""

import os

os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef"
os.environ["ENCRYPTION_SALT"] = "test-salt-0123456789"
os.environ["DOCUMENT_STORE_BACKEND"] = "memory"
os.environ["AZURE_AD_ENABLED"] = "false"
os.environ["EMAIL_BACKEND"] = "log"
os.environ["EMAIL_SCHEDULER_ENABLED"] = "false"
os.environ["LLM_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from diary.core.config import get_settings  # noqa: E402
from diary.core.lifespan import create_lifespan  # noqa: E402
from diary.core.limiter import limiter  # noqa: E402
from diary.domain.enums import AuthMethod  # noqa: E402
from diary.main import create_app  # noqa: E402
from diary.middleware.authentication import (  # noqa: E402
    AuthenticateResult,
    Principal,
    extract_bearer_token,
)

OAUTH_TOKEN_PREFIX = "oauth-"


class StaticOAuthHandler:
    """Stands in for Azure AD: `Bearer oauth-<user>` is that user, with an email claim."""

    async def authenticate(self, authorization: str | None) -> AuthenticateResult:
        token = extract_bearer_token(authorization)
        if token is None or not token.startswith(OAUTH_TOKEN_PREFIX):
            return AuthenticateResult.no_result()
        user_id = token[len(OAUTH_TOKEN_PREFIX):]
        claims = {
            "oid": user_id,
            "sub": user_id,
            "preferred_username": f"{user_id}@example.com",
            "auth_method": AuthMethod.OAUTH.value,
        }
        return AuthenticateResult.success(
            Principal(user_id=user_id, name=user_id, auth_method=AuthMethod.OAUTH, claims=claims)
        )


def oauth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {OAUTH_TOKEN_PREFIX}{user_id}"}


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reset cached settings and rate-limit counters around every test."""
    get_settings.cache_clear()
    limiter.reset()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def app() -> FastAPI:
    """Fresh application with its lifespan running (services on app.state)."""
    application = create_app()
    async with create_lifespan(application):
        application.state.authentication_handlers.append(StaticOAuthHandler())
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Interactive (OAuth) caller `user-1`."""
    return oauth_headers("user-1")


@pytest.fixture
async def pat_headers(app: FastAPI) -> dict[str, str]:
    """PAT caller `user-1` (token created directly through the service)."""
    created = await app.state.token_service.create_token("user-1")
    return {"Authorization": f"Bearer {created.token}"}


@pytest.fixture
def other_user_headers() -> dict[str, str]:
    """Interactive (OAuth) caller `user-2`."""
    return oauth_headers("user-2")
