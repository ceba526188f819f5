"""Lifespan wiring of the authentication handlers."""

from diary.core.config import get_settings
from diary.core.lifespan import create_lifespan
from diary.infrastructure.security.azure_ad import AzureAdTokenValidator
from diary.main import create_app
from diary.middleware.authentication import (
    AzureAdAuthenticationHandler,
    PatAuthenticationHandler,
)


async def test_pat_handler_only_when_azure_ad_disabled() -> None:
    app = create_app()
    async with create_lifespan(app):
        assert app.state.azure_ad_validator is None
        assert [type(h) for h in app.state.authentication_handlers] == [PatAuthenticationHandler]


async def test_azure_ad_handler_follows_pat_handler(monkeypatch) -> None:
    monkeypatch.setenv("AZURE_AD_ENABLED", "true")
    monkeypatch.setenv("AZURE_AD_TENANT_ID", "tenant-456")
    monkeypatch.setenv("AZURE_AD_CLIENT_ID", "client-123")
    get_settings.cache_clear()

    app = create_app()
    async with create_lifespan(app):
        assert isinstance(app.state.azure_ad_validator, AzureAdTokenValidator)
        assert app.state.azure_ad_validator.audience == "client-123"
        assert [type(h) for h in app.state.authentication_handlers] == [
            PatAuthenticationHandler,
            AzureAdAuthenticationHandler,
        ]
