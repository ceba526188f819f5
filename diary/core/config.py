"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, ENCRYPTION_SALT) and
backend-specific settings are validated at load time, so a misconfigured
deployment fails at startup instead of on the first scheduled email.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_backends (secret_key, encryption_salt, and the
    credentials of whichever document store / email backend is selected).
    """

    # App
    app_name: str = "diary-service"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store: "memory" (single process, dev/tests) or "firestore" (REST)
    document_store_backend: str = "memory"
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None

    # Encryption at rest for diary entries (Fernet key derived via PBKDF2)
    secret_key: SecretStr = SecretStr("")
    encryption_salt: SecretStr = SecretStr("")

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Azure AD (OAuth bearer tokens). Audience is the app registration client id.
    azure_ad_enabled: bool = True
    azure_ad_tenant_id: str = ""
    azure_ad_client_id: str = ""
    azure_ad_authority: str = "https://login.microsoftonline.com"
    azure_ad_jwks_cache_seconds: int = 3600

    # Personal access tokens: scopes granted to PAT-authenticated requests.
    pat_default_scopes: str = "diary.read diary.write recommendations.read"

    # LLM: "azure" (Azure OpenAI deployment) or "openai" (OpenAI-compatible API)
    llm_provider: str = "azure"
    llm_endpoint: str = ""
    llm_api_key: SecretStr = SecretStr("")
    llm_deployment: str = "gpt-4o-mini"
    llm_api_version: str = "2024-06-01"
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 60.0
    recommendation_history_count: int = 5

    # Email: "acs" (Azure Communication Services REST), "smtp", or "log"
    email_backend: str = "log"
    email_sender_address: str = ""
    app_url: str = "http://localhost:3000"
    acs_connection_string: SecretStr | None = None
    acs_api_version: str = "2023-03-31"
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: SecretStr | None = None

    # Scheduled recommendation emails
    email_scheduler_enabled: bool = True
    email_poll_interval_seconds: float = 60.0
    email_dispatch_window_minutes: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_backends(self) -> "Settings":
        """Validate required env and backend selections.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - ACS email: ACS_CONNECTION_STRING and EMAIL_SENDER_ADDRESS required.
        - SMTP email: SMTP_HOST and EMAIL_SENDER_ADDRESS required.
        - Scheduler: poll interval must not exceed the dispatch window, otherwise
          an eligible window can pass without being observed.
        """
        if self.document_store_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When document_store_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY "
                    "(full JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.document_store_backend != "memory":
            raise ValueError(
                "document_store_backend must be 'memory' or 'firestore', "
                f"got: {self.document_store_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if not self.encryption_salt.get_secret_value():
            raise ValueError(
                "ENCRYPTION_SALT is required. Generate with: openssl rand -hex 16."
            )
        if self.email_backend == "acs":
            has_conn = (
                self.acs_connection_string
                and self.acs_connection_string.get_secret_value()
            )
            if not has_conn or not self.email_sender_address:
                raise ValueError(
                    "When email_backend is 'acs', set ACS_CONNECTION_STRING and EMAIL_SENDER_ADDRESS."
                )
        elif self.email_backend == "smtp":
            if not self.smtp_host or not self.email_sender_address:
                raise ValueError(
                    "When email_backend is 'smtp', set SMTP_HOST and EMAIL_SENDER_ADDRESS."
                )
        elif self.email_backend != "log":
            raise ValueError(
                f"Invalid email_backend '{self.email_backend}'. "
                "Must be one of: 'acs', 'smtp', 'log'"
            )
        if self.llm_provider not in ("azure", "openai"):
            raise ValueError(
                f"llm_provider must be 'azure' or 'openai', got: {self.llm_provider!r}"
            )
        if self.azure_ad_enabled and not (
            self.azure_ad_tenant_id and self.azure_ad_client_id
        ):
            raise ValueError(
                "AZURE_AD_TENANT_ID and AZURE_AD_CLIENT_ID are required when "
                "azure_ad_enabled is true."
            )
        if self.email_dispatch_window_minutes <= 0:
            raise ValueError("email_dispatch_window_minutes must be positive")
        if not 0 < self.email_poll_interval_seconds <= self.email_dispatch_window_minutes * 60:
            raise ValueError(
                "email_poll_interval_seconds must be positive and no longer than "
                "the dispatch window (email_dispatch_window_minutes * 60)."
            )
        return self

    @property
    def pat_scopes(self) -> list[str]:
        """PAT scopes as a list (space or comma separated in env)."""
        return [s for s in self.pat_default_scopes.replace(",", " ").split() if s]

    @property
    def azure_ad_issuer(self) -> str:
        """Expected `iss` claim for v2.0 tokens of the configured tenant."""
        return f"{self.azure_ad_authority.rstrip('/')}/{self.azure_ad_tenant_id}/v2.0"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
