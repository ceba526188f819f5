"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Builds the document store,
repositories, services and authentication handlers, and runs the
scheduled-email loop as a background task. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator

from fastapi import FastAPI

from diary.application.services import (
    DiaryService,
    EmailService,
    EmailSettingsService,
    PersonalAccessTokenService,
    RecommendationService,
    SystemPromptService,
)
from diary.core.config import get_settings
from diary.infrastructure.background import EmailScheduler
from diary.infrastructure.document_store import build_document_store
from diary.infrastructure.external.email import EmailContentRenderer, build_email_sender
from diary.infrastructure.external.llm import build_llm_client
from diary.infrastructure.repositories import (
    DiaryEntryRepository,
    EmailSettingsRepository,
    PersonalAccessTokenRepository,
    RecommendationRepository,
    SystemPromptRepository,
)
from diary.infrastructure.security.azure_ad import AzureAdTokenValidator
from diary.infrastructure.security.encryption import FieldEncryptor
from diary.middleware.authentication import (
    AzureAdAuthenticationHandler,
    PatAuthenticationHandler,
)

logger = logging.getLogger(__name__)


async def _aclose(resource: object, label: str) -> None:
    close = getattr(resource, "aclose", None)
    if close is not None:
        await close()
        logger.info("%s closed", label)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: document store, services, authentication handlers,
    email scheduler (if enabled). Shutdown runs in reverse: the scheduler
    finishes its current pass before clients and the store are closed.
    """
    settings = get_settings()

    # ---- Startup ----
    store = build_document_store(settings)
    app.state.document_store = store

    token_repo = PersonalAccessTokenRepository(store)
    settings_repo = EmailSettingsRepository(store)
    recommendation_repo = RecommendationRepository(store)
    entry_repo = DiaryEntryRepository(store, FieldEncryptor(settings))
    prompt_repo = SystemPromptRepository(store)

    llm_client = build_llm_client(settings)
    email_sender = build_email_sender(settings)
    app.state.llm_client = llm_client
    app.state.email_sender = email_sender

    app.state.token_service = PersonalAccessTokenService(token_repo)
    app.state.email_settings_service = EmailSettingsService(settings_repo)
    app.state.diary_service = DiaryService(entry_repo)
    app.state.system_prompt_service = SystemPromptService(prompt_repo)
    app.state.recommendation_service = RecommendationService(
        entry_repo,
        recommendation_repo,
        app.state.system_prompt_service,
        llm_client,
        history_count=settings.recommendation_history_count,
    )
    app.state.email_service = EmailService(
        settings_repo,
        app.state.recommendation_service,
        email_sender,
        EmailContentRenderer(settings.app_url),
        dispatch_window=timedelta(minutes=settings.email_dispatch_window_minutes),
    )

    handlers: list = [PatAuthenticationHandler(app.state.token_service, settings.pat_scopes)]
    app.state.azure_ad_validator = None
    if settings.azure_ad_enabled:
        app.state.azure_ad_validator = AzureAdTokenValidator(settings)
        handlers.append(AzureAdAuthenticationHandler(app.state.azure_ad_validator))
    app.state.authentication_handlers = handlers

    app.state.email_scheduler = None
    if settings.email_scheduler_enabled:
        scheduler = EmailScheduler(
            app.state.email_service.check_and_send_scheduled_emails,
            settings.email_poll_interval_seconds,
        )
        scheduler.start()
        app.state.email_scheduler = scheduler

    yield

    # ---- Shutdown ----
    if app.state.email_scheduler is not None:
        await app.state.email_scheduler.stop()
        app.state.email_scheduler = None

    if app.state.azure_ad_validator is not None:
        await _aclose(app.state.azure_ad_validator, "Azure AD key client")
    await _aclose(llm_client, "LLM client")
    await _aclose(email_sender, "Email sender")
    await store.aclose()
    logger.info("Document store closed")
