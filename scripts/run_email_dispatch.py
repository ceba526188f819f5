"""Run one scheduled-email dispatch pass outside the web process.

Usage:
    uv run python -m scripts.run_email_dispatch [--at 2025-04-06T14:02:00Z]
With --at, the pass is evaluated as if it were that instant (handy for
checking a user's schedule). Requires DOCUMENT_STORE_BACKEND=firestore;
the in-memory store is empty in a fresh process.
"""

import asyncio
import sys
from datetime import timedelta

from diary.application.services import (
    EmailService,
    RecommendationService,
    SystemPromptService,
)
from diary.core.config import get_settings
from diary.infrastructure.document_store import build_document_store
from diary.infrastructure.external.email import EmailContentRenderer, build_email_sender
from diary.infrastructure.external.llm import build_llm_client
from diary.infrastructure.repositories import (
    DiaryEntryRepository,
    EmailSettingsRepository,
    RecommendationRepository,
    SystemPromptRepository,
)
from diary.infrastructure.security.encryption import FieldEncryptor
from diary.shared.telemetry.logging import setup_logging
from diary.shared.utils.datetime import parse_datetime_utc, utc_now


async def main() -> None:
    """Build the dispatch engine against the configured store and run a pass."""
    clock = utc_now
    if len(sys.argv) > 2 and sys.argv[1] == "--at":
        fixed = parse_datetime_utc(sys.argv[2])
        if fixed is None:
            print(f"Not an ISO 8601 instant: {sys.argv[2]}", file=sys.stderr)
            sys.exit(1)
        clock = lambda: fixed  # noqa: E731

    settings = get_settings()
    setup_logging()
    if settings.document_store_backend == "memory":
        print("Set DOCUMENT_STORE_BACKEND=firestore to dispatch real settings", file=sys.stderr)
        sys.exit(1)

    store = build_document_store(settings)
    entry_repo = DiaryEntryRepository(store, FieldEncryptor(settings))
    llm_client = build_llm_client(settings)
    sender = build_email_sender(settings)
    recommendations = RecommendationService(
        entry_repo,
        RecommendationRepository(store),
        SystemPromptService(SystemPromptRepository(store)),
        llm_client,
        history_count=settings.recommendation_history_count,
    )
    service = EmailService(
        EmailSettingsRepository(store),
        recommendations,
        sender,
        EmailContentRenderer(settings.app_url),
        clock=clock,
        dispatch_window=timedelta(minutes=settings.email_dispatch_window_minutes),
    )
    try:
        sent = await service.check_and_send_scheduled_emails()
    finally:
        await llm_client.aclose()
        if hasattr(sender, "aclose"):
            await sender.aclose()
        await store.aclose()
    print("Done. Emails sent." if sent else "Done. No emails due.")


if __name__ == "__main__":
    asyncio.run(main())
