"""Recommendation email delivery and the scheduled dispatch pass.

A dispatch pass looks at every user's email settings and sends today's
recommendation to those whose preferred local time fell within the last
few minutes, at most once per local calendar day.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from diary.application.interfaces.repositories import IEmailSettingsRepository
from diary.application.interfaces.services import (
    Clock,
    IEmailContentRenderer,
    IEmailSender,
    IRecommendationGenerator,
)
from diary.domain.entities import EmailSettingsEntity
from diary.shared.telemetry.logging import get_logger
from diary.shared.utils.datetime import ensure_utc, utc_now
from diary.shared.utils.timezones import (
    local_time_on_date_to_utc,
    resolve_time_zone_or_utc,
    same_local_date,
    to_local,
)

logger = get_logger(__name__)

RECOMMENDATION_SUBJECT = "Your Daily Second Diary Recommendation"
RECOMMENDATION_HEADER = "Your Daily Recommendation"
RECOMMENDATION_INTRO = (
    "Based on your recent diary entries, here's a personalized recommendation for you:"
)
RECOMMENDATION_OUTRO = "We hope you find this recommendation helpful and insightful."

TEST_SUBJECT = "Test Email from Second Diary"
TEST_HEADER = "Test Email"
TEST_MESSAGE = "This is a test email to confirm your email settings are working correctly."

DEFAULT_DISPATCH_WINDOW = timedelta(minutes=5)


class EmailService:
    """Sends recommendation and test emails; runs the scheduled dispatch pass."""

    def __init__(
        self,
        settings_repo: IEmailSettingsRepository,
        recommendation_generator: IRecommendationGenerator,
        sender: IEmailSender,
        renderer: IEmailContentRenderer,
        *,
        clock: Clock = utc_now,
        dispatch_window: timedelta = DEFAULT_DISPATCH_WINDOW,
    ) -> None:
        self.settings_repo = settings_repo
        self.recommendation_generator = recommendation_generator
        self.sender = sender
        self.renderer = renderer
        self._clock = clock
        self._window = dispatch_window

    async def send_recommendation_email(
        self, user_id: str, email_address: str, recommendation: str
    ) -> str:
        """Send a recommendation email; returns the provider operation id."""
        html_body, text_body = self.renderer.render(
            RECOMMENDATION_HEADER, RECOMMENDATION_INTRO, recommendation, RECOMMENDATION_OUTRO
        )
        operation_id = await self.sender.send(
            email_address, RECOMMENDATION_SUBJECT, html_body, text_body
        )
        logger.info(
            "Recommendation email accepted for user %s, operation id %s",
            user_id,
            operation_id,
        )
        return operation_id

    async def send_test_email(self, email_address: str) -> str:
        """Send the fixed test email; returns the provider operation id."""
        html_body, text_body = self.renderer.render(TEST_HEADER, "", TEST_MESSAGE, "")
        operation_id = await self.sender.send(email_address, TEST_SUBJECT, html_body, text_body)
        logger.info("Test email accepted, operation id %s", operation_id)
        return operation_id

    def is_due(self, settings: EmailSettingsEntity, now: datetime) -> bool:
        """Whether settings call for an email at `now` (aware UTC).

        Due when `now` is between the preferred local time today and the end of
        the dispatch window (both ends inclusive) and nothing was sent earlier
        on the same local date.
        """
        tz = resolve_time_zone_or_utc(settings.time_zone, owner=settings.user_id)
        local_now = to_local(now, tz)
        preferred_utc = local_time_on_date_to_utc(local_now, settings.preferred_time, tz)
        delta = now - preferred_utc
        if delta < timedelta(0) or delta > self._window:
            return False
        last_sent = ensure_utc(settings.last_email_sent)
        if last_sent is not None and same_local_date(last_sent, now, tz):
            return False
        return True

    async def check_and_send_scheduled_emails(self) -> bool:
        """Run one dispatch pass. Returns True if at least one email was sent.

        Users are processed one at a time; a failure for one user is logged
        and the pass moves on to the next.
        """
        now = ensure_utc(self._clock())
        logger.info("Starting scheduled email check at %s", now.isoformat())
        try:
            all_settings = await self.settings_repo.list_all()
        except Exception:
            logger.exception("Failed to load email settings for scheduled email check")
            return False

        sent_any = False
        for settings in all_settings:
            if not settings.is_enabled:
                continue
            try:
                if not self.is_due(settings, now):
                    continue
                await self._dispatch(settings, now)
                sent_any = True
            except Exception:
                logger.exception(
                    "Error processing scheduled email for user %s", settings.user_id
                )
        return sent_any

    async def _dispatch(self, settings: EmailSettingsEntity, now: datetime) -> None:
        recommendation = await self.recommendation_generator.generate(settings.user_id)
        await self.send_recommendation_email(settings.user_id, settings.email, recommendation)

        # Stamp the latest stored record; settings may have changed during generation.
        current = await self.settings_repo.get_for_user(settings.user_id)
        if current is None:
            logger.warning(
                "Email settings for user %s were deleted during dispatch", settings.user_id
            )
            return
        current.last_email_sent = now
        await self.settings_repo.save(current)
        logger.info(
            "Sent scheduled email to user %s (timezone: %s)",
            settings.user_id,
            settings.time_zone or "UTC",
        )
