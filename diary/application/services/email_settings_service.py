"""Email settings use cases (one record per user)."""

from __future__ import annotations

from datetime import time

from diary.application.interfaces.repositories import IEmailSettingsRepository
from diary.domain.entities import EmailSettingsEntity
from diary.domain.entities.email_settings import DEFAULT_TIME_ZONE
from diary.domain.exceptions import ValidationException
from diary.shared.utils.timezones import is_valid_time_zone


class EmailSettingsService:
    def __init__(self, settings_repo: IEmailSettingsRepository) -> None:
        self.settings_repo = settings_repo

    async def get(self, user_id: str) -> EmailSettingsEntity | None:
        return await self.settings_repo.get_for_user(user_id)

    async def save(
        self,
        user_id: str,
        email: str,
        *,
        preferred_time: time,
        is_enabled: bool,
        time_zone: str | None,
    ) -> EmailSettingsEntity:
        """Create or update the user's settings.

        `email` comes from the caller's identity, never from request input.
        An empty time_zone keeps the stored zone (UTC for a new record);
        lastEmailSent is never changed here.

        Raises:
            ValidationException: If email is empty or time_zone is not a known zone.
        """
        if not email:
            raise ValidationException("User email not found in token claims", field="email")
        zone = (time_zone or "").strip()
        if zone and not is_valid_time_zone(zone):
            raise ValidationException(f"Unknown time zone: {zone}", field="time_zone")

        existing = await self.settings_repo.get_for_user(user_id)
        if existing is None:
            settings = EmailSettingsEntity(
                user_id=user_id,
                email=email,
                preferred_time=preferred_time,
                is_enabled=is_enabled,
                time_zone=zone or DEFAULT_TIME_ZONE,
            )
        else:
            settings = existing
            settings.email = email
            settings.preferred_time = preferred_time.replace(second=0, microsecond=0, tzinfo=None)
            settings.is_enabled = is_enabled
            if zone:
                settings.time_zone = zone
        return await self.settings_repo.save(settings)

    async def delete(self, user_id: str) -> bool:
        return await self.settings_repo.delete_for_user(user_id)
