"""Email settings API schemas."""

from datetime import datetime, time

from pydantic import Field, field_serializer

from diary.schemas.base import CamelModel


class EmailSettingsRequest(CamelModel):
    """POST /email-settings. The address is taken from the caller's token, not the body."""

    preferred_time: time = Field(default=time(9, 0), description="Local time of day (HH:MM)")
    is_enabled: bool = True
    time_zone: str | None = Field(
        default=None,
        max_length=64,
        description="IANA zone, e.g. America/New_York. Omit to keep the current one.",
    )


class EmailSettingsResponse(CamelModel):
    id: str
    user_id: str
    email: str
    preferred_time: time
    is_enabled: bool
    time_zone: str
    last_email_sent: datetime | None = None

    @field_serializer("preferred_time")
    def _serialize_preferred_time(self, value: time) -> str:
        return value.strftime("%H:%M")


class SendTestEmailResponse(CamelModel):
    message: str
    operation_id: str
