"""Email settings domain entity (one record per user)."""

from dataclasses import dataclass, field
from datetime import datetime, time

from diary.domain.exceptions import ValidationException
from diary.shared.utils.generators import generate_cuid

DEFAULT_PREFERRED_TIME = time(9, 0)
DEFAULT_TIME_ZONE = "UTC"


@dataclass
class EmailSettingsEntity:
    """Per-user schedule for the daily recommendation email.

    preferred_time is a local wall-clock time in time_zone (hours and
    minutes; seconds are dropped). last_email_sent is a UTC instant.
    """

    user_id: str
    email: str
    preferred_time: time = DEFAULT_PREFERRED_TIME
    is_enabled: bool = True
    time_zone: str = DEFAULT_TIME_ZONE
    last_email_sent: datetime | None = None
    id: str = field(default_factory=generate_cuid)

    def __post_init__(self) -> None:
        self.preferred_time = self.preferred_time.replace(second=0, microsecond=0, tzinfo=None)
        self.validate()

    def validate(self) -> None:
        """Raise ValidationException when required fields are missing."""
        if not self.user_id:
            raise ValidationException("User ID is required", field="user_id")
