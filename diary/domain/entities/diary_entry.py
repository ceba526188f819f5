"""Diary entry domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from diary.domain.exceptions import ValidationException
from diary.shared.utils.datetime import utc_now
from diary.shared.utils.generators import generate_cuid


@dataclass
class DiaryEntryEntity:
    """A single diary entry. Plaintext here; encrypted only at the storage boundary."""

    user_id: str
    thought: str
    context: str | None = None
    date: datetime = field(default_factory=utc_now)
    tags: list[str] = field(default_factory=list)
    id: str = field(default_factory=generate_cuid)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ValidationException if the entry is not writable."""
        if not self.user_id:
            raise ValidationException("User ID is required", field="user_id")
        if not self.thought or not self.thought.strip():
            raise ValidationException("Thought cannot be empty", field="thought")
