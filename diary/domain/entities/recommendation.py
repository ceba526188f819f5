"""Recommendation domain entity (immutable once created)."""

from dataclasses import dataclass, field
from datetime import datetime

from diary.shared.utils.datetime import utc_now
from diary.shared.utils.generators import generate_cuid


@dataclass(frozen=True)
class RecommendationEntity:
    """Generated recommendation; kept as history to avoid repeating advice."""

    user_id: str
    text: str
    date: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=generate_cuid)
