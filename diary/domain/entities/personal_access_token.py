"""Personal access token domain entity.

The entity never holds the plaintext secret: `id` is the one-way hash of the
full token, so knowing a stored record is not enough to authenticate.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PersonalAccessTokenEntity:
    """Stored PAT record (partitioned by user_id)."""

    id: str
    user_id: str
    token_prefix: str
    created_at: datetime
    is_active: bool = True

    @property
    def is_valid(self) -> bool:
        """A token authenticates only while active (revoked tokens are inactive)."""
        return self.is_active
