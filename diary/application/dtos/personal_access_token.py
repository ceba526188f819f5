"""DTOs for personal access token use cases."""

from dataclasses import dataclass
from datetime import datetime

TOKEN_SHOWN_ONCE_WARNING = "This token will only be shown once. Please copy it now."


@dataclass(frozen=True)
class PersonalAccessTokenCreated:
    """Creation result. The only place the plaintext token ever appears."""

    id: str
    token: str
    token_prefix: str
    created_at: datetime
    warning: str = TOKEN_SHOWN_ONCE_WARNING
