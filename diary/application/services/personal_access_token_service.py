"""Personal access token lifecycle: create, list, validate, revoke.

Tokens look like `p_<url-safe base64 of 40 random bytes>`. Only the SHA-256
of the full token is stored (as the record id), so a token is shown to its
owner exactly once, at creation.
"""

from __future__ import annotations

import base64
import hashlib
import secrets

from diary.application.dtos.personal_access_token import PersonalAccessTokenCreated
from diary.application.interfaces.repositories import IPersonalAccessTokenRepository
from diary.domain.entities import PersonalAccessTokenEntity
from diary.shared.telemetry.logging import get_logger
from diary.shared.utils.datetime import utc_now

logger = get_logger(__name__)

TOKEN_PREFIX = "p_"
TOKEN_RANDOM_BYTES = 40
DISPLAY_PREFIX_LENGTH = 12


def generate_token() -> str:
    """Return a new plaintext token (prefix + unpadded URL-safe base64)."""
    raw = secrets.token_bytes(TOKEN_RANDOM_BYTES)
    return TOKEN_PREFIX + base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def hash_token(token: str) -> str:
    """Token id: base64 of the SHA-256 digest of the full token."""
    return base64.b64encode(hashlib.sha256(token.encode("utf-8")).digest()).decode("ascii")


def is_pat_shaped(token: str | None) -> bool:
    """True for a non-empty token carrying the PAT prefix and a secret part."""
    return bool(token) and token.startswith(TOKEN_PREFIX) and len(token) > len(TOKEN_PREFIX)


class PersonalAccessTokenService:
    """Creates, validates, and revokes personal access tokens."""

    def __init__(self, token_repo: IPersonalAccessTokenRepository) -> None:
        self.token_repo = token_repo

    async def create_token(self, user_id: str) -> PersonalAccessTokenCreated:
        """Create and persist a token for user_id; the plaintext is only in the result.

        Raises:
            DuplicateTokenException: If the hashed id already exists (never overwritten).
        """
        token = generate_token()
        entity = PersonalAccessTokenEntity(
            id=hash_token(token),
            user_id=user_id,
            token_prefix=token[:DISPLAY_PREFIX_LENGTH],
            created_at=utc_now(),
            is_active=True,
        )
        saved = await self.token_repo.create(entity)
        logger.info("Created personal access token %s for user %s", saved.token_prefix, user_id)
        return PersonalAccessTokenCreated(
            id=saved.id,
            token=token,
            token_prefix=saved.token_prefix,
            created_at=saved.created_at,
        )

    async def get_user_tokens(self, user_id: str) -> list[PersonalAccessTokenEntity]:
        """Return the user's tokens (metadata only)."""
        return await self.token_repo.list_for_user(user_id)

    async def get_token(
        self, user_id: str, token_id: str
    ) -> PersonalAccessTokenEntity | None:
        """Return the token if it exists and belongs to user_id."""
        return await self.token_repo.get_for_user(user_id, token_id)

    async def validate_token(self, token: str | None) -> PersonalAccessTokenEntity | None:
        """Return the active record for a plaintext token, else None.

        Tokens without the PAT prefix are rejected before any store access.
        Store errors propagate to the caller.
        """
        if not token or not is_pat_shaped(token):
            return None
        record = await self.token_repo.get_by_id(hash_token(token))
        if record is None:
            return None
        if not record.is_valid:
            logger.warning("Rejected inactive personal access token %s", record.token_prefix)
            return None
        return record

    async def revoke_token(self, token_id: str, user_id: str) -> bool:
        """Delete the user's token. Any failure (including not found) returns False."""
        try:
            await self.token_repo.delete(user_id, token_id)
        except Exception:
            logger.exception("Failed to revoke token %s for user %s", token_id, user_id)
            return False
        logger.info("Revoked personal access token %s for user %s", token_id, user_id)
        return True
