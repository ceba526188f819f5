"""Create a personal access token for a user id (Firestore backend).

Usage:
    uv run python -m scripts.create_personal_access_token <user_id>
Prints the token once; only its hash is stored.
"""

import asyncio
import sys

from diary.application.services import PersonalAccessTokenService
from diary.core.config import get_settings
from diary.infrastructure.document_store import build_document_store
from diary.infrastructure.repositories import PersonalAccessTokenRepository


async def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: uv run python -m scripts.create_personal_access_token <user_id>",
            file=sys.stderr,
        )
        sys.exit(1)
    user_id = sys.argv[1]

    settings = get_settings()
    if settings.document_store_backend == "memory":
        print("Set DOCUMENT_STORE_BACKEND=firestore to persist tokens", file=sys.stderr)
        sys.exit(1)

    store = build_document_store(settings)
    try:
        created = await PersonalAccessTokenService(
            PersonalAccessTokenRepository(store)
        ).create_token(user_id)
    finally:
        await store.aclose()
    print(f"Token id:  {created.id}")
    print(f"Token:     {created.token}")
    print(created.warning)


if __name__ == "__main__":
    asyncio.run(main())
