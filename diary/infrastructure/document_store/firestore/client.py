"""Firestore document store construction (REST-based, no firebase-admin).

Credentials come from FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path). Unlike an optional integration,
the store is the system of record, so a missing or malformed account is a
startup error rather than a silent fallback.
"""

import json
import logging
from pathlib import Path

from diary.core.config import Settings
from diary.infrastructure.document_store.firestore._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from diary.infrastructure.document_store.firestore.store import FirestoreDocumentStore

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if not path:
        raise ValueError("No Firebase service account configured")
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise ValueError(
            f"FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: {path} (resolved: {resolved})"
        )
    with open(resolved, encoding="utf-8") as f:
        return json.load(f)


def create_firestore_document_store(settings: Settings) -> FirestoreDocumentStore:
    """Build the Firestore-backed document store.

    Raises:
        ValueError: If the service account is missing, malformed, or lacks project_id.
    """
    key_dict = _load_key_dict(settings)
    project_id = key_dict.get("project_id")
    if not project_id:
        raise ValueError("Firebase service account JSON missing 'project_id'")
    client = FirestoreRESTClient(project_id, _get_credentials(key_dict))
    logger.info("Firestore document store initialized for project %s", project_id)
    return FirestoreDocumentStore(client)
