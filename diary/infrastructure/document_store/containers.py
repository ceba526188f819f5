"""Container names (schema-in-code).

Document stores have no DDL or migrations. Containers are created on first
write. Use these constants so names stay consistent. Every record carries
its partition key in the `userId` field.

Example:
    store = build_document_store(settings)
    await store.upsert(CONTAINER_EMAIL_SETTINGS, {...}, partition_key=user_id)
"""

PARTITION_KEY_FIELD = "userId"

CONTAINER_PERSONAL_ACCESS_TOKENS = "personal_access_tokens"
CONTAINER_EMAIL_SETTINGS = "email_settings"
CONTAINER_RECOMMENDATIONS = "recommendations"
CONTAINER_DIARY_ENTRIES = "diary_entries"
CONTAINER_SYSTEM_PROMPTS = "system_prompts"
