"""Repository record formats and behaviors over the in-memory store."""

from datetime import UTC, datetime, time, timedelta

import pytest

from diary.core.config import Settings
from diary.domain.entities import (
    DEFAULT_SYSTEM_PROMPT_LINE,
    DiaryEntryEntity,
    EmailSettingsEntity,
    RecommendationEntity,
    SystemPromptEntity,
)
from diary.infrastructure.document_store import (
    CONTAINER_DIARY_ENTRIES,
    CONTAINER_EMAIL_SETTINGS,
    CONTAINER_SYSTEM_PROMPTS,
    InMemoryDocumentStore,
)
from diary.infrastructure.repositories import (
    DiaryEntryRepository,
    EmailSettingsRepository,
    RecommendationRepository,
    SystemPromptRepository,
)
from diary.infrastructure.security.encryption import FieldEncryptor


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def encryptor() -> FieldEncryptor:
    return FieldEncryptor(
        Settings(secret_key="unit-secret", encryption_salt="unit-salt", azure_ad_enabled=False)
    )


class TestEmailSettingsRepository:
    async def test_record_uses_hh_mm_and_iso_timestamp(self, store) -> None:
        repo = EmailSettingsRepository(store)
        await repo.save(
            EmailSettingsEntity(
                user_id="u1",
                email="u1@example.com",
                preferred_time=time(7, 30, 45),
                time_zone="Europe/Berlin",
                last_email_sent=datetime(2025, 4, 6, 5, 30, tzinfo=UTC),
            )
        )
        [record] = await store.query(CONTAINER_EMAIL_SETTINGS)
        assert record["preferredTime"] == "07:30"
        assert record["timeZone"] == "Europe/Berlin"
        assert record["lastEmailSent"] == "2025-04-06T05:30:00+00:00"
        assert record["userId"] == "u1"

        loaded = await repo.get_for_user("u1")
        assert loaded.preferred_time == time(7, 30)
        assert loaded.last_email_sent == datetime(2025, 4, 6, 5, 30, tzinfo=UTC)

    async def test_missing_fields_get_defaults(self, store) -> None:
        await store.upsert(
            CONTAINER_EMAIL_SETTINGS,
            {"id": "s1", "userId": "u1", "email": "a@b.c", "preferredTime": "garbage"},
            "u1",
        )
        loaded = await EmailSettingsRepository(store).get_for_user("u1")
        assert loaded.preferred_time == time(9, 0)
        assert loaded.time_zone == "UTC"
        assert loaded.is_enabled is True
        assert loaded.last_email_sent is None

    async def test_save_updates_in_place(self, store) -> None:
        repo = EmailSettingsRepository(store)
        saved = await repo.save(EmailSettingsEntity(user_id="u1", email="a@b.c"))
        saved.is_enabled = False
        await repo.save(saved)
        assert len(await repo.list_all()) == 1
        assert (await repo.get_for_user("u1")).is_enabled is False

    async def test_delete_for_user(self, store) -> None:
        repo = EmailSettingsRepository(store)
        await repo.save(EmailSettingsEntity(user_id="u1", email="a@b.c"))
        assert await repo.delete_for_user("u1") is True
        assert await repo.delete_for_user("u1") is False
        assert await repo.get_for_user("u1") is None


class TestDiaryEntryRepository:
    async def test_content_is_ciphertext_at_rest(self, store, encryptor) -> None:
        repo = DiaryEntryRepository(store, encryptor)
        entry = await repo.add(
            DiaryEntryEntity(user_id="u1", thought="secret thought", context="at work")
        )
        [record] = await store.query(CONTAINER_DIARY_ENTRIES)
        assert "secret thought" not in str(record)
        assert "at work" not in str(record)
        assert encryptor.decrypt(record["encryptedThought"]) == "secret thought"

        loaded = await repo.get("u1", entry.id)
        assert loaded.thought == "secret thought"
        assert loaded.context == "at work"

    async def test_list_is_oldest_first_and_partitioned(self, store, encryptor) -> None:
        repo = DiaryEntryRepository(store, encryptor)
        base = datetime(2025, 1, 1, tzinfo=UTC)
        await repo.add(DiaryEntryEntity(user_id="u1", thought="second", date=base + timedelta(days=1)))
        await repo.add(DiaryEntryEntity(user_id="u1", thought="first", date=base))
        await repo.add(DiaryEntryEntity(user_id="u2", thought="other"))
        assert [e.thought for e in await repo.list_for_user("u1")] == ["first", "second"]

    async def test_other_key_cannot_read(self, store, encryptor) -> None:
        await DiaryEntryRepository(store, encryptor).add(DiaryEntryEntity(user_id="u1", thought="x"))
        other = FieldEncryptor(
            Settings(secret_key="other", encryption_salt="unit-salt", azure_ad_enabled=False)
        )
        with pytest.raises(ValueError):
            await DiaryEntryRepository(store, other).list_for_user("u1")

    async def test_delete_missing_returns_false(self, store, encryptor) -> None:
        repo = DiaryEntryRepository(store, encryptor)
        entry = await repo.add(DiaryEntryEntity(user_id="u1", thought="x"))
        assert await repo.delete("u1", entry.id) is True
        assert await repo.delete("u1", entry.id) is False


class TestRecommendationRepository:
    async def test_history_newest_first_with_limit(self, store) -> None:
        repo = RecommendationRepository(store)
        base = datetime(2025, 1, 1, tzinfo=UTC)
        for i in range(4):
            await repo.add(RecommendationEntity(user_id="u1", text=f"r{i}", date=base + timedelta(days=i)))
        await repo.add(RecommendationEntity(user_id="u2", text="other"))
        assert [r.text for r in await repo.list_for_user("u1", limit=2)] == ["r3", "r2"]
        assert len(await repo.list_for_user("u1")) == 4


class TestSystemPromptRepository:
    async def test_save_and_get(self, store) -> None:
        repo = SystemPromptRepository(store)
        assert await repo.get("u1") is None
        await repo.save(SystemPromptEntity(user_id="u1", lines=["a", "b"]))
        assert (await repo.get("u1")).lines == ["a", "b"]
        assert await store.get(CONTAINER_SYSTEM_PROMPTS, "u1-systemprompt", "u1") is not None

    async def test_default_line(self) -> None:
        assert SystemPromptEntity(user_id="u1").lines == [DEFAULT_SYSTEM_PROMPT_LINE]
