"""Scheduled dispatch pass: window, dedup, DST, isolation, bookkeeping."""

import logging
from datetime import UTC, datetime, time, timedelta
from unittest.mock import AsyncMock

import pytest

from diary.application.services.email_service import (
    RECOMMENDATION_SUBJECT,
    EmailService,
)
from diary.domain.entities import EmailSettingsEntity
from diary.infrastructure.document_store import InMemoryDocumentStore
from diary.infrastructure.external.email import EmailContentRenderer
from diary.infrastructure.repositories import EmailSettingsRepository

NY = "America/New_York"


def at(iso: str) -> datetime:
    return datetime.fromisoformat(iso.replace("Z", "+00:00"))


@pytest.fixture
def settings_repo() -> EmailSettingsRepository:
    return EmailSettingsRepository(InMemoryDocumentStore())


@pytest.fixture
def generator():
    gen = AsyncMock()
    gen.generate = AsyncMock(return_value="Take a walk.")
    return gen


@pytest.fixture
def sender():
    s = AsyncMock()
    s.send = AsyncMock(return_value="op-1")
    return s


@pytest.fixture
def make_service(settings_repo, generator, sender):
    def _make(now: datetime) -> EmailService:
        return EmailService(
            settings_repo,
            generator,
            sender,
            EmailContentRenderer("https://diary.example"),
            clock=lambda: now,
        )

    return _make


async def add_settings(repo, user_id="user-1", **kwargs) -> EmailSettingsEntity:
    kwargs.setdefault("email", f"{user_id}@example.com")
    return await repo.save(EmailSettingsEntity(user_id=user_id, **kwargs))


class TestWindow:
    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            ("2025-04-06T09:00:00Z", True),
            ("2025-04-06T09:02:30Z", True),
            ("2025-04-06T09:05:00Z", True),
            ("2025-04-06T09:05:01Z", False),
            ("2025-04-06T08:59:59Z", False),
            ("2025-04-06T21:00:00Z", False),
        ],
    )
    async def test_boundaries(self, settings_repo, make_service, sender, now, expected) -> None:
        await add_settings(settings_repo, preferred_time=time(9, 0), time_zone="UTC")
        assert await make_service(at(now)).check_and_send_scheduled_emails() is expected
        assert sender.send.await_count == (1 if expected else 0)


class TestDedup:
    async def test_already_sent_earlier_today_is_skipped(
        self, settings_repo, make_service, generator
    ) -> None:
        await add_settings(
            settings_repo,
            preferred_time=time(9, 0),
            last_email_sent=at("2025-04-06T00:30:00Z"),
        )
        assert await make_service(at("2025-04-06T09:01:00Z")).check_and_send_scheduled_emails() is False
        generator.generate.assert_not_awaited()

    async def test_sent_yesterday_sends_again(self, settings_repo, make_service) -> None:
        await add_settings(
            settings_repo,
            preferred_time=time(9, 0),
            last_email_sent=at("2025-04-05T09:01:00Z"),
        )
        assert await make_service(at("2025-04-06T09:01:00Z")).check_and_send_scheduled_emails() is True

    async def test_same_local_date_is_judged_in_users_zone(self, settings_repo, make_service) -> None:
        # 2025-04-06T02:00Z is still 04-05 in New York, so today's email is not yet sent.
        await add_settings(
            settings_repo,
            preferred_time=time(10, 0),
            time_zone=NY,
            last_email_sent=at("2025-04-06T02:00:00Z"),
        )
        assert await make_service(at("2025-04-06T14:01:00Z")).check_and_send_scheduled_emails() is True

    async def test_second_pass_in_same_window_does_not_resend(
        self, settings_repo, make_service, sender
    ) -> None:
        await add_settings(settings_repo, preferred_time=time(9, 0))
        assert await make_service(at("2025-04-06T09:00:00Z")).check_and_send_scheduled_emails() is True
        assert await make_service(at("2025-04-06T09:01:00Z")).check_and_send_scheduled_emails() is False
        assert sender.send.await_count == 1


class TestDaylightSaving:
    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            ("2025-03-08T15:00:00Z", True),
            ("2025-03-08T14:00:00Z", False),
            ("2025-03-10T14:00:00Z", True),
            ("2025-03-10T15:00:00Z", False),
        ],
    )
    async def test_ten_am_new_york_across_transition(
        self, settings_repo, make_service, now, expected
    ) -> None:
        await add_settings(settings_repo, preferred_time=time(10, 0), time_zone=NY)
        assert await make_service(at(now)).check_and_send_scheduled_emails() is expected


class TestConcreteScenario:
    async def test_fires_and_records_send_time(
        self, settings_repo, make_service, generator, sender
    ) -> None:
        await add_settings(
            settings_repo,
            preferred_time=time(10, 0),
            time_zone=NY,
            last_email_sent=at("2025-04-05T14:01:00Z"),
        )
        now = at("2025-04-06T14:02:00Z")
        assert await make_service(now).check_and_send_scheduled_emails() is True

        generator.generate.assert_awaited_once_with("user-1")
        to, subject, html_body, text_body = sender.send.await_args.args
        assert to == "user-1@example.com"
        assert subject == RECOMMENDATION_SUBJECT
        assert "Take a walk." in html_body
        assert "Take a walk." in text_body
        stored = await settings_repo.get_for_user("user-1")
        assert stored.last_email_sent == now

    async def test_two_hours_later_does_not_fire(self, settings_repo, make_service, sender) -> None:
        await add_settings(
            settings_repo,
            preferred_time=time(10, 0),
            time_zone=NY,
            last_email_sent=at("2025-04-05T14:01:00Z"),
        )
        assert await make_service(at("2025-04-06T16:00:00Z")).check_and_send_scheduled_emails() is False
        sender.send.assert_not_awaited()


class TestIsolation:
    async def test_invalid_timezone_falls_back_to_utc_and_others_are_processed(
        self, settings_repo, make_service, sender, caplog: pytest.LogCaptureFixture
    ) -> None:
        await add_settings(settings_repo, "user-1", preferred_time=time(9, 0))
        await add_settings(settings_repo, "user-2", preferred_time=time(9, 0), time_zone="Bogus/Zone")
        await add_settings(settings_repo, "user-3", preferred_time=time(9, 0))

        with caplog.at_level(logging.WARNING):
            assert await make_service(at("2025-04-06T09:00:00Z")).check_and_send_scheduled_emails() is True

        recipients = sorted(call.args[0] for call in sender.send.await_args_list)
        assert recipients == [
            "user-1@example.com",
            "user-2@example.com",
            "user-3@example.com",
        ]
        assert "Bogus/Zone" in caplog.text

    async def test_zone_directory_name_falls_back_to_utc(
        self, settings_repo, make_service, sender
    ) -> None:
        await add_settings(settings_repo, "user-1", preferred_time=time(10, 0), time_zone="America")

        assert await make_service(at("2025-04-06T10:02:00Z")).check_and_send_scheduled_emails() is True
        sender.send.assert_awaited_once()
        saved = await settings_repo.get_for_user("user-1")
        assert saved.last_email_sent == at("2025-04-06T10:02:00Z")

    async def test_failure_for_one_user_does_not_stop_the_pass(
        self, settings_repo, make_service, generator, sender, caplog: pytest.LogCaptureFixture
    ) -> None:
        for user in ("user-1", "user-2", "user-3"):
            await add_settings(settings_repo, user, preferred_time=time(9, 0))

        async def generate(user_id: str) -> str:
            if user_id == "user-2":
                raise RuntimeError("llm down")
            return "ok"

        generator.generate = AsyncMock(side_effect=generate)
        with caplog.at_level(logging.ERROR):
            assert await make_service(at("2025-04-06T09:00:00Z")).check_and_send_scheduled_emails() is True

        assert sender.send.await_count == 2
        assert "user-2" in caplog.text
        assert (await settings_repo.get_for_user("user-2")).last_email_sent is None
        assert (await settings_repo.get_for_user("user-3")).last_email_sent is not None

    async def test_send_failure_does_not_record_send_time(
        self, settings_repo, make_service, sender
    ) -> None:
        await add_settings(settings_repo, preferred_time=time(9, 0))
        sender.send = AsyncMock(side_effect=RuntimeError("smtp down"))
        assert await make_service(at("2025-04-06T09:00:00Z")).check_and_send_scheduled_emails() is False
        assert (await settings_repo.get_for_user("user-1")).last_email_sent is None


class TestSkips:
    async def test_disabled_settings_are_skipped(self, settings_repo, make_service, generator) -> None:
        await add_settings(settings_repo, preferred_time=time(9, 0), is_enabled=False)
        assert await make_service(at("2025-04-06T09:00:00Z")).check_and_send_scheduled_emails() is False
        generator.generate.assert_not_awaited()

    async def test_no_settings_sends_nothing(self, make_service, sender) -> None:
        assert await make_service(at("2025-04-06T09:00:00Z")).check_and_send_scheduled_emails() is False
        sender.send.assert_not_awaited()

    async def test_settings_load_failure_returns_false(self, generator, sender) -> None:
        repo = AsyncMock()
        repo.list_all = AsyncMock(side_effect=RuntimeError("store down"))
        service = EmailService(
            repo, generator, sender, EmailContentRenderer("https://x"), clock=lambda: at("2025-04-06T09:00:00Z")
        )
        assert await service.check_and_send_scheduled_emails() is False


class TestConfigurableWindow:
    async def test_wider_window(self, settings_repo, generator, sender) -> None:
        await add_settings(settings_repo, preferred_time=time(9, 0))
        service = EmailService(
            settings_repo,
            generator,
            sender,
            EmailContentRenderer("https://x"),
            clock=lambda: at("2025-04-06T09:09:00Z"),
            dispatch_window=timedelta(minutes=10),
        )
        assert await service.check_and_send_scheduled_emails() is True


async def test_send_test_email_uses_test_subject(sender) -> None:
    service = EmailService(AsyncMock(), AsyncMock(), sender, EmailContentRenderer("https://x"))
    assert await service.send_test_email("a@example.com") == "op-1"
    to, subject, _, text_body = sender.send.await_args.args
    assert to == "a@example.com"
    assert subject == "Test Email from Second Diary"
    assert "test email to confirm your email settings" in text_body
