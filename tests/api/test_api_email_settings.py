"""Email settings endpoints and the test email."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

BASE = "/api/v1/email-settings"


async def test_missing_settings_is_404(client: AsyncClient, user_headers) -> None:
    assert (await client.get(BASE, headers=user_headers)).status_code == 404


async def test_save_and_read(client: AsyncClient, user_headers) -> None:
    response = await client.post(
        BASE,
        headers=user_headers,
        json={"preferredTime": "07:45", "isEnabled": True, "timeZone": "America/New_York"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "user-1@example.com"
    assert body["preferredTime"] == "07:45"
    assert body["timeZone"] == "America/New_York"
    assert body["lastEmailSent"] is None

    fetched = (await client.get(BASE, headers=user_headers)).json()
    assert fetched == body


async def test_update_without_zone_keeps_zone(client: AsyncClient, user_headers) -> None:
    await client.post(BASE, headers=user_headers, json={"timeZone": "Europe/Paris"})
    response = await client.post(BASE, headers=user_headers, json={"preferredTime": "20:00"})
    assert response.json()["timeZone"] == "Europe/Paris"
    assert response.json()["preferredTime"] == "20:00"


async def test_unknown_zone_is_400(client: AsyncClient, user_headers) -> None:
    response = await client.post(BASE, headers=user_headers, json={"timeZone": "Nowhere/City"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_zone_directory_name_is_400(client: AsyncClient, user_headers) -> None:
    response = await client.post(BASE, headers=user_headers, json={"timeZone": "America"})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_malformed_time_is_422(client: AsyncClient, user_headers) -> None:
    response = await client.post(BASE, headers=user_headers, json={"preferredTime": "25:99"})
    assert response.status_code == 422


async def test_pat_caller_without_email_claim_is_400(client: AsyncClient, pat_headers) -> None:
    response = await client.post(BASE, headers=pat_headers, json={})
    assert response.status_code == 400


async def test_delete(client: AsyncClient, user_headers) -> None:
    await client.post(BASE, headers=user_headers, json={})
    assert (await client.delete(BASE, headers=user_headers)).status_code == 204
    assert (await client.delete(BASE, headers=user_headers)).status_code == 404


async def test_settings_are_per_user(
    client: AsyncClient, user_headers, other_user_headers
) -> None:
    await client.post(BASE, headers=user_headers, json={})
    assert (await client.get(BASE, headers=other_user_headers)).status_code == 404


async def test_send_test_email(app, client: AsyncClient, user_headers, monkeypatch) -> None:
    send = AsyncMock(return_value="op-42")
    monkeypatch.setattr(app.state.email_service.sender, "send", send)

    assert (await client.post(f"{BASE}/test", headers=user_headers)).status_code == 404

    await client.post(BASE, headers=user_headers, json={})
    response = await client.post(f"{BASE}/test", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Test email sent", "operationId": "op-42"}
    assert send.await_args.args[0] == "user-1@example.com"
    assert send.await_args.args[1] == "Test Email from Second Diary"
