"""Personal access token endpoints and PAT authentication over HTTP."""

from httpx import AsyncClient

from diary.application.dtos.personal_access_token import TOKEN_SHOWN_ONCE_WARNING

BASE = "/api/v1/personal-access-tokens"


async def test_unauthenticated_is_401(client: AsyncClient) -> None:
    response = await client.get(BASE)
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_create_returns_token_once(client: AsyncClient, user_headers) -> None:
    response = await client.post(BASE, headers=user_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["token"].startswith("p_")
    assert len(body["token"]) == 56
    assert body["tokenPrefix"] == body["token"][:12]
    assert body["warning"] == TOKEN_SHOWN_ONCE_WARNING

    listed = (await client.get(BASE, headers=user_headers)).json()
    assert [t["id"] for t in listed] == [body["id"]]
    assert "token" not in listed[0]
    assert listed[0]["isActive"] is True


async def test_list_is_owner_scoped(
    client: AsyncClient, user_headers, other_user_headers
) -> None:
    await client.post(BASE, headers=user_headers)
    response = await client.get(BASE, headers=other_user_headers)
    assert response.json() == []


async def test_created_token_authenticates(client: AsyncClient, user_headers) -> None:
    token = (await client.post(BASE, headers=user_headers)).json()["token"]
    response = await client.get("/api/v1/diary", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


async def test_revoke_then_token_is_rejected(client: AsyncClient, user_headers) -> None:
    created = (await client.post(BASE, headers=user_headers)).json()
    pat = {"Authorization": f"Bearer {created['token']}"}

    response = await client.delete(f"{BASE}/{created['id']}", headers=user_headers)
    assert response.status_code == 204

    response = await client.get("/api/v1/diary", headers=pat)
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"
    assert (await client.get(BASE, headers=user_headers)).json() == []


async def test_revoke_unknown_or_foreign_token_is_404(
    client: AsyncClient, user_headers, other_user_headers
) -> None:
    created = (await client.post(BASE, headers=user_headers)).json()
    response = await client.delete(f"{BASE}/{created['id']}", headers=other_user_headers)
    assert response.status_code == 404
    response = await client.delete(f"{BASE}/does-not-exist", headers=user_headers)
    assert response.status_code == 404


async def test_pat_cannot_manage_tokens(client: AsyncClient, pat_headers) -> None:
    for response in (
        await client.post(BASE, headers=pat_headers),
        await client.get(BASE, headers=pat_headers),
        await client.delete(f"{BASE}/anything", headers=pat_headers),
    ):
        assert response.status_code == 403
        assert response.json()["error"] == "PERMISSION_DENIED"


async def test_unknown_pat_is_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/diary", headers={"Authorization": "Bearer p_notarealtoken"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


async def test_non_bearer_scheme_is_anonymous(client: AsyncClient) -> None:
    response = await client.get("/api/v1/diary", headers={"Authorization": "Basic dTpw"})
    assert response.status_code == 401
    assert response.json()["message"] == "Not authenticated"
