"""API tests for profile and time zone settings."""

import pytest

from tests.conftest import signup_and_login

API = "/api/v1"


@pytest.mark.asyncio
async def test_update_bio_and_image(auth_client):
    response = await auth_client.put(
        f"{API}/profile",
        json={"bio": "Dinghy club on the north shore", "profile_image": "/img/burgee.png"},
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["bio"] == "Dinghy club on the north shore"
    assert body["profile_image"] == "/img/burgee.png"
    assert body["username"] == "skipper"
    me = (await auth_client.get(f"{API}/auth/me")).json()
    assert me["bio"] == "Dinghy club on the north shore"


@pytest.mark.asyncio
async def test_rename_moves_public_profile(auth_client):
    await auth_client.post(f"{API}/links", json={"title": "A", "url": "https://a.example.com"})

    response = await auth_client.put(f"{API}/profile", json={"username": "harbour-yc"})

    assert response.status_code == 200, response.text
    assert (await auth_client.get(f"{API}/public/harbour-yc/links")).status_code == 200
    assert (await auth_client.get(f"{API}/public/skipper/links")).status_code == 404


@pytest.mark.asyncio
async def test_rename_to_taken_or_reserved_is_400(client):
    await signup_and_login(client, "taken")
    await signup_and_login(client, "skipper")

    taken = await client.put(f"{API}/profile", json={"username": "taken"})
    reserved = await client.put(f"{API}/profile", json={"username": "results"})

    assert taken.status_code == 400
    assert taken.json()["detail"] == "'taken' is already taken"
    assert reserved.status_code == 400
    assert (await client.get(f"{API}/auth/me")).json()["username"] == "skipper"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{"username": None}, {"bio": None}, {"username": "no spaces"}, {}],
)
async def test_invalid_profile_update_is_400(auth_client, body):
    response = await auth_client.put(f"{API}/profile", json=body)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_timezone_defaults_to_utc_and_updates(auth_client):
    assert (await auth_client.get(f"{API}/settings/timezone")).json() == {"timezone": "UTC"}

    response = await auth_client.put(
        f"{API}/settings/timezone", json={"timezone": "Europe/Dublin"}
    )

    assert response.status_code == 200, response.text
    assert response.json() == {"timezone": "Europe/Dublin"}
    assert (await auth_client.get(f"{API}/auth/me")).json()["timezone"] == "Europe/Dublin"


@pytest.mark.asyncio
async def test_unknown_timezone_is_400(auth_client):
    response = await auth_client.put(f"{API}/settings/timezone", json={"timezone": "Mars/Olympus"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_settings_require_login(client):
    assert (await client.get(f"{API}/settings/timezone")).status_code == 401
