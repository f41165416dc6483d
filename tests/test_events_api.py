"""API tests for events: updates, search, public calendar and delete cleanup."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from app.models import EventResult, RaceTimeline, TimelinePost
from tests.conftest import signup_and_login
from tests.test_notices_documents_api import API, create_documents, create_notices


def days_from_now(days: int) -> str:
    moment = datetime.now(timezone.utc) + timedelta(days=days)
    return moment.replace(microsecond=0).isoformat()


async def add_event(client, title, start, **extra) -> dict:
    payload = {
        "title": title,
        "location": "North Harbour",
        "event_type": "regatta",
        "boat_classes": ["ILCA 6"],
        "start_date": start,
        **extra,
    }
    response = await client.post(f"{API}/events", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestEventUpdates:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["title", "location", "boat_classes", "start_date"])
    async def test_null_field_is_400(self, auth_client, field):
        event = await add_event(auth_client, "Spring Regatta", days_from_now(5))

        response = await auth_client.put(f"{API}/events/{event['id']}", json={field: None})

        assert response.status_code == 400, response.text
        stored = (await auth_client.get(f"{API}/events/{event['id']}")).json()
        assert stored[field] == event[field]

    @pytest.mark.asyncio
    async def test_description_can_be_cleared(self, auth_client):
        event = await add_event(
            auth_client, "Spring Regatta", days_from_now(5), description="Two races"
        )

        response = await auth_client.put(
            f"{API}/events/{event['id']}", json={"description": None}
        )

        assert response.status_code == 200, response.text
        assert response.json()["description"] is None


class TestEventSearch:
    @pytest.mark.asyncio
    async def test_matches_title_boat_class_and_series(self, auth_client):
        series = await auth_client.post(f"{API}/series", json={"title": "Winter Frostbite"})
        assert series.status_code == 201, series.text
        await add_event(auth_client, "Spring Regatta", days_from_now(5))
        await add_event(
            auth_client,
            "Club Race",
            days_from_now(10),
            boat_classes=["Optimist"],
            series_id=series.json()["id"],
        )

        async def search(q):
            response = await auth_client.get(f"{API}/events/search", params={"q": q})
            assert response.status_code == 200, response.text
            return [event["title"] for event in response.json()]

        assert await search("spring") == ["Spring Regatta"]
        assert await search("optimist") == ["Club Race"]
        assert await search("frostbite") == ["Club Race"]
        assert await search("harbour") == ["Spring Regatta", "Club Race"]
        assert await search("nothing here") == []

    @pytest.mark.asyncio
    async def test_short_query_is_400(self, auth_client):
        response = await auth_client.get(f"{API}/events/search", params={"q": "a"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_only_own_events(self, client):
        await signup_and_login(client, "owner")
        await add_event(client, "Spring Regatta", days_from_now(5))
        await signup_and_login(client, "rival")

        response = await client.get(f"{API}/events/search", params={"q": "spring"})

        assert response.status_code == 200
        assert response.json() == []


class TestPublicCalendar:
    @pytest.mark.asyncio
    async def test_window_and_attachments(self, auth_client):
        await add_event(auth_client, "Long Gone", days_from_now(-60))
        recent = await add_event(auth_client, "Last Week", days_from_now(-7))
        upcoming = await add_event(auth_client, "Next Month", days_from_now(30))
        await add_event(auth_client, "Far Future", days_from_now(400))

        a, b = await create_notices(auth_client, upcoming["id"], ["A", "B"])
        await auth_client.put(f"{API}/notices/{b['id']}", json={"sequence": 0})
        await create_documents(auth_client, ["NoR", "SI"], event_id=upcoming["id"])

        auth_client.cookies.clear()
        response = await auth_client.get(f"{API}/public/skipper/events")

        assert response.status_code == 200, response.text
        events = response.json()
        assert [event["title"] for event in events] == ["Last Week", "Next Month"]
        assert events[0]["id"] == recent["id"]
        assert [n["subject"] for n in events[1]["notices"]] == ["B", "A"]
        assert [d["name"] for d in events[1]["documents"]] == ["NoR", "SI"]

    @pytest.mark.asyncio
    async def test_series_title_and_documents(self, auth_client):
        series = (await auth_client.post(f"{API}/series", json={"title": "Summer Series"})).json()
        event = await add_event(
            auth_client, "Race 1", days_from_now(3), series_id=series["id"]
        )
        await create_documents(auth_client, ["Series SI"], series_id=series["id"])
        await create_documents(auth_client, ["Race 1 NoR"], event_id=event["id"])

        response = await auth_client.get(f"{API}/public/skipper/events")

        (listed,) = response.json()
        assert listed["series_title"] == "Summer Series"
        assert [d["name"] for d in listed["documents"]] == ["Series SI", "Race 1 NoR"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, client):
        response = await client.get(f"{API}/public/nobody/events")

        assert response.status_code == 404


class TestEventDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_results_and_timeline(self, auth_client, db):
        event = await add_event(auth_client, "Spring Regatta", days_from_now(5))
        await auth_client.put(
            f"{API}/events/{event['id']}/results",
            json={"results": [{"date_range": "Day 1", "document_url": "/r/day1.pdf"}]},
        )
        await auth_client.put(f"{API}/timeline/{event['id']}/settings", json={"is_active": True})
        post = await auth_client.post(
            f"{API}/timeline/{event['id']}/posts", json={"content": "Good breeze"}
        )
        assert post.status_code == 201, post.text

        response = await auth_client.delete(f"{API}/events/{event['id']}")

        assert response.status_code == 204
        for model in (EventResult, RaceTimeline, TimelinePost):
            assert await db.scalar(select(func.count()).select_from(model)) == 0
