"""Tests for the ordering gateway against a real database session."""

import uuid
from datetime import datetime, timezone

import pytest

from app.models import Document, Event, Link, LinkType, Notice, Series, User
from app.services.ordering import (
    OrderingGateway,
    OrderValidationError,
    ScopeNotFoundError,
    document_scope,
    link_scope,
    notice_scope,
)
from app.services.reorder_engine import PositionUpdate


async def make_user(db, username="skipper") -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        hashed_password="x",
    )
    db.add(user)
    await db.flush()
    return user


async def make_links(db, user, titles) -> list[Link]:
    links = [
        Link(user_id=user.id, title=title, url=f"https://{title}.example.com", type=LinkType.LINK, order=index)
        for index, title in enumerate(titles)
    ]
    db.add_all(links)
    await db.flush()
    return links


async def positions(gateway, scope) -> dict[str, int]:
    return {row.title: row.order for row in await gateway.load(scope)}


@pytest.mark.asyncio
async def test_commit_order_applies_batch(db):
    user = await make_user(db)
    a, b, c, d = await make_links(db, user, "abcd")
    gateway = OrderingGateway(db)
    scope = link_scope(user.id)

    updated = await gateway.commit_order(
        scope, [PositionUpdate(c.id, 0), PositionUpdate(a.id, 1), PositionUpdate(b.id, 2)]
    )

    assert [link.id for link in updated] == [c.id, a.id, b.id]
    assert await positions(gateway, scope) == {"c": 0, "a": 1, "b": 2, "d": 3}
    assert await gateway.ordered_ids(scope) == [c.id, a.id, b.id, d.id]


@pytest.mark.asyncio
async def test_commit_order_is_idempotent(db):
    user = await make_user(db)
    a, b, c = await make_links(db, user, "abc")
    gateway = OrderingGateway(db)
    scope = link_scope(user.id)
    batch = [PositionUpdate(c.id, 0), PositionUpdate(a.id, 1), PositionUpdate(b.id, 2)]

    await gateway.commit_order(scope, batch)
    first = await positions(gateway, scope)
    await gateway.commit_order(scope, batch)

    assert await positions(gateway, scope) == first


@pytest.mark.asyncio
async def test_foreign_ids_reject_whole_batch(db):
    owner = await make_user(db, "owner")
    other = await make_user(db, "other")
    a, b = await make_links(db, owner, "ab")
    (foreign,) = await make_links(db, other, "z")
    gateway = OrderingGateway(db)
    scope = link_scope(owner.id)

    with pytest.raises(OrderValidationError) as exc_info:
        await gateway.commit_order(
            scope, [PositionUpdate(b.id, 0), PositionUpdate(foreign.id, 1)]
        )

    assert exc_info.value.invalid_ids == [str(foreign.id)]
    assert await positions(gateway, scope) == {"a": 0, "b": 1}


@pytest.mark.asyncio
async def test_non_contiguous_result_is_rejected(db):
    user = await make_user(db)
    a, b, c = await make_links(db, user, "abc")
    gateway = OrderingGateway(db)
    scope = link_scope(user.id)

    with pytest.raises(OrderValidationError):
        await gateway.commit_order(scope, [PositionUpdate(a.id, 5)])
    with pytest.raises(OrderValidationError):
        await gateway.commit_order(scope, [PositionUpdate(a.id, 1)])

    assert await positions(gateway, scope) == {"a": 0, "b": 1, "c": 2}


@pytest.mark.asyncio
async def test_duplicate_ids_are_rejected(db):
    user = await make_user(db)
    a, b = await make_links(db, user, "ab")
    gateway = OrderingGateway(db)

    with pytest.raises(OrderValidationError, match="Duplicate"):
        await gateway.commit_order(
            link_scope(user.id), [PositionUpdate(a.id, 1), PositionUpdate(a.id, 0)]
        )


@pytest.mark.asyncio
async def test_move_item_renumbers_scope(db):
    user = await make_user(db)
    a, b, c, d = await make_links(db, user, "abcd")
    gateway = OrderingGateway(db)
    scope = link_scope(user.id)

    await gateway.move_item(scope, c.id, 0)

    assert await positions(gateway, scope) == {"c": 0, "a": 1, "b": 2, "d": 3}


@pytest.mark.asyncio
async def test_move_item_outside_scope(db):
    user = await make_user(db)
    await make_links(db, user, "ab")
    gateway = OrderingGateway(db)

    with pytest.raises(ScopeNotFoundError):
        await gateway.move_item(link_scope(user.id), uuid.uuid4(), 0)


@pytest.mark.asyncio
async def test_close_gap_after_delete(db):
    user = await make_user(db)
    a, b, c = await make_links(db, user, "abc")
    gateway = OrderingGateway(db)
    scope = link_scope(user.id)

    await db.delete(a)
    await db.flush()
    await gateway.close_gap(scope)

    assert await positions(gateway, scope) == {"b": 0, "c": 1}
    assert await gateway.next_position(scope) == 2


@pytest.mark.asyncio
async def test_notice_and_document_scopes_are_independent(db):
    user = await make_user(db)
    series = Series(user_id=user.id, title="Winter series")
    db.add(series)
    await db.flush()
    start = datetime(2026, 1, 10, tzinfo=timezone.utc)
    events = [
        Event(
            user_id=user.id,
            series_id=series.id,
            title=f"Race {n}",
            location="Harbour",
            event_type="race",
            boat_classes=["ILCA 7"],
            start_date=start,
            end_date=start,
        )
        for n in (1, 2)
    ]
    db.add_all(events)
    await db.flush()
    for event in events:
        db.add_all(
            Notice(user_id=user.id, event_id=event.id, subject=s, content=s, sequence=i)
            for i, s in enumerate(["first", "second"])
        )
    db.add(Document(user_id=user.id, series_id=series.id, name="SI", url="/si.pdf", order=0))
    db.add(Document(user_id=user.id, event_id=events[0].id, name="NoR", url="/nor.pdf", order=0))
    await db.flush()
    gateway = OrderingGateway(db)

    scope = notice_scope(events[0].id, user.id)
    second = (await gateway.load(scope))[1]
    await gateway.move_item(scope, second.id, 0)

    other = await gateway.load(notice_scope(events[1].id, user.id))
    assert [n.subject for n in await gateway.load(scope)] == ["second", "first"]
    assert [(n.subject, n.sequence) for n in other] == [("first", 0), ("second", 1)]
    assert await gateway.next_position(document_scope(user.id, series_id=series.id)) == 1
    assert await gateway.next_position(document_scope(user.id, event_id=events[0].id)) == 1


def test_document_scope_needs_exactly_one_parent():
    with pytest.raises(ValueError):
        document_scope(uuid.uuid4())
    with pytest.raises(ValueError):
        document_scope(uuid.uuid4(), event_id=uuid.uuid4(), series_id=uuid.uuid4())
