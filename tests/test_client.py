"""Tests for the dashboard-side gateway client and collection views."""

import asyncio
import json
import uuid

import httpx
import pytest

from app.client import (
    CollectionView,
    DocumentCollectionView,
    LinkCollectionView,
    NoticeCollectionView,
    OrderGatewayClient,
    OrderState,
    TransientFailure,
    Unauthorized,
    ValidationFailed,
)
from app.schemas.reorder import LinksReorder, NoticeReorder
from app.services.reorder_engine import GROUP_PLACEHOLDER, Direction, MoveStatus, ReorderResult

A, B, C, D = (uuid.uuid4() for _ in range(4))


class Recorder:
    """MockTransport handler returning canned responses in turn."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


class HeldFirst:
    """Handler that holds the first request until released, answering the rest at once."""

    def __init__(self, first: httpx.Response, rest: httpx.Response):
        self.first = first
        self.rest = rest
        self.release = asyncio.Event()
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.requests) == 1:
            await self.release.wait()
            return self.first
        return self.rest

    async def wait_for_first(self) -> None:
        while not self.requests:
            await asyncio.sleep(0)


def make_gateway(handler, max_retries=3) -> OrderGatewayClient:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://test/api/v1"
    )
    return OrderGatewayClient(client=client, max_retries=max_retries, retry_delay=0)


def ok(body=None) -> httpx.Response:
    return httpx.Response(200, json=body or {"success": True})


class TestOrderState:
    def test_apply_then_revert(self):
        state = OrderState(["a", "b"])
        state.apply(["b", "a"])

        assert state.dirty
        assert state.revert() == ("a", "b")
        assert not state.dirty

    def test_confirm_promotes_working_copy(self):
        state = OrderState(["a", "b"])
        state.apply(["b", "a"])
        state.confirm()

        assert state.confirmed == ("b", "a")
        assert state.revert() == ("b", "a")

    def test_failed_move_falls_back_to_pending_move(self):
        state = OrderState(["a", "b", "c"])
        first = state.begin(["c", "a", "b"])
        second = state.begin(["b", "c", "a"])

        state.fail(second)
        assert state.working == ("c", "a", "b")
        assert state.in_flight

        state.succeed(first)
        assert state.working == state.confirmed == ("c", "a", "b")
        assert not state.in_flight

    def test_late_success_does_not_override_newer_confirmation(self):
        state = OrderState(["a", "b", "c"])
        first = state.begin(["c", "a", "b"])
        second = state.begin(["b", "c", "a"])

        state.succeed(second)
        state.succeed(first)

        assert state.working == state.confirmed == ("b", "c", "a")

    def test_reset_drops_pending_moves(self):
        state = OrderState(["a", "b"])
        token = state.begin(["b", "a"])
        state.reset(["a", "b"])
        state.succeed(token)

        assert state.working == state.confirmed == ("a", "b")


class TestGateway:
    @pytest.mark.asyncio
    async def test_links_request_shape(self):
        handler = Recorder(ok())
        gateway = make_gateway(handler)
        request = LinksReorder.from_result(ReorderResult(sequence=(C, A)))

        confirmed = await gateway.commit(request)

        assert confirmed.payload == {"success": True}
        sent = handler.requests[0]
        assert sent.method == "PUT"
        assert sent.url.path == "/api/v1/links/order"
        assert handler.bodies()[0] == {
            "links": [{"id": str(C), "order": 0}, {"id": str(A), "order": 1}]
        }

    @pytest.mark.asyncio
    async def test_notice_request_shape(self):
        handler = Recorder(ok())
        gateway = make_gateway(handler)

        await gateway.commit(NoticeReorder(notice_id=B, sequence=2))

        assert handler.requests[0].url.path == f"/api/v1/notices/{B}"
        assert handler.bodies() == [{"sequence": 2}]

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self):
        handler = Recorder(httpx.Response(503), httpx.ConnectError("down"), ok())
        gateway = make_gateway(handler)

        await gateway.commit(NoticeReorder(notice_id=B, sequence=0))

        assert len(handler.requests) == 3
        # Retries resend the identical payload
        assert handler.bodies() == [{"sequence": 0}] * 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        handler = Recorder(httpx.Response(500))
        gateway = make_gateway(handler, max_retries=2)

        with pytest.raises(TransientFailure):
            await gateway.commit(NoticeReorder(notice_id=B, sequence=0))

        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code, error",
        [(400, ValidationFailed), (404, ValidationFailed), (401, Unauthorized), (403, Unauthorized)],
    )
    async def test_rejections_are_not_retried(self, status_code, error):
        handler = Recorder(
            httpx.Response(status_code, json={"detail": {"success": False, "message": "nope"}})
        )
        gateway = make_gateway(handler)

        with pytest.raises(error) as exc_info:
            await gateway.commit(NoticeReorder(notice_id=B, sequence=0))

        assert len(handler.requests) == 1
        assert exc_info.value.status_code == status_code
        assert str(exc_info.value) == "nope"


class TestCollectionView:
    @pytest.mark.asyncio
    async def test_successful_move_is_confirmed(self):
        handler = Recorder(ok())
        view = NoticeCollectionView(make_gateway(handler), [A, B, C, D])

        outcome = await view.move(C, 0)

        assert outcome.confirmed
        assert view.items == (C, A, B, D)
        assert view.state.confirmed == (C, A, B, D)
        assert handler.bodies() == [{"sequence": 0}]

    @pytest.mark.asyncio
    async def test_transient_failure_reverts_and_notifies_once(self):
        notifications = []
        handler = Recorder(httpx.ConnectError("offline"))
        view = LinkCollectionView(
            make_gateway(handler), [A, B, C, D], notifier=notifications.append
        )

        outcome = await view.move(C, 0)

        assert outcome.reverted
        assert isinstance(outcome.error, TransientFailure)
        assert view.items == (A, B, C, D)
        assert len(notifications) == 1
        assert notifications[0].variant == "destructive"

    @pytest.mark.asyncio
    async def test_rejection_reverts(self):
        notifications = []
        handler = Recorder(httpx.Response(400, json={"detail": "Invalid"}))
        view = DocumentCollectionView(
            make_gateway(handler), [A, B, C], notifier=notifications.append
        )

        outcome = await view.step(B, Direction.DOWN)

        assert isinstance(outcome.error, ValidationFailed)
        assert view.items == (A, B, C)
        assert len(handler.requests) == 1
        assert len(notifications) == 1

    @pytest.mark.asyncio
    async def test_boundary_step_sends_nothing(self):
        handler = Recorder(ok())
        view = NoticeCollectionView(make_gateway(handler), [A, B, C])

        outcome = await view.step(A, Direction.UP)

        assert outcome.result.is_boundary
        assert not outcome.confirmed
        assert handler.requests == []
        assert view.items == (A, B, C)

    @pytest.mark.asyncio
    async def test_step_down(self):
        handler = Recorder(ok())
        view = DocumentCollectionView(make_gateway(handler), [A, B, C])

        await view.step(B, "down")

        assert view.items == (A, C, B)
        assert handler.bodies() == [{"order": 2}]

    @pytest.mark.asyncio
    async def test_failed_move_during_pending_move_keeps_pending_order(self):
        handler = HeldFirst(ok(), httpx.Response(400, json={"detail": "Invalid"}))
        notifications = []
        view = NoticeCollectionView(
            make_gateway(handler), [A, B, C, D], notifier=notifications.append
        )

        first = asyncio.create_task(view.move(C, 0))
        await handler.wait_for_first()
        assert view.items == (C, A, B, D)

        second = await view.move(D, 0)

        assert second.reverted
        assert view.items == (C, A, B, D)
        assert len(notifications) == 1

        handler.release.set()
        outcome = await first

        assert outcome.confirmed
        assert view.items == view.state.confirmed == (C, A, B, D)

    @pytest.mark.asyncio
    async def test_earlier_move_failing_after_later_success_keeps_later_order(self):
        handler = HeldFirst(httpx.Response(400, json={"detail": "Invalid"}), ok())
        view = NoticeCollectionView(make_gateway(handler), [A, B, C, D])

        first = asyncio.create_task(view.move(C, 0))
        await handler.wait_for_first()
        second = await view.move(D, 0)

        assert second.confirmed
        assert view.items == view.state.confirmed == (D, C, A, B)

        handler.release.set()
        outcome = await first

        assert outcome.reverted
        assert view.items == view.state.confirmed == (D, C, A, B)

    def test_base_view_is_abstract(self):
        with pytest.raises(TypeError):
            CollectionView(make_gateway(Recorder(ok())), [A, B])


class TestLinkCollectionView:
    @pytest.mark.asyncio
    async def test_group_moves_together_and_sends_full_list(self):
        link_1, facebook, twitter, link_2 = (uuid.uuid4() for _ in range(4))
        handler = Recorder(ok())
        view = LinkCollectionView(
            make_gateway(handler),
            [link_1, facebook, twitter, link_2],
            social_ids=[facebook, twitter],
        )
        assert view.slots == [link_1, GROUP_PLACEHOLDER, link_2]

        outcome = await view.move(GROUP_PLACEHOLDER, 2)

        assert outcome.confirmed
        assert view.items == (link_1, link_2, facebook, twitter)
        assert handler.bodies() == [
            {
                "links": [
                    {"id": str(link_1), "order": 0},
                    {"id": str(link_2), "order": 1},
                    {"id": str(facebook), "order": 2},
                    {"id": str(twitter), "order": 3},
                ]
            }
        ]

    @pytest.mark.asyncio
    async def test_move_within_group_keeps_slots(self):
        link_1, facebook, twitter, link_2 = (uuid.uuid4() for _ in range(4))
        handler = Recorder(ok())
        view = LinkCollectionView(
            make_gateway(handler),
            [link_1, facebook, twitter, link_2],
            social_ids=[facebook, twitter],
        )

        outcome = await view.move_within_group(twitter, 0)

        assert outcome.result.status == MoveStatus.MOVED
        assert view.items == (link_1, twitter, facebook, link_2)

    @pytest.mark.asyncio
    async def test_unchanged_move_sends_nothing(self):
        handler = Recorder(ok())
        view = LinkCollectionView(make_gateway(handler), [A, B])

        outcome = await view.move(A, 0)

        assert outcome.result.status == MoveStatus.UNCHANGED
        assert handler.requests == []
