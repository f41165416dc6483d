"""Optimistically updated views over an ordered collection.

A view keeps an :class:`OrderState`. A move is applied to the working copy
immediately, then committed through the gateway. On success the new order
becomes the confirmed one; on failure the working copy falls back to the
newest order still pending or confirmed, and the notifier is called once.
A second move may start while the first is in flight.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Hashable, Sequence
from dataclasses import dataclass
from uuid import UUID

from app.client.errors import OrderGatewayError
from app.client.gateway import OrderGatewayClient
from app.client.state import OrderState
from app.schemas.reorder import (
    DocumentReorder,
    LinksReorder,
    NoticeReorder,
    ReorderRequest,
)
from app.services import reorder_engine
from app.services.reorder_engine import (
    Direction,
    MoveStatus,
    ReorderResult,
    SocialGroup,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """User-facing message, shown as a toast by the dashboard."""

    title: str
    description: str
    variant: str = "default"


Notifier = Callable[[Notification], None]


def log_notification(notification: Notification) -> None:
    logger.warning("%s: %s", notification.title, notification.description)


@dataclass(frozen=True)
class MoveOutcome:
    """Result of a view move and whether the server accepted it."""

    result: ReorderResult
    confirmed: bool = False
    error: OrderGatewayError | None = None

    @property
    def reverted(self) -> bool:
        return self.error is not None


class CollectionView(ABC):
    """Base view: subclasses build the request for their endpoint."""

    entity_name = "item"

    def __init__(
        self,
        gateway: OrderGatewayClient,
        item_ids: Sequence[Hashable] = (),
        *,
        notifier: Notifier | None = None,
    ):
        self.gateway = gateway
        self.state = OrderState(item_ids)
        self.notifier = notifier or log_notification

    @property
    def items(self) -> tuple[Hashable, ...]:
        return self.state.working

    def load(self, item_ids: Sequence[Hashable]) -> None:
        """Replace the view contents with a fresh server listing."""
        self.state.reset(item_ids)

    def group(self) -> SocialGroup | None:
        return None

    @abstractmethod
    def build_request(self, result: ReorderResult, moved_id: Hashable) -> ReorderRequest:
        """Request that persists ``result`` for this collection."""

    async def move(self, item_id: Hashable, target_index: int) -> MoveOutcome:
        """Drag-and-drop ``item_id`` to ``target_index``."""
        result = reorder_engine.move_to(
            self.state.working, item_id, target_index, group=self.group()
        )
        return await self._commit(result, item_id)

    async def step(self, item_id: Hashable, direction: Direction | str) -> MoveOutcome:
        """Move ``item_id`` one place up or down."""
        result = reorder_engine.step(
            self.state.working, item_id, direction, group=self.group()
        )
        return await self._commit(result, item_id)

    async def _commit(self, result: ReorderResult, moved_id: Hashable) -> MoveOutcome:
        if not result.changed:
            logger.debug("No %s reorder for %s: %s", self.entity_name, moved_id, result.status.value)
            return MoveOutcome(result=result)

        request = self.build_request(result, moved_id)
        token = self.state.begin(result.sequence)
        try:
            await self.gateway.commit(request)
        except OrderGatewayError as e:
            self.state.fail(token)
            logger.warning("Reverted %s order after failed commit: %s", self.entity_name, e)
            self.notifier(
                Notification(
                    title="Error",
                    description=f"Failed to update {self.entity_name} order: {e}",
                    variant="destructive",
                )
            )
            return MoveOutcome(result=result, error=e)

        self.state.succeed(token)
        return MoveOutcome(result=result, confirmed=True)


class LinkCollectionView(CollectionView):
    """A user's links; social links move together as one group slot."""

    entity_name = "link"

    def __init__(
        self,
        gateway: OrderGatewayClient,
        item_ids: Sequence[UUID] = (),
        *,
        social_ids: Collection[UUID] = (),
        notifier: Notifier | None = None,
    ):
        super().__init__(gateway, item_ids, notifier=notifier)
        self.social_ids = frozenset(social_ids)

    def load(self, item_ids: Sequence[UUID], social_ids: Collection[UUID] = ()) -> None:
        super().load(item_ids)
        self.social_ids = frozenset(social_ids)

    def group(self) -> SocialGroup | None:
        if not self.social_ids:
            return None
        return SocialGroup(members=self.social_ids)

    @property
    def slots(self) -> list[Hashable]:
        """Display slots, with the social links collapsed into one."""
        group = self.group()
        if group is None:
            return list(self.items)
        return reorder_engine.collapse_group(self.items, group)[0]

    def build_request(self, result: ReorderResult, moved_id: Hashable) -> LinksReorder:
        return LinksReorder.from_result(result)

    async def move_within_group(self, link_id: UUID, target_index: int) -> MoveOutcome:
        """Reorder one social link among the other social links."""
        working = self.state.working
        members = [item_id for item_id in working if item_id in self.social_ids]
        inner = reorder_engine.move_to(members, link_id, target_index)
        if not inner.changed:
            return await self._commit(
                ReorderResult(sequence=working, status=inner.status), link_id
            )

        # Members keep their slots in the parent list, only their order changes
        replacements = iter(inner.sequence)
        after = tuple(
            next(replacements) if item_id in self.social_ids else item_id
            for item_id in working
        )
        result = ReorderResult(
            sequence=after,
            updates=tuple(reorder_engine.position_updates(working, after)),
            status=MoveStatus.MOVED,
        )
        return await self._commit(result, link_id)


class NoticeCollectionView(CollectionView):
    """Notices on one event's board."""

    entity_name = "notice"

    def build_request(self, result: ReorderResult, moved_id: Hashable) -> NoticeReorder:
        return NoticeReorder.from_result(result, moved_id)


class DocumentCollectionView(CollectionView):
    """Documents of one event or series."""

    entity_name = "document"

    def build_request(self, result: ReorderResult, moved_id: Hashable) -> DocumentReorder:
        return DocumentReorder.from_result(result, moved_id)
