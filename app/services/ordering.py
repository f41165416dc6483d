"""Persistence of item positions within an ownership scope.

An :class:`OrderScope` names the rows whose positions form one dense
``0..N-1`` sequence (a user's links, an event's notices, an event's or a
series' documents) together with the ownership filter of the requesting
user. :class:`OrderingGateway` is the only place that writes positions.
"""

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Document, Link, Notice
from app.services import reorder_engine
from app.services.reorder_engine import PositionUpdate

logger = logging.getLogger(__name__)


class OrderValidationError(ValueError):
    """The batch cannot be applied to the scope; nothing was written."""

    def __init__(self, message: str, invalid_ids: Sequence[Any] = ()):
        super().__init__(message)
        self.invalid_ids = [str(item_id) for item_id in invalid_ids]


class ScopeNotFoundError(ValueError):
    """The item is not part of any scope visible to the user."""


@dataclass(frozen=True)
class OrderScope:
    """Rows of ``model`` matching ``filters``, ordered by ``position_attr``."""

    model: type
    position_attr: str
    filters: tuple[ColumnElement[bool], ...]
    label: str

    @property
    def position_column(self):
        return getattr(self.model, self.position_attr)


def link_scope(user_id: uuid.UUID) -> OrderScope:
    return OrderScope(Link, "order", (Link.user_id == user_id,), f"links:user={user_id}")


def notice_scope(event_id: uuid.UUID, user_id: uuid.UUID) -> OrderScope:
    return OrderScope(
        Notice,
        "sequence",
        (Notice.event_id == event_id, Notice.user_id == user_id),
        f"notices:event={event_id}",
    )


def document_scope(
    user_id: uuid.UUID,
    event_id: uuid.UUID | None = None,
    series_id: uuid.UUID | None = None,
) -> OrderScope:
    if (event_id is None) == (series_id is None):
        raise ValueError("Exactly one of event_id or series_id is required")
    if event_id is not None:
        return OrderScope(
            Document,
            "order",
            (Document.event_id == event_id, Document.user_id == user_id),
            f"documents:event={event_id}",
        )
    return OrderScope(
        Document,
        "order",
        (Document.series_id == series_id, Document.user_id == user_id),
        f"documents:series={series_id}",
    )


class OrderingGateway:
    """Applies position batches to one scope, all-or-nothing."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self, scope: OrderScope) -> list[Any]:
        """Rows of the scope in display order."""
        model = scope.model
        result = await self.db.execute(
            select(model)
            .where(*scope.filters)
            .order_by(scope.position_column, model.created_at, model.id)
        )
        return list(result.scalars().all())

    async def ordered_ids(self, scope: OrderScope) -> list[uuid.UUID]:
        return [row.id for row in await self.load(scope)]

    async def next_position(self, scope: OrderScope) -> int:
        """Position for a new item appended at the end of the scope."""
        result = await self.db.execute(
            select(func.count()).select_from(scope.model).where(*scope.filters)
        )
        return result.scalar() or 0

    async def commit_order(
        self, scope: OrderScope, updates: Sequence[PositionUpdate]
    ) -> list[Any]:
        """Write ``updates`` to the scope and return the updated rows.

        Rejects the whole batch if an id is outside the scope, appears twice,
        or if the resulting positions would not be exactly ``0..N-1``.
        Applying the same batch twice leaves the same state.
        """
        rows = await self.load(scope)
        by_id = {row.id: row for row in rows}

        invalid_ids = [update.id for update in updates if update.id not in by_id]
        if invalid_ids:
            logger.warning(
                "Rejected order for %s: %d ids outside scope", scope.label, len(invalid_ids)
            )
            raise OrderValidationError(
                "Some items are invalid or do not belong to the user",
                invalid_ids=invalid_ids,
            )

        seen: set[Any] = set()
        duplicates = []
        for update in updates:
            if update.id in seen:
                duplicates.append(update.id)
            seen.add(update.id)
        if duplicates:
            raise OrderValidationError("Duplicate items in order update", invalid_ids=duplicates)

        proposed = {row.id: getattr(row, scope.position_attr) for row in rows}
        for update in updates:
            proposed[update.id] = update.position

        if sorted(proposed.values()) != list(range(len(rows))):
            logger.warning("Rejected order for %s: positions not contiguous", scope.label)
            raise OrderValidationError(
                f"Positions must be unique and contiguous from 0 to {len(rows) - 1}"
            )

        for update in updates:
            setattr(by_id[update.id], scope.position_attr, update.position)

        await self.db.flush()
        logger.info("Committed %d position updates for %s", len(updates), scope.label)
        return [by_id[update.id] for update in updates]

    async def move_item(
        self, scope: OrderScope, item_id: uuid.UUID, target_index: int
    ) -> list[Any]:
        """Move one item to ``target_index`` and renumber the scope densely."""
        rows = await self.load(scope)
        stored = {row.id: getattr(row, scope.position_attr) for row in rows}
        if item_id not in stored:
            raise ScopeNotFoundError("Item not found")

        ids = [row.id for row in rows]
        result = reorder_engine.move_to(ids, item_id, target_index)
        updates = [
            PositionUpdate(row_id, index)
            for index, row_id in enumerate(result.sequence)
            if stored[row_id] != index
        ]
        if not updates:
            return []
        return await self.commit_order(scope, updates)

    async def close_gap(self, scope: OrderScope) -> None:
        """Renumber the scope densely, e.g. after a delete."""
        rows = await self.load(scope)
        updates = reorder_engine.compact(
            [row.id for row in rows],
            [getattr(row, scope.position_attr) for row in rows],
        )
        by_id = {row.id: row for row in rows}
        for update in updates:
            setattr(by_id[update.id], scope.position_attr, update.position)
        if updates:
            await self.db.flush()
