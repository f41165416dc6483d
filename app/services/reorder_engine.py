"""Pure reordering of ordered collections (links, notices, documents).

Every function here works on an in-memory sequence of item ids and returns
a new sequence; nothing is persisted. Positions are always the zero-based
index of an item in the resulting sequence.

A :class:`SocialGroup` makes a set of member ids behave as a single slot in
the parent list: the members move together and keep their internal order.
"""

import enum
from collections.abc import Collection, Hashable, Sequence
from dataclasses import dataclass, field

GROUP_PLACEHOLDER = "social-media-group"


class Direction(str, enum.Enum):
    """Direction of a discrete up/down nudge."""

    UP = "up"
    DOWN = "down"


class MoveStatus(str, enum.Enum):
    """Outcome of a move. Only ``MOVED`` produces updates."""

    MOVED = "moved"
    UNCHANGED = "unchanged"
    BOUNDARY = "boundary"
    NOT_FOUND = "not_found"
    EMPTY = "empty"


@dataclass(frozen=True)
class PositionUpdate:
    """A single ``(id, new position)`` write."""

    id: Hashable
    position: int


@dataclass(frozen=True)
class SocialGroup:
    """Member ids that move as one slot, addressed by ``placeholder``."""

    members: Collection[Hashable]
    placeholder: Hashable = GROUP_PLACEHOLDER


@dataclass(frozen=True)
class ReorderResult:
    """New sequence plus the position writes needed to persist it."""

    sequence: tuple[Hashable, ...]
    updates: tuple[PositionUpdate, ...] = field(default_factory=tuple)
    status: MoveStatus = MoveStatus.MOVED

    @property
    def changed(self) -> bool:
        return self.status == MoveStatus.MOVED

    @property
    def is_boundary(self) -> bool:
        return self.status == MoveStatus.BOUNDARY


def _unchanged(sequence: Sequence[Hashable], status: MoveStatus) -> ReorderResult:
    return ReorderResult(sequence=tuple(sequence), updates=(), status=status)


def collapse_group(
    sequence: Sequence[Hashable], group: SocialGroup
) -> tuple[list[Hashable], list[Hashable]]:
    """Replace the group's members with a single placeholder slot.

    The placeholder takes the slot of the first member found. Returns the
    slot list and the members in their current internal order.
    """
    members = set(group.members)
    slots: list[Hashable] = []
    ordered_members: list[Hashable] = []
    for item_id in sequence:
        if item_id in members:
            if not ordered_members:
                slots.append(group.placeholder)
            ordered_members.append(item_id)
        else:
            slots.append(item_id)
    return slots, ordered_members


def expand_group(
    slots: Sequence[Hashable], members: Sequence[Hashable], group: SocialGroup
) -> list[Hashable]:
    """Inverse of :func:`collapse_group`."""
    expanded: list[Hashable] = []
    for slot in slots:
        if slot == group.placeholder:
            expanded.extend(members)
        else:
            expanded.append(slot)
    return expanded


def position_updates(
    before: Sequence[Hashable], after: Sequence[Hashable], *, minimal: bool = True
) -> list[PositionUpdate]:
    """Position writes that turn ``before`` into ``after``.

    With ``minimal`` only items whose index changed are returned, otherwise
    every item of ``after`` is listed.
    """
    previous = {item_id: index for index, item_id in enumerate(before)}
    return [
        PositionUpdate(item_id, index)
        for index, item_id in enumerate(after)
        if not minimal or previous.get(item_id) != index
    ]


def compact(sequence: Sequence[Hashable], positions: Sequence[int]) -> list[PositionUpdate]:
    """Dense renumbering for items whose stored positions have gaps.

    ``sequence`` must already be sorted by its stored ``positions``.
    """
    return [
        PositionUpdate(item_id, index)
        for index, (item_id, current) in enumerate(zip(sequence, positions))
        if current != index
    ]


def _reposition(slots: list[Hashable], current: int, target: int) -> list[Hashable]:
    moved = slots.pop(current)
    target = max(0, min(target, len(slots)))
    slots.insert(target, moved)
    return slots


def move_to(
    sequence: Sequence[Hashable],
    item_id: Hashable,
    target_index: int,
    *,
    group: SocialGroup | None = None,
    minimal: bool = True,
) -> ReorderResult:
    """Drag-and-drop move: take ``item_id`` out and reinsert it at ``target_index``.

    ``target_index`` is clamped into range. When ``group`` is given, indexes
    count slots (the whole group is one slot) and ``item_id`` may be the
    group placeholder.
    """
    if len(sequence) <= 1:
        return _unchanged(sequence, MoveStatus.EMPTY)

    if group is not None:
        slots, members = collapse_group(sequence, group)
    else:
        slots, members = list(sequence), []

    try:
        current = slots.index(item_id)
    except ValueError:
        return _unchanged(sequence, MoveStatus.NOT_FOUND)

    slots = _reposition(slots, current, target_index)
    after = expand_group(slots, members, group) if group is not None else slots

    if list(after) == list(sequence):
        return _unchanged(sequence, MoveStatus.UNCHANGED)

    return ReorderResult(
        sequence=tuple(after),
        updates=tuple(position_updates(sequence, after, minimal=minimal)),
        status=MoveStatus.MOVED,
    )


def step(
    sequence: Sequence[Hashable],
    item_id: Hashable,
    direction: Direction | str,
    *,
    group: SocialGroup | None = None,
    minimal: bool = True,
) -> ReorderResult:
    """Swap ``item_id`` with its neighbour; a no-op at either end."""
    direction = Direction(direction)
    if len(sequence) <= 1:
        return _unchanged(sequence, MoveStatus.EMPTY)

    slots = collapse_group(sequence, group)[0] if group is not None else list(sequence)
    try:
        current = slots.index(item_id)
    except ValueError:
        return _unchanged(sequence, MoveStatus.NOT_FOUND)

    if direction == Direction.UP and current == 0:
        return _unchanged(sequence, MoveStatus.BOUNDARY)
    if direction == Direction.DOWN and current == len(slots) - 1:
        return _unchanged(sequence, MoveStatus.BOUNDARY)

    target = current - 1 if direction == Direction.UP else current + 1
    return move_to(sequence, item_id, target, group=group, minimal=minimal)
