"""Tests for the pure reorder engine."""

import itertools

import pytest

from app.services.reorder_engine import (
    GROUP_PLACEHOLDER,
    Direction,
    MoveStatus,
    PositionUpdate,
    SocialGroup,
    collapse_group,
    compact,
    expand_group,
    move_to,
    position_updates,
    step,
)


def as_positions(updates):
    return {update.id: update.position for update in updates}


class TestMoveTo:
    def test_move_to_front(self):
        result = move_to(["A", "B", "C", "D"], "C", 0)

        assert result.status == MoveStatus.MOVED
        assert result.sequence == ("C", "A", "B", "D")
        assert as_positions(result.updates) == {"C": 0, "A": 1, "B": 2}

    def test_full_diff_lists_every_item(self):
        result = move_to(["A", "B", "C", "D"], "C", 0, minimal=False)

        assert as_positions(result.updates) == {"C": 0, "A": 1, "B": 2, "D": 3}

    def test_move_to_end(self):
        result = move_to(["A", "B", "C"], "A", 2)

        assert result.sequence == ("B", "C", "A")

    def test_target_is_clamped(self):
        assert move_to(["A", "B", "C"], "A", 99).sequence == ("B", "C", "A")
        assert move_to(["A", "B", "C"], "C", -5).sequence == ("C", "A", "B")

    def test_same_position_is_unchanged(self):
        result = move_to(["A", "B", "C"], "B", 1)

        assert result.status == MoveStatus.UNCHANGED
        assert not result.changed
        assert result.updates == ()

    def test_unknown_item(self):
        result = move_to(["A", "B"], "Z", 0)

        assert result.status == MoveStatus.NOT_FOUND
        assert result.sequence == ("A", "B")

    @pytest.mark.parametrize("sequence", [[], ["A"]])
    def test_short_lists_never_move(self, sequence):
        result = move_to(sequence, "A", 0)

        assert result.status == MoveStatus.EMPTY
        assert result.updates == ()

    def test_all_moves_keep_ids_dense_and_stable(self):
        sequence = ["A", "B", "C", "D", "E"]
        for item_id, target in itertools.product(sequence, range(len(sequence))):
            result = move_to(sequence, item_id, target)
            after = list(result.sequence)

            assert sorted(after) == sorted(sequence)
            assert after.index(item_id) == target

            # Everything except the moved item keeps its relative order
            others_before = [x for x in sequence if x != item_id]
            others_after = [x for x in after if x != item_id]
            assert others_before == others_after

            positions = {x: i for i, x in enumerate(sequence)}
            positions.update(as_positions(result.updates))
            assert sorted(positions.values()) == list(range(len(sequence)))


class TestStep:
    def test_up_on_first_is_boundary(self):
        result = step(["A", "B", "C"], "A", Direction.UP)

        assert result.is_boundary
        assert result.sequence == ("A", "B", "C")
        assert result.updates == ()

    def test_down_on_last_is_boundary(self):
        result = step(["A", "B", "C"], "C", "down")

        assert result.is_boundary

    def test_down_swaps_with_next(self):
        result = step(["A", "B", "C"], "B", Direction.DOWN)

        assert result.sequence == ("A", "C", "B")
        assert as_positions(result.updates) == {"C": 1, "B": 2}

    def test_up_swaps_with_previous(self):
        result = step(["A", "B", "C"], "C", Direction.UP)

        assert result.sequence == ("A", "C", "B")

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            step(["A", "B"], "A", "sideways")


class TestSocialGroup:
    group = SocialGroup(members={"fb", "tw"})

    def test_collapse_takes_first_member_slot(self):
        slots, members = collapse_group(["L1", "fb", "L2", "tw"], self.group)

        assert slots == ["L1", GROUP_PLACEHOLDER, "L2"]
        assert members == ["fb", "tw"]

    def test_expand_is_inverse_for_contiguous_groups(self):
        sequence = ["L1", "fb", "tw", "L2"]
        slots, members = collapse_group(sequence, self.group)

        assert expand_group(slots, members, self.group) == sequence

    def test_group_moves_as_one_slot(self):
        result = move_to(["L1", "fb", "tw", "L2"], GROUP_PLACEHOLDER, 2, group=self.group)

        assert result.sequence == ("L1", "L2", "fb", "tw")
        assert as_positions(result.updates) == {"L2": 1, "fb": 2, "tw": 3}

    def test_link_moves_past_whole_group(self):
        result = step(["L1", "fb", "tw", "L2"], "L1", Direction.DOWN, group=self.group)

        assert result.sequence == ("fb", "tw", "L1", "L2")

    def test_group_boundary_counts_slots(self):
        result = step(["L1", "fb", "tw"], GROUP_PLACEHOLDER, Direction.DOWN, group=self.group)

        assert result.is_boundary

    def test_member_id_is_not_a_slot(self):
        result = move_to(["L1", "fb", "tw"], "fb", 0, group=self.group)

        assert result.status == MoveStatus.NOT_FOUND


def test_position_updates_minimal():
    updates = position_updates(["A", "B", "C"], ["B", "A", "C"])

    assert updates == [PositionUpdate("B", 0), PositionUpdate("A", 1)]


def test_compact_closes_gaps():
    updates = compact(["A", "C", "D"], [0, 2, 3])

    assert updates == [PositionUpdate("C", 1), PositionUpdate("D", 2)]


def test_compact_dense_sequence_needs_nothing():
    assert compact(["A", "B"], [0, 1]) == []
