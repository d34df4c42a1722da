"""Tests for core types."""

import pytest
from pydantic import ValidationError

from boulder.types import (
    Action,
    Direction,
    GridPos,
    from_xy,
    offset,
    parse_actions,
    to_xy,
)


class TestDirection:
    """Tests for Direction enum."""

    def test_reverse(self):
        """Each direction reverses to its opposite."""
        assert Direction.UP.reverse is Direction.DOWN
        assert Direction.DOWN.reverse is Direction.UP
        assert Direction.LEFT.reverse is Direction.RIGHT
        assert Direction.RIGHT.reverse is Direction.LEFT

    def test_from_name_case_insensitive(self):
        assert Direction.from_name("left") is Direction.LEFT
        assert Direction.from_name("Up") is Direction.UP

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            Direction.from_name("north")


class TestGridPos:
    """Tests for linear index arithmetic."""

    def test_offset_moves_by_row_width(self):
        """Up and down move a whole row, left and right a single cell."""
        pos = from_xy(3, 2, width=10)
        assert offset(pos, Direction.UP, 10) == from_xy(3, 3, 10)
        assert offset(pos, Direction.DOWN, 10) == from_xy(3, 1, 10)
        assert offset(pos, Direction.LEFT, 10) == from_xy(2, 2, 10)
        assert offset(pos, Direction.RIGHT, 10) == from_xy(4, 2, 10)

    def test_xy_round_trip(self):
        assert to_xy(from_xy(7, 4, 9), 9) == (7, 4)

    def test_offset_does_not_clamp(self):
        """Arithmetic is unchecked: left of x=0 wraps into the previous row."""
        pos = from_xy(0, 1, width=5)
        assert offset(pos, Direction.LEFT, 5) == GridPos(4)


class TestAction:
    """Tests for Action."""

    def test_defaults(self):
        action = Action(direction=Direction.UP)
        assert action.fire is False

    def test_immutable(self):
        action = Action(direction=Direction.UP)
        with pytest.raises(ValidationError):
            action.direction = Direction.DOWN  # type: ignore

    def test_str(self):
        assert str(Action(direction=Direction.LEFT)) == "LEFT"
        assert str(Action(direction=Direction.LEFT, fire=True)) == "FIRE+LEFT"


class TestParseActions:
    """Tests for scripted action parsing."""

    def test_one_tick_per_character(self):
        ticks = parse_actions("UR.l")
        assert ticks == [
            [Action(direction=Direction.UP)],
            [Action(direction=Direction.RIGHT)],
            [],
            [Action(direction=Direction.LEFT)],
        ]

    def test_whitespace_ignored(self):
        assert len(parse_actions("U D\nL")) == 3

    def test_unknown_code(self):
        with pytest.raises(ValueError, match="Unknown action code"):
            parse_actions("UX")
