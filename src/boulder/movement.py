"""Movement policies: player actions, falling objects, creatures."""

from typing import Sequence

import structlog

from .grid import GridState
from .rng import RandomSource
from .tiles import Tile, TileKind
from .types import Action, Direction, GridPos

logger = structlog.get_logger()


# RandomSource.pick(2) result when both roll sides are free
ROLL_LEFT = 0
ROLL_RIGHT = 1

# Candidate order for a blocked creature choosing a new heading
TURN_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)

# Creatures act on every third tick
CREATURE_PERIOD = 3


def resolve_player_actions(
    grid: GridState, actions: Sequence[Action]
) -> Action | None:
    """
    Apply the first player action that changes the grid.

    Actions are tried in order. Stepping onto empty, dirt or diamond moves the
    player; a rock with empty space behind it is pushed one cell and the
    player follows. Actions that would change nothing are skipped.

    Returns:
        The action that was applied, or None if the player did not move.
    """
    for action in actions:
        direction = action.direction
        player_pos = grid.player_pos
        dst_pos, dst = grid.get_tile_relative(player_pos, direction)

        # Counted on sight of the target, before the step check
        if dst.kind is TileKind.DIAMOND:
            grid.diamond_count += 1
            logger.debug(
                "diamond_collected",
                pos=grid.xy_of(dst_pos),
                diamond_count=grid.diamond_count,
            )

        if dst.can_be_stepped_on:
            grid.move_grid_object(player_pos, dst_pos)
            logger.debug(
                "player_moved",
                direction=direction.name,
                to_pos=grid.xy_of(dst_pos),
            )
            return action

        if dst.can_be_pushed:
            past_pos, past = grid.get_tile_relative(dst_pos, direction)
            if past.is_empty:
                grid.move_grid_object(dst_pos, past_pos)
                grid.move_grid_object(player_pos, dst_pos)
                logger.debug(
                    "rock_pushed",
                    direction=direction.name,
                    rock_pos=grid.xy_of(past_pos),
                )
                return action

    return None


def apply_gravity(grid: GridState, pos: GridPos, rng: RandomSource) -> bool:
    """
    Roll or drop the falling object at pos.

    A roll is tried first when resting on a rock, diamond or wall: a side is
    free when both the cell beside and the cell below that are empty. With
    both sides free the random source decides. Otherwise the object falls
    one cell if the cell below is empty.

    Returns:
        True if the object moved.
    """
    below_pos, below = grid.get_tile_relative(pos, Direction.DOWN)

    if below.can_be_rolled_on:
        left_pos, left = grid.get_tile_relative(pos, Direction.LEFT)
        right_pos, right = grid.get_tile_relative(pos, Direction.RIGHT)
        left_free = (
            left.is_empty
            and grid.get_tile_relative(left_pos, Direction.DOWN)[1].is_empty
        )
        right_free = (
            right.is_empty
            and grid.get_tile_relative(right_pos, Direction.DOWN)[1].is_empty
        )

        if left_free and right_free:
            dst_pos = left_pos if rng.pick(2) == ROLL_LEFT else right_pos
        elif left_free:
            dst_pos = left_pos
        elif right_free:
            dst_pos = right_pos
        else:
            dst_pos = None

        if dst_pos is not None:
            grid.move_grid_object(pos, dst_pos)
            return True

    if below.is_empty:
        grid.move_grid_object(pos, below_pos)
        return True

    return False


def apply_creature(
    grid: GridState, pos: GridPos, creature: Tile, rng: RandomSource
) -> bool:
    """
    Advance the creature at pos by one tick.

    Off-phase ticks only bump the counter. On the acting phase the creature
    keeps walking forward into empty space. Blocked by the player it waits
    without touching its counter. Blocked by anything else it turns to a
    random free non-reverse direction, then to the reverse, and otherwise
    waits, retrying every tick.

    Returns:
        True if the creature moved.
    """
    if creature.counter % CREATURE_PERIOD != CREATURE_PERIOD - 1:
        grid.set_tile(pos, creature.with_counter(creature.counter + 1))
        return False

    facing = creature.direction
    ahead_pos, ahead = grid.get_tile_relative(pos, facing)
    if ahead.is_empty:
        grid.move_grid_object(pos, ahead_pos)
        grid.set_tile(ahead_pos, Tile.creature(facing))
        return True

    if not ahead.can_be_bounced_on:
        return False

    candidates: list[tuple[Direction, GridPos]] = []
    for direction in TURN_ORDER:
        if direction is facing.reverse:
            continue
        target_pos, target = grid.get_tile_relative(pos, direction)
        if target.is_empty:
            candidates.append((direction, target_pos))

    if candidates:
        if len(candidates) == 1:
            new_direction, dst_pos = candidates[0]
        else:
            new_direction, dst_pos = candidates[rng.pick(len(candidates))]
    else:
        back_pos, back = grid.get_tile_relative(pos, facing.reverse)
        if not back.is_empty:
            return False
        new_direction, dst_pos = facing.reverse, back_pos

    grid.move_grid_object(pos, dst_pos)
    grid.set_tile(dst_pos, Tile.creature(new_direction))
    return True
