"""Grid state management."""

from typing import TYPE_CHECKING, Iterator, Sequence

import numpy as np
import structlog
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr

from .exceptions import InvariantError, MapBorderError, MapFormatError
from .tiles import EMPTY, Tile, TileKind
from .types import Direction, GridPos, from_xy, offset, to_xy

if TYPE_CHECKING:
    from .maps import MapDescription

logger = structlog.get_logger()

# Points awarded per collected diamond
SCORE_PER_DIAMOND = 5


def border_positions(width: int, height: int) -> Iterator[GridPos]:
    """Yield every index on the outer border of a width x height grid."""
    for x in range(width):
        yield from_xy(x, 0, width)
        if height > 1:
            yield from_xy(x, height - 1, width)
    for y in range(1, height - 1):
        yield from_xy(0, y, width)
        if width > 1:
            yield from_xy(width - 1, y, width)


def validate_border(tiles: Sequence[Tile], width: int, height: int) -> None:
    """Check that the grid border is fully enclosed by Steel or Wall.

    This is what makes unchecked directional arithmetic safe during ticks.

    Raises:
        MapBorderError: On the first border tile that is not impassable.
    """
    for pos in border_positions(width, height):
        tile = tiles[pos]
        if not tile.is_impassable:
            x, y = to_xy(pos, width)
            raise MapBorderError(
                f"Border tile at ({x}, {y}) is {tile}, expected steel or wall"
            )


class GridState(BaseModel):
    """
    Mutable grid state container.

    Tiles live in a flat list addressed by linear index, row 0 at the bottom.
    player_pos caches the index of the single Player tile.

    Grids are only built through from_map, which validates the map first.
    Calling GridState(...) directly raises TypeError.
    """

    width: int
    height: int
    diamond_count: int = 0

    _tiles: list[Tile] = PrivateAttr(default_factory=list)
    _player_pos: GridPos = PrivateAttr(default=GridPos(0))

    def __init__(self, **data):
        raise TypeError("GridState must be built with GridState.from_map()")

    @classmethod
    def from_map(cls, description: "MapDescription") -> "GridState":
        """Build a grid from a parsed map.

        Raises:
            MapFormatError: If the start position does not hold the player.
            MapBorderError: If the border is not fully impassable.
        """
        tiles = list(description.tiles)
        if len(tiles) != description.width * description.height:
            raise MapFormatError(
                f"Map has {len(tiles)} tiles, expected "
                f"{description.width}x{description.height}"
            )
        if not tiles[description.start_pos].is_player:
            raise MapFormatError(
                f"Start position {description.start_pos} does not hold the player"
            )
        validate_border(tiles, description.width, description.height)

        grid = cls.model_construct(
            width=description.width, height=description.height, diamond_count=0
        )
        grid._tiles = tiles
        grid._player_pos = GridPos(description.start_pos)
        logger.debug(
            "grid_created",
            width=grid.width,
            height=grid.height,
            player_pos=grid.xy_of(grid.player_pos),
        )
        return grid

    # --- Tile operations ---

    @property
    def player_pos(self) -> GridPos:
        """Index of the player tile."""
        return self._player_pos

    @property
    def size(self) -> int:
        """Number of tiles in the grid."""
        return self.width * self.height

    def get_tile(self, pos: GridPos) -> Tile:
        """Get tile at pos."""
        return self._tiles[pos]

    def set_tile(self, pos: GridPos, tile: Tile) -> None:
        """Set tile at pos. No validation, callers keep the invariants."""
        self._tiles[pos] = tile

    def get_tile_relative(
        self, pos: GridPos, direction: Direction
    ) -> tuple[GridPos, Tile]:
        """Return the neighbor index in direction and its current tile."""
        neighbor = offset(pos, direction, self.width)
        return neighbor, self._tiles[neighbor]

    def move_grid_object(self, src: GridPos, dst: GridPos) -> None:
        """Move the tile at src to dst, leaving src empty.

        Whatever was at dst is destroyed.

        Raises:
            InvariantError: If src is the player position but holds no player.
        """
        tile = self._tiles[src]
        self._tiles[dst] = tile
        self._tiles[src] = EMPTY
        if src == self._player_pos:
            if not tile.is_player:
                raise InvariantError(
                    f"Tile at player position {self.xy_of(src)} is {tile}"
                )
            self._player_pos = dst

    # --- Coordinates ---

    def pos_of(self, x: int, y: int) -> GridPos:
        """Linear index of (x, y)."""
        return from_xy(x, y, self.width)

    def xy_of(self, pos: GridPos) -> tuple[int, int]:
        """(x, y) of a linear index."""
        return to_xy(pos, self.width)

    # --- Queries ---

    @property
    def score(self) -> int:
        """Points earned so far."""
        return self.diamond_count * SCORE_PER_DIAMOND

    def tiles(self) -> Sequence[Tile]:
        """Return read-only view of all tiles in index order."""
        return tuple(self._tiles)

    def count(self, kind: TileKind) -> int:
        """Number of tiles of the given kind."""
        return sum(1 for tile in self._tiles if tile.kind is kind)

    def kind_array(self) -> NDArray[np.uint8]:
        """Tile kind codes as a (height, width) array, row 0 at the bottom."""
        codes = np.fromiter(
            (tile.kind.code for tile in self._tiles),
            dtype=np.uint8,
            count=len(self._tiles),
        )
        return codes.reshape(self.height, self.width)

    def check_invariants(self, previous_diamond_count: int | None = None) -> None:
        """Verify the grid invariants.

        Raises:
            InvariantError: If the player tile is missing, duplicated, or not
                at player_pos, the border was breached, or the diamond count
                went down.
        """
        players = [i for i, tile in enumerate(self._tiles) if tile.is_player]
        if players != [self._player_pos]:
            raise InvariantError(
                f"Expected single player at {self.xy_of(self._player_pos)}, "
                f"found {[self.xy_of(GridPos(i)) for i in players]}"
            )
        try:
            validate_border(self._tiles, self.width, self.height)
        except MapBorderError as e:
            raise InvariantError(str(e)) from e
        if (
            previous_diamond_count is not None
            and self.diamond_count < previous_diamond_count
        ):
            raise InvariantError(
                f"Diamond count dropped from {previous_diamond_count} "
                f"to {self.diamond_count}"
            )
