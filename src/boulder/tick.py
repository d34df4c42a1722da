"""Tick engine and fixed-timestep host loop."""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

import structlog

from .grid import GridState
from .input import InputTracker
from .maps import MapDescription
from .movement import apply_creature, apply_gravity, resolve_player_actions
from .rng import NumpyRandomSource, RandomSource
from .types import Action, GridPos

logger = structlog.get_logger()


def sweep_grid(grid: GridState, rng: RandomSource) -> int:
    """
    Apply gravity and creature behavior to every tile once.

    Positions are visited in increasing index order (bottom row first) and
    each sees the tile currently there, including anything moved in earlier
    in this sweep. Something that moves to a higher index is therefore
    handled again later in the same sweep, while a move to a lower index
    waits for the next tick.

    Returns:
        Number of objects that moved.
    """
    moved = 0
    for i in range(grid.size):
        pos = GridPos(i)
        tile = grid.get_tile(pos)
        if tile.can_fall:
            moved += apply_gravity(grid, pos, rng)
        elif tile.is_creature:
            moved += apply_creature(grid, pos, tile, rng)
    return moved


def run_tick(
    grid: GridState, actions: Sequence[Action], rng: RandomSource
) -> None:
    """
    Advance the grid by one tick.

    Player actions are resolved first, then the whole grid is swept once.
    """
    applied = resolve_player_actions(grid, actions)
    moved = sweep_grid(grid, rng)
    logger.debug(
        "tick_processed",
        actions=len(actions),
        player_action=str(applied) if applied else None,
        objects_moved=moved,
        diamond_count=grid.diamond_count,
    )


@dataclass
class TickConfig:
    """Configuration for tick loop timing."""

    tick_duration_ms: int = 125


class Session:
    """
    Owns the grid for one play session.

    Usage:
        session = Session(load_map(find_map("01")), rng=NumpyRandomSource(7))
        session.run_tick([Action(direction=Direction.LEFT)])
        session.grid.diamond_count
    """

    def __init__(
        self,
        description: MapDescription,
        rng: RandomSource | None = None,
        check_invariants: bool = False,
    ):
        self.description = description
        self.rng = rng or NumpyRandomSource()
        self.check_invariants = check_invariants
        self.grid = GridState.from_map(description)
        self.tick = 0
        self.started_at = time.monotonic()

    @property
    def elapsed_seconds(self) -> float:
        """Wall-clock seconds since the session started or last restarted."""
        return time.monotonic() - self.started_at

    def run_tick(self, actions: Sequence[Action] = ()) -> None:
        """Advance one tick.

        Raises:
            InvariantError: If invariant checking is enabled and the tick
                left the grid inconsistent.
        """
        previous_diamonds = self.grid.diamond_count
        run_tick(self.grid, actions, self.rng)
        if self.check_invariants:
            self.grid.check_invariants(previous_diamonds)
        self.tick += 1

    def restart(self) -> None:
        """Replace the grid with a fresh one built from the same map."""
        self.grid = GridState.from_map(self.description)
        self.tick = 0
        self.started_at = time.monotonic()
        logger.info("session_restarted")


# Type alias for tick callbacks
TickCallback = Callable[[Session], Awaitable[None]]


class TickLoop:
    """
    Async fixed-timestep loop driving a session.

    Each tick drains the input tracker, runs the engine once, then waits out
    the rest of the tick duration. Restart requests are applied between
    ticks.

    Usage:
        loop = TickLoop(session, tracker)
        tracker.handle_key(Button.LEFT, pressed=True)
        await loop.run()
    """

    def __init__(
        self,
        session: Session,
        input_tracker: InputTracker | None = None,
        config: TickConfig | None = None,
        on_tick_complete: TickCallback | None = None,
    ):
        self.session = session
        self.input_tracker = input_tracker or InputTracker()
        self.config = config or TickConfig()
        self.on_tick_complete = on_tick_complete

        self._running = False
        self._restart_requested = False
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        """Whether the tick loop is currently running."""
        return self._running

    def request_restart(self) -> None:
        """Restart the session before the next tick."""
        self._restart_requested = True

    async def run(self) -> None:
        """Run the tick loop until stopped."""
        self._running = True
        self._stop_event.clear()

        logger.info("tick_loop_started", tick_duration_ms=self.config.tick_duration_ms)

        try:
            while self._running:
                tick_start = time.time() * 1000

                if self._restart_requested:
                    self._restart_requested = False
                    self.input_tracker.clear()
                    self.session.restart()

                self.session.run_tick(self.input_tracker.pop_actions())

                if self.on_tick_complete:
                    await self.on_tick_complete(self.session)

                # Wait for remainder of tick duration
                elapsed = time.time() * 1000 - tick_start
                remaining = self.config.tick_duration_ms - elapsed
                if remaining > 0:
                    try:
                        await asyncio.wait_for(
                            self._stop_event.wait(), timeout=remaining / 1000
                        )
                    except asyncio.TimeoutError:
                        pass  # Normal - tick duration elapsed

        finally:
            self._running = False
            logger.info("tick_loop_stopped", tick=self.session.tick)

    def stop(self) -> None:
        """Signal the tick loop to stop."""
        self._running = False
        self._stop_event.set()


def run_ticks(
    session: Session,
    num_ticks: int,
    script: Sequence[Sequence[Action]] = (),
) -> None:
    """
    Run a fixed number of ticks without waiting between them.

    Args:
        session: Session to advance
        num_ticks: Number of ticks to run
        script: Actions per tick; ticks past the end of the script get none
    """
    for i in range(num_ticks):
        actions = script[i] if i < len(script) else ()
        session.run_tick(actions)
