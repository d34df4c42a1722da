"""Key state tracking that turns key events into per-tick actions."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from .types import Action, Direction


class Button(str, Enum):
    """Buttons the game reacts to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    FIRE = "fire"

    @property
    def direction(self) -> Direction | None:
        """Movement direction, or None for non-movement buttons."""
        return _BUTTON_DIRECTIONS.get(self)


_BUTTON_DIRECTIONS: dict[Button, Direction] = {
    Button.UP: Direction.UP,
    Button.DOWN: Direction.DOWN,
    Button.LEFT: Direction.LEFT,
    Button.RIGHT: Direction.RIGHT,
}

# Held movement keys offered to the engine each tick
HELD_MOVES_PER_TICK = 2


@dataclass
class InputTracker:
    """
    Tracks held buttons and freshly pressed moves between ticks.

    Every fresh press of a move button queues one pending action, so a quick
    tap between two ticks still moves the player. Held move buttons are kept
    most-recent-first and offered again on every tick.
    """

    actions_pending: deque[Action] = field(default_factory=deque)
    keys_down: set[Button] = field(default_factory=set)
    movements_down: deque[Direction] = field(default_factory=deque)

    def handle_key(self, button: Button, pressed: bool) -> None:
        """Record a press or release of button.

        Repeated presses of a held button and releases of a button that is
        not held are ignored.
        """
        held = button in self.keys_down
        if held == pressed:
            return

        direction = button.direction
        if pressed:
            self.keys_down.add(button)
            if direction is not None:
                self.movements_down.appendleft(direction)
                self.actions_pending.append(
                    Action(direction=direction, fire=Button.FIRE in self.keys_down)
                )
        else:
            self.keys_down.discard(button)
            if direction is not None:
                self.movements_down = deque(
                    d for d in self.movements_down if d is not direction
                )

    def pop_actions(self) -> list[Action]:
        """Return this tick's actions in priority order.

        The oldest pending press comes first, followed by the most recently
        pressed held movements.
        """
        actions: list[Action] = []
        if self.actions_pending:
            actions.append(self.actions_pending.popleft())
        fire = Button.FIRE in self.keys_down
        for direction in list(self.movements_down)[:HELD_MOVES_PER_TICK]:
            actions.append(Action(direction=direction, fire=fire))
        return actions

    def clear(self) -> None:
        """Forget all held and pending input."""
        self.actions_pending.clear()
        self.keys_down.clear()
        self.movements_down.clear()
