"""Frame driver feeding input and gravity into the engine.

Input and gravity are two independent triggers.  The input side is an
explicit :class:`InputState` owned by the driver and written by whatever
translates key events; gravity is a fixed-period :class:`GravityTimer`.  Each
frame :class:`FrameDriver` makes at most one engine call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from .board import Board
from .config import GRAVITY_INTERVAL_MS


LOGGER = logging.getLogger(__name__)


class Key(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    ROTATE = "rotate"
    REPEAT = "repeat"


class Action(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_DOWN = "move_down"
    ROTATE = "rotate"
    TICK = "tick"


@dataclass
class InputState:
    """Pending input requests.

    Direction flags are raised on key press and dropped on key release.  A
    rotation is requested when the rotate key is released.  While ``repeat``
    is held, dispatching a movement keeps its flag raised so the move fires
    again next frame; otherwise every request is consumed by one dispatch.
    """

    left: bool = False
    right: bool = False
    down: bool = False
    rotate: bool = False
    repeat: bool = False

    def press(self, key: Key) -> None:
        if key is Key.LEFT:
            self.left = True
        elif key is Key.RIGHT:
            self.right = True
        elif key is Key.DOWN:
            self.down = True
        elif key is Key.REPEAT:
            self.repeat = True
        elif key is not Key.ROTATE:
            raise ValueError(f"Unknown key: {key!r}")

    def release(self, key: Key) -> None:
        if key is Key.LEFT:
            self.left = False
        elif key is Key.RIGHT:
            self.right = False
        elif key is Key.DOWN:
            self.down = False
        elif key is Key.ROTATE:
            self.rotate = True
        elif key is Key.REPEAT:
            self.repeat = False
        else:
            raise ValueError(f"Unknown key: {key!r}")

    def take(self) -> Optional[Action]:
        """Return the highest-priority pending action and consume it."""

        if self.left:
            self.left = self.repeat
            return Action.MOVE_LEFT
        if self.right:
            self.right = self.repeat
            return Action.MOVE_RIGHT
        if self.down:
            self.down = self.repeat
            return Action.MOVE_DOWN
        if self.rotate:
            self.rotate = False
            return Action.ROTATE
        return None

    def clear(self) -> None:
        self.left = self.right = self.down = self.rotate = self.repeat = False


class GravityTimer:
    """Accumulate frame time and report when a gravity tick is due."""

    def __init__(self, interval_ms: float = GRAVITY_INTERVAL_MS) -> None:
        if interval_ms <= 0:
            raise ValueError("Gravity interval must be positive")
        self.interval_ms = interval_ms
        self.elapsed_ms = 0.0

    @property
    def due(self) -> bool:
        return self.elapsed_ms >= self.interval_ms

    def advance(self, dt_ms: float) -> None:
        self.elapsed_ms += dt_ms

    def consume(self) -> bool:
        """Return ``True`` and restart the period if a tick is due."""

        if not self.due:
            return False
        self.elapsed_ms = 0.0
        return True

    def reset(self) -> None:
        self.elapsed_ms = 0.0


class FrameDriver:
    """Dispatch exactly one engine call per frame, if anything is pending.

    Pending input wins over gravity.  A due gravity tick that loses to input
    stays due and fires on the first frame without input.
    """

    def __init__(
        self,
        board: Board,
        *,
        inputs: Optional[InputState] = None,
        timer: Optional[GravityTimer] = None,
    ) -> None:
        self.board = board
        self.inputs = inputs or InputState()
        self.timer = timer or GravityTimer()
        self._handlers: Dict[Action, Callable[[], object]] = {
            Action.MOVE_LEFT: board.move_left,
            Action.MOVE_RIGHT: board.move_right,
            Action.MOVE_DOWN: board.move_down,
            Action.ROTATE: board.rotate,
            Action.TICK: board.tick,
        }

    def step(self, dt_ms: float) -> Optional[Action]:
        """Advance the gravity timer by ``dt_ms`` and dispatch one action."""

        self.timer.advance(dt_ms)
        action = self.inputs.take()
        if action is None and self.timer.consume():
            action = Action.TICK
        if action is not None:
            self._handlers[action]()
            LOGGER.debug("Dispatched %s", action.value)
        return action

    def reset(self) -> None:
        self.inputs.clear()
        self.timer.reset()
