"""Simple pygame front-end for the engine.

This module is the thin shell around :class:`~tetris_engine.board.Board`: it
paints the board, the preview panel and the row-clear flash, shows the score
in the window caption, and turns key events into
:class:`~tetris_engine.driver.InputState` updates.  All game rules stay in the
engine; the frame loop hands one call per frame to
:class:`~tetris_engine.driver.FrameDriver`.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Dict, Optional

import pygame

from .board import Board
from .config import SPAWN_COLUMN
from .driver import FrameDriver, Key

# Size of a single board cell in pixels
CELL_SIZE = 30
# Size of a cell in the preview panel
PREVIEW_CELL_SIZE = 20
PREVIEW_WIDTH = 6 * PREVIEW_CELL_SIZE
# Frames per second to run the game loop at
FPS = 60
# Frames per on/off phase of the row-clear flash
FLASH_PERIOD = 5

BACKGROUND = pygame.Color("#000712")
GRID_LINES = pygame.Color("#0654df")
FLASH = pygame.Color("#ffffff")

KEY_BINDINGS: Dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.ROTATE,
    pygame.K_LSHIFT: Key.REPEAT,
}

LOGGER = logging.getLogger(__name__)


def board_size() -> tuple[int, int]:
    return Board.width * CELL_SIZE, Board.height * CELL_SIZE


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the background, the grid lines and every visible part."""

    width, height = board_size()
    screen.fill(BACKGROUND, pygame.Rect(0, 0, width, height))
    for row in range(board.height + 1):
        pygame.draw.line(screen, GRID_LINES, (0, row * CELL_SIZE), (width, row * CELL_SIZE))
    for col in range(board.width + 1):
        pygame.draw.line(screen, GRID_LINES, (col * CELL_SIZE, 0), (col * CELL_SIZE, height))
    for piece, part in board.visible_parts():
        rect = pygame.Rect(part.x * CELL_SIZE, part.y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(screen, pygame.Color(piece.color), rect)


def draw_preview(screen: pygame.Surface, board: Board) -> None:
    """Render the queued pieces stacked in the panel right of the board."""

    left, _ = board_size()
    screen.fill(BACKGROUND, pygame.Rect(left, 0, PREVIEW_WIDTH, board.height * CELL_SIZE))
    for slot, piece in enumerate(board.next_pieces):
        top = (slot * 3 + 1) * PREVIEW_CELL_SIZE
        for part in piece.parts:
            rect = pygame.Rect(
                left + (part.x - SPAWN_COLUMN + 1) * PREVIEW_CELL_SIZE,
                top + part.y * PREVIEW_CELL_SIZE,
                PREVIEW_CELL_SIZE,
                PREVIEW_CELL_SIZE,
            )
            pygame.draw.rect(screen, pygame.Color(piece.color), rect)


def draw_row_flash(screen: pygame.Surface, board: Board) -> None:
    """Flash the rows cleared most recently and count the animation down."""

    animation = board.row_clear_animation
    if not animation.active:
        return
    if (animation.remaining_ticks // FLASH_PERIOD) % 2 == 0:
        width, _ = board_size()
        for row in animation.rows:
            pygame.draw.rect(screen, FLASH, pygame.Rect(0, row * CELL_SIZE, width, CELL_SIZE))
    animation.advance()


def draw_frame(screen: pygame.Surface, board: Board) -> None:
    draw_board(screen, board)
    draw_row_flash(screen, board)
    draw_preview(screen, board)


def handle_event(event: pygame.event.Event, driver: FrameDriver) -> None:
    """Translate a key event into an input state update."""

    key = KEY_BINDINGS.get(getattr(event, "key", None))
    if key is None:
        return
    if event.type == pygame.KEYDOWN:
        driver.inputs.press(key)
    elif event.type == pygame.KEYUP:
        driver.inputs.release(key)


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(self, *, level: int = 1, seed: Optional[int] = None) -> None:
        self._running = False
        self._paused = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self.board = Board(level=level, seed=seed)
        self.driver = FrameDriver(self.board)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    def _restart(self) -> None:
        LOGGER.info("Game over with score %d. Resetting.", self.board.score)
        self.board.reset()
        self.driver.reset()

    async def _run_loop(self) -> None:
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        width, height = board_size()
        self._screen = pygame.display.set_mode((width + PREVIEW_WIDTH, height))
        self._clock = pygame.time.Clock()
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            dt = self._clock.tick(FPS) if self._clock else 0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif not self._paused:
                    handle_event(event, self.driver)

            if not self._paused:
                self.driver.step(dt)
                if self.board.game_over:
                    self._restart()

            if self._screen:
                draw_frame(self._screen, self.board)
                pygame.display.set_caption(
                    f"Tetris - {'Paused - ' if self._paused else ''}Score: {self.board.score}"
                )
                pygame.display.flip()

            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        self._paused = False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        self._paused = True
        LOGGER.info("Paused")

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        self._paused = False
        self.driver.reset()
        LOGGER.info("Resumed")

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    GameRunner().start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
