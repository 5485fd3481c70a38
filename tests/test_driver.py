from __future__ import annotations

import types
from typing import List, Tuple

import pytest

from tetris_engine.board import Board
from tetris_engine.driver import Action, FrameDriver, GravityTimer, InputState, Key


def _recording_board() -> Tuple[types.SimpleNamespace, List[str]]:
    calls: List[str] = []
    board = types.SimpleNamespace(
        move_left=lambda: calls.append("left"),
        move_right=lambda: calls.append("right"),
        move_down=lambda: calls.append("down"),
        rotate=lambda: calls.append("rotate"),
        tick=lambda: calls.append("tick"),
    )
    return board, calls


def test_press_is_consumed_by_one_dispatch() -> None:
    inputs = InputState()
    inputs.press(Key.LEFT)
    assert inputs.take() is Action.MOVE_LEFT
    assert inputs.take() is None


def test_repeat_keeps_movement_pending_until_release() -> None:
    inputs = InputState()
    inputs.press(Key.REPEAT)
    inputs.press(Key.DOWN)
    assert inputs.take() is Action.MOVE_DOWN
    assert inputs.take() is Action.MOVE_DOWN
    inputs.release(Key.DOWN)
    assert inputs.take() is None


def test_rotation_fires_on_release_only() -> None:
    inputs = InputState()
    inputs.press(Key.ROTATE)
    assert inputs.take() is None
    inputs.release(Key.ROTATE)
    assert inputs.take() is Action.ROTATE
    assert inputs.take() is None


def test_priority_order() -> None:
    inputs = InputState(left=True, right=True, down=True, rotate=True)
    assert [inputs.take() for _ in range(5)] == [
        Action.MOVE_LEFT,
        Action.MOVE_RIGHT,
        Action.MOVE_DOWN,
        Action.ROTATE,
        None,
    ]


def test_unknown_key_rejected() -> None:
    inputs = InputState()
    with pytest.raises(ValueError):
        inputs.press("jump")
    with pytest.raises(ValueError):
        inputs.release("jump")


def test_gravity_timer_fires_once_per_interval() -> None:
    timer = GravityTimer(interval_ms=1000)
    timer.advance(999)
    assert not timer.consume()
    timer.advance(1)
    assert timer.consume()
    assert not timer.consume()
    with pytest.raises(ValueError):
        GravityTimer(interval_ms=0)


def test_driver_ticks_on_gravity_cadence() -> None:
    board, calls = _recording_board()
    driver = FrameDriver(board, timer=GravityTimer(interval_ms=100))
    for _ in range(10):
        driver.step(25)
    assert calls == ["tick", "tick"]


def test_input_wins_and_gravity_waits_for_a_free_frame() -> None:
    board, calls = _recording_board()
    driver = FrameDriver(board, timer=GravityTimer(interval_ms=100))
    driver.inputs.press(Key.LEFT)
    assert driver.step(100) is Action.MOVE_LEFT
    assert driver.step(0) is Action.TICK
    assert driver.step(0) is None
    assert calls == ["left", "tick"]


def test_reset_drops_pending_input_and_time() -> None:
    board, calls = _recording_board()
    driver = FrameDriver(board)
    driver.inputs.press(Key.RIGHT)
    driver.timer.advance(5000)
    driver.reset()
    assert driver.step(0) is None
    assert calls == []


def test_driver_runs_a_real_board() -> None:
    board = Board(seed=0)
    driver = FrameDriver(board)
    assert driver.step(1000) is Action.TICK
    assert board.active_piece is not None
    before = board.active.cells()
    driver.inputs.press(Key.RIGHT)
    driver.step(16)
    assert board.active.cells() == [(x + 1, y) for x, y in before]
