from __future__ import annotations

import random

import pytest

from formstudio.geometry.mapper import ContainerBounds
from formstudio.model.field import FieldPosition, FieldType
from formstudio.state.drag import (
    DragCreateController,
    DragIdle,
    DragMoveController,
    Dragging,
    MoveIdle,
    Moving,
)
from formstudio.state.selection import Selection
from formstudio.state.store import FieldStore

BOUNDS = ContainerBounds(left=20, top=10, width=600, height=800)


@pytest.fixture
def store() -> FieldStore:
    return FieldStore()


@pytest.fixture
def selection() -> Selection:
    return Selection()


def test_drop_inside_container_creates_and_selects(store, selection):
    controller = DragCreateController(store, selection)
    controller.begin(FieldType.TEXT)
    assert controller.state == Dragging(FieldType.TEXT)

    created = controller.drop(320, 410, BOUNDS, page=2)

    assert controller.state == DragIdle()
    assert created.page == 2
    assert created.position == FieldPosition(0.5, 0.5)
    assert created.value == ""
    assert selection.selected_id == created.id


def test_drop_outside_container_creates_nothing(store, selection):
    controller = DragCreateController(store, selection)
    controller.begin(FieldType.IMAGE)
    assert controller.drop(5, 5, BOUNDS, page=1) is None
    assert controller.state == DragIdle()
    assert len(store) == 0


def test_drop_before_layout_creates_nothing(store, selection):
    controller = DragCreateController(store, selection)
    controller.begin(FieldType.IMAGE)
    assert controller.drop(0, 0, ContainerBounds(0, 0, 0, 0), page=1) is None
    assert len(store) == 0


def test_cancelled_drag_returns_to_idle(store, selection):
    controller = DragCreateController(store, selection)
    controller.begin(FieldType.SIGNATURE)
    controller.cancel()
    assert controller.state == DragIdle()
    assert controller.drop(320, 410, BOUNDS, page=1) is None
    assert len(store) == 0


def test_second_begin_keeps_active_gesture(store, selection):
    controller = DragCreateController(store, selection)
    controller.begin(FieldType.TEXT)
    controller.begin(FieldType.IMAGE)
    assert controller.active_type is FieldType.TEXT


def test_press_selects_and_starts_moving(store, selection):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    controller = DragMoveController(store, selection)
    controller.press(created.id)
    assert controller.state == Moving(created.id)
    assert selection.selected_id == created.id


def test_press_on_unknown_field_stays_idle(store, selection):
    controller = DragMoveController(store, selection)
    controller.press(42)
    assert controller.state == MoveIdle()
    assert selection.selected_id is None


def test_moves_are_ignored_when_idle(store, selection):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    controller = DragMoveController(store, selection)
    assert controller.pointer_move(20, 10, BOUNDS) is None
    assert store.get(created.id).position == FieldPosition(0.5, 0.5)


def test_any_pointer_path_keeps_position_in_range(store, selection):
    created = store.create(FieldType.CHECKBOX, 1, FieldPosition(0.5, 0.5))
    controller = DragMoveController(store, selection)
    controller.press(created.id)

    rng = random.Random(1234)
    for _ in range(500):
        x = rng.uniform(-2000, 2000)
        y = rng.uniform(-2000, 2000)
        moved = controller.pointer_move(x, y, BOUNDS)
        assert moved is not None
        assert moved.position.is_in_range()
        assert (moved.width, moved.height) == (30, 30)


def test_excursion_outside_container_pins_to_edge(store, selection):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    controller = DragMoveController(store, selection)
    controller.press(created.id)
    moved = controller.pointer_move(10_000, -10_000, BOUNDS)
    assert moved.position == FieldPosition(1.0, 0.0)


def test_release_always_ends_the_drag(store, selection):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    controller = DragMoveController(store, selection)
    controller.press(created.id)
    controller.release()
    assert controller.state == MoveIdle()
    assert controller.pointer_move(320, 410, BOUNDS) is None


def test_field_deleted_mid_drag_ends_the_drag(store, selection):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    controller = DragMoveController(store, selection)
    controller.press(created.id)
    store.delete(created.id)
    assert controller.pointer_move(320, 410, BOUNDS) is None
    assert controller.state == MoveIdle()
