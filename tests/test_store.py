from __future__ import annotations

import pytest

from formstudio.model.errors import InvalidFieldValue
from formstudio.model.field import FieldPosition, FieldType
from formstudio.state.selection import Selection
from formstudio.state.store import FieldStore


@pytest.fixture
def store() -> FieldStore:
    return FieldStore()


def test_create_assigns_unique_increasing_ids(store):
    first = store.create(FieldType.TEXT, 1, FieldPosition(0.1, 0.1))
    second = store.create(FieldType.TEXT, 1, FieldPosition(0.2, 0.2))
    store.delete(first.id)
    third = store.create(FieldType.TEXT, 1, FieldPosition(0.3, 0.3))
    assert first.id < second.id < third.id


def test_ids_not_reused_after_clear(store):
    first = store.create(FieldType.TEXT, 1, FieldPosition(0.1, 0.1))
    store.clear()
    assert store.create(FieldType.TEXT, 1, FieldPosition(0.1, 0.1)).id != first.id


def test_checkbox_defaults(store):
    created = store.create(FieldType.CHECKBOX, 1, FieldPosition(0.5, 0.5))
    assert (created.width, created.height, created.value) == (30, 30, False)


def test_create_clamps_position(store):
    created = store.create(FieldType.IMAGE, 1, FieldPosition(1.2, -0.3))
    assert created.position == FieldPosition(1.0, 0.0)


@pytest.mark.parametrize(("page", "page_count"), [(0, None), (-1, 3), (4, 3)])
def test_create_rejects_out_of_range_page(store, page, page_count):
    with pytest.raises(ValueError):
        store.create(FieldType.TEXT, page, FieldPosition(0.5, 0.5), page_count=page_count)
    assert len(store) == 0


def test_update_changes_only_value(store):
    created = store.create(FieldType.TEXT, 2, FieldPosition(0.4, 0.6))
    updated = store.update(created.id, "hello")
    assert updated.value == "hello"
    assert (updated.page, updated.position, updated.width, updated.height) == (
        2,
        FieldPosition(0.4, 0.6),
        150,
        40,
    )


def test_update_rejects_wrong_representation(store):
    created = store.create(FieldType.CHECKBOX, 1, FieldPosition(0.5, 0.5))
    with pytest.raises(InvalidFieldValue):
        store.update(created.id, "checked")
    assert store.get(created.id).value is False


def test_update_and_move_unknown_id_are_noops(store):
    store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    before = list(store)
    assert store.update(999, "x") is None
    assert store.move(999, FieldPosition(0.1, 0.1)) is None
    assert list(store) == before


def test_move_clamps_and_keeps_value(store):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    store.update(created.id, "keep me")
    moved = store.move(created.id, FieldPosition(2.0, -1.0))
    assert moved.position == FieldPosition(1.0, 0.0)
    assert moved.value == "keep me"


def test_store_order_and_page_filter(store):
    a = store.create(FieldType.TEXT, 1, FieldPosition(0.1, 0.1))
    b = store.create(FieldType.DATE, 2, FieldPosition(0.1, 0.1))
    c = store.create(FieldType.CHECKBOX, 1, FieldPosition(0.1, 0.1))
    assert [item.id for item in store] == [a.id, b.id, c.id]
    assert [item.id for item in store.on_page(1)] == [a.id, c.id]


def test_delete(store):
    created = store.create(FieldType.TEXT, 1, FieldPosition(0.5, 0.5))
    assert store.delete(created.id)
    assert not store.delete(created.id)
    assert created.id not in store


def test_selection_forget_only_clears_matching_id():
    selection = Selection()
    selection.select(3)
    selection.forget(4)
    assert selection.selected_id == 3
    selection.forget(3)
    assert selection.selected_id is None
