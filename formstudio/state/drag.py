"""Drag-to-create and drag-to-move state machines.

Both controllers are driven by discrete events and know nothing about Qt's
event dispatch; the canvas translates widget events into these calls.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Union

from formstudio.geometry.mapper import ContainerBounds, to_fraction
from formstudio.model.field import Field, FieldType
from formstudio.state.selection import Selection
from formstudio.state.store import FieldStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DragIdle:
    pass


@dataclass(frozen=True, slots=True)
class Dragging:
    field_type: FieldType


DragCreateState = Union[DragIdle, Dragging]


@dataclass(frozen=True, slots=True)
class MoveIdle:
    pass


@dataclass(frozen=True, slots=True)
class Moving:
    field_id: int


DragMoveState = Union[MoveIdle, Moving]


class DragCreateController:
    def __init__(self, store: FieldStore, selection: Selection) -> None:
        self._store = store
        self._selection = selection
        self.state: DragCreateState = DragIdle()

    @property
    def active_type(self) -> FieldType | None:
        return self.state.field_type if isinstance(self.state, Dragging) else None

    def begin(self, field_type: FieldType) -> None:
        if isinstance(self.state, Dragging):
            return
        self.state = Dragging(FieldType(field_type))

    def drop(
        self,
        client_x: float,
        client_y: float,
        bounds: ContainerBounds,
        page: int,
        page_count: int | None = None,
    ) -> Field | None:
        """Finish the gesture; creates a field only for a drop inside a measured container."""
        state = self.state
        self.state = DragIdle()
        if not isinstance(state, Dragging):
            return None
        if not bounds.is_laid_out or not bounds.contains(client_x, client_y):
            logger.debug("Ignored %s drop outside the page", state.field_type.value)
            return None

        position = to_fraction(client_x, client_y, bounds)
        if position is None:
            return None
        created = self._store.create(state.field_type, page, position, page_count=page_count)
        self._selection.select(created.id)
        return created

    def cancel(self) -> None:
        self.state = DragIdle()


class DragMoveController:
    def __init__(self, store: FieldStore, selection: Selection) -> None:
        self._store = store
        self._selection = selection
        self.state: DragMoveState = MoveIdle()

    @property
    def moving_id(self) -> int | None:
        return self.state.field_id if isinstance(self.state, Moving) else None

    def press(self, field_id: int) -> None:
        if field_id not in self._store:
            return
        self._selection.select(field_id)
        self.state = Moving(field_id)

    def pointer_move(self, client_x: float, client_y: float, bounds: ContainerBounds) -> Field | None:
        if not isinstance(self.state, Moving):
            return None
        position = to_fraction(client_x, client_y, bounds, clamp=True)
        if position is None:
            return None
        moved = self._store.move(self.state.field_id, position)
        if moved is None:
            self.state = MoveIdle()
        return moved

    def release(self) -> None:
        self.state = MoveIdle()
