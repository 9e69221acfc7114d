"""Authoritative, ordered collection of placed fields."""

from __future__ import annotations

from dataclasses import dataclass, field
import itertools
import logging
from typing import Iterator

from formstudio.model.field import Field, FieldPosition, FieldType, kind_of

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FieldStore:
    """Fields in creation order.

    Records are immutable; every mutation swaps in a new ``Field`` so readers
    never observe a half-applied change. Page and position ranges are enforced
    here, at ``create`` and ``move``.
    """

    _fields: list[Field] = field(default_factory=list)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1))

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(list(self._fields))

    def __contains__(self, field_id: object) -> bool:
        return self._index_of(field_id) is not None

    def get(self, field_id: int) -> Field | None:
        index = self._index_of(field_id)
        return None if index is None else self._fields[index]

    def on_page(self, page: int) -> list[Field]:
        return [item for item in self._fields if item.page == page]

    def create(
        self,
        field_type: FieldType,
        page: int,
        position: FieldPosition,
        page_count: int | None = None,
    ) -> Field:
        if page < 1 or (page_count is not None and page > page_count):
            raise ValueError(f"Page out of range: {page}")

        kind = kind_of(field_type)
        created = Field(
            id=next(self._ids),
            field_type=kind.field_type,
            page=page,
            position=position.clamped(),
            width=kind.width,
            height=kind.height,
            value=kind.default_value(),
        )
        self._fields.append(created)
        logger.info("Created %s field %d on page %d", created.field_type.value, created.id, page)
        return created

    def update(self, field_id: int, value: object) -> Field | None:
        index = self._index_of(field_id)
        if index is None:
            return None
        self._fields[index] = self._fields[index].with_value(value)
        return self._fields[index]

    def move(self, field_id: int, position: FieldPosition) -> Field | None:
        index = self._index_of(field_id)
        if index is None:
            return None
        self._fields[index] = self._fields[index].with_position(position)
        return self._fields[index]

    def delete(self, field_id: int) -> bool:
        index = self._index_of(field_id)
        if index is None:
            return False
        removed = self._fields.pop(index)
        logger.info("Deleted %s field %d", removed.field_type.value, removed.id)
        return True

    def clear(self) -> None:
        self._fields.clear()

    def _index_of(self, field_id: object) -> int | None:
        for index, item in enumerate(self._fields):
            if item.id == field_id:
                return index
        return None
