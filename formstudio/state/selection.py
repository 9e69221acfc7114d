"""Single-field selection."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Selection:
    selected_id: int | None = None

    def select(self, field_id: int) -> None:
        self.selected_id = field_id

    def clear(self) -> None:
        self.selected_id = None

    def is_selected(self, field_id: int) -> bool:
        return self.selected_id is not None and self.selected_id == field_id

    def forget(self, field_id: int) -> None:
        if self.is_selected(field_id):
            self.selected_id = None
