"""Field model: types, positions and the per-type value behavior."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
import math
import re
from typing import Callable, Union

from formstudio.model.errors import InvalidFieldValue

FieldValue = Union[str, bool]

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FieldType(str, Enum):
    TEXT = "text"
    DATE = "date"
    CHECKBOX = "checkbox"
    SIGNATURE = "signature"
    IMAGE = "image"


def _clamp_unit(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass(frozen=True, slots=True)
class FieldPosition:
    """Field center as a fraction of the container width and height."""

    x_percent: float
    y_percent: float

    def clamped(self) -> FieldPosition:
        return FieldPosition(_clamp_unit(self.x_percent), _clamp_unit(self.y_percent))

    def is_in_range(self) -> bool:
        return 0.0 <= self.x_percent <= 1.0 and 0.0 <= self.y_percent <= 1.0


@dataclass(frozen=True, slots=True)
class FieldKind(ABC):
    """Behavior shared by every field of one type.

    A kind owns the creation size, the initial value and the rules for what a
    valid value looks like. Widgets that render a kind live in
    ``formstudio.viewer.editors``.
    """

    field_type: FieldType
    width: int
    height: int
    default_value: Callable[[], FieldValue]
    label: str

    @abstractmethod
    def coerce(self, value: object) -> FieldValue:
        """Return ``value`` in its stored form or raise ``InvalidFieldValue``."""

    def has_value(self, value: FieldValue) -> bool:
        return bool(value)


class _TextKind(FieldKind):
    def coerce(self, value: object) -> FieldValue:
        if not isinstance(value, str):
            raise InvalidFieldValue(f"Text value must be a string, got {type(value).__name__}")
        return value


class _DateKind(FieldKind):
    def coerce(self, value: object) -> FieldValue:
        if isinstance(value, date):
            return value.isoformat()
        if not isinstance(value, str):
            raise InvalidFieldValue(f"Date value must be a string, got {type(value).__name__}")
        if value and not _ISO_DATE.match(value):
            raise InvalidFieldValue(f"Date value must look like YYYY-MM-DD: {value!r}")
        if value:
            try:
                date.fromisoformat(value)
            except ValueError as exc:
                raise InvalidFieldValue(f"Not a calendar date: {value!r}") from exc
        return value


class _CheckboxKind(FieldKind):
    def coerce(self, value: object) -> FieldValue:
        if not isinstance(value, bool):
            raise InvalidFieldValue(f"Checkbox value must be a bool, got {type(value).__name__}")
        return value

    def has_value(self, value: FieldValue) -> bool:
        return value is True


class _ImageKind(FieldKind):
    """Signature and image values: a data URI, or empty for "not set yet"."""

    def coerce(self, value: object) -> FieldValue:
        if not isinstance(value, str):
            raise InvalidFieldValue(f"Image value must be a string, got {type(value).__name__}")
        if value and not value.startswith("data:image/"):
            raise InvalidFieldValue("Image value must be an image data URI")
        return value


def _today() -> str:
    return date.today().isoformat()


FIELD_KINDS: dict[FieldType, FieldKind] = {
    FieldType.TEXT: _TextKind(FieldType.TEXT, 150, 40, str, "Text"),
    FieldType.DATE: _DateKind(FieldType.DATE, 150, 40, _today, "Date"),
    FieldType.CHECKBOX: _CheckboxKind(FieldType.CHECKBOX, 30, 30, bool, "Checkbox"),
    FieldType.SIGNATURE: _ImageKind(FieldType.SIGNATURE, 120, 60, str, "Signature"),
    FieldType.IMAGE: _ImageKind(FieldType.IMAGE, 100, 100, str, "Image"),
}


def kind_of(field_type: FieldType) -> FieldKind:
    return FIELD_KINDS[FieldType(field_type)]


@dataclass(frozen=True, slots=True)
class Field:
    id: int
    field_type: FieldType
    page: int
    position: FieldPosition
    width: int
    height: int
    value: FieldValue

    @property
    def kind(self) -> FieldKind:
        return kind_of(self.field_type)

    @property
    def has_value(self) -> bool:
        return self.kind.has_value(self.value)

    def with_value(self, value: object) -> Field:
        return replace(self, value=self.kind.coerce(value))

    def with_position(self, position: FieldPosition) -> Field:
        return replace(self, position=position.clamped())

    def to_record(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.field_type.value,
            "page": self.page,
            "xPercent": self.position.x_percent,
            "yPercent": self.position.y_percent,
            "width": self.width,
            "height": self.height,
            "value": self.value,
        }
