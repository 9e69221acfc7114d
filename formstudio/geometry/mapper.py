"""Pixel <-> fractional position conversion relative to the page container."""

from __future__ import annotations

from dataclasses import dataclass

from formstudio.model.field import FieldPosition


@dataclass(frozen=True, slots=True)
class ContainerBounds:
    """Container bounding box in the same coordinate space as pointer events."""

    left: float
    top: float
    width: float
    height: float

    @property
    def is_laid_out(self) -> bool:
        return self.width > 0 and self.height > 0

    def contains(self, x: float, y: float) -> bool:
        return (
            self.left <= x <= self.left + self.width
            and self.top <= y <= self.top + self.height
        )


@dataclass(frozen=True, slots=True)
class PixelRect:
    left: float
    top: float
    width: float
    height: float


def to_fraction(
    client_x: float,
    client_y: float,
    bounds: ContainerBounds,
    clamp: bool = True,
) -> FieldPosition | None:
    """Map a pointer position to a container fraction.

    Returns ``None`` while the container has no measured size.
    """
    if not bounds.is_laid_out:
        return None
    position = FieldPosition(
        (client_x - bounds.left) / bounds.width,
        (client_y - bounds.top) / bounds.height,
    )
    return position.clamped() if clamp else position


def field_rect(
    position: FieldPosition,
    width: float,
    height: float,
    container_width: float,
    container_height: float,
) -> PixelRect:
    """Top-left box that centers a field of fixed pixel size on its fraction."""
    center_x = position.x_percent * container_width
    center_y = position.y_percent * container_height
    return PixelRect(center_x - width / 2.0, center_y - height / 2.0, width, height)
