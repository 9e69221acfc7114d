from __future__ import annotations

import pytest

from formstudio.model.errors import EmptySignature
from formstudio.viewer.images import data_uri_to_bytes


@pytest.fixture
def surface(qt_app):
    from formstudio.signature.surface import SignatureSurface

    return SignatureSurface(300)


def _is_blank(surface) -> bool:
    image = surface.image
    white = image.pixel(0, 0)
    return all(
        image.pixel(x, y) == white
        for x in range(0, image.width(), 5)
        for y in range(0, image.height(), 5)
    )


def test_new_surface_is_empty_and_blank(surface):
    assert surface.empty
    assert (surface.width, surface.height) == (300, 200)
    assert _is_blank(surface)


def test_save_rejects_empty_surface(surface):
    with pytest.raises(EmptySignature):
        surface.save()
    assert surface.empty


def test_stroke_marks_pixels_and_saves_png(surface):
    surface.begin_stroke(10, 100)
    surface.extend_stroke(150, 100)
    surface.end_stroke()

    assert not surface.empty
    assert not _is_blank(surface)
    data_uri = surface.save()
    assert data_uri.startswith("data:image/png;base64,")
    assert data_uri_to_bytes(data_uri).startswith(b"\x89PNG")


def test_moves_after_stroke_end_are_ignored(surface):
    surface.begin_stroke(10, 10)
    surface.end_stroke()
    assert not surface.extend_stroke(200, 150)
    assert not surface.drawing


def test_clear_resets(surface):
    surface.begin_stroke(10, 100)
    surface.extend_stroke(150, 100)
    surface.clear()
    assert surface.empty
    assert _is_blank(surface)


def test_resize_keeps_strokes_and_height(surface):
    surface.begin_stroke(10, 100)
    surface.extend_stroke(50, 100)
    surface.end_stroke()
    surface.resize(500)
    assert (surface.width, surface.height) == (500, 200)
    assert not surface.empty
    assert surface.image.pixel(30, 100) != surface.image.pixel(400, 10)


@pytest.fixture
def dialog(qt_app):
    from formstudio.signature.dialog import SignatureDialog

    saved: list[str] = []
    notices: list[str] = []
    dlg = SignatureDialog(on_save=saved.append)
    dlg._notify_empty = notices.append
    dlg.saved = saved
    dlg.notices = notices
    yield dlg
    dlg.deleteLater()


def test_dialog_refuses_empty_save(dialog):
    dialog.show()
    assert not dialog.save_signature()
    assert dialog.notices == ["Please sign before saving."]
    assert dialog.saved == []
    assert dialog.is_empty
    assert dialog.isVisible()


def test_dialog_saves_after_stroke(dialog):
    from PySide6.QtWidgets import QDialog

    dialog.show()
    dialog.pad.surface.begin_stroke(20, 50)
    dialog.pad.surface.extend_stroke(120, 80)
    dialog.pad.surface.end_stroke()

    assert dialog.save_signature()
    assert len(dialog.saved) == 1
    assert dialog.saved[0].startswith("data:image/png;base64,")
    assert dialog.result() == QDialog.DialogCode.Accepted
    assert not dialog.isVisible()


def test_pad_mouse_events_draw(dialog):
    from PySide6.QtCore import QPoint, Qt
    from PySide6.QtTest import QTest

    dialog.show()
    pad = dialog.pad
    QTest.mousePress(pad, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(20, 40))
    QTest.mouseMove(pad, QPoint(80, 60))
    QTest.mouseRelease(pad, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(80, 60))
    assert not pad.surface.empty
    assert not pad.surface.drawing


def test_dialog_cancel_does_not_save(dialog):
    dialog.show()
    dialog.pad.surface.begin_stroke(20, 50)
    dialog.reject()
    assert dialog.saved == []


def test_pad_leaving_ends_stroke_while_button_held(dialog):
    from PySide6.QtCore import QPoint, Qt
    from PySide6.QtTest import QTest

    dialog.show()
    pad = dialog.pad
    background = pad.surface.image.pixel(pad.width() - 5, 5)
    QTest.mousePress(pad, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(20, 40))
    QTest.mouseMove(pad, QPoint(80, 60))
    assert pad.surface.drawing

    QTest.mouseMove(pad, QPoint(20, pad.height() + 60))
    assert not pad.surface.drawing
    QTest.mouseMove(pad, QPoint(150, 100))
    assert not pad.surface.drawing
    QTest.mouseRelease(pad, Qt.MouseButton.LeftButton, Qt.KeyboardModifier.NoModifier, QPoint(150, 100))

    assert not pad.surface.empty
    assert pad.surface.image.pixel(150, 100) == background


def test_pad_touch_events_draw(dialog):
    from PySide6.QtCore import QPoint
    from PySide6.QtTest import QTest

    dialog.show()
    pad = dialog.pad
    device = QTest.createTouchDevice()
    touch = QTest.touchEvent(pad, device)
    touch.press(0, QPoint(20, 40))
    touch.commit()
    touch.move(0, QPoint(120, 90))
    touch.commit()
    assert pad.surface.drawing
    touch.release(0, QPoint(120, 90))
    touch.commit()

    assert not pad.surface.empty
    assert not pad.surface.drawing
