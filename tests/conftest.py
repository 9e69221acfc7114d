from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz  # noqa: E402


@pytest.fixture(scope="session")
def qt_app():
    try:
        from PySide6 import QtWidgets
    except ImportError:  # pragma: no cover - import guard for CI environments without Qt libs
        pytest.skip("PySide6 QtWidgets is unavailable")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


def make_pdf(path: Path, pages: int = 3) -> Path:
    doc = fitz.open()
    for number in range(1, pages + 1):
        page = doc.new_page(width=595, height=842)
        page.insert_text((72, 72), f"Page {number}")
    doc.save(path)
    doc.close()
    return path


@pytest.fixture
def pdf_factory(tmp_path: Path):
    def factory(name: str = "contract.pdf", pages: int = 3) -> Path:
        return make_pdf(tmp_path / name, pages)

    return factory


@pytest.fixture
def pdf_path(pdf_factory) -> Path:
    return pdf_factory()


@pytest.fixture
def png_path(tmp_path: Path, qt_app) -> Path:
    from PySide6.QtGui import QColor, QImage

    image = QImage(8, 8, QImage.Format.Format_RGB32)
    image.fill(QColor("red"))
    path = tmp_path / "logo.png"
    assert image.save(str(path), "PNG")
    return path
