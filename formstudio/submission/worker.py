"""Background worker that keeps the window responsive during submission."""

from __future__ import annotations

import asyncio

from PySide6.QtCore import QObject, Signal, Slot

from formstudio.model.errors import SubmissionRejected, TransportFailure
from formstudio.submission.assembler import SubmissionPayload, submit


class SubmitWorker(QObject):
    finished = Signal(object)  # SubmissionResult
    failed = Signal(str)
    done = Signal()

    def __init__(self, payload: SubmissionPayload, endpoint: str, timeout: float) -> None:
        super().__init__()
        self._payload = payload
        self._endpoint = endpoint
        self._timeout = timeout

    @Slot()
    def run(self) -> None:
        try:
            result = asyncio.run(submit(self._payload, self._endpoint, self._timeout))
        except (SubmissionRejected, TransportFailure) as exc:
            self.failed.emit(str(exc))
        else:
            self.finished.emit(result)
        finally:
            self.done.emit()
