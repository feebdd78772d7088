"""
Qt plumbing shared by background workers.

A worker moves one blocking call off the calling thread and reports
back through signals. Runs cannot be cancelled: a worker ends either
COMPLETED with a result or FAILED with an error.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot, QMutex, QMutexLocker


class WorkerState(Enum):
    """Lifecycle of a worker."""
    PENDING = auto()
    RUNNING = auto()
    COMPLETED = auto()
    FAILED = auto()


class WorkerSignals(QObject):
    """Signals emitted by a worker to the thread that owns it."""
    progress = pyqtSignal(int, str)         # (processed, current relative path)
    progress_detail = pyqtSignal(object)    # CompareProgress
    status = pyqtSignal(str)
    started = pyqtSignal()
    finished = pyqtSignal(object)           # result
    error = pyqtSignal(str, str)            # (exception type, message)
    state_changed = pyqtSignal(object)      # WorkerState


class BaseWorker(QObject):
    """
    Runs `do_work` and publishes its outcome.

    Subclasses implement `do_work`. Exceptions it raises are logged and
    turned into the `error` signal; nothing is emitted on `finished`.
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.signals = WorkerSignals()
        self._state = WorkerState.PENDING
        self._mutex = QMutex()
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None

    @property
    def state(self) -> WorkerState:
        with QMutexLocker(self._mutex):
            return self._state

    def _set_state(self, state: WorkerState) -> None:
        with QMutexLocker(self._mutex):
            self._state = state
        self.signals.state_changed.emit(state)

    @property
    def result(self) -> Any:
        """Value returned by `do_work`, once completed."""
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """(exception type, message) of a failed run."""
        return self._error

    @pyqtSlot()
    def run(self) -> None:
        self._set_state(WorkerState.RUNNING)
        self.signals.started.emit()

        try:
            result = self.do_work()
        except Exception as e:
            logging.exception(f"{type(self).__name__} - Work failed")
            self._error = (type(e).__name__, str(e))
            self._set_state(WorkerState.FAILED)
            self.signals.error.emit(*self._error)
            return

        self._result = result
        self._set_state(WorkerState.COMPLETED)
        self.signals.finished.emit(result)

    def do_work(self) -> Any:
        raise NotImplementedError

    def report_status(self, message: str) -> None:
        self.signals.status.emit(message)


class WorkerThread(QThread):
    """
    QThread that owns a single worker and starts it on `start()`.

    The thread quits as soon as the worker finishes or fails.
    """

    def __init__(self, worker: BaseWorker, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.worker = worker
        self.worker.moveToThread(self)

        self.started.connect(self.worker.run)
        self.worker.signals.finished.connect(self.quit)
        self.worker.signals.error.connect(self.quit)

    @property
    def result(self) -> Any:
        return self.worker.result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        return self.worker.error
