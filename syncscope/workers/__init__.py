"""
Background workers for non-blocking operations.

Provides QObject-based workers that run a folder comparison in a
QThread. All workers use Qt signals for thread-safe communication
with the owning thread.
"""

from syncscope.workers.base_worker import (
    BaseWorker,
    WorkerSignals,
    WorkerState,
    WorkerThread,
)
from syncscope.workers.compare_worker import (
    ComparisonWorker,
    SignalReporter,
)

__all__ = [
    # Base
    'BaseWorker',
    'WorkerSignals',
    'WorkerState',
    'WorkerThread',
    # Compare
    'ComparisonWorker',
    'SignalReporter',
]
