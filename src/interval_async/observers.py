"""Failure observers.

The scheduler swallows handler failures. Pass one of these as
IntervalScheduler(on_failure=...) to see them.
"""

import logging

from interval_async.types import FailureObserver, HandlerFailure

logger = logging.getLogger(__name__)


def log_failure(failure: HandlerFailure) -> None:
    """Log a handler failure at WARNING with its traceback."""
    logger.warning(
        "interval_handler_failed",
        exc_info=failure.error,
        extra={
            "interval.id": failure.handle_id,
            "interval.invocation": failure.invocation,
            "error.type": type(failure.error).__name__,
            "error.message": str(failure.error),
        },
    )


def collect_failures(sink: list[HandlerFailure]) -> FailureObserver:
    """Build an observer that appends every failure to sink."""

    def _observe(failure: HandlerFailure) -> None:
        sink.append(failure)

    return _observe


def chain_observers(*observers: FailureObserver) -> FailureObserver:
    """Combine observers; each is called in order."""

    def _observe(failure: HandlerFailure) -> None:
        for observer in observers:
            observer(failure)

    return _observe
