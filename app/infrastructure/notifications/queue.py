"""Background worker pool that runs notification jobs off the request path."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from app.config import get_settings

logger = logging.getLogger(__name__)


class NotificationQueue:
    """Run jobs on a bounded thread pool, logging every failure they raise.

    At most ``max_pending`` jobs may be waiting or running at once; further
    submissions are dropped until a slot frees up.
    """

    def __init__(
        self,
        max_workers: int,
        *,
        max_pending: int = 100,
        thread_name_prefix: str = "notifications",
    ) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._slots = threading.BoundedSemaphore(max_pending)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, job: Callable[..., Any], *args: Any, **kwargs: Any) -> Future | None:
        """Schedule ``job`` and return immediately.

        Returns ``None`` when the queue has been shut down or its backlog is
        full; the job is dropped and a warning is logged.
        """

        if self._closed:
            logger.warning("Notification queue is closed; dropping job %r", job)
            return None
        if not self._slots.acquire(blocking=False):
            logger.warning("Notification backlog is full; dropping job %r", job)
            return None
        try:
            return self._executor.submit(self._run_safely, job, *args, **kwargs)
        except RuntimeError:
            self._slots.release()
            logger.warning("Notification queue rejected job %r", job)
            return None

    def shutdown(self, *, wait: bool = False) -> None:
        self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=not wait)

    def _run_safely(self, job: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return job(*args, **kwargs)
        except Exception:  # pragma: no cover - exercised through notification jobs
            logger.exception("Notification job %r failed", job)
            return None
        finally:
            self._slots.release()


_queue: NotificationQueue | None = None
_queue_lock = threading.Lock()


def get_notification_queue() -> NotificationQueue:
    """Return the process wide queue, creating it on first use."""

    global _queue
    with _queue_lock:
        if _queue is None or _queue.closed:
            settings = get_settings()
            _queue = NotificationQueue(
                settings.notification_workers, max_pending=settings.notification_backlog
            )
        return _queue


def shutdown_notification_queue(*, wait: bool = False) -> None:
    """Stop the process wide queue if it was started."""

    global _queue
    with _queue_lock:
        if _queue is not None:
            _queue.shutdown(wait=wait)
            _queue = None


__all__ = [
    "NotificationQueue",
    "get_notification_queue",
    "shutdown_notification_queue",
]
