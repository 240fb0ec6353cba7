"""Single-writer queue for background saves.

Saves are fire-and-forget for the caller, but only one write runs at a time
and a snapshot still waiting to be written is replaced by any newer one. A
slow earlier write therefore can never land after a later one.
"""

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from canhao.utils.errors import StorageWriteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SaveQueue(Generic[T]):
    """Run ``save_fn`` on a worker thread, keeping only the latest snapshot.

    Example:
        >>> with SaveQueue(repository.save) as queue:
        ...     queue.submit(store.episodes)
        ...     queue.submit(store.episodes)  # replaces the first if still queued
    """

    def __init__(
        self,
        save_fn: Callable[[T], None],
        synchronous: bool = False,
        name: str = "canhao-save",
    ) -> None:
        """Initialize the queue.

        Args:
            save_fn: Writes one snapshot; may raise
            synchronous: Write inline on submit instead of in the background
            name: Worker thread name
        """
        self._save_fn = save_fn
        self.synchronous = synchronous
        self._name = name

        self._cond = threading.Condition()
        self._queued: T | None = None
        self._has_queued = False
        self._busy = False
        self._closed = False
        self._thread: threading.Thread | None = None

        self._unreported: StorageWriteError | None = None
        self.last_error: StorageWriteError | None = None
        self.superseded = 0

    @property
    def pending(self) -> bool:
        """True while a write is queued or running."""
        with self._cond:
            return self._has_queued or self._busy

    def submit(self, snapshot: T) -> None:
        """Schedule ``snapshot`` to be written.

        In synchronous mode the write happens before this returns; a failure
        is reported by the next flush, exactly as for background writes.

        Raises:
            RuntimeError: If the queue has been closed
        """
        if self._closed:
            raise RuntimeError("SaveQueue is closed")

        if self.synchronous:
            self._write(snapshot)
            return

        with self._cond:
            if self._has_queued:
                self.superseded += 1
                logger.debug("Queued save superseded by a newer snapshot")
            self._queued = snapshot
            self._has_queued = True
            self._ensure_worker()
            self._cond.notify_all()

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every submitted snapshot has been written.

        Args:
            timeout: Seconds to wait (None = wait forever)

        Returns:
            True if the queue drained, False on timeout

        Raises:
            StorageWriteError: If a background write failed since the last flush
        """
        with self._cond:
            drained = self._cond.wait_for(
                lambda: not self._has_queued and not self._busy, timeout
            )
            error, self._unreported = self._unreported, None

        if error is not None:
            raise error
        return drained

    def close(self, timeout: float | None = None) -> None:
        """Flush outstanding work and stop the worker.

        Raises:
            StorageWriteError: If a background write failed since the last flush
        """
        if self._closed:
            return

        try:
            self.flush(timeout)
        finally:
            with self._cond:
                self._closed = True
                self._cond.notify_all()
            if self._thread is not None:
                self._thread.join(timeout)

    def __enter__(self) -> "SaveQueue[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_worker(self) -> None:
        # Called with self._cond held
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._has_queued and not self._closed:
                    self._cond.wait()
                if not self._has_queued:
                    return
                snapshot = self._queued
                self._queued = None
                self._has_queued = False
                self._busy = True

            try:
                self._write(snapshot)  # type: ignore[arg-type]
            finally:
                with self._cond:
                    self._busy = False
                    self._cond.notify_all()

    def _write(self, snapshot: T) -> None:
        error: StorageWriteError | None = None
        try:
            self._save_fn(snapshot)
        except StorageWriteError as e:
            error = e
        except Exception as e:
            error = StorageWriteError(f"Unexpected error while saving: {e}")
            error.__cause__ = e

        if error is not None:
            logger.error(f"Save failed: {error}")
            with self._cond:
                self.last_error = error
                if self._unreported is None:
                    self._unreported = error
