"""Owner-thread dispatch for hosts with thread affinity.

Hosts whose tree view may only be touched from one thread pass one of
these to InMemoryHost, or call dispatcher.run from their own
run_on_owner_thread. Work submitted from another thread blocks the caller
until it has finished on the owner thread.
"""

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SHUTDOWN = object()


class InlineDispatcher:
    """Run work directly on the calling thread."""

    def run(self, work: Callable[[], T]) -> T:
        return work()

    def close(self) -> None:
        pass


class OwnerThreadDispatcher:
    """Run work on a dedicated owner thread, one item at a time.

    Items run in submission order, each to completion before the next
    starts. Work submitted from the owner thread itself runs inline.
    """

    def __init__(self, name: str = "expandstate-owner"):
        """Start the owner thread.

        Args:
            name: Name given to the worker thread
        """
        self._queue: "queue.Queue" = queue.Queue()
        self._closed = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._serve, name=name, daemon=True)
        self._thread.start()

    @property
    def thread(self) -> threading.Thread:
        return self._thread

    def is_owner_thread(self) -> bool:
        return threading.current_thread() is self._thread

    def run(self, work: Callable[[], T]) -> T:
        """Run work on the owner thread and wait for its result.

        Exceptions raised by work are re-raised in the caller.

        Raises:
            RuntimeError: If the dispatcher has been closed
        """
        if self.is_owner_thread():
            return work()

        future: Future = Future()
        with self._lock:
            if self._closed:
                raise RuntimeError("Dispatcher is closed")
            self._queue.put((work, future))
        return future.result()

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop the owner thread after the work already queued."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_SHUTDOWN)
        if not self.is_owner_thread():
            self._thread.join(timeout)

    def __enter__(self) -> "OwnerThreadDispatcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _serve(self) -> None:
        while True:
            item = self._queue.get()
            if item is _SHUTDOWN:
                break
            work, future = item
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = work()
            except BaseException as e:
                future.set_exception(e)
            else:
                future.set_result(result)
        logger.debug(f"Owner thread {self._thread.name} stopped")
