"""Thread-safe memoizing cache for compiled templates."""

import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Generic, TypeVar

from stacheview.exceptions import CachedComputationError

T = TypeVar("T")


class MemoizingCache(Generic[T]):
    """Compute each key once and share the result.

    Concurrent callers asking for a key that is being computed wait for the
    first caller instead of computing it again. Failed computations are not
    stored: the next call for that key computes afresh. Every caller that
    observes a failure receives a new `CachedComputationError` chained to
    the original exception.
    """

    def __init__(self) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._entries: dict[str, Future[T]] = {}

    def get(self, key: str, compute: Callable[[], T]) -> T:
        """Return the value for `key`, computing it if needed.

        Args:
            key: Cache key.
            compute: Produces the value when `key` is absent.

        Returns:
            The cached or freshly computed value.

        Raises:
            CachedComputationError: If the computation failed.
        """
        with self._lock:
            future = self._entries.get(key)
            owner = future is None
            if future is None:
                future = Future()
                self._entries[key] = future

        if owner:
            try:
                future.set_result(compute())
            except BaseException as e:
                with self._lock:
                    if self._entries.get(key) is future:
                        del self._entries[key]
                future.set_exception(e)
                if not isinstance(e, Exception):
                    raise

        try:
            return future.result()
        except Exception as e:
            msg = f"Computation for {key!r} failed: {e}"
            raise CachedComputationError(msg, key=key) from e

    def invalidate(self, key: str) -> bool:
        """Drop `key`. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
