import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class QueryCache:
    """
    Result cache keyed by resource path (e.g. "/api/anime/3/episodes").

    Entries live until invalidated. Concurrent misses on the same key share
    one fetch: the first caller runs it, the rest wait on its result.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, Any] = {}
        self._in_flight: Dict[str, Future] = {}
        # Bumped on every invalidation so a fetch that started earlier doesn't store stale data
        self._generation = 0

    def get_or_fetch(self, key: str, fetch: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._entries:
                return self._entries[key]

            future = self._in_flight.get(key)
            is_owner = future is None
            if is_owner:
                future = Future()
                self._in_flight[key] = future
                generation = self._generation

        if not is_owner:
            return future.result()

        try:
            value = fetch()
        except Exception as e:
            with self._lock:
                self._in_flight.pop(key, None)
            future.set_exception(e)
            raise

        with self._lock:
            if self._in_flight.get(key) is future:
                del self._in_flight[key]
            if generation == self._generation:
                self._entries[key] = value

        future.set_result(value)
        return value

    def peek(self, key: str) -> Any:
        with self._lock:
            return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def invalidate(self, *prefixes: str) -> int:
        """
        Drop every key equal to a prefix or nested under it.
        "/api/anime" drops "/api/anime", "/api/anime/3" and "/api/anime?search=x".
        """
        with self._lock:
            self._generation += 1
            doomed = [key for key in self._entries if any(_under(key, prefix) for prefix in prefixes)]
            for key in doomed:
                del self._entries[key]
            # Waiters on an in-flight fetch still get its result; it just won't be stored
            for key in [k for k in self._in_flight if any(_under(k, p) for p in prefixes)]:
                del self._in_flight[key]

        if doomed:
            logger.debug(f"Invalidated {len(doomed)} cached queries for {', '.join(prefixes)}")
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()
            self._in_flight.clear()


def _under(key: str, prefix: str) -> bool:
    if key == prefix:
        return True
    return key.startswith(prefix) and key[len(prefix)] in "/?"
