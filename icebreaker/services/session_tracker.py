import threading
from collections.abc import Iterable, Iterator, MutableMapping
from contextlib import contextmanager

DEFAULT_SESSION_ID = "default"


def resolve_session_id(session_id: str | None) -> str:
    session_id = (session_id or "").strip()
    return session_id or DEFAULT_SESSION_ID


class _SessionLock:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class SessionTracker:
    """Per-session record of surfaced question ids.

    Storage is injected so callers can share or isolate it; nothing is
    persisted across restarts. Each session id gets its own lock, so work for
    different sessions never contends. A session's lock only lives while some
    thread holds or waits on it; the registry never outgrows the callers in flight.
    """

    def __init__(self, storage: MutableMapping[str, list[int]] | None = None) -> None:
        self._storage: MutableMapping[str, list[int]] = storage if storage is not None else {}
        self._locks: dict[str, _SessionLock] = {}
        self._registry_lock = threading.Lock()

    @contextmanager
    def _locked(self, session_id: str) -> Iterator[None]:
        with self._registry_lock:
            entry = self._locks.get(session_id)
            if entry is None:
                entry = self._locks[session_id] = _SessionLock()
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._registry_lock:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._locks[session_id]

    @contextmanager
    def session(self, session_id: str | None) -> Iterator[str]:
        """Critical section for one session; read-select-record must happen inside it."""
        resolved = resolve_session_id(session_id)
        with self._locked(resolved):
            yield resolved

    def get_used(self, session_id: str | None) -> set[int]:
        resolved = resolve_session_id(session_id)
        with self._locked(resolved):
            return set(self._storage.get(resolved, ()))

    def used_in_order(self, session_id: str | None) -> list[int]:
        resolved = resolve_session_id(session_id)
        with self._locked(resolved):
            return list(self._storage.get(resolved, ()))

    def record_used(self, session_id: str | None, ids: Iterable[int]) -> None:
        resolved = resolve_session_id(session_id)
        with self._locked(resolved):
            history = list(self._storage.get(resolved, ()))
            history.extend(ids)
            self._storage[resolved] = history

    def clear(self, session_id: str | None) -> None:
        resolved = resolve_session_id(session_id)
        with self._locked(resolved):
            self._storage.pop(resolved, None)

    def active_locks(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    def sessions(self) -> list[str]:
        with self._registry_lock:
            return list(self._storage.keys())
