"""Thread-safe in-memory session store keyed by call identifier."""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ..errors import MalformedRequestError
from ..logging.config import get_logger
from ..state.models import TradingSession


class SessionStore:
    """
    Process-lifetime map of call id -> TradingSession.

    A short guard lock protects the maps; every call id also owns a
    re-entrant lock. ``lock_session`` holds that per-call lock across a whole
    read-modify-write so two utterances for the same call are applied one
    after the other, while different calls proceed independently. Records
    are never evicted.
    """

    def __init__(self):
        self.logger = get_logger("quantbot.session.store")
        self._sessions: dict[str, TradingSession] = {}
        self._call_locks: dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    def _call_lock(self, call_id: str) -> threading.RLock:
        with self._lock:
            lock = self._call_locks.get(call_id)
            if lock is None:
                lock = threading.RLock()
                self._call_locks[call_id] = lock
            return lock

    @staticmethod
    def _check_call_id(call_id: str) -> None:
        if not isinstance(call_id, str) or not call_id.strip():
            raise MalformedRequestError("call_id must be a non-empty string", field="call_id")

    def get_or_create(self, call_id: str) -> TradingSession:
        """Return the session for call_id, creating a greeting-state one if absent."""
        self._check_call_id(call_id)
        with self._call_lock(call_id):
            with self._lock:
                session = self._sessions.get(call_id)
                if session is not None:
                    return session
                session = TradingSession(call_id=call_id)
                self._sessions[call_id] = session

            self.logger.info(
                "Created new session",
                call_id=call_id,
                initial_state=session.state.value
            )
            return session

    def get(self, call_id: str) -> Optional[TradingSession]:
        """Return the session for call_id without creating one."""
        with self._lock:
            return self._sessions.get(call_id)

    def put(self, session: TradingSession) -> None:
        """Insert or replace the record stored under session.call_id."""
        self._check_call_id(session.call_id)
        with self._call_lock(session.call_id):
            with self._lock:
                self._sessions[session.call_id] = session

    @contextmanager
    def lock_session(self, call_id: str) -> Iterator[TradingSession]:
        """
        Hold the call's lock for a read-modify-write.

        Yields the current session (created if absent). Call ``put`` with the
        new record before leaving the block.
        """
        self._check_call_id(call_id)
        lock = self._call_lock(call_id)
        with lock:
            yield self.get_or_create(call_id)

    def call_ids(self) -> list[str]:
        """Snapshot of known call identifiers."""
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, call_id: object) -> bool:
        with self._lock:
            return call_id in self._sessions
