"""Tests for the in-memory session store."""

import threading
import time

import pytest

from quantbot.errors import MalformedRequestError
from quantbot.persistence.session_store import SessionStore
from quantbot.state.models import ConversationState, TradingSession


class TestSessionStore:
    """Test SessionStore operations."""

    def test_get_or_create_new(self, store):
        session = store.get_or_create("call-1")

        assert session.call_id == "call-1"
        assert session.state == ConversationState.GREETING
        assert "call-1" in store
        assert len(store) == 1

    def test_get_or_create_is_idempotent(self, store):
        first = store.get_or_create("call-1")
        second = store.get_or_create("call-1")

        assert first is second
        assert len(store) == 1

    def test_put_replaces(self, store):
        store.get_or_create("call-1")
        updated = TradingSession(call_id="call-1").with_exchange("OKX")

        store.put(updated)

        assert store.get("call-1") is updated
        assert store.get_or_create("call-1") is updated
        assert len(store) == 1

    def test_put_inserts(self, store):
        session = TradingSession(call_id="call-2")
        store.put(session)
        store.put(session)

        assert store.get("call-2") is session
        assert len(store) == 1

    def test_get_missing(self, store):
        assert store.get("missing") is None
        assert "missing" not in store

    def test_call_ids(self, store):
        store.get_or_create("a")
        store.get_or_create("b")

        assert sorted(store.call_ids()) == ["a", "b"]

    @pytest.mark.parametrize("call_id", ["", "   "])
    def test_blank_call_id_rejected(self, store, call_id):
        with pytest.raises(MalformedRequestError):
            store.get_or_create(call_id)
        with pytest.raises(MalformedRequestError):
            store.put(TradingSession(call_id=call_id))

    def test_lock_session_yields_current(self, store):
        with store.lock_session("call-1") as session:
            assert session.state == ConversationState.GREETING
            store.put(session.with_exchange("Bybit"))

        assert store.get("call-1").exchange == "Bybit"


class TestSessionStoreConcurrency:
    """Test locking discipline under threads."""

    def test_same_call_serialized(self, store):
        """Read-modify-write cycles on one call never interleave."""
        workers = 8
        rounds = 25

        def bump():
            for _ in range(rounds):
                with store.lock_session("shared") as session:
                    count = int(session.context.get("count", "0"))
                    time.sleep(0)
                    store.put(TradingSession(call_id="shared", context={"count": str(count + 1)}))

        threads = [threading.Thread(target=bump) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.get("shared").context["count"] == str(workers * rounds)

    def test_distinct_calls_do_not_block(self, store):
        """Holding one call's lock does not stall another call."""
        entered = threading.Event()
        release = threading.Event()
        finished = threading.Event()

        def hold():
            with store.lock_session("slow"):
                entered.set()
                release.wait(timeout=5)

        def other():
            with store.lock_session("fast") as session:
                store.put(session.with_exchange("OKX"))
            finished.set()

        holder = threading.Thread(target=hold)
        holder.start()
        assert entered.wait(timeout=5)

        worker = threading.Thread(target=other)
        worker.start()
        assert finished.wait(timeout=5)

        release.set()
        holder.join()
        worker.join()
        assert store.get("fast").exchange == "OKX"

    def test_concurrent_get_or_create_single_record(self, store):
        results = []
        lock = threading.Lock()

        def create():
            session = store.get_or_create("race")
            with lock:
                results.append(session)

        threads = [threading.Thread(target=create) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 1
        assert all(session is results[0] for session in results)
