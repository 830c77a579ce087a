"""End-to-end conversation flows through the engine."""

import random
import threading

import pytest

from quantbot.engine import ConversationEngine
from quantbot.persistence.session_store import SessionStore
from quantbot.pricing.static import StaticPriceGateway
from quantbot.state.machine import process_utterance
from quantbot.state.models import ConversationState, TradingSession

SUMMARY = (
    "Got it. To confirm, you want to trade 1.5000 BITCOIN at $65000.0000 "
    "per unit on OKX. Is that correct?"
)

UTTERANCE_POOL = [
    "I want okx", "bybit", "binance please", "kraken", "",
    "bitcoin", "eth", "dogecoin", "   ",
    "1.5 at 65000", "amount 2", "at 100", "3", "0", "-4", "price 10 quantity 0",
    "yes please", "no", "that's wrong", "correct", "hmm", "maybe later",
]


class TestScenarios:
    """Walk through the documented conversation scenarios."""

    def test_full_happy_path(self, engine, store):
        call_id, greeting = engine.create_session()
        assert "OKX, Bybit, Deribit, or Binance" in greeting

        engine.handle(call_id, "I want okx")
        session = store.get(call_id)
        assert session.state == ConversationState.EXCHANGE_SELECTED
        assert session.exchange == "OKX"

        reply = engine.handle(call_id, "bitcoin")
        session = store.get(call_id)
        assert session.state == ConversationState.SYMBOL_SELECTED
        assert session.symbol == "BITCOIN"
        assert "65123.4500" in reply

        reply = engine.handle(call_id, "1.5 at 65000")
        session = store.get(call_id)
        assert session.state == ConversationState.CONFIRMING
        assert session.quantity == 1.5
        assert session.limit_price == 65000.0
        assert reply == SUMMARY

        engine.handle(call_id, "yes please")
        assert store.get(call_id).state == ConversationState.COMPLETED

    def test_gateway_failure_names_symbol(self, engine, store):
        engine.handle("c1", "okx")

        reply = engine.handle("c1", "dogecoin")

        assert store.get("c1").state == ConversationState.EXCHANGE_SELECTED
        assert reply.startswith("Sorry")
        assert "DOGECOIN" in reply

    def test_webhook_creates_unknown_session(self, engine, store):
        assert store.get("never-seen") is None

        engine.handle("never-seen", "deribit")

        session = store.get("never-seen")
        assert session.exchange == "Deribit"

    def test_split_order_entry(self, engine, store):
        for utterance in ["okx", "bitcoin", "at 65,000", "1.5"]:
            reply = engine.handle("c2", utterance)

        assert reply == SUMMARY

    def test_rejection_then_correction(self, engine, store):
        for utterance in ["okx", "bitcoin", "2 at 60000", "no"]:
            engine.handle("c3", utterance)

        session = store.get("c3")
        assert session.state == ConversationState.SYMBOL_SELECTED
        assert session.quantity is None
        assert session.limit_price is None

        assert engine.handle("c3", "1.5 at 65000") == SUMMARY


class TestInvariants:
    """Randomized transition sequences."""

    @pytest.mark.parametrize("seed", range(25))
    def test_confirming_always_has_order_values(self, seed):
        rng = random.Random(seed)
        gateway = StaticPriceGateway(prices={"BITCOIN": 65123.45, "ETH": 3000.0})
        session = TradingSession(call_id=f"prop-{seed}")

        for _ in range(60):
            before = session
            result = process_utterance(session, rng.choice(UTTERANCE_POOL), gateway)
            session = result.session

            assert isinstance(result.reply, str) and result.reply
            if session.state == ConversationState.CONFIRMING:
                assert session.quantity > 0
                assert session.limit_price > 0
            if result.trigger != "order_rejected":
                # Accepted values survive every other turn
                if before.has_limit_price:
                    assert session.limit_price == before.limit_price
                if before.has_quantity:
                    assert session.quantity == before.quantity

    @pytest.mark.parametrize("seed", range(10))
    def test_rejection_always_clears_order(self, seed):
        rng = random.Random(seed)
        quantity = rng.uniform(0.001, 100)
        price = rng.uniform(1, 100000)
        session = TradingSession(
            call_id="reject",
            state=ConversationState.CONFIRMING,
            exchange="OKX",
            symbol="BTC",
            quantity=quantity,
            limit_price=price,
        )

        result = process_utterance(session, rng.choice(["no", "no thanks", "NO!", "that is wrong"]),
                                   StaticPriceGateway())

        assert result.session.state == ConversationState.SYMBOL_SELECTED
        assert result.session.quantity is None
        assert result.session.limit_price is None


class TestConcurrentCalls:
    """Many callers at once against one engine."""

    def test_parallel_conversations(self):
        engine = ConversationEngine(SessionStore(), StaticPriceGateway(default=100.0))
        errors = []

        def converse(index):
            call_id = f"call-{index}"
            try:
                for utterance in ["binance", "eth", "2 at 99", "yes"]:
                    engine.handle(call_id, utterance)
            except Exception as e:  # surfaced through the errors list
                errors.append(e)

        threads = [threading.Thread(target=converse, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        for i in range(20):
            session = engine.get_session(f"call-{i}")
            assert session.state == ConversationState.COMPLETED
            assert session.quantity == 2.0
            assert session.limit_price == 99.0

    def test_interleaved_utterances_on_one_call(self):
        """Two simultaneous order entries on one call both apply, one after the other."""
        engine = ConversationEngine(SessionStore(), StaticPriceGateway(default=100.0))
        engine.handle("shared", "okx")
        engine.handle("shared", "btc")

        barrier = threading.Barrier(2)
        replies = []

        def send(utterance):
            barrier.wait()
            replies.append(engine.handle("shared", utterance))

        threads = [
            threading.Thread(target=send, args=("amount 2",)),
            threading.Thread(target=send, args=("at 500",)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        session = engine.get_session("shared")
        assert session.state == ConversationState.CONFIRMING
        assert session.quantity == 2.0
        assert session.limit_price == 500.0
