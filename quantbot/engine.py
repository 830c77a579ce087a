"""
Conversation engine.

Coordinates one caller turn: load or create the session, run the state
machine, store the result. This is what the webhook routes call.

    utterance -> SessionStore.lock_session -> process_utterance -> SessionStore.put -> reply
"""

import secrets
from typing import Optional, Sequence

import structlog

from .config.defaults import DEFAULT_EXCHANGES
from .persistence.session_store import SessionStore
from .pricing.base import PriceGateway
from .state import replies
from .state.machine import process_utterance
from .state.models import TradingSession

logger = structlog.get_logger(__name__)


def generate_call_id() -> str:
    """New opaque call identifier (32 hex characters)."""
    return secrets.token_hex(16)


class ConversationEngine:
    """Runs caller turns against an injected session store and price gateway."""

    def __init__(
        self,
        store: SessionStore,
        price_gateway: PriceGateway,
        exchanges: Sequence[str] = DEFAULT_EXCHANGES
    ) -> None:
        self.logger = logger
        self.store = store
        self.price_gateway = price_gateway
        self.exchanges = tuple(exchanges)

    def create_session(self) -> tuple[str, str]:
        """Start a new conversation; returns (call_id, greeting text)."""
        call_id = generate_call_id()
        while call_id in self.store:
            call_id = generate_call_id()

        self.store.get_or_create(call_id)
        self.logger.info("New web session started", call_id=call_id)

        return call_id, replies.greeting(self.exchanges)

    def handle(self, call_id: str, utterance: str) -> str:
        """
        Process one caller utterance and return the reply text.

        Unknown call ids get a fresh greeting-state session before dispatch.
        The whole read-modify-write runs under the call's lock.
        """
        with self.store.lock_session(call_id) as session:
            result = process_utterance(
                session,
                utterance,
                self.price_gateway,
                self.exchanges
            )
            self.store.put(result.session)

        self.logger.debug(
            "Handled utterance",
            call_id=call_id,
            state=result.session.state.value,
            trigger=result.trigger
        )
        return result.reply

    def get_session(self, call_id: str) -> Optional[TradingSession]:
        """Current record for call_id, if any."""
        return self.store.get(call_id)
