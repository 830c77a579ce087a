"""Pytest configuration and shared fixtures."""

import pytest

from quantbot.engine import ConversationEngine
from quantbot.errors import PriceLookupNetworkError
from quantbot.persistence.session_store import SessionStore
from quantbot.pricing.static import StaticPriceGateway
from quantbot.state.models import ConversationState, TradingSession


@pytest.fixture
def price_gateway() -> StaticPriceGateway:
    """Gateway quoting BITCOIN and ETH, failing DOGECOIN with a network error."""
    return StaticPriceGateway(
        prices={"BITCOIN": 65123.45, "ETH": 3120.5},
        errors={
            "DOGECOIN": PriceLookupNetworkError(
                "failed to fetch price data",
                exchange="OKX",
                symbol="DOGECOIN"
            )
        },
    )


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def engine(store: SessionStore, price_gateway: StaticPriceGateway) -> ConversationEngine:
    return ConversationEngine(store=store, price_gateway=price_gateway)


@pytest.fixture
def symbol_selected_session() -> TradingSession:
    """Session that has picked OKX and been quoted BITCOIN."""
    return TradingSession(
        call_id="call-001",
        state=ConversationState.SYMBOL_SELECTED,
        exchange="OKX",
        symbol="BITCOIN",
        reference_price=65123.45,
    )


@pytest.fixture
def confirming_session(symbol_selected_session: TradingSession) -> TradingSession:
    """Session waiting for a yes/no on 1.5 BITCOIN at 65000."""
    return symbol_selected_session.with_order(
        ConversationState.CONFIRMING,
        quantity=1.5,
        limit_price=65000.0
    )
