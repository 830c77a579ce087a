"""Tests for reply texts."""

from quantbot.config.defaults import DEFAULT_EXCHANGES
from quantbot.state import replies

GREETING = (
    "Hello! Welcome to GoQuant's OTC trading service. To get started, please choose an "
    "exchange from the following options: OKX, Bybit, Deribit, or Binance."
)


class TestReplies:
    """Test reply formatting."""

    def test_greeting_literal(self):
        assert replies.greeting(DEFAULT_EXCHANGES) == GREETING

    def test_order_summary_format(self):
        assert replies.order_summary(1.5, "BITCOIN", 65000, "OKX") == (
            "Got it. To confirm, you want to trade 1.5000 BITCOIN at $65000.0000 "
            "per unit on OKX. Is that correct?"
        )

    def test_price_quoted_four_decimals(self):
        assert replies.price_quoted("BITCOIN", "OKX", 65123.45) == (
            "The current price for BITCOIN on OKX is $65123.4500. "
            "Now, what quantity and price for the order?"
        )

    def test_list_exchanges(self):
        assert replies.list_exchanges(["OKX"]) == "OKX"
        assert replies.list_exchanges(["OKX", "Bybit"]) == "OKX or Bybit"
        assert replies.list_exchanges(DEFAULT_EXCHANGES) == "OKX, Bybit, Deribit, or Binance"

    def test_exchange_not_recognized(self):
        assert replies.exchange_not_recognized(DEFAULT_EXCHANGES) == (
            "I didn't catch that. Please choose from: OKX, Bybit, Deribit, or Binance."
        )

    def test_price_unavailable_names_symbol(self):
        assert "DOGECOIN" in replies.price_unavailable("DOGECOIN")
