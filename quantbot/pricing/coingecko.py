"""CoinGecko-backed price lookup over HTTP."""

import http.client
import json
import math
import socket
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from ..config.defaults import PriceGatewayParams
from ..errors import (
    PriceLookupError,
    PriceLookupDecodeError,
    PriceLookupNetworkError,
    PriceLookupStatusError,
)
from .base import PriceGateway


class CoinGeckoPriceGateway(PriceGateway):
    """
    Quotes from the CoinGecko simple price endpoint.

    CoinGecko aggregates across venues, so the exchange only shows up in logs
    and errors. A coin id missing from an otherwise valid response yields the
    configured fallback price instead of an error.
    """

    def __init__(self, params: Optional[PriceGatewayParams] = None):
        super().__init__("coingecko")
        self.params = params or PriceGatewayParams()

    def coin_id_for(self, symbol: str) -> str:
        """Map a spoken symbol to a CoinGecko coin id."""
        coin_id = symbol.strip().lower()
        for alias, target in self.params.coin_aliases.items():
            if alias in coin_id:
                return target
        return coin_id

    def build_url(self, coin_id: str) -> str:
        query = urlencode({"ids": coin_id, "vs_currencies": self.params.vs_currency})
        return f"{self.params.base_url}?{query}"

    def lookup_price(self, exchange: str, symbol: str) -> float:
        self._record_lookup()
        coin_id = self.coin_id_for(symbol)

        self.logger.info(
            "Fetching price",
            exchange=exchange,
            symbol=symbol,
            coin_id=coin_id
        )

        try:
            payload = self._fetch(exchange, symbol, coin_id)
            price = self._extract_price(payload, coin_id, exchange, symbol)
        except PriceLookupError:
            self._record_error()
            raise

        if price is None:
            self.logger.warning(
                "Price not found, using fallback price",
                exchange=exchange,
                symbol=symbol,
                coin_id=coin_id,
                fallback_price=self.params.fallback_price
            )
            return self.params.fallback_price

        return price

    def _fetch(self, exchange: str, symbol: str, coin_id: str) -> Any:
        """GET the quote payload, translating transport failures."""
        req = Request(
            self.build_url(coin_id),
            headers={
                'Accept': 'application/json',
                'User-Agent': self.params.user_agent
            },
            method='GET'
        )

        try:
            with urlopen(req, timeout=self.params.timeout_seconds) as response:
                response_code = response.getcode()
                raw = response.read()

        except HTTPError as e:
            self.logger.warning(
                "Price lookup HTTP error",
                exchange=exchange,
                symbol=symbol,
                error_code=e.code,
                error_reason=str(e.reason)
            )
            raise PriceLookupStatusError(
                f"API returned status: {e.code}",
                status_code=e.code,
                exchange=exchange,
                symbol=symbol
            ) from e

        except (OSError, URLError, socket.timeout, http.client.HTTPException) as e:
            self.logger.warning(
                "Price lookup network error",
                exchange=exchange,
                symbol=symbol,
                error=str(e)
            )
            raise PriceLookupNetworkError(
                "failed to fetch price data",
                exchange=exchange,
                symbol=symbol,
                context={"error": str(e)}
            ) from e

        if not 200 <= response_code < 300:
            self.logger.warning(
                "Price lookup failed with HTTP status",
                exchange=exchange,
                symbol=symbol,
                response_code=response_code
            )
            raise PriceLookupStatusError(
                f"API returned status: {response_code}",
                status_code=response_code,
                exchange=exchange,
                symbol=symbol
            )

        try:
            return json.loads(raw.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            self.logger.warning(
                "Price lookup decode error",
                exchange=exchange,
                symbol=symbol,
                error=str(e)
            )
            raise PriceLookupDecodeError(
                "failed to decode price response",
                raw_data=raw[:200].decode('utf-8', errors='replace'),
                exchange=exchange,
                symbol=symbol
            ) from e

    def _extract_price(
        self,
        payload: Any,
        coin_id: str,
        exchange: str,
        symbol: str
    ) -> Optional[float]:
        """Pull {coin_id: {currency: price}} out of the payload."""
        if not isinstance(payload, dict):
            raise PriceLookupDecodeError(
                "failed to decode price response",
                raw_data=str(payload)[:200],
                exchange=exchange,
                symbol=symbol
            )

        quotes = payload.get(coin_id)
        if quotes is None:
            return None
        if not isinstance(quotes, dict):
            raise PriceLookupDecodeError(
                "failed to decode price response",
                raw_data=str(payload)[:200],
                exchange=exchange,
                symbol=symbol
            )

        price = quotes.get(self.params.vs_currency)
        if price is None:
            return None
        if (isinstance(price, bool) or not isinstance(price, (int, float))
                or not math.isfinite(price)):
            raise PriceLookupDecodeError(
                "failed to decode price response",
                raw_data=str(payload)[:200],
                exchange=exchange,
                symbol=symbol
            )
        return float(price)
