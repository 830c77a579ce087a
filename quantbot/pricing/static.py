"""In-memory price gateway for offline runs and tests."""

from typing import Optional

from ..errors import PriceLookupError
from .base import PriceGateway


class StaticPriceGateway(PriceGateway):
    """Serves quotes from a fixed symbol -> price table."""

    def __init__(
        self,
        prices: Optional[dict[str, float]] = None,
        default: Optional[float] = None,
        errors: Optional[dict[str, PriceLookupError]] = None,
    ):
        super().__init__("static")
        self.prices = {symbol.upper(): price for symbol, price in (prices or {}).items()}
        self.default = default
        self.errors = {symbol.upper(): error for symbol, error in (errors or {}).items()}
        self.calls: list[tuple[str, str]] = []

    def lookup_price(self, exchange: str, symbol: str) -> float:
        self._record_lookup()
        self.calls.append((exchange, symbol))
        key = symbol.upper()

        if key in self.errors:
            self._record_error()
            raise self.errors[key]

        if key in self.prices:
            return self.prices[key]

        if self.default is not None:
            return self.default

        self._record_error()
        raise PriceLookupError(
            f"No static price for {key}",
            exchange=exchange,
            symbol=key
        )
