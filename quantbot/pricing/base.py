"""Base class for price lookup gateways."""

import threading
from abc import ABC, abstractmethod

from ..logging.config import get_logger


class PriceGateway(ABC):
    """
    Looks up a current quote for a symbol on a venue.

    One gateway is shared by every request thread, so the lookup counters
    are only touched through ``_record_lookup`` and ``_record_error``.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = get_logger(f"quantbot.pricing.{name}")
        self._lookup_count = 0
        self._error_count = 0
        self._stats_lock = threading.Lock()

    @abstractmethod
    def lookup_price(self, exchange: str, symbol: str) -> float:
        """
        Return the current price for symbol on exchange.

        Args:
            exchange: Venue display name, e.g. "OKX"
            symbol: Upper-cased trading symbol as spoken, e.g. "BITCOIN"

        Returns:
            Current price

        Raises:
            PriceLookupError: network failure, timeout, bad status or bad payload
        """

    def _record_lookup(self) -> None:
        with self._stats_lock:
            self._lookup_count += 1

    def _record_error(self) -> None:
        with self._stats_lock:
            self._error_count += 1

    def get_stats(self) -> dict[str, int]:
        """Lookup counters for health reporting."""
        with self._stats_lock:
            return {
                "lookups": self._lookup_count,
                "errors": self._error_count,
            }
