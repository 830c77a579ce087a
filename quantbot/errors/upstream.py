"""
Price lookup failure classifications.

Every lookup failure is recoverable: the caller stays in the same
conversation state and may retry with another symbol.
"""

from typing import Optional

from .recovery import RecoverableError


class PriceLookupError(RecoverableError):
    """Base class for failures of the price lookup gateway."""

    def __init__(self, message: str, exchange: Optional[str] = None,
                 symbol: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.exchange = exchange
        self.symbol = symbol


class PriceLookupNetworkError(PriceLookupError):
    """Connection failure or timeout talking to the upstream."""


class PriceLookupStatusError(PriceLookupError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class PriceLookupDecodeError(PriceLookupError):
    """Upstream response body could not be decoded into a quote."""

    def __init__(self, message: str, raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
