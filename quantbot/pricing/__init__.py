"""
Price lookup gateways.

A gateway returns the current quote for (exchange, symbol) or raises a
PriceLookupError subclass. The conversation treats every failure as
recoverable.
"""

from .base import PriceGateway
from .coingecko import CoinGeckoPriceGateway
from .static import StaticPriceGateway

__all__ = ["PriceGateway", "CoinGeckoPriceGateway", "StaticPriceGateway"]
