"""
Error classification for the conversation service.

Exceptions are grouped by recovery characteristics: upstream price lookup
failures are recoverable and keep the conversation moving, boundary errors
reject a request before it reaches the state machine, and system failures
signal a corrupted record or unusable configuration.
"""

from .recovery import (
    RecoverableError,
    UnrecoverableError,
)
from .request import MalformedRequestError
from .system_failures import (
    ConfigurationError,
    StateTransitionError,
    SystemFailureError,
)
from .upstream import (
    PriceLookupDecodeError,
    PriceLookupError,
    PriceLookupNetworkError,
    PriceLookupStatusError,
)

__all__ = [
    # Recovery Categories
    "RecoverableError",
    "UnrecoverableError",
    # Boundary
    "MalformedRequestError",
    # System Failures
    "SystemFailureError",
    "StateTransitionError",
    "ConfigurationError",
    # Upstream
    "PriceLookupError",
    "PriceLookupNetworkError",
    "PriceLookupStatusError",
    "PriceLookupDecodeError",
]
