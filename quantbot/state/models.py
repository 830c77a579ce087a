"""
Conversation data models.

This module defines the immutable session record for one call, the closed
set of conversation states, and the result of processing one utterance.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from ..errors import StateTransitionError


class ConversationState(str, Enum):
    """Conversation states; values are the wire strings."""
    GREETING = "greeting"
    EXCHANGE_SELECTED = "exchange_selected"
    SYMBOL_SELECTED = "symbol_selected"
    AWAITING_QUANTITY = "awaiting_quantity"
    AWAITING_PRICE = "awaiting_price"
    CONFIRMING = "confirming"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TradingSession:
    """Conversation record for a single call."""

    call_id: str
    state: ConversationState = ConversationState.GREETING

    # Venue and instrument
    exchange: Optional[str] = None
    symbol: Optional[str] = None                     # Upper-cased as spoken
    reference_price: Optional[float] = None          # Last quote, informational only

    # Order parameters, None until a positive number is accepted
    quantity: Optional[float] = None
    limit_price: Optional[float] = None

    # Reserved extension point
    context: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.state == ConversationState.CONFIRMING and not (
            self.has_quantity and self.has_limit_price
        ):
            raise StateTransitionError(
                "Cannot confirm an order without quantity and limit price",
                current_state=self.state.value,
                attempted_transition=ConversationState.CONFIRMING.value,
                context={"call_id": self.call_id}
            )

    @property
    def has_quantity(self) -> bool:
        return self.quantity is not None and self.quantity > 0

    @property
    def has_limit_price(self) -> bool:
        return self.limit_price is not None and self.limit_price > 0

    def with_state(self, new_state: ConversationState) -> 'TradingSession':
        """Create new session in another state, fields unchanged."""
        return replace(self, state=new_state)

    def with_exchange(self, exchange: str) -> 'TradingSession':
        """Record the chosen venue."""
        return replace(self, exchange=exchange, state=ConversationState.EXCHANGE_SELECTED)

    def with_symbol(self, symbol: str, reference_price: float) -> 'TradingSession':
        """Record the quoted symbol."""
        return replace(
            self,
            symbol=symbol,
            reference_price=reference_price,
            state=ConversationState.SYMBOL_SELECTED
        )

    def with_order(
        self,
        new_state: ConversationState,
        quantity: Optional[float] = None,
        limit_price: Optional[float] = None
    ) -> 'TradingSession':
        """Merge newly accepted order values and move to new_state in one step."""
        return replace(
            self,
            state=new_state,
            quantity=quantity if quantity is not None else self.quantity,
            limit_price=limit_price if limit_price is not None else self.limit_price
        )

    def with_order_cleared(self) -> 'TradingSession':
        """Drop quantity and limit price and go back to order entry."""
        return replace(
            self,
            state=ConversationState.SYMBOL_SELECTED,
            quantity=None,
            limit_price=None
        )

    def restarted(self) -> 'TradingSession':
        """Fresh greeting-state record for the same call."""
        return TradingSession(call_id=self.call_id, context=dict(self.context))


@dataclass(frozen=True)
class TurnResult:
    """Outcome of processing one utterance."""

    session: TradingSession
    reply: str
    trigger: str                                     # Short label for logs
