"""
Conversation state machine.

``process_utterance`` maps (session, utterance) to (new session, reply). It
never mutates its input and has no side effects besides the price lookup made
while a symbol is being chosen. Unparseable input never fails a turn: the
state simply does not advance and the reply asks again.

    greeting -> exchange_selected -> symbol_selected
        -> awaiting_quantity | awaiting_price -> confirming -> completed
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..config.defaults import DEFAULT_EXCHANGES
from ..data.extractor import contains_any, extract_number, extract_order_details, match_exchange
from ..errors import PriceLookupError
from ..logging.config import get_state_logger, log_state_transition
from ..pricing.base import PriceGateway
from . import replies
from .models import ConversationState, TradingSession, TurnResult

ACCEPT_WORDS = ("yes", "correct")
REJECT_WORDS = ("no", "wrong")


@dataclass(frozen=True)
class TurnContext:
    """Collaborators available to every state handler."""
    price_gateway: PriceGateway
    exchanges: Sequence[str] = DEFAULT_EXCHANGES


StateHandler = Callable[[TradingSession, str, TurnContext], TurnResult]


def process_utterance(
    session: TradingSession,
    utterance: str,
    price_gateway: PriceGateway,
    exchanges: Sequence[str] = DEFAULT_EXCHANGES
) -> TurnResult:
    """
    Advance a conversation by one caller utterance.

    Args:
        session: Current session record
        utterance: Transcribed caller speech
        price_gateway: Quote source used while choosing a symbol
        exchanges: Venues the caller may choose from, in priority order

    Returns:
        TurnResult with the new session record and the reply text
    """
    text = utterance.strip().lower()
    ctx = TurnContext(price_gateway=price_gateway, exchanges=tuple(exchanges))

    handler = STATE_HANDLERS.get(session.state, handle_unknown_state)
    result = handler(session, text, ctx)

    log_state_transition(
        get_state_logger(__name__),
        call_id=session.call_id,
        from_state=_state_name(session.state),
        to_state=result.session.state.value,
        trigger=result.trigger,
        context={
            "exchange": result.session.exchange,
            "symbol": result.session.symbol,
            "quantity": result.session.quantity,
            "limit_price": result.session.limit_price,
        }
    )
    return result


def handle_exchange_selection(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    exchange = match_exchange(text, ctx.exchanges)
    if exchange is None:
        return TurnResult(session, replies.exchange_not_recognized(ctx.exchanges), "exchange_not_recognized")

    return TurnResult(session.with_exchange(exchange), replies.exchange_selected(exchange), "exchange_selected")


def handle_symbol_selection(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    symbol = text.upper()
    if not symbol:
        return TurnResult(session, replies.REPROMPT_SYMBOL, "symbol_missing")

    try:
        price = ctx.price_gateway.lookup_price(session.exchange, symbol)
    except PriceLookupError as e:
        get_state_logger(__name__).warning(
            "Failed to fetch price",
            call_id=session.call_id,
            exchange=session.exchange,
            symbol=symbol,
            error=str(e),
            error_type=type(e).__name__
        )
        return TurnResult(session, replies.price_unavailable(symbol), "price_lookup_failed")

    return TurnResult(
        session.with_symbol(symbol, price),
        replies.price_quoted(symbol, session.exchange, price),
        "price_quoted"
    )


def handle_order_details(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    quantity, price = extract_order_details(text)
    return _advance_order(session, _positive(quantity), _positive(price))


def handle_quantity(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    value, found = extract_number(text)
    quantity = _positive(value) if found else None
    if quantity is None:
        return TurnResult(session, replies.REPROMPT_QUANTITY, "quantity_missing")
    return _advance_order(session, quantity=quantity)


def handle_order_price(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    value, found = extract_number(text)
    price = _positive(value) if found else None
    if price is None:
        return TurnResult(session, replies.REPROMPT_PRICE, "price_missing")
    return _advance_order(session, limit_price=price)


def handle_confirmation(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    if contains_any(text, ACCEPT_WORDS):
        return TurnResult(session.with_state(ConversationState.COMPLETED), replies.ORDER_RECORDED, "order_accepted")

    if contains_any(text, REJECT_WORDS):
        return TurnResult(session.with_order_cleared(), replies.ORDER_REJECTED, "order_rejected")

    return TurnResult(session, replies.ASK_YES_NO, "confirmation_unclear")


def handle_completed(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    return TurnResult(session, replies.ALREADY_COMPLETED, "already_completed")


def handle_unknown_state(session: TradingSession, text: str, ctx: TurnContext) -> TurnResult:
    get_state_logger(__name__).error(
        "Unknown conversation state, restarting",
        call_id=session.call_id,
        state=_state_name(session.state)
    )
    return TurnResult(session.restarted(), replies.lost_track(ctx.exchanges), "state_reset")


STATE_HANDLERS: dict[ConversationState, StateHandler] = {
    ConversationState.GREETING: handle_exchange_selection,
    ConversationState.EXCHANGE_SELECTED: handle_symbol_selection,
    ConversationState.SYMBOL_SELECTED: handle_order_details,
    ConversationState.AWAITING_QUANTITY: handle_quantity,
    ConversationState.AWAITING_PRICE: handle_order_price,
    ConversationState.CONFIRMING: handle_confirmation,
    ConversationState.COMPLETED: handle_completed,
}


def _advance_order(
    session: TradingSession,
    quantity: Optional[float] = None,
    limit_price: Optional[float] = None
) -> TurnResult:
    """Merge accepted values and ask for whatever is still missing."""
    has_quantity = quantity is not None or session.has_quantity
    has_price = limit_price is not None or session.has_limit_price

    if has_quantity and has_price:
        updated = session.with_order(ConversationState.CONFIRMING, quantity, limit_price)
        reply = replies.order_summary(updated.quantity, updated.symbol, updated.limit_price, updated.exchange)
        return TurnResult(updated, reply, "order_complete")

    if has_quantity:
        return TurnResult(
            session.with_order(ConversationState.AWAITING_PRICE, quantity, limit_price),
            replies.ASK_PRICE,
            "price_needed"
        )

    if has_price:
        return TurnResult(
            session.with_order(ConversationState.AWAITING_QUANTITY, quantity, limit_price),
            replies.ASK_QUANTITY,
            "quantity_needed"
        )

    return TurnResult(session, replies.ASK_ORDER_DETAILS, "order_details_missing")


def _positive(value: Optional[float]) -> Optional[float]:
    # Zero or negative quantities and prices are never valid order values
    if value is None or value <= 0:
        return None
    return value


def _state_name(state: object) -> str:
    return state.value if isinstance(state, ConversationState) else str(state)
