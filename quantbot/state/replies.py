"""
Reply texts spoken back to the caller.

The greeting and the order summary are consumed verbatim by the speech
synthesis front-end; keep their wording and number formatting stable.
"""

from typing import Sequence

ORDER_SUMMARY_TEMPLATE = (
    "Got it. To confirm, you want to trade {quantity:.4f} {symbol} at ${price:.4f} "
    "per unit on {exchange}. Is that correct?"
)

ASK_PRICE = "And at what price?"
ASK_QUANTITY = "And what quantity?"
ASK_ORDER_DETAILS = "I need the quantity and the price. For example, '1.5 Bitcoin at 65,000 dollars'."
REPROMPT_QUANTITY = "I didn't catch that. How much do you want to trade?"
REPROMPT_PRICE = "Sorry, what was the price?"
REPROMPT_SYMBOL = "I didn't catch a symbol. Which trading symbol would you like to trade?"
ORDER_RECORDED = "Excellent! Your simulated order has been recorded. Thank you for using GoQuant!"
ORDER_REJECTED = "No problem, let's correct it. What quantity and at what price?"
ASK_YES_NO = "Please confirm with 'yes' or 'no'."
ALREADY_COMPLETED = (
    "Your simulated order has already been recorded. "
    "Please start a new session to place another order."
)


def list_exchanges(exchanges: Sequence[str]) -> str:
    """'A, B, C, or D' style venue listing."""
    names = list(exchanges)
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return ", ".join(names[:-1]) + f", or {names[-1]}"


def greeting(exchanges: Sequence[str]) -> str:
    return (
        "Hello! Welcome to GoQuant's OTC trading service. To get started, please choose "
        f"an exchange from the following options: {list_exchanges(exchanges)}."
    )


def exchange_selected(exchange: str) -> str:
    return f"Great! You've selected {exchange}. Which trading symbol would you like to trade?"


def exchange_not_recognized(exchanges: Sequence[str]) -> str:
    return f"I didn't catch that. Please choose from: {list_exchanges(exchanges)}."


def price_quoted(symbol: str, exchange: str, price: float) -> str:
    return (
        f"The current price for {symbol} on {exchange} is ${price:.4f}. "
        "Now, what quantity and price for the order?"
    )


def price_unavailable(symbol: str) -> str:
    return f"Sorry, I couldn't get the price for {symbol}. Please try a different symbol."


def order_summary(quantity: float, symbol: str, price: float, exchange: str) -> str:
    return ORDER_SUMMARY_TEMPLATE.format(
        quantity=quantity,
        symbol=symbol,
        price=price,
        exchange=exchange
    )


def lost_track(exchanges: Sequence[str]) -> str:
    return (
        "I'm sorry, I seem to have lost track. Let's start over. "
        f"Which exchange would you like to trade on: {list_exchanges(exchanges)}?"
    )
