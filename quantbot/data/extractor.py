"""
Number and keyword extraction from transcribed caller utterances.

Utterances arrive as free speech-to-text output, so extraction is a token
scan rather than a grammar: commas are treated as thousands separators, each
whitespace token is stripped of surrounding punctuation, and a token counts
as a number when it is plain ASCII decimal notation ("65000", "1.5",
"2e3") with a finite value.

Keyword hints are honored as anchors. A hint is satisfied by the first
number at most ``ANCHOR_WINDOW`` tokens after the hint word ("at $65,000",
"price of 100"). Hints are tried in the order given, so earlier hints take
priority. Without hints, or when no hint anchors a number, the first number
in reading order wins.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

STRIP_CHARS = ".,!?$;:'\"()"
ANCHOR_WINDOW = 3

# ASCII decimal or exponent notation only
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

QUANTITY_KEYWORDS = ("quantity", "amount", "size", "qty")
PRICE_KEYWORDS = ("price", "at", "@", "for")


@dataclass(frozen=True)
class NumberToken:
    """A number found in an utterance and its token position."""
    index: int
    value: float


def tokenize(text: str) -> list[str]:
    """Split text into lower-cased tokens with surrounding punctuation removed."""
    words = text.replace(",", "").split()
    return [word.strip(STRIP_CHARS).lower() for word in words]


def parse_number(token: str) -> Optional[float]:
    """Parse a single cleaned token, returning None for non-numbers."""
    if not token or NUMBER_PATTERN.fullmatch(token) is None:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def find_numbers(tokens: Sequence[str]) -> list[NumberToken]:
    """Return every numeric token in reading order."""
    numbers = []
    for index, token in enumerate(tokens):
        value = parse_number(token)
        if value is not None:
            numbers.append(NumberToken(index=index, value=value))
    return numbers


def _anchored(
    tokens: Sequence[str],
    numbers: Sequence[NumberToken],
    hint_keywords: Sequence[str],
    exclude: Optional[NumberToken] = None
) -> Optional[NumberToken]:
    for keyword in hint_keywords:
        keyword = keyword.lower()
        for position, token in enumerate(tokens):
            if token != keyword:
                continue
            for number in numbers:
                if number is exclude:
                    continue
                if position < number.index <= position + ANCHOR_WINDOW:
                    return number
    return None


def extract_number(text: str, hint_keywords: Sequence[str] = ()) -> tuple[float, bool]:
    """
    Extract one number from free text.

    Args:
        text: Utterance to scan
        hint_keywords: Words that anchor the wanted number, highest priority first

    Returns:
        (value, found) - value is 0.0 when nothing was found
    """
    tokens = tokenize(text)
    numbers = find_numbers(tokens)
    if not numbers:
        return 0.0, False

    anchored = _anchored(tokens, numbers, hint_keywords) if hint_keywords else None
    chosen = anchored or numbers[0]
    return chosen.value, True


def extract_order_details(text: str) -> tuple[Optional[float], Optional[float]]:
    """
    Extract quantity and price independently from one utterance.

    Price is anchored by PRICE_KEYWORDS, quantity by QUANTITY_KEYWORDS.
    Numbers no keyword claimed fill quantity first, then price.

    Returns:
        (quantity, price), each None when absent
    """
    tokens = tokenize(text)
    numbers = find_numbers(tokens)

    price = _anchored(tokens, numbers, PRICE_KEYWORDS)
    quantity = _anchored(tokens, numbers, QUANTITY_KEYWORDS, exclude=price)

    unclaimed = [n for n in numbers if n is not price and n is not quantity]
    if quantity is None and unclaimed:
        quantity = unclaimed.pop(0)
    if price is None and unclaimed:
        price = unclaimed.pop(0)

    return (
        quantity.value if quantity else None,
        price.value if price else None,
    )


def match_exchange(text: str, exchanges: Sequence[str]) -> Optional[str]:
    """
    Find the venue named in an utterance (case-insensitive substring).

    The venue occurring earliest in the text wins; venues found at the same
    position are ranked by their order in ``exchanges``.
    """
    lowered = text.lower()
    best: Optional[tuple[int, int]] = None
    for rank, name in enumerate(exchanges):
        position = lowered.find(name.lower())
        if position < 0:
            continue
        if best is None or (position, rank) < best:
            best = (position, rank)
    return exchanges[best[1]] if best else None


def contains_any(text: str, words: Sequence[str]) -> bool:
    """True when any of the words occurs in text as a substring."""
    lowered = text.lower()
    return any(word in lowered for word in words)
