"""Card and hand notation parsing."""

from typing import Iterable, Union

from ..errors import InvalidHandError
from .models import Card, Hand, Rank, Suit


def parse_card(notation: str) -> Card:
    """Parse ``"SA"`` (suit then rank) into a Card."""
    text = notation.strip().upper()
    if len(text) != 2:
        raise InvalidHandError(f"Invalid card notation: {notation}", raw=notation)
    try:
        return Card(Suit(text[0]), Rank(text[1]))
    except ValueError as e:
        raise InvalidHandError(f"Invalid card notation: {notation}", raw=notation) from e


def parse_hand(notation: Union[str, Iterable[str]]) -> Hand:
    """
    Parse a hand.

    Accepts either a list of card codes (``["SA", "SK", ...]``) or a
    suit-grouped string in spades-hearts-diamonds-clubs order, e.g.
    ``"AKQ2.J53.T98.642"`` (``-`` marks a void).
    """
    if isinstance(notation, str):
        groups = notation.strip().split(".")
        if len(groups) != 4:
            raise InvalidHandError(
                f"Hand string needs four dot-separated suits: {notation}", raw=notation
            )
        codes = []
        for suit_letter, ranks in zip("SHDC", groups):
            if ranks in ("", "-"):
                continue
            codes.extend(f"{suit_letter}{rank}" for rank in ranks)
    else:
        codes = list(notation)

    return Hand(tuple(parse_card(code) for code in codes))
