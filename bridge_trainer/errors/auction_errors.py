"""
Auction error classifications.

These exceptions describe calls that violate auction legality. They are
always surfaced verbatim to the caller, never silently corrected.
"""

from typing import Any, Dict, Optional


class AuctionError(Exception):
    """Base class for auction legality problems the trainee can recover from."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class IllegalCallError(AuctionError):
    """An attempted call is not legal at this point of the auction."""

    def __init__(self, message: str, call: Optional[Any] = None,
                 seat: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.call = call
        self.seat = seat


class AuctionCompleteError(IllegalCallError):
    """A call was attempted after the auction ended."""


class CallParseError(AuctionError):
    """Call notation could not be parsed."""

    def __init__(self, message: str, raw: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw = raw
