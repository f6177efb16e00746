"""
Error classification for the bidding engine.

Auction errors are surfaced to the trainee (another call can be tried);
convention errors are authoring or usage bugs and are never recovered from.
"""

from .auction_errors import (
    AuctionError,
    IllegalCallError,
    AuctionCompleteError,
    CallParseError,
)
from .convention_errors import (
    ConventionError,
    DuplicateConventionIdError,
    UnknownConventionIdError,
    TreeStructureError,
    ConditionDefinitionError,
    ConfigurationError,
)
from .hand_errors import (
    HandError,
    InvalidHandError,
    DealGenerationError,
)

__all__ = [
    # Auction Errors
    "AuctionError",
    "IllegalCallError",
    "AuctionCompleteError",
    "CallParseError",
    # Convention Errors
    "ConventionError",
    "DuplicateConventionIdError",
    "UnknownConventionIdError",
    "TreeStructureError",
    "ConditionDefinitionError",
    "ConfigurationError",
    # Hand / Deal Errors
    "HandError",
    "InvalidHandError",
    "DealGenerationError",
]
