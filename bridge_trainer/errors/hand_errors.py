"""
Hand and deal error classifications.
"""

from typing import Any, Dict, Optional


class HandError(Exception):
    """Base class for hand construction and dealing problems."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidHandError(HandError):
    """A hand does not hold exactly 13 unique cards, or card notation is bad."""

    def __init__(self, message: str, card_count: Optional[int] = None,
                 raw: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.card_count = card_count
        self.raw = raw


class DealGenerationError(HandError):
    """No deal satisfying the constraints was found within the attempt budget."""

    def __init__(self, message: str, attempts: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = attempts
        self.recoverable = True
