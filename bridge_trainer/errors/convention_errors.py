"""
Convention error classifications.

These exceptions represent convention-authoring bugs or registry misuse.
They fail fast rather than let the engine return incorrect results.
"""

from typing import Any, Dict, Optional, Sequence


class ConventionError(Exception):
    """Base class for unrecoverable convention definition or usage errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class DuplicateConventionIdError(ConventionError):
    """A convention id was registered twice."""

    def __init__(self, message: str, convention_id: Optional[str] = None,
                 registered_ids: Optional[Sequence[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.convention_id = convention_id
        self.registered_ids = list(registered_ids or [])


class UnknownConventionIdError(ConventionError):
    """A convention id was looked up but never registered."""

    def __init__(self, message: str, convention_id: Optional[str] = None,
                 registered_ids: Optional[Sequence[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.convention_id = convention_id
        self.registered_ids = list(registered_ids or [])


class TreeStructureError(ConventionError):
    """A rule tree violates its structural constraints."""

    def __init__(self, message: str, node_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.node_name = node_name


class ConditionDefinitionError(ConventionError):
    """A condition or rule was built with invalid arguments."""

    def __init__(self, message: str, condition_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.condition_name = condition_name


class ConfigurationError(ConventionError):
    """Trainer configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
