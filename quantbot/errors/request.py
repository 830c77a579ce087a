"""Boundary errors raised before a request reaches the state machine."""

from typing import Optional

from .recovery import UnrecoverableError


class MalformedRequestError(UnrecoverableError):
    """Inbound payload could not be decoded or is missing required fields."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
