"""
Recovery strategy classifications for error handling.

These bases help categorize errors by their recovery characteristics
and guide how callers react to them.
"""

from typing import Any, Dict, Optional


class RecoverableError(Exception):
    """Base for errors the conversation can recover from locally."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class UnrecoverableError(Exception):
    """Base for errors that require intervention."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False
