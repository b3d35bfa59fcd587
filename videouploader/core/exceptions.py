"""
Custom exceptions for video upload operations.

Runtime transfer failures live in core.api.errors; this module holds the
package base class and construction-time errors.
"""
from typing import Optional


class UploaderException(Exception):
    """Base exception for all videouploader errors."""
    
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        super().__init__(message)


class ConfigurationError(UploaderException):
    """Raised synchronously for invalid constructor input. Never retried."""
    pass
