"""Upload error kinds and the structured upload error."""
import json
from enum import Enum
from typing import Any, Dict, Optional

from ...exceptions import UploaderException


class ErrorKind(str, Enum):
    """Classification used by retry strategies."""
    
    ABORTED = 'ABORTED'
    NETWORK_ERROR = 'NETWORK_ERROR'
    NETWORK_TIMEOUT = 'NETWORK_TIMEOUT'
    HTTP_ERROR = 'HTTP_ERROR'
    UNKNOWN = 'UNKNOWN'


class UploadError(UploaderException):
    """
    Exception raised for failed upload requests.
    
    Attributes:
        kind: Error classification
        status: HTTP status (None for transport-level failures)
        raw: Raw response body, if any
        reason: Server supplied reason, or the kind name
        title: Server supplied title
        type: Server supplied problem type URI
        fields: Every field parsed from the JSON error body
    """
    
    def __init__(
        self,
        kind: ErrorKind,
        status: Optional[int] = None,
        raw: Optional[str] = None,
        reason: Optional[str] = None,
        title: Optional[str] = None,
        type: Optional[str] = None,
        fields: Optional[Dict[str, Any]] = None
    ) -> None:
        self.kind = kind
        self.raw = raw
        self.reason = reason or kind.value
        self.title = title
        self.type = type
        self.fields = fields or {}
        super().__init__(self._format_message(kind, status, self.reason, title), status)
    
    @staticmethod
    def _format_message(
        kind: ErrorKind,
        status: Optional[int],
        reason: str,
        title: Optional[str]
    ) -> str:
        message = f"{kind.value}"
        if status is not None:
            message += f" (HTTP {status})"
        if title:
            message += f": {title}"
        elif reason != kind.value:
            message += f": {reason}"
        return message
    
    @property
    def is_aborted(self) -> bool:
        return self.kind is ErrorKind.ABORTED
    
    @classmethod
    def aborted(cls) -> 'UploadError':
        return cls(ErrorKind.ABORTED)
    
    @classmethod
    def network_error(cls, detail: Optional[str] = None) -> 'UploadError':
        return cls(ErrorKind.NETWORK_ERROR, title=detail)
    
    @classmethod
    def network_timeout(cls) -> 'UploadError':
        return cls(ErrorKind.NETWORK_TIMEOUT)


def parse_error_response(status: int, text: Optional[str]) -> UploadError:
    """
    Build an UploadError from an HTTP error response.
    
    The body is parsed as JSON when possible; any other body is kept as
    raw text with reason UNKNOWN.
    
    Args:
        status: HTTP status code
        text: Raw response body
        
    Returns:
        Structured HTTP error
    """
    try:
        parsed = json.loads(text) if text else None
    except ValueError:
        parsed = None
    
    if not isinstance(parsed, dict):
        return UploadError(
            ErrorKind.HTTP_ERROR,
            status=status,
            raw=text,
            reason='UNKNOWN'
        )
    
    return UploadError(
        ErrorKind.HTTP_ERROR,
        status=status,
        raw=text,
        reason=parsed.get('reason'),
        title=parsed.get('title'),
        type=parsed.get('type'),
        fields=parsed
    )
