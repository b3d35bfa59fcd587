"""Upload errors and error parsing."""
from .api_errors import ErrorKind, UploadError, parse_error_response

__all__ = [
    'ErrorKind',
    'UploadError',
    'parse_error_response',
]
