"""Session management using Factory Pattern."""
from .session_factory import SessionFactory
from .session_manager import SessionManager
from .operation_registry import OperationRegistry

__all__ = [
    'SessionFactory',
    'SessionManager',
    'OperationRegistry',
]
