"""Event emitter implementation using Observer Pattern."""
from typing import Dict, List, Callable


class EventEmitter:
    """
    Event emitter using Observer Pattern.
    
    Handlers run synchronously, in registration order. A handler that
    raises stops the emission and the exception reaches the emitter.
    """
    
    def __init__(self):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
    
    def on(self, event: str, callback: Callable) -> Callable[[], None]:
        """
        Registers an event handler.
        
        The same callback may be registered more than once; each
        registration is invoked.
        
        Returns:
            A function removing exactly this registration
        """
        handlers = self._events.setdefault(event, [])
        entry = _Registration(callback)
        handlers.append(entry)
        
        def unsubscribe() -> None:
            current = self._events.get(event)
            if current and entry in current:
                current.remove(entry)
        
        return unsubscribe
    
    def emit(self, event: str, *args, **kwargs):
        """Emits an event."""
        for entry in list(self._events.get(event, ())):
            entry.callback(*args, **kwargs)
    
    def listener_count(self, event: str) -> int:
        return len(self._events.get(event, ()))


class _Registration:
    __slots__ = ('callback',)
    
    def __init__(self, callback: Callable):
        self.callback = callback
