"""Tests for the event emitter."""
import pytest

from videouploader.core.api.events import EventEmitter


class TestEventEmitter:
    """Test suite for EventEmitter."""
    
    @pytest.fixture
    def emitter(self):
        """Create emitter."""
        return EventEmitter()
    
    def test_emit_in_registration_order(self, emitter):
        """Test handlers run synchronously in order."""
        calls = []
        emitter.on('progress', lambda value: calls.append(('a', value)))
        emitter.on('progress', lambda value: calls.append(('b', value)))
        
        emitter.emit('progress', 1)
        
        assert calls == [('a', 1), ('b', 1)]
    
    def test_unsubscribe(self, emitter):
        """Test the returned function removes the handler."""
        calls = []
        unsubscribe = emitter.on('progress', calls.append)
        
        emitter.emit('progress', 1)
        unsubscribe()
        emitter.emit('progress', 2)
        
        assert calls == [1]
        assert emitter.listener_count('progress') == 0
    
    def test_unsubscribe_twice(self, emitter):
        """Test unsubscribing is idempotent."""
        unsubscribe = emitter.on('progress', print)
        
        unsubscribe()
        unsubscribe()
        
        assert emitter.listener_count('progress') == 0
    
    def test_unsubscribe_removes_one_registration(self, emitter):
        """Test a callback registered twice is removed once."""
        calls = []
        first = emitter.on('progress', calls.append)
        emitter.on('progress', calls.append)
        
        first()
        emitter.emit('progress', 'x')
        
        assert calls == ['x']
    
    def test_unsubscribe_during_emit(self, emitter):
        """Test handlers removed while emitting still see the current event."""
        calls = []
        unsubscribe_b = None
        
        def a(value):
            calls.append('a')
            unsubscribe_b()
        
        emitter.on('progress', a)
        unsubscribe_b = emitter.on('progress', lambda value: calls.append('b'))
        
        emitter.emit('progress', 1)
        emitter.emit('progress', 2)
        
        assert calls == ['a', 'b', 'a']
    
    def test_handler_exception_propagates(self, emitter):
        """Test emit does not swallow handler errors."""
        def broken(value):
            raise ValueError("bad")
        
        emitter.on('playable', broken)
        
        with pytest.raises(ValueError):
            emitter.emit('playable', None)
    
    def test_emit_without_handlers(self, emitter):
        """Test emitting an unknown event is a no-op."""
        emitter.emit('unknown', 1)
