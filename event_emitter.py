"""
Event Emitter Module
Named events with ordered, synchronous listener dispatch
"""

from typing import Dict, List, Protocol

from loguru import logger


class Listener(Protocol):
    """Anything callable without arguments"""

    def __call__(self) -> None:
        ...


class EventEmitter:
    """
    Registry of listeners keyed by event name.

    Listeners run in registration order on the emitting thread. The same
    listener may be registered several times and is then called once per
    registration. There is no way to unregister.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def register(self, event_name: str, listener: Listener) -> None:
        """Append a listener for event_name"""
        self._listeners.setdefault(event_name, []).append(listener)
        logger.debug("Listener registered for '{}' ({} total)", event_name, len(self._listeners[event_name]))

    on = register

    def emit(self, event_name: str) -> None:
        """
        Call every listener registered for event_name.

        Emitting a name nobody listens to does nothing. An exception raised by a
        listener propagates to the caller and the remaining listeners are skipped.
        """
        listeners = self._listeners.get(event_name)
        if not listeners:
            return
        logger.debug("Emitting '{}' to {} listener(s)", event_name, len(listeners))
        for listener in listeners:
            listener()

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, ()))
