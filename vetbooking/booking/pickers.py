"""Scoped click-outside subscriptions for the date and time pickers."""

from collections.abc import Callable
from enum import Enum


class PickerKind(str, Enum):
    CALENDAR = 'calendar'
    TIME = 'time'


class ClickOutsideEvents:
    """Dispatches "clicked outside the open picker" to current subscribers."""

    def __init__(self):
        self._listeners: list[Callable[[], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self) -> None:
        for listener in list(self._listeners):
            listener()
