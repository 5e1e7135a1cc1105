"""
Change notifications for Unscramble.
ObservableValue pushes engine state to subscribers; GameEvent is the
serialisable record of one notification.
"""

from dataclasses import dataclass
from typing import Any, Callable

_UNSET = object()


@dataclass
class GameEvent:
    """A single state change. The type names the value that changed."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


# ===== Event Type Constants =====

SCORE = "score"
ROUND_COUNT = "round_count"
SCRAMBLED_WORD = "scrambled_word"


class ObservableValue:
    """
    Holds a value and notifies subscribers synchronously whenever it is set.

    A subscriber that arrives after the value was set receives the latest
    value immediately, unless it asks not to be replayed.
    """

    def __init__(self, value: Any = _UNSET):
        self._value = value
        self._subscribers: list[Callable[[Any], None]] = []

    @property
    def value(self) -> Any:
        """Current value, or None before the first set."""
        return None if self._value is _UNSET else self._value

    @property
    def has_value(self) -> bool:
        return self._value is not _UNSET

    def set(self, value: Any) -> None:
        self._value = value
        # Copy so a callback may unsubscribe itself
        for callback in list(self._subscribers):
            callback(value)

    def subscribe(
        self,
        callback: Callable[[Any], None],
        replay: bool = True,
    ) -> Callable[[], None]:
        """Register a callback and return a function that removes it."""
        self._subscribers.append(callback)
        if replay and self.has_value:
            callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
