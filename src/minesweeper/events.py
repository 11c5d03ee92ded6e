"""
Change notification for rendering layers.

A session publishes on three channels: the board layout, the game status
and the remaining safe cell count. Subscribers receive every value once,
in publication order.
"""
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class EventChannel(Generic[T]):
    """
    Ordered observer list for one kind of value.

    With ``replay`` set, a new subscriber is immediately handed the most
    recently published value.
    """

    def __init__(self, replay: bool = False) -> None:
        self._listeners: List[Listener] = []
        self._replay = replay
        self._has_value = False
        self._last: Optional[T] = None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)
        if self._replay and self._has_value:
            listener(self._last)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, value: T) -> None:
        """Deliver a value to every current listener."""
        self._last = value
        self._has_value = True
        # Listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(value)

    @property
    def last(self) -> Optional[T]:
        """Most recently published value, or None."""
        return self._last

    def __len__(self) -> int:
        return len(self._listeners)


@dataclass
class SessionEvents:
    """Channels a game session publishes on."""

    board_changed: EventChannel = field(
        default_factory=lambda: EventChannel(replay=True)
    )
    status_changed: EventChannel = field(default_factory=EventChannel)
    remaining_safe_cells_changed: EventChannel = field(
        default_factory=EventChannel
    )
