"""
Unit tests for EventChannel.
"""
import pytest
from minesweeper import EventChannel


class TestEventChannel:
    """Test observer delivery."""

    def test_publish_reaches_all_listeners_in_order(self) -> None:
        """Every listener sees every value in publication order."""
        channel = EventChannel()
        first, second = [], []
        channel.subscribe(first.append)
        channel.subscribe(second.append)

        for value in (3, 1, 2):
            channel.publish(value)

        assert first == [3, 1, 2]
        assert second == [3, 1, 2]

    def test_unsubscribe_stops_delivery(self) -> None:
        """Removed listeners receive nothing further."""
        channel = EventChannel()
        received = []
        unsubscribe = channel.subscribe(received.append)
        channel.publish(1)
        unsubscribe()
        unsubscribe()
        channel.publish(2)
        assert received == [1]
        assert len(channel) == 0

    def test_plain_channel_does_not_replay(self) -> None:
        """Late subscribers only see later values."""
        channel = EventChannel()
        channel.publish("old")
        received = []
        channel.subscribe(received.append)
        assert received == []

    def test_replay_channel_sends_last_value(self) -> None:
        """Replay channels hand the latest value to new subscribers."""
        channel = EventChannel(replay=True)
        channel.publish("old")
        channel.publish("new")
        received = []
        channel.subscribe(received.append)
        assert received == ["new"]
        assert channel.last == "new"

    def test_listener_may_unsubscribe_during_publish(self) -> None:
        """Unsubscribing inside a callback does not skip other listeners."""
        channel = EventChannel()
        received = []
        holder = {}

        def once(value):
            received.append(("once", value))
            holder["unsubscribe"]()

        holder["unsubscribe"] = channel.subscribe(once)
        channel.subscribe(lambda value: received.append(("always", value)))

        channel.publish(1)
        channel.publish(2)
        assert received == [("once", 1), ("always", 1), ("always", 2)]

    def test_listener_errors_propagate(self) -> None:
        """A failing listener surfaces to the publisher."""
        channel = EventChannel()

        def broken(value):
            raise RuntimeError("render failed")

        channel.subscribe(broken)
        with pytest.raises(RuntimeError, match="render failed"):
            channel.publish(1)
