from __future__ import annotations

import logging

from barbearia_sdk.changes import ChangeFeed


def test_publish_reaches_table_subscribers_only() -> None:
    feed = ChangeFeed()
    received = []
    feed.subscribe("appointments", lambda table, event: received.append((table, event)))
    feed.subscribe("products", lambda table, event: received.append(("wrong", event)))

    delivered = feed.publish("appointments", "INSERT", {"id": "apt-1"})

    assert delivered == 1
    assert received == [("appointments", {"event": "INSERT", "record": {"id": "apt-1"}})]


def test_unsubscribe_stops_delivery() -> None:
    feed = ChangeFeed()
    received = []
    unsubscribe = feed.subscribe("barber_blocks", lambda table, event: received.append(event))

    unsubscribe()
    unsubscribe()

    assert feed.publish("barber_blocks", "DELETE") == 0
    assert feed.subscriber_count("barber_blocks") == 0
    assert received == []


def test_failing_subscriber_is_logged_and_skipped(caplog) -> None:
    feed = ChangeFeed()
    received = []

    def broken(table, event):
        raise RuntimeError("boom")

    feed.subscribe("appointments", broken)
    feed.subscribe("appointments", lambda table, event: received.append(event["event"]))

    with caplog.at_level(logging.ERROR, logger="barbearia_sdk.changes"):
        delivered = feed.publish("appointments", "UPDATE")

    assert delivered == 1
    assert received == ["UPDATE"]
    assert "change_subscriber_failed" in caplog.text
