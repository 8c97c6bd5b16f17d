from __future__ import annotations

import logging

import pytest

from eventsync.state.notifications import LoggingNotifier, Notification, NotificationQueue, Severity


def test_queue_drains_in_order() -> None:
    queue = NotificationQueue()
    queue.notify(Notification(severity=Severity.SUCCESS, message="Event added successfully!"))
    queue.notify(Notification(severity=Severity.ERROR, message="Failed to delete event"))

    assert len(queue) == 2
    assert [n.message for n in queue.drain()] == ["Event added successfully!", "Failed to delete event"]
    assert len(queue) == 0


def test_queue_drops_oldest_when_full() -> None:
    queue = NotificationQueue(maxlen=2)
    for text in ("a", "b", "c"):
        queue.notify(Notification(severity=Severity.SUCCESS, message=text))

    assert [n.message for n in queue.drain()] == ["b", "c"]


def test_logging_notifier_levels(caplog: pytest.LogCaptureFixture) -> None:
    notifier = LoggingNotifier(logging.getLogger("eventsync.test"))

    with caplog.at_level(logging.INFO, logger="eventsync.test"):
        notifier.notify(Notification(severity=Severity.ERROR, message="Failed to fetch events"))
        notifier.notify(Notification(severity=Severity.SUCCESS, message="Event added successfully!"))

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.ERROR, "Failed to fetch events"),
        (logging.INFO, "Event added successfully!"),
    ]
