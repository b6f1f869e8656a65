"""Latest-snapshot fan-out of heading updates to WebSocket clients.

Every client owns a one-slot queue. A newer snapshot replaces one the client
has not sent yet, so a slow client skips stale headings and always catches up
with the current state instead of replaying a backlog.
"""

import asyncio
import threading
from collections.abc import Callable

from compass.heading import HeadingState
from server.formatters import format_heading_message

__all__ = ["broadcast_latest", "subscribe", "unsubscribe"]

_subscriber_queues: list[asyncio.Queue[str]] = []
_publish_lock = threading.Lock()


def subscribe(current: Callable[[], HeadingState]) -> asyncio.Queue[str]:
    """Register a new client queue holding the current snapshot.

    The queue is registered before *current* is read, so an update published
    concurrently is either in the snapshot or delivered afterwards.
    """
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=1)
    _subscriber_queues.append(queue)
    _replace_latest(queue, format_heading_message(current()))
    return queue


def unsubscribe(queue: asyncio.Queue[str]) -> None:
    """Unregister a client queue; unknown queues are ignored."""
    if queue in _subscriber_queues:
        _subscriber_queues.remove(queue)


def _replace_latest(queue: asyncio.Queue[str], message: str) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def broadcast_latest(
    current: Callable[[], HeadingState], loop: asyncio.AbstractEventLoop
) -> None:
    """Send the current snapshot to every client, from any thread.

    Reading the state and scheduling the delivery happen under one lock, so
    two publishing threads cannot deliver their snapshots out of order.
    """
    with _publish_lock:
        message = format_heading_message(current())
        for queue in list(_subscriber_queues):
            loop.call_soon_threadsafe(_replace_latest, queue, message)
