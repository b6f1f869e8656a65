"""Controlled stand-ins for the sensor and button used by server tests."""

import queue
from collections.abc import Iterator

from compass.nmea import append_checksum


class ControlledSensorReader:
    def __init__(self, *_: object, **__: object) -> None:
        self.chunk_queue: queue.Queue[bytes | None] = queue.Queue()

    def __enter__(self) -> "ControlledSensorReader":
        return self

    def __exit__(self, *_: object) -> None:
        pass

    def cancel(self) -> None:
        self.chunk_queue.put(None)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            item = self.chunk_queue.get()
            if item is None:
                raise EOFError("cancelled")
            yield item


class ControlledResetButton:
    def __init__(self, *_: object, **__: object) -> None:
        self.press_queue: queue.Queue[bool] = queue.Queue()

    def __enter__(self) -> "ControlledResetButton":
        return self

    def __exit__(self, *_: object) -> None:
        pass

    def wait_for_press(self, timeout: float = 1.0) -> bool:
        try:
            return self.press_queue.get(timeout=min(timeout, 0.05))
        except queue.Empty:
            return False


def make_sentence(content: str) -> bytes:
    return append_checksum(content).encode()
