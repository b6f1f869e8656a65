"""ResetButton: GPIO push button that clears the heading state.

Hardware configuration:
    The button connects the GPIO line to ground; the internal pull-up
    keeps the line high while released. A press is a falling edge.

Debouncing is delegated to the kernel (``LineSettings.debounce_period``), so
each physical press produces a single edge event.
"""

from datetime import timedelta
from types import TracebackType

import gpiod
from gpiod.line import Bias, Direction, Edge

__all__ = ["ResetButton"]

# --- Hardware defaults -------------------------------------------------------

_GPIO_CHIP = "/dev/gpiochip0"
_GPIO_LINE = 17
_DEBOUNCE_MS = 50


class ResetButton:
    """Context manager for waiting on reset button presses.

    Manages the GPIO line request for the lifetime of the ``with`` block::

        with ResetButton() as button:
            while True:
                if button.wait_for_press(timeout=1.0):
                    tracker.reset()

    Args:
        gpio_chip: Path to the GPIO chip device (default: ``/dev/gpiochip0``).
        gpio_line: GPIO line number of the button (default: 17).
        debounce_ms: Kernel debounce period in milliseconds (default: 50).
    """

    def __init__(
        self,
        gpio_chip: str = _GPIO_CHIP,
        gpio_line: int = _GPIO_LINE,
        debounce_ms: int = _DEBOUNCE_MS,
    ) -> None:
        """Store hardware parameters; the line is requested in __enter__."""
        self._gpio_chip = gpio_chip
        self._gpio_line = gpio_line
        self._debounce_ms = debounce_ms
        self._chip: gpiod.Chip | None = None
        self._request: gpiod.LineRequest | None = None

    def __enter__(self) -> "ResetButton":
        """Open the chip and request the line with falling-edge detection."""
        settings = gpiod.LineSettings(
            direction=Direction.INPUT,
            edge_detection=Edge.FALLING,
            bias=Bias.PULL_UP,
            debounce_period=timedelta(milliseconds=self._debounce_ms),
        )
        self._chip = gpiod.Chip(self._gpio_chip)
        self._request = self._chip.request_lines(
            consumer="ResetButton",
            config={self._gpio_line: settings},
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Release the GPIO line and close the chip."""
        if self._request is not None:
            self._request.release()
            self._request = None
        if self._chip is not None:
            self._chip.close()
            self._chip = None

    def wait_for_press(self, timeout: float = 1.0) -> bool:
        """Block until the button is pressed or *timeout* seconds pass.

        Returns:
            True if at least one press was seen, False on timeout.

        Raises:
            RuntimeError: If called outside a ``with`` block.
        """
        if self._request is None:
            raise RuntimeError("ResetButton must be used as a context manager.")
        if not self._request.wait_edge_events(timeout=timeout):
            return False
        # Drain queued edges so one press never counts twice
        return bool(self._request.read_edge_events())
