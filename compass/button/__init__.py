"""GPIO reset button."""

from compass.button.reader import ResetButton

__all__ = ["ResetButton"]
