"""Pytest fixtures for server module testing."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from tests.server.helpers import ControlledResetButton, ControlledSensorReader


@pytest.fixture(autouse=True)
def mock_hardware() -> Iterator[tuple[ControlledSensorReader, ControlledResetButton]]:
    sensor = ControlledSensorReader()
    button = ControlledResetButton()
    with (
        patch("server.main.HeadingSensorReader", return_value=sensor),
        patch("server.main.ResetButton", return_value=button),
    ):
        yield sensor, button
    sensor.cancel()


@pytest.fixture
def sensor(
    mock_hardware: tuple[ControlledSensorReader, ControlledResetButton],
) -> ControlledSensorReader:
    return mock_hardware[0]


@pytest.fixture
def button(
    mock_hardware: tuple[ControlledSensorReader, ControlledResetButton],
) -> ControlledResetButton:
    return mock_hardware[1]
