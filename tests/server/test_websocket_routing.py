"""Tests for heading payload routing over HTTP and WebSocket."""

import pytest
from fastapi.testclient import TestClient

from server.main import app
from tests.server.helpers import (
    ControlledResetButton,
    ControlledSensorReader,
    make_sentence,
)

_UNSET = {
    "type": "heading",
    "true_bearing": None,
    "magnetic_bearing": None,
    "compass_error": None,
    "deviation_direction": None,
}


def test_initial_snapshot_on_connect() -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        assert websocket.receive_json() == _UNSET


def test_hdt_sentence_broadcast(sensor: ControlledSensorReader) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(make_sentence("HEHDT,123.4,T"))
        data = websocket.receive_json()
        assert data["type"] == "heading"
        assert data["true_bearing"] == pytest.approx(123.4)
        assert data["compass_error"] is None


def test_sentence_split_across_chunks(sensor: ControlledSensorReader) -> None:
    sentence = make_sentence("HEHDM,045.0,M")
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(sentence[:6])
        sensor.chunk_queue.put(sentence[6:])
        data = websocket.receive_json()
        assert data["magnetic_bearing"] == pytest.approx(45.0)


def test_compass_error_broadcast(sensor: ControlledSensorReader) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(
            make_sentence("HEHDT,123.4,T") + make_sentence("HEHDM,045.0,M")
        )
        data = websocket.receive_json()
        assert data["compass_error"] == pytest.approx(-78.4)
        assert data["deviation_direction"] == "E"


def test_get_heading(sensor: ControlledSensorReader) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(make_sentence("HEHDT,353.6,T") + make_sentence("HEHDM,0.8,M"))
        websocket.receive_json()
        response = client.get("/heading")
        assert response.status_code == 200
        body = response.json()
        assert body["true_bearing"] == pytest.approx(353.6)
        assert body["magnetic_bearing"] == pytest.approx(0.8)
        assert body["compass_error"] == pytest.approx(7.2, abs=1e-3)
        assert body["deviation_direction"] == "W"


def test_post_reset(sensor: ControlledSensorReader) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(make_sentence("HEHDT,123.4,T"))
        websocket.receive_json()
        response = client.post("/reset")
        assert response.status_code == 200
        assert response.json()["true_bearing"] is None
        assert websocket.receive_json() == _UNSET


def test_button_press_resets(
    sensor: ControlledSensorReader, button: ControlledResetButton
) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(make_sentence("HEHDT,123.4,T"))
        websocket.receive_json()
        button.press_queue.put(True)
        assert websocket.receive_json() == _UNSET
        assert client.get("/heading").json()["true_bearing"] is None


def test_ignored_sentence_not_broadcast(sensor: ControlledSensorReader) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        websocket.receive_json()
        sensor.chunk_queue.put(make_sentence("GPGGA,1"))
        sensor.chunk_queue.put(make_sentence("HEHDT,10.0,T"))
        data = websocket.receive_json()
        assert data["true_bearing"] == pytest.approx(10.0)
