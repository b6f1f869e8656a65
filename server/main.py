"""FastAPI web server exposing the live compass deviation.

Start with::

    uvicorn server.main:app --host 0.0.0.0 --port 8000

Endpoints:
    ``GET /heading``  current true/magnetic headings and compass error
    ``POST /reset``   clear both headings (same as the hardware button)
    ``WS /ws``        one ``type="heading"`` JSON message per state change,
                      starting with the current snapshot on connect

Configuration comes from ``COMPASS_*`` environment variables (see
``compass.config.Settings``).
"""

import asyncio
import logging
import threading
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect

from compass.button import ResetButton
from compass.config import Settings
from compass.monitor import HeadingMonitor
from compass.sensor import HeadingSensorReader
from server.broadcaster import subscribe, unsubscribe
from server.models import HeadingResponse
from server.sensors import publish_state, run_button_loop, run_sensor_forever

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"
_TIMEOUT_SECONDS = 5.0


def _run_button_thread(
    settings: Settings,
    loop: asyncio.AbstractEventLoop,
    monitor: HeadingMonitor,
    stop: threading.Event,
) -> None:
    try:
        with ResetButton(
            settings.button_gpio_chip,
            settings.button_gpio_line,
            settings.button_debounce_ms,
        ) as button:
            run_button_loop(loop, button, monitor, stop)
    except OSError as exc:
        logger.warning("Reset button unavailable: %s", exc)


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    settings = Settings()
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)

    loop = asyncio.get_running_loop()
    monitor = HeadingMonitor.from_settings(settings)
    application.state.monitor = monitor

    stop = threading.Event()
    sensor = HeadingSensorReader(
        settings.serial_port, settings.serial_baud, settings.serial_timeout
    )
    executor = ThreadPoolExecutor(max_workers=2)
    loop.run_in_executor(executor, run_sensor_forever, loop, sensor, monitor, stop)
    if settings.button_enabled:
        loop.run_in_executor(
            executor, _run_button_thread, settings, loop, monitor, stop
        )
    logger.info("Compass server ready on %s", settings.serial_port)

    yield

    stop.set()
    sensor.cancel()
    executor.shutdown(wait=False)
    logger.info("Compass server stopped")


app = FastAPI(
    title="Compass Deviation",
    description="Live true/magnetic heading and compass error from NMEA 0183",
    lifespan=_lifespan,
)


@app.get("/heading", response_model=HeadingResponse)
async def get_heading(request: Request) -> HeadingResponse:
    """Return the current heading snapshot."""
    monitor: HeadingMonitor = request.app.state.monitor
    return HeadingResponse.from_state(monitor.state)


@app.post("/reset", response_model=HeadingResponse)
async def reset_heading(request: Request) -> HeadingResponse:
    """Clear both headings and notify WebSocket subscribers."""
    monitor: HeadingMonitor = request.app.state.monitor
    monitor.reset()
    publish_state(monitor, asyncio.get_running_loop())
    return HeadingResponse.from_state(monitor.state)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream heading JSON messages to a connected WebSocket client.

    The current snapshot is sent immediately, followed by the newest
    snapshot after each state change. A slow client skips intermediate
    snapshots rather than queueing them. The connection closes with code
    1001 if no message arrives within ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    monitor: HeadingMonitor = websocket.app.state.monitor
    queue = subscribe(lambda: monitor.state)
    try:
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        unsubscribe(queue)
