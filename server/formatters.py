"""JSON formatting utilities for heading data."""

import json

from compass.heading import HeadingState
from server.models import HeadingResponse

__all__ = ["format_heading_message"]


def format_heading_message(state: HeadingState) -> str:
    """Serialize a heading snapshot into a JSON string for WebSocket transmission."""
    payload = HeadingResponse.from_state(state).model_dump()
    return json.dumps({"type": "heading", **payload})
