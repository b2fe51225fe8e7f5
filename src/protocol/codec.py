"""
Frame codec for the /ws text protocol.

Client -> server:
  "ping"                              -> Ping
  "data:image<...>,<base64>"          -> ImageData(<base64>)
  anything else (including binary)    -> Unknown

Server -> client:
  "pong", or a JSON array of {"class": str, "confidence": number}.
"""

from __future__ import annotations

import json
from typing import Iterable, Optional, Union

from models.detection import Detection
from models.frame import ImageData, InboundFrame, Ping, Unknown

PING = "ping"
PONG = "pong"
IMAGE_PREFIX = "data:image"


def decode(raw: Optional[Union[str, bytes]]) -> InboundFrame:
    """Classify one inbound message. Never raises."""
    if not isinstance(raw, str):
        return Unknown()
    if raw == PING:
        return Ping()
    if raw.startswith(IMAGE_PREFIX):
        _, _, payload = raw.partition(",")
        return ImageData(base64=payload)
    return Unknown(raw=raw)


def encode(detections: Iterable[Detection]) -> str:
    """Serialize detections to a compact JSON array, preserving order."""
    return json.dumps([d.to_wire() for d in detections], separators=(",", ":"))


def encode_pong() -> str:
    return PONG
