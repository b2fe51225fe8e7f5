"""
Inbound frame models for the WebSocket protocol.

Every text message received on a session is decoded into exactly one of
these variants by `protocol.codec.decode`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Ping:
    """Liveness probe from the client; answered with "pong"."""


@dataclass(frozen=True)
class ImageData:
    """
    An image frame sent as a data URL.

    Attributes:
        base64: Raw base64 payload (everything after the first comma).
            May be empty when the client sent a prefix with no comma.
    """
    base64: str


@dataclass(frozen=True)
class Unknown:
    """Anything that is neither a ping nor an image; ignored by the session."""
    raw: str = ""


InboundFrame = Union[Ping, ImageData, Unknown]
