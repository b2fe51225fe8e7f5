"""
Typed models for the frame relay.

Frames, detections and outcomes are immutable values; config objects are
resolved once at startup and shared read-only.
"""

from .frame import InboundFrame, Ping, ImageData, Unknown
from .detection import Detection
from .outcome import InferenceOutcome, Success, Failure, FailureKind
from .config import RelayConfig, ServerConfig, ProviderConfig

__all__ = [
    # Frames
    "InboundFrame",
    "Ping",
    "ImageData",
    "Unknown",
    # Detection
    "Detection",
    # Outcomes
    "InferenceOutcome",
    "Success",
    "Failure",
    "FailureKind",
    # Config
    "RelayConfig",
    "ServerConfig",
    "ProviderConfig",
]
