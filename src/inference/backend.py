"""
Inference backend interface.

Backends take the raw base64 payload of an image frame and return an
InferenceOutcome. They must never raise: every failure is logged and turned
into a Failure outcome.
"""

from __future__ import annotations

from typing import Protocol

from models.outcome import InferenceOutcome


class InferenceBackend(Protocol):
    async def detect(self, base64_image: str) -> InferenceOutcome:
        ...
