"""
In-process stub backend.

Returns a fixed outcome without network access. Used by the test suite and
selectable with `provider.backend: stub` for offline development.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from models.outcome import InferenceOutcome, Success

from .backend import InferenceBackend


class StubBackend(InferenceBackend):
    def __init__(
        self,
        outcome: Optional[InferenceOutcome] = None,
        delay_s: float = 0.0,
        gate: Optional[asyncio.Event] = None,
    ):
        self.outcome = outcome if outcome is not None else Success()
        self.delay_s = delay_s
        self.gate = gate
        self.calls: List[str] = []

    async def detect(self, base64_image: str) -> InferenceOutcome:
        self.calls.append(base64_image)
        if self.gate is not None:
            await self.gate.wait()
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        return self.outcome
