"""
Inference outcome models.

The session only ever sees a Success or a Failure; the raw cause of a
failure stays inside the inference backend and its logs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from .detection import Detection


class FailureKind(str, Enum):
    TRANSPORT_ERROR = "transport_error"
    PROVIDER_ERROR = "provider_error"
    DECODE_ERROR = "decode_error"


@dataclass(frozen=True)
class Success:
    detections: Tuple[Detection, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    reason: str = ""

    @property
    def ok(self) -> bool:
        return False

    @property
    def detections(self) -> Tuple[Detection, ...]:
        # Failures reach the client as an empty detection list.
        return ()


InferenceOutcome = Union[Success, Failure]
