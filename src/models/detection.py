"""
Detection models for inference results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Detection:
    """
    A single labeled detection returned to the client.

    Attributes:
        label: Class name reported by the provider.
        confidence: Detection confidence score (0-1).
    """
    label: str
    confidence: float

    def to_wire(self) -> Dict[str, Any]:
        """Return the client-facing mapping ({"class", "confidence"})."""
        return {"class": self.label, "confidence": self.confidence}

    @classmethod
    def from_prediction(cls, pred) -> "Detection":
        """
        Adapter: Convert a provider prediction to a Detection.

        Only the class name and confidence are kept; box geometry and class id
        are dropped.
        """
        return cls(label=pred.class_name, confidence=float(pred.confidence))
