"""
Inference backends for the frame relay.
"""

from __future__ import annotations

import httpx

from models.config import ProviderConfig

from .backend import InferenceBackend
from .roboflow_backend import RoboflowBackend
from .stub_backend import StubBackend


def create_backend(cfg: ProviderConfig, client: httpx.AsyncClient) -> InferenceBackend:
    """Select the backend named by `provider.backend`."""
    if cfg.backend == "stub":
        return StubBackend()
    if cfg.backend == "roboflow":
        return RoboflowBackend(cfg, client)
    raise ValueError(f"Unknown provider backend: {cfg.backend}")


__all__ = ["InferenceBackend", "RoboflowBackend", "StubBackend", "create_backend"]
