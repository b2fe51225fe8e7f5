from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from inference import InferenceBackend, create_backend
from models.config import RelayConfig


@dataclass
class RuntimeContext:
    """Holds the resolved config and shared services; avoids global singletons."""

    config: RelayConfig
    backend: InferenceBackend
    http_client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(cls, config: RelayConfig) -> "RuntimeContext":
        """Build the shared HTTP client and the configured inference backend."""
        client = httpx.AsyncClient(timeout=httpx.Timeout(config.provider.timeout_s))
        return cls(
            config=config,
            backend=create_backend(config.provider, client),
            http_client=client,
        )

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
