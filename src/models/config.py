"""
Typed configuration models matching the YAML config structure.

All config objects are frozen: they are resolved once at startup and shared
read-only by every session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

DEFAULT_API_URL = "https://detect.roboflow.com"


@dataclass(frozen=True)
class ServerConfig:
    """HTTP/WebSocket listener configuration."""
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ServerConfig":
        """Adapter: Create from config dictionary."""
        return cls(
            host=d.get("host", "0.0.0.0"),
            port=int(d.get("port", 3000)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
        }


@dataclass(frozen=True)
class ProviderConfig:
    """External inference provider configuration."""
    backend: str = "roboflow"
    api_url: str = DEFAULT_API_URL
    api_key: str = field(default="", repr=False)
    model_id: str = ""
    model_version: str = ""
    timeout_s: float = 10.0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ProviderConfig":
        return cls(
            backend=d.get("backend", "roboflow"),
            api_url=(d.get("api_url") or DEFAULT_API_URL).rstrip("/"),
            api_key=str(d.get("api_key") or ""),
            model_id=str(d.get("model_id") or ""),
            model_version=str(d.get("model_version") or ""),
            timeout_s=float(d.get("timeout_s", 10.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend,
            "api_url": self.api_url,
            "api_key": self.api_key,
            "model_id": self.model_id,
            "model_version": self.model_version,
            "timeout_s": self.timeout_s,
        }

    @property
    def endpoint(self) -> str:
        """Model endpoint without the api_key query parameter."""
        return f"{self.api_url}/{self.model_id}/{self.model_version}"


@dataclass(frozen=True)
class RelayConfig:
    """
    Complete application configuration.
    
    This is a typed representation of the YAML config structure.
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    log_path: str = "logs/frame_relay.log"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RelayConfig":
        """Adapter: Create RelayConfig from raw dictionary (e.g., from load_config)."""
        return cls(
            server=ServerConfig.from_dict(d.get("server", {}) or {}),
            provider=ProviderConfig.from_dict(d.get("provider", {}) or {}),
            log_path=d.get("log_path", "logs/frame_relay.log"),
            log_level=d.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to dictionary."""
        return {
            "server": self.server.to_dict(),
            "provider": self.provider.to_dict(),
            "log_path": self.log_path,
            "log_level": self.log_level,
        }
