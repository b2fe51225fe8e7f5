"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


@pytest.fixture
def temp_config_dir(tmp_path):
    """Create a temporary config directory with default.yaml."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    
    default_yaml = config_dir / "default.yaml"
    default_yaml.write_text("""
server:
  host: "127.0.0.1"
  port: 3000

provider:
  backend: "roboflow"
  api_url: "https://detect.roboflow.com"
  timeout_s: 10.0

log_path: "logs/test.log"
log_level: "INFO"
""")
    
    return config_dir


@pytest.fixture
def valid_config():
    """Return a valid configuration dictionary."""
    return {
        "server": {
            "host": "0.0.0.0",
            "port": 3000,
        },
        "provider": {
            "backend": "roboflow",
            "api_url": "https://detect.roboflow.com",
            "api_key": "test-key",
            "model_id": "fish-detector",
            "model_version": "3",
            "timeout_s": 5.0,
        },
        "log_path": "logs/test.log",
        "log_level": "INFO",
    }
