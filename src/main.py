"""
Frame relay entry point.

Accepts WebSocket connections carrying data-URL image frames, forwards each
image to the hosted detection model and streams the detections back.

Usage:
    python src/main.py --config config/config.yaml

Arguments:
    --config: Path to configuration file
    --host / --port: Override the listen address
    --log-level: Override log_level from config
"""

import os
import sys
import argparse
import logging
import yaml
from typing import Dict, Any, Tuple, Optional

import uvicorn

from models.config import RelayConfig
from ops.logging import setup_logging
from runtime.context import RuntimeContext
from web.app import create_app

# Environment variable -> provider config key
PROVIDER_ENV = {
    "ROBOFLOW_API_KEY": "api_key",
    "ROBOFLOW_MODEL_ID": "model_id",
    "ROBOFLOW_MODEL_VERSION": "model_version",
    "ROBOFLOW_API_URL": "api_url",
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
VALID_BACKENDS = ('roboflow', 'stub')


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        base_path = os.path.join(os.path.dirname(config_path), "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(os.path.dirname(config_path), "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        # Finally apply explicit config_path if it's not the local override file itself
        if os.path.exists(config_path) and os.path.abspath(config_path) != os.path.abspath(local_overrides_path):
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except Exception as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def inject_provider_secrets(config: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> None:
    """
    Apply provider credentials from the environment over the YAML values.

    Empty variables are ignored so a blank export does not wipe a value set in
    config/config.yaml.
    """
    env = os.environ if environ is None else environ
    provider = config.setdefault('provider', {}) or {}
    config['provider'] = provider
    for var, key in PROVIDER_ENV.items():
        value = env.get(var)
        if value:
            provider[key] = value


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration file structure and values.
    
    Args:
        config: Configuration dictionary
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    server = config.get('server', {}) or {}
    port = server.get('port', 3000)
    if not isinstance(port, int) or not (0 < port < 65536):
        return False, "server.port must be an integer between 1 and 65535"
    if not isinstance(server.get('host', '0.0.0.0'), str):
        return False, "server.host must be a string"

    provider = config.get('provider')
    if not isinstance(provider, dict):
        return False, "Missing required configuration section: provider"

    backend = provider.get('backend', 'roboflow')
    if backend not in VALID_BACKENDS:
        return False, f"provider.backend must be one of: {', '.join(VALID_BACKENDS)}"

    if 'timeout_s' in provider:
        timeout = provider['timeout_s']
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            return False, "provider.timeout_s must be a positive number"

    if backend == 'roboflow':
        for var, key in PROVIDER_ENV.items():
            if key == 'api_url':
                continue
            if not provider.get(key):
                return False, f"Missing provider.{key} (set {var})"
        api_url = provider.get('api_url', 'https://detect.roboflow.com')
        if not isinstance(api_url, str) or not api_url.startswith(('http://', 'https://')):
            return False, "provider.api_url must be an http(s) URL"

    # Validate log settings
    for key in ('log_path', 'log_level'):
        if key not in config:
            return False, f"Missing {key}"
    if config['log_level'] not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"
    
    return True, None


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Frame Relay - WebSocket object-detection relay')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--host', type=str, default=None,
                        help='Listen address (overrides server.host)')
    parser.add_argument('--port', type=int, default=None,
                        help='Listen port (overrides server.port)')
    parser.add_argument('--log-level', type=str, default=None, choices=VALID_LOG_LEVELS,
                        help='Log level (overrides log_level)')
    return parser.parse_args(argv)


def main(argv=None):
    """Main application function."""
    args = parse_args(argv)

    config = load_config(args.config)
    inject_provider_secrets(config)

    server = config.setdefault('server', {}) or {}
    config['server'] = server
    if args.host is not None:
        server['host'] = args.host
    if args.port is not None:
        server['port'] = args.port
    if args.log_level is not None:
        config['log_level'] = args.log_level

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config['log_path'], config['log_level'])

    relay_cfg = RelayConfig.from_dict(config)
    logging.info("Starting Frame Relay")

    ctx = RuntimeContext.from_config(relay_cfg)
    app = create_app(ctx)
    logging.info(f"Server running on http://{relay_cfg.server.host}:{relay_cfg.server.port}")
    uvicorn.run(
        app,
        host=relay_cfg.server.host,
        port=relay_cfg.server.port,
        log_level=relay_cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
