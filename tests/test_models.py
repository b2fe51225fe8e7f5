"""
Smoke tests for typed models and adapters.
"""

from dataclasses import FrozenInstanceError

import pytest

from models.config import DEFAULT_API_URL, ProviderConfig, RelayConfig, ServerConfig
from models.detection import Detection
from models.outcome import Failure, FailureKind, Success
from inference.roboflow_backend import RoboflowPrediction


class TestDetection:
    def test_to_wire(self):
        assert Detection("cat", 0.9).to_wire() == {"class": "cat", "confidence": 0.9}

    def test_from_prediction_drops_geometry(self):
        pred = RoboflowPrediction.model_validate(
            {"class": "fish", "confidence": 1, "x": 0, "y": 0, "width": 1, "height": 1, "class_id": 0}
        )
        det = Detection.from_prediction(pred)
        assert det == Detection(label="fish", confidence=1.0)
        assert isinstance(det.confidence, float)

    def test_frozen(self):
        det = Detection("cat", 0.5)
        with pytest.raises(FrozenInstanceError):
            det.label = "dog"


class TestOutcome:
    def test_success_detections(self):
        outcome = Success((Detection("cat", 0.5),))
        assert outcome.ok is True
        assert outcome.detections == (Detection("cat", 0.5),)

    def test_failure_has_no_detections(self):
        outcome = Failure(FailureKind.PROVIDER_ERROR, "HTTP 500")
        assert outcome.ok is False
        assert outcome.detections == ()


class TestConfigModels:
    def test_defaults(self):
        cfg = RelayConfig.from_dict({})
        assert cfg.server == ServerConfig(host="0.0.0.0", port=3000)
        assert cfg.provider.backend == "roboflow"
        assert cfg.provider.api_url == DEFAULT_API_URL
        assert cfg.provider.timeout_s == 10.0
        assert cfg.log_level == "INFO"

    def test_from_dict(self, valid_config):
        cfg = RelayConfig.from_dict(valid_config)
        assert cfg.provider.api_key == "test-key"
        assert cfg.provider.model_id == "fish-detector"
        assert cfg.provider.model_version == "3"
        assert cfg.provider.endpoint == "https://detect.roboflow.com/fish-detector/3"

    def test_round_trip(self, valid_config):
        cfg = RelayConfig.from_dict(valid_config)
        assert RelayConfig.from_dict(cfg.to_dict()) == cfg

    def test_trailing_slash_stripped(self):
        cfg = ProviderConfig.from_dict({"api_url": "http://localhost:9001/", "model_id": "m", "model_version": "1"})
        assert cfg.endpoint == "http://localhost:9001/m/1"

    def test_numeric_model_version_becomes_string(self):
        cfg = ProviderConfig.from_dict({"model_version": 2})
        assert cfg.model_version == "2"

    def test_api_key_not_in_repr(self):
        cfg = ProviderConfig(api_key="super-secret")
        assert "super-secret" not in repr(cfg)

    def test_config_is_immutable(self):
        cfg = ProviderConfig(api_key="k")
        with pytest.raises(FrozenInstanceError):
            cfg.api_key = "other"
