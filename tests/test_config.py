"""Unit tests for configuration loading."""

import json
import os

import pytest

from nmwatch.publisher.config import PublisherConfig, load_config
from nmwatch.shared.config import get_config_path, get_log_level, load_yaml_config
from nmwatch.shared.mqtt import MQTTConfig, create_state_payload


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("NMWATCH_CONFIG", "NMWATCH_CONFIG_DIR", "NMWATCH_MQTT_TOPIC",
                 "NMWATCH_QUERY_TIMEOUT", "MQTT_BROKER", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestPublisherConfig:
    """Test suite for PublisherConfig loading."""

    def test_defaults(self):
        config = PublisherConfig()

        assert config.query_timeout == 5.0
        assert config.mqtt.broker == "localhost"
        assert config.mqtt_topic == "system/network/connected"
        assert config.retain is True

    def test_from_dict(self):
        config = PublisherConfig.from_dict({
            "query_timeout": 1.5,
            "mqtt": {"broker": "broker.lan", "port": 8883, "qos": 0},
            "mqtt_topic": "shed/network/connected",
            "retain": False,
            "log_level": "debug",
        })

        assert config.query_timeout == 1.5
        assert config.mqtt.broker == "broker.lan"
        assert config.mqtt.port == 8883
        assert config.mqtt.qos == 0
        assert config.mqtt_topic == "shed/network/connected"
        assert config.retain is False
        assert config.log_level == "DEBUG"

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "publisher.yaml"
        path.write_text("mqtt:\n  broker: mqtt.example\nsensor_id: pi-4\n")

        config = load_config(str(path))

        assert config.mqtt.broker == "mqtt.example"
        assert config.sensor_id == "pi-4"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "publisher.yaml"
        path.write_text("mqtt_topic: from/env\n")
        monkeypatch.setenv("NMWATCH_CONFIG", str(path))

        assert load_config().mqtt_topic == "from/env"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MQTT_BROKER", "10.0.0.5")
        monkeypatch.setenv("NMWATCH_MQTT_TOPIC", "a/b")
        monkeypatch.setenv("NMWATCH_QUERY_TIMEOUT", "0.5")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        config = load_config(str(tmp_path / "missing.yaml"))

        assert config.mqtt.broker == "10.0.0.5"
        assert config.mqtt_topic == "a/b"
        assert config.query_timeout == 0.5
        assert config.log_level == "WARNING"


class TestSharedConfig:
    """Tests for the shared YAML helpers."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "nope.yaml", load_env=False)

    def test_empty_file_is_empty_dict(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_yaml_config(path, load_env=False) == {}

    def test_env_file_beside_config_is_loaded(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("NMWATCH_TEST_SECRET=from-dotenv\n")
        path = tmp_path / "publisher.yaml"
        path.write_text("sensor_id: pi\n")
        monkeypatch.delenv("NMWATCH_TEST_SECRET", raising=False)

        load_yaml_config(path)

        assert os.environ["NMWATCH_TEST_SECRET"] == "from-dotenv"
        monkeypatch.delenv("NMWATCH_TEST_SECRET")

    def test_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("NMWATCH_TEST_SECRET=from-dotenv\n")
        path = tmp_path / "publisher.yaml"
        path.write_text("sensor_id: pi\n")
        monkeypatch.setenv("NMWATCH_TEST_SECRET", "from-shell")

        load_yaml_config(path)

        assert os.environ["NMWATCH_TEST_SECRET"] == "from-shell"

    @pytest.mark.parametrize("value, expected", [
        ("debug", "DEBUG"),
        ("Warning", "WARNING"),
        ("verbose", "INFO"),
        (None, "INFO"),
    ])
    def test_log_level(self, value, expected):
        config = {} if value is None else {"log_level": value}

        assert get_log_level(config) == expected

    def test_config_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NMWATCH_CONFIG_DIR", str(tmp_path))

        assert get_config_path() == tmp_path / "publisher.yaml"


class TestMQTTHelpers:
    """Tests for MQTT config and payloads."""

    def test_mqtt_config_from_dict_defaults(self):
        assert MQTTConfig.from_dict({}) == MQTTConfig()

    def test_state_payload(self):
        payload = json.loads(create_state_payload(False, "host-1", timestamp=123.0))

        assert payload == {"value": 0, "unit": "state", "ts": 123.0, "sensor": "host-1"}
