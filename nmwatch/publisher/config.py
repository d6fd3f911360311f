"""Configuration for the connectivity publisher."""

import os
from dataclasses import dataclass, field
from typing import Optional

from nmwatch.shared.config import get_config_path, get_log_level, load_yaml_config
from nmwatch.shared.mqtt import MQTTConfig


@dataclass
class PublisherConfig:
    """Configuration for publishing connectivity transitions."""

    # D-Bus settings
    query_timeout: float = 5.0  # seconds

    # MQTT settings
    mqtt: MQTTConfig = field(default_factory=MQTTConfig)
    mqtt_topic: str = "system/network/connected"
    sensor_id: str = "nmwatch"
    retain: bool = True

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "PublisherConfig":
        """Create config from dictionary."""
        mqtt_data = data.get("mqtt", {})

        return cls(
            query_timeout=data.get("query_timeout", 5.0),
            mqtt=MQTTConfig.from_dict(mqtt_data),
            mqtt_topic=data.get("mqtt_topic", "system/network/connected"),
            sensor_id=data.get("sensor_id", "nmwatch"),
            retain=data.get("retain", True),
            log_level=get_log_level(data),
        )


def load_config(config_path: Optional[str] = None) -> PublisherConfig:
    """Load configuration from YAML file or environment.

    Args:
        config_path: Path to YAML config file. If not provided,
                    looks for NMWATCH_CONFIG env var,
                    then config/publisher.yaml, then defaults.

    Returns:
        PublisherConfig instance.
    """
    if config_path is None:
        config_path = os.environ.get("NMWATCH_CONFIG")

    if config_path is None and get_config_path().exists():
        config_path = str(get_config_path())

    if config_path and os.path.exists(config_path):
        return PublisherConfig.from_dict(load_yaml_config(config_path))

    # Environment variable overrides
    config = PublisherConfig()

    if mqtt_broker := os.environ.get("MQTT_BROKER"):
        config.mqtt.broker = mqtt_broker
    if mqtt_topic := os.environ.get("NMWATCH_MQTT_TOPIC"):
        config.mqtt_topic = mqtt_topic
    if timeout := os.environ.get("NMWATCH_QUERY_TIMEOUT"):
        config.query_timeout = float(timeout)
    if log_level := os.environ.get("LOG_LEVEL"):
        config.log_level = log_level

    return config
