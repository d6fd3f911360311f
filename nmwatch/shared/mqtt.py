"""MQTT configuration and payload helpers."""

import json
import time
from dataclasses import dataclass
from typing import Optional


@dataclass
class MQTTConfig:
    """MQTT broker configuration."""
    broker: str = "localhost"
    port: int = 1883
    client_id: str = "nmwatch"
    keepalive: int = 60
    qos: int = 1

    @classmethod
    def from_dict(cls, data: dict) -> "MQTTConfig":
        """Create config from dictionary."""
        return cls(
            broker=data.get("broker", "localhost"),
            port=data.get("port", 1883),
            client_id=data.get("client_id", "nmwatch"),
            keepalive=data.get("keepalive", 60),
            qos=data.get("qos", 1),
        )


def create_state_payload(
    connected: bool,
    sensor_id: str,
    timestamp: Optional[float] = None,
) -> str:
    """Create a sensor style MQTT payload for a connectivity state.

    Args:
        connected: Coarse connectivity state.
        sensor_id: Identifier of the publishing host.
        timestamp: Unix timestamp (defaults to current time).

    Returns:
        JSON string payload with value 1 (connected) or 0 (disconnected).
    """
    return json.dumps({
        "value": 1 if connected else 0,
        "unit": "state",
        "ts": timestamp or time.time(),
        "sensor": sensor_id,
    })
