"""Connectivity Publisher - mirrors watcher transitions to MQTT."""

import logging
import signal
import time
from typing import Optional

import paho.mqtt.client as mqtt
from paho.mqtt.enums import CallbackAPIVersion

from nmwatch.shared.mqtt import create_state_payload
from nmwatch.watcher import ConnectivityWatcher, ListenerHandle

from .config import PublisherConfig

logger = logging.getLogger(__name__)


class ConnectivityPublisher:
    """Service that publishes connected/disconnected transitions to MQTT."""

    def __init__(self, config: PublisherConfig, watcher: ConnectivityWatcher):
        self.config = config
        self.watcher = watcher
        self.mqtt_client: Optional[mqtt.Client] = None
        self._handle: Optional[ListenerHandle] = None
        self._loop = None

    def _on_connect(self, client: mqtt.Client, userdata, flags, reason_code, properties):
        """Republish the last known state whenever the broker (re)connects."""
        if reason_code != 0:
            logger.error(f"MQTT connection to {self.config.mqtt.broker} failed: {reason_code}")
            return

        logger.info(f"Connected to MQTT broker at {self.config.mqtt.broker}:{self.config.mqtt.port}")
        if self.watcher.state is not None:
            self.publish_state(self.watcher.state)

    def _on_disconnect(self, client: mqtt.Client, userdata, disconnect_flags, reason_code, properties):
        """Log broker disconnects; paho's network loop reconnects on its own."""
        if reason_code != 0:
            logger.warning(f"Unexpected disconnection from MQTT broker (reason={reason_code})")
        else:
            logger.info("Disconnected from MQTT broker")

    def _setup_mqtt(self) -> None:
        """Create the MQTT client and start its network loop."""
        client = mqtt.Client(
            callback_api_version=CallbackAPIVersion.VERSION2,
            client_id=f"{self.config.mqtt.client_id}-{int(time.time())}",
        )
        client.on_connect = self._on_connect
        client.on_disconnect = self._on_disconnect

        try:
            client.connect(self.config.mqtt.broker, self.config.mqtt.port, self.config.mqtt.keepalive)
            client.loop_start()
        except Exception as e:
            logger.error(f"Failed to connect to MQTT broker {self.config.mqtt.broker}: {e}")
            return

        self.mqtt_client = client

    def publish_state(self, connected: bool) -> None:
        """Publish a connectivity state to MQTT."""
        if not self.mqtt_client:
            return

        try:
            payload = create_state_payload(connected, self.config.sensor_id)
            self.mqtt_client.publish(
                self.config.mqtt_topic,
                payload,
                qos=self.config.mqtt.qos,
                retain=self.config.retain,
            )
            logger.debug(f"Published state: {'connected' if connected else 'disconnected'}")
        except Exception as e:
            logger.error(f"Failed to publish state: {e}")

    def start(self) -> None:
        """Connect to the broker and start following the watcher."""
        self._setup_mqtt()
        self._handle = self.watcher.add_listener(self.publish_state)

    def stop(self) -> None:
        """Stop following the watcher and disconnect from the broker."""
        if self._handle is not None:
            self.watcher.remove_listener(self._handle)
            self._handle = None

        if self.mqtt_client:
            self.mqtt_client.loop_stop()
            self.mqtt_client.disconnect()
            self.mqtt_client = None

    def _quit(self) -> bool:
        """GLib signal handler: stop the main loop and drop the source."""
        logger.info("Shutting down connectivity publisher...")
        if self._loop is not None:
            self._loop.quit()
        return False

    def run(self) -> None:
        """Start the service and block in a GLib main loop until signalled."""
        from gi.repository import GLib

        self._loop = GLib.MainLoop()
        for signum in (signal.SIGINT, signal.SIGTERM):
            GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signum, self._quit)

        logger.info(f"Starting connectivity publisher (topic={self.config.mqtt_topic})")
        self.start()

        try:
            self._loop.run()
        finally:
            self.stop()
            self._loop = None
