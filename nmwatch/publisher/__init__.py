"""Connectivity Publisher - publishes network connectivity transitions to MQTT."""

from .publisher import ConnectivityPublisher


def main():
    """Entry point for the connectivity publisher.

    Requires the optional dependencies: pip install nmwatch[publisher,dbus]
    """
    from dbus.mainloop.glib import DBusGMainLoop

    from .config import load_config
    from nmwatch.shared.logging import setup_logging
    from nmwatch.watcher import ConnectivityWatcher
    from nmwatch.watcher.dbus_transport import DBusTransport

    config = load_config()
    setup_logging(config.log_level)

    transport = DBusTransport(timeout=config.query_timeout, mainloop=DBusGMainLoop())
    service = ConnectivityPublisher(config, ConnectivityWatcher(transport))
    service.run()


__all__ = ["ConnectivityPublisher", "main"]
