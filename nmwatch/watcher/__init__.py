"""Connectivity watcher - NetworkManager state as a connected/disconnected flag."""

from .errors import InvalidListenerError, TransportError, WatcherError
from .states import RawState, to_coarse
from .transport import BusScope, Transport
from .watcher import ConnectivityWatcher, ListenerHandle

__all__ = [
    "BusScope",
    "ConnectivityWatcher",
    "InvalidListenerError",
    "ListenerHandle",
    "RawState",
    "Transport",
    "TransportError",
    "WatcherError",
    "to_coarse",
]
