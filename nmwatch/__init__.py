"""nmwatch - notify embedding programs when network connectivity changes."""

__version__ = "0.1.0"

from .watcher import (
    ConnectivityWatcher,
    InvalidListenerError,
    ListenerHandle,
    RawState,
    Transport,
    TransportError,
)

__all__ = [
    "ConnectivityWatcher",
    "InvalidListenerError",
    "ListenerHandle",
    "RawState",
    "Transport",
    "TransportError",
]
