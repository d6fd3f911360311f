"""Transport capability the watcher talks to NetworkManager through."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable

# NetworkManager D-Bus protocol
NM_SERVICE = "org.freedesktop.NetworkManager"
NM_OBJECT_PATH = "/org/freedesktop/NetworkManager"
NM_INTERFACE = "org.freedesktop.NetworkManager"
NM_STATE_PROPERTY = "State"
NM_STATE_SIGNAL = "StateChanged"


class BusScope(Enum):
    """Which message bus to talk to."""
    SYSTEM = "system"
    SESSION = "session"


class Transport(ABC):
    """Base class for IPC transports.

    Implementations raise TransportError for every failure.
    """

    @abstractmethod
    def query_property(
        self,
        scope: BusScope,
        service: str,
        object_path: str,
        interface: str,
        property_name: str,
    ) -> Any:
        """Synchronously read a property from a remote object."""
        pass

    @abstractmethod
    def subscribe(
        self,
        scope: BusScope,
        service: str,
        object_path: str,
        interface: str,
        signal_name: str,
        handler: Callable[..., None],
    ) -> Any:
        """Call handler with the signal arguments every time the signal fires.

        Returns an opaque handle to pass to unsubscribe().
        """
        pass

    @abstractmethod
    def unsubscribe(self, handle: Any) -> None:
        """Release a handle obtained from subscribe()."""
        pass
