"""Transport implementation on top of dbus-python."""

import logging
from typing import Any, Callable, Dict, Optional

import dbus

from .errors import TransportError
from .transport import BusScope, Transport

logger = logging.getLogger(__name__)


class _Subscription:
    """Handle returned by DBusTransport.subscribe()."""

    def __init__(self, match, description: str):
        self.match = match
        self.description = description
        self.active = True

    def __repr__(self) -> str:
        state = "active" if self.active else "released"
        return f"<_Subscription {self.description} ({state})>"


class DBusTransport(Transport):
    """Talks to services on the system or session bus.

    Signals are only delivered while a main loop is running; pass one in
    (e.g. ``DBusGMainLoop()``) or install a default before the first call.
    """

    def __init__(self, timeout: float = 5.0, mainloop: Optional[Any] = None):
        self.timeout = timeout
        self.mainloop = mainloop
        self._buses: Dict[BusScope, Any] = {}

    def _bus(self, scope: BusScope):
        bus = self._buses.get(scope)
        if bus is not None:
            return bus

        kwargs = {"mainloop": self.mainloop} if self.mainloop is not None else {}
        try:
            if scope == BusScope.SYSTEM:
                bus = dbus.SystemBus(**kwargs)
            else:
                bus = dbus.SessionBus(**kwargs)
        except dbus.DBusException as e:
            raise TransportError(f"Could not connect to {scope.value} bus: {e}") from e

        self._buses[scope] = bus
        return bus

    def query_property(
        self,
        scope: BusScope,
        service: str,
        object_path: str,
        interface: str,
        property_name: str,
    ) -> Any:
        bus = self._bus(scope)
        try:
            proxy = bus.get_object(service, object_path, introspect=False)
            properties = dbus.Interface(proxy, dbus.PROPERTIES_IFACE)
            return properties.Get(interface, property_name, timeout=self.timeout)
        except dbus.DBusException as e:
            raise TransportError(
                f"Could not read {interface}.{property_name} from {service}: {e}"
            ) from e

    def subscribe(
        self,
        scope: BusScope,
        service: str,
        object_path: str,
        interface: str,
        signal_name: str,
        handler: Callable[..., None],
    ) -> _Subscription:
        bus = self._bus(scope)
        try:
            match = bus.add_signal_receiver(
                handler,
                signal_name=signal_name,
                dbus_interface=interface,
                bus_name=service,
                path=object_path,
            )
        except dbus.DBusException as e:
            raise TransportError(f"Could not subscribe to {interface}.{signal_name}: {e}") from e

        logger.debug(f"Subscribed to {interface}.{signal_name} on {object_path}")
        return _Subscription(match, f"{interface}.{signal_name}")

    def unsubscribe(self, handle: _Subscription) -> None:
        if not handle.active:
            raise TransportError(f"Subscription already released: {handle!r}")

        handle.active = False
        try:
            handle.match.remove()
        except dbus.DBusException as e:
            raise TransportError(f"Could not release {handle.description}: {e}") from e

        logger.debug(f"Unsubscribed from {handle.description}")
