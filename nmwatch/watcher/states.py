"""NetworkManager connectivity states and their coarse mapping."""

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class RawState(IntEnum):
    """NMState values as reported on the bus.

    The numbering is NetworkManager's own wire encoding and must not change.
    """
    UNKNOWN = 0
    ASLEEP = 10
    DISCONNECTED = 20
    DISCONNECTING = 30
    CONNECTING = 40
    CONNECTED_LOCAL = 50
    CONNECTED_SITE = 60
    CONNECTED_GLOBAL = 70

    @classmethod
    def from_value(cls, value) -> "RawState":
        """Convert a bus value (int, dbus.UInt32, ...) to a RawState.

        Values NetworkManager may add in the future map to UNKNOWN.
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            logger.debug(f"Unrecognised network state {value!r}, treating as unknown")
            return cls.UNKNOWN

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    RawState.UNKNOWN: "Unknown",
    RawState.ASLEEP: "Asleep",
    RawState.DISCONNECTED: "Disconnected",
    RawState.DISCONNECTING: "Disconnecting",
    RawState.CONNECTING: "Connecting",
    RawState.CONNECTED_LOCAL: "Connected (Local)",
    RawState.CONNECTED_SITE: "Connected (Site)",
    RawState.CONNECTED_GLOBAL: "Connected (Global)",
}


def to_coarse(raw: RawState) -> bool:
    """Map a RawState to the coarse connected flag.

    Only full internet connectivity counts as connected.
    """
    return raw == RawState.CONNECTED_GLOBAL
