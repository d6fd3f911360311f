"""Connectivity Watcher - boolean network state on top of NetworkManager."""

import inspect
import logging
import threading
from typing import Any, Callable, List, Optional, Union

from .errors import InvalidListenerError, TransportError
from .states import RawState, to_coarse
from .transport import (
    NM_INTERFACE,
    NM_OBJECT_PATH,
    NM_SERVICE,
    NM_STATE_PROPERTY,
    NM_STATE_SIGNAL,
    BusScope,
    Transport,
)

logger = logging.getLogger(__name__)

Listener = Callable[[bool], Any]


class ListenerHandle:
    """Token identifying one add_listener() registration.

    Handles compare by identity, so registering the same callback twice
    yields two handles that can be removed independently.
    """

    __slots__ = ("callback",)

    def __init__(self, callback: Listener):
        self.callback = callback

    def __repr__(self) -> str:
        return f"<ListenerHandle {self.callback!r}>"


def _describe(state: Optional[bool]) -> str:
    if state is None:
        return "unknown"
    return "connected" if state else "disconnected"


def _validate_listener(callback: Listener) -> None:
    """Reject callbacks that cannot take a single connectivity argument."""
    if not callable(callback):
        raise InvalidListenerError(f"Listener {callback!r} is not callable")

    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        # Some builtins have no introspectable signature
        return

    try:
        signature.bind(False)
    except TypeError as e:
        raise InvalidListenerError(
            f"Listener {callback!r} must accept exactly one argument: {e}"
        ) from e


class ConnectivityWatcher:
    """Tracks whether the host has global connectivity.

    The NetworkManager StateChanged subscription only exists while at least
    one listener is registered. Listeners are called with True/False on
    every transition of the coarse state, in registration order, and once
    synchronously when they are added.
    """

    def __init__(self, transport: Transport):
        self.transport = transport
        self._lock = threading.RLock()
        self._listeners: List[ListenerHandle] = []
        self._subscription: Optional[Any] = None
        # None until the first query or signal
        self._state: Optional[bool] = None
        self._raw_state: Optional[RawState] = None

    @property
    def state(self) -> Optional[bool]:
        """Last known coarse state, None before initialization."""
        return self._state

    @property
    def raw_state(self) -> Optional[RawState]:
        """Last RawState from a baseline query or signal, including suppressed ones."""
        return self._raw_state

    @property
    def subscribed(self) -> bool:
        """Whether a StateChanged subscription is currently held."""
        return self._subscription is not None

    @property
    def listener_count(self) -> int:
        """Number of registrations, counting duplicates separately."""
        return len(self._listeners)

    def _query_raw_state(self) -> Optional[RawState]:
        """Read the State property, None if NetworkManager is unreachable."""
        try:
            value = self.transport.query_property(
                BusScope.SYSTEM,
                NM_SERVICE,
                NM_OBJECT_PATH,
                NM_INTERFACE,
                NM_STATE_PROPERTY,
            )
        except TransportError as e:
            logger.debug(f"NetworkManager state unavailable: {e}")
            return None

        raw_state = RawState.from_value(value)
        logger.debug(f"NetworkManager reports {raw_state.description}")
        return raw_state

    def query_current_state(self) -> Optional[bool]:
        """Read the current state from NetworkManager.

        Returns:
            True if connected, False if not, None if NetworkManager could
            not be queried.
        """
        raw_state = self._query_raw_state()
        if raw_state is None:
            return None
        return to_coarse(raw_state)

    def is_connected(self) -> bool:
        """Return True only if NetworkManager reports global connectivity."""
        return self.query_current_state() or False

    def on_raw_state_changed(self, value, *args) -> None:
        """Handle a StateChanged signal carrying the new NMState."""
        raw_state = RawState.from_value(value)
        logger.debug(f"Network state signal: {raw_state.description}")
        self._update_state(to_coarse(raw_state), raw_state)

    def add_listener(self, callback: Listener) -> ListenerHandle:
        """Register a callback for connectivity transitions.

        The callback is invoked before this method returns with the current
        state, then again on every transition until it is removed.

        Returns:
            Handle to pass to remove_listener().

        Raises:
            InvalidListenerError: If callback cannot take one argument.
        """
        _validate_listener(callback)
        handle = ListenerHandle(callback)

        with self._lock:
            if self._subscription is None:
                self._start_watching()

            self._listeners.append(handle)
            logger.debug(f"Added listener {callback!r} ({len(self._listeners)} total)")
            self._notify([handle], bool(self._state))

        return handle

    def remove_listener(self, listener: Union[ListenerHandle, Listener]) -> None:
        """Unregister a listener.

        Accepts the handle returned by add_listener(), which removes exactly
        that registration, or the callback itself, which removes its oldest
        registration. Unknown listeners are ignored.
        """
        with self._lock:
            handle = self._find(listener)
            if handle is None:
                logger.debug(f"Listener {listener!r} is not registered")
                return

            self._listeners.remove(handle)
            logger.debug(f"Removed listener {handle.callback!r} ({len(self._listeners)} left)")

            if not self._listeners:
                self._stop_watching()

    def _find(self, listener) -> Optional[ListenerHandle]:
        """Return the registration matching a handle or callback, if any."""
        if isinstance(listener, ListenerHandle):
            return listener if listener in self._listeners else None

        for handle in self._listeners:
            if handle.callback == listener:
                return handle
        return None

    def _start_watching(self) -> None:
        """Establish the baseline state and subscribe to StateChanged."""
        raw_state = self._query_raw_state()
        if raw_state is None:
            logger.warning("NetworkManager is not available, reporting disconnected")
            self._update_state(False)
        else:
            self._update_state(to_coarse(raw_state), raw_state)

        try:
            self._subscription = self.transport.subscribe(
                BusScope.SYSTEM,
                NM_SERVICE,
                NM_OBJECT_PATH,
                NM_INTERFACE,
                NM_STATE_SIGNAL,
                self.on_raw_state_changed,
            )
        except TransportError as e:
            logger.warning(f"Could not subscribe to network state changes: {e}")
            return

        logger.info("Watching NetworkManager state changes")

    def _stop_watching(self) -> None:
        """Release the StateChanged subscription, ignoring transport errors."""
        subscription, self._subscription = self._subscription, None
        if subscription is None:
            return

        try:
            self.transport.unsubscribe(subscription)
        except TransportError as e:
            logger.warning(f"Error releasing network state subscription: {e}")
            return

        logger.info("Stopped watching NetworkManager state changes")

    def _update_state(self, connected: bool, raw_state: Optional[RawState] = None) -> None:
        """Record a new state and notify listeners if the coarse value changed."""
        with self._lock:
            if raw_state is not None:
                self._raw_state = raw_state

            if connected == self._state:
                return

            logger.info(f"Network {_describe(connected)} (was {_describe(self._state)})")
            self._state = connected
            self._notify(list(self._listeners), connected)

    def _notify(self, handles: List[ListenerHandle], connected: bool) -> None:
        """Call each still-registered handle, logging listener failures."""
        for handle in handles:
            # An earlier listener may have removed this one
            if handle not in self._listeners:
                continue
            try:
                handle.callback(connected)
            except Exception:
                logger.exception(f"Listener {handle.callback!r} failed")
