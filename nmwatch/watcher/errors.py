"""Exceptions raised by the connectivity watcher."""


class WatcherError(Exception):
    """Base class for watcher errors."""


class TransportError(WatcherError):
    """The IPC transport could not complete a query, subscribe or unsubscribe.

    Covers an unreachable bus, an absent network-management service, call
    timeouts and stale subscription handles.
    """


class InvalidListenerError(WatcherError, TypeError):
    """A listener cannot be called with a single connectivity argument."""
