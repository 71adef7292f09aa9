"""The socket contract shared by every kernelmux backend.

:mod:`kernelmux.sockets` and :mod:`kernelmux.channel` only ever talk to a
:class:`Socket`: they connect it, wait for its ``connect`` event, send
messages through it and listen for its ``message`` events. The errors below
are what a backend raises when any of that goes wrong.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from ..protocol.message import Message


# Errors raised by backends

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConstructionError(TransportError):
    """The transport rejected the socket pattern, signature scheme or key."""


class TransportConnectionError(TransportError):
    """The transport could not establish a connection in the allotted time."""


class SendError(TransportError):
    """A message could not be encoded or handed to the socket."""


class Socket(ABC):
    """Minimal contract for a kernel channel socket.

    Implementations emit two events: ``connect`` (only while monitoring is
    enabled) and ``message`` (with a decoded :class:`Message` whose
    ``idents`` attribute holds any routing frames).
    """

    identity: str

    @abstractmethod
    def connect(self, url: str) -> None:
        """Initiate a connection to *url*."""

    @abstractmethod
    def send(self, msg: Message) -> None:
        """Sign and send a protocol Message."""

    @abstractmethod
    def subscribe(self, topic: str) -> None:
        """Apply a PUB/SUB topic filter."""

    @abstractmethod
    def monitor(self) -> None:
        """Start emitting ``connect`` events."""

    @abstractmethod
    def unmonitor(self) -> None:
        """Stop emitting ``connect`` events."""

    @abstractmethod
    def on(self, event: str, callback: Callable) -> None:
        """Register *callback* for *event*."""

    @abstractmethod
    def remove_all_listeners(self, event: str | None = None) -> None:
        """Detach every listener, or every listener for one *event*."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the socket. Closing twice is a no-op."""

    @property
    def closed(self) -> bool:
        """Whether the socket has been closed."""
        return False
