"""ZeroMQ kernel channel socket.

Each :class:`Socket` owns one ZeroMQ socket and one background thread. All
I/O on the ZeroMQ socket happens on that thread: inbound messages and
connection-monitor events are read there, and outbound frames are handed over
through a queue plus an inproc PAIR signal, so no ZeroMQ socket is ever used
from two threads.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from typing import Callable, Dict, List, Optional

import zmq
from zmq.utils.monitor import recv_monitor_message

from ...protocol.message import Message
from ..base import SendError, Socket as BaseSocket, TransportConstructionError
from . import framing

log = logging.getLogger(__name__)

zmq_context = zmq.Context.instance()

patterns = {
    "dealer": zmq.DEALER,
    "sub": zmq.SUB,
}

_sequence = itertools.count()


class Socket(BaseSocket):
    """A kernel channel socket with HMAC-signed framing and event emission.

    *pattern* is one of the keys of :data:`patterns`, *scheme* is a
    ``hashlib`` digest name (``sha256``) and *key* is the shared secret used
    to sign outbound messages and verify inbound ones. Both are handed to the
    :class:`jupyter_client.session.Session` kept as :attr:`session`.
    """

    poll_interval = 1000

    def __init__(self, pattern: str, scheme: str = "sha256", key: str = ""):
        try:
            socket_type = patterns[pattern]
        except KeyError:
            raise TransportConstructionError(f"unsupported socket pattern: {pattern!r}")

        if isinstance(key, str):
            key = key.encode()
        elif not isinstance(key, bytes):
            raise TransportConstructionError(f"key must be str or bytes, not {type(key).__name__}")

        self.session = framing.session_for(scheme, key)

        self.pattern = pattern
        self.scheme = scheme
        self.key = key
        self.url: Optional[str] = None

        self._identity: Optional[str] = None
        self._listeners: Dict[str, List[Callable]] = {}
        self._listener_lock = threading.Lock()

        self.socket = zmq_context.socket(socket_type)
        self.socket.setsockopt(zmq.LINGER, 0)

        self._monitoring = False
        self._monitor_socket: Optional[zmq.Socket] = None

        self._outbox = queue.SimpleQueue()

        internal = f"inproc://kernelmux.Socket:signal:{next(_sequence)}"
        self._signal_rx = zmq_context.socket(zmq.PAIR)
        self._signal_rx.bind(internal)
        self._signal_tx = zmq_context.socket(zmq.PAIR)
        self._signal_tx.connect(internal)
        self._signal_lock = threading.Lock()

        self._closed = False
        self._close_lock = threading.Lock()
        self.thread: Optional[threading.Thread] = None

    # --- identity ---

    @property
    def identity(self) -> Optional[str]:
        return self._identity

    @identity.setter
    def identity(self, value: str) -> None:
        self._identity = value
        if isinstance(value, str):
            value = value.encode()
        self.socket.setsockopt(zmq.IDENTITY, value)

    @property
    def closed(self) -> bool:
        return self._closed

    # --- events ---

    def on(self, event: str, callback: Callable) -> None:
        if not callable(callback):
            raise TypeError("callback must be callable")
        with self._listener_lock:
            self._listeners.setdefault(event, []).append(callback)

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        with self._listener_lock:
            if event is None:
                self._listeners.clear()
            else:
                self._listeners.pop(event, None)

    def emit(self, event: str, *args) -> None:
        with self._listener_lock:
            callbacks = list(self._listeners.get(event, ()))

        for callback in callbacks:
            try:
                callback(*args)
            except Exception:
                log.exception("%s listener failed on %s socket", event, self.pattern)

    # --- connection ---

    def monitor(self) -> None:
        """Start emitting ``connect`` events.

        Must be called before :func:`connect`; the monitor socket is then
        owned by the background thread.
        """

        if self._monitor_socket is None and not self._closed:
            self._monitor_socket = self.socket.get_monitor_socket(zmq.EVENT_CONNECTED)
        self._monitoring = True

    def unmonitor(self) -> None:
        # The monitor socket itself is torn down on the background thread.
        self._monitoring = False
        self._signal()

    def connect(self, url: str) -> None:
        self.url = url
        try:
            self.socket.connect(url)
        except zmq.ZMQError as exc:
            raise TransportConstructionError(f"cannot connect to {url}: {exc}") from exc

        self.thread = threading.Thread(target=self.run, daemon=True, name=f"kernelmux-{self.pattern}")
        self.thread.start()

    def subscribe(self, topic: str = "") -> None:
        if self.pattern != "sub":
            raise TransportConstructionError(f"cannot subscribe on a {self.pattern} socket")
        if isinstance(topic, str):
            topic = topic.encode()
        self._enqueue(("subscribe", topic))

    # --- outbound ---

    def send(self, msg: Message) -> None:
        """Encode and sign *msg*, then queue it for the background thread."""

        frames = framing.to_frames(self.session, msg)
        self._enqueue(("send", frames))

    def _enqueue(self, item) -> None:
        # Held across the put so nothing lands behind the close sentinel.
        with self._close_lock:
            if self._closed:
                raise SendError(f"{self.pattern} socket is closed")
            if self.thread is None:
                # Not connected yet; there is no other user of the socket.
                self._handle(item)
                return
            self._outbox.put(item)
            self._signal()

    def _signal(self) -> None:
        with self._signal_lock:
            if self._closed:
                return
            self._signal_tx.send(b"")

    # --- background thread ---

    def _handle(self, item) -> None:
        action, value = item
        if action == "send":
            self.socket.send_multipart(value)
        elif action == "subscribe":
            self.socket.setsockopt(zmq.SUBSCRIBE, value)

    def _handle_outgoing(self) -> bool:
        """Drain the outbox. Returns False once the close sentinel is seen."""

        self._signal_rx.recv(flags=zmq.NOBLOCK)

        while True:
            try:
                item = self._outbox.get(block=False)
            except queue.Empty:
                return True

            if item is None:
                return False

            try:
                self._handle(item)
            except zmq.ZMQError:
                log.exception("%s socket failed to handle %s", self.pattern, item[0])

    def _handle_incoming(self) -> None:
        parts = self.socket.recv_multipart(copy=True)
        try:
            msg = framing.from_frames(self.session, parts)
        except framing.FramingError as exc:
            log.warning("dropping message on %s socket: %s", self.pattern, exc)
            return
        self.emit("message", msg)

    def _handle_monitor(self) -> None:
        event = recv_monitor_message(self._monitor_socket)
        if event["event"] == zmq.EVENT_CONNECTED and self._monitoring:
            self.emit("connect", event)

    def _stop_monitor(self, poller: zmq.Poller) -> None:
        poller.unregister(self._monitor_socket)
        self.socket.disable_monitor()
        self._monitor_socket.close()
        self._monitor_socket = None

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)
        if self._monitor_socket is not None:
            poller.register(self._monitor_socket, zmq.POLLIN)

        running = True
        while running:
            for active, _flag in poller.poll(self.poll_interval):
                if active == self._signal_rx:
                    running = self._handle_outgoing()
                elif active == self.socket:
                    self._handle_incoming()
                elif active == self._monitor_socket:
                    self._handle_monitor()

                if not running:
                    break

            if self._monitor_socket is not None and not self._monitoring:
                self._stop_monitor(poller)

        self._close_sockets()

    # --- teardown ---

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return

            if self.thread is None:
                self._closed = True
                self._close_sockets()
                return

            # The background thread owns the sockets; ask it to stop. It
            # closes them on its way out.
            self._outbox.put(None)
            with self._signal_lock:
                self._signal_tx.send(b"")
                self._closed = True

    def _close_sockets(self) -> None:
        if self._monitor_socket is not None:
            try:
                self.socket.disable_monitor()
            except zmq.ZMQError:
                pass
            self._monitor_socket.close()
            self._monitor_socket = None

        self.socket.close()
        with self._signal_lock:
            self._signal_tx.close()
        self._signal_rx.close()
