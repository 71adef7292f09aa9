""" The channel multiplexer presents the four kernel sockets as a single
    duplex channel: :func:`Channel.send` routes outbound messages to the
    correct socket, and :func:`Channel.subscribe` receives inbound messages
    from all four sockets, each tagged with the channel it arrived on.
"""

import collections.abc
import functools
import logging
import queue
import threading

from . import session
from .protocol.message import Message
from .sockets import create_sockets

log = logging.getLogger(__name__)

OPEN = 'open'
CLOSED = 'closed'

_finished = object()


class Subscription:
    """ A consumer of the inbound side of a :class:`Channel`. If a *callback*
        is provided it is invoked with each arriving :class:`Message`;
        otherwise, messages are queued and retrieved with :func:`get` or by
        iterating over the subscription. Iteration ends when the channel
        closes or the subscription is cancelled.
    """

    def __init__(self, channel, callback=None):

        if callback is not None and not callable(callback):
            raise TypeError('callback must be callable')

        self.channel = channel
        self.callback = callback
        self.active = True

        if callback is None:
            self.queue = queue.SimpleQueue()
        else:
            self.queue = None


    def __iter__(self):
        while True:
            message = self.get()
            if message is None:
                return
            yield message


    def deliver(self, message):
        if self.queue is None:
            self.callback(message)
        else:
            self.queue.put(message)


    def finish(self):
        """ Mark this subscription as finished; any blocked :func:`get`
            returns None.
        """

        self.active = False
        if self.queue is not None:
            self.queue.put(_finished)


    def get(self, timeout=None):
        """ Return the next inbound message, blocking for up to *timeout*
            seconds; None blocks indefinitely. Raises :class:`queue.Empty`
            if the timeout expires. Returns None once the subscription is
            finished.
        """

        if self.queue is None:
            raise TypeError('callback subscriptions are not queued')

        message = self.queue.get(timeout=timeout)

        if message is _finished:
            # Leave the marker in place for any later callers.
            self.queue.put(_finished)
            return None

        return message


    def unsubscribe(self):
        """ Stop receiving messages. If this was the last subscription the
            channel itself is closed. Calling this more than once is
            harmless.
        """

        self.channel._unsubscribe(self)


# end of class Subscription



class Channel:
    """ A multiplexed view of the kernel channel *sockets*, a dictionary of
        connected sockets keyed by channel name. The *header* is the session
        header, a dictionary with 'session' and 'username' keys, stamped
        onto every outbound message; one is generated via
        :func:`kernelmux.session.header` if not provided.

        The :class:`Channel` takes ownership of the sockets. They are closed
        when :func:`close` is called, or when the last :class:`Subscription`
        is cancelled.

        Inbound messages are delivered to subscribers one at a time, in the
        order they reach the multiplexer. Messages from the same socket keep
        their relative order; there is no ordering guarantee between
        different sockets. Messages that arrive while there are no
        subscribers are discarded.

        :ivar sockets: Dictionary of sockets, keyed by channel name.
        :ivar header: The session header.
        :ivar state: Either 'open' or 'closed'.
    """

    def __init__(self, sockets, header=None):

        if header is None:
            header = session.header()

        self.sockets = dict(sockets)
        self.header = dict(header)
        self.state = OPEN
        self.subscriptions = list()

        self._state_lock = threading.Lock()

        # Re-entrant so that a subscriber can close the channel, or cancel
        # its own subscription, from inside its callback.
        self._delivery_lock = threading.RLock()

        for name, socket in self.sockets.items():
            socket.on('message', functools.partial(self._incoming, name))


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


    def __repr__(self):
        return '<Channel %s session=%s>' % (self.state, self.header.get('session'))


    @property
    def closed(self):
        return self.state == CLOSED


    def send(self, message):
        """ Send a *message*, either a :class:`Message` instance or a
            dictionary with the same fields, to the socket named by its
            *channel*. A message without a recognized channel is logged and
            dropped; so is a message the socket fails to send. Neither
            condition affects the channel.
        """

        if message is None:
            log.warning('message sent without a channel: None')
            return

        if not isinstance(message, Message):
            if not isinstance(message, collections.abc.Mapping):
                log.warning('message sent without a channel: %r', message)
                return
            message = Message.from_dict(message)

        if self.closed:
            log.warning('channel is closed, dropping %r', message)
            return

        name = message.channel

        if not name:
            log.warning('message sent without a channel: %r', message)
            return

        try:
            socket = self.sockets[name]
        except (KeyError, TypeError):
            log.warning('channel not understood for message: %r', message)
            return

        # The session header wins over anything the caller put in the
        # header with the same names.

        header = dict(message.header or {})
        header.update(self.header)

        outgoing = Message(
            header=header,
            parent_header=message.parent_header,
            metadata=message.metadata,
            content=message.content,
            buffers=message.buffers,
        )

        try:
            socket.send(outgoing)
        except Exception:
            log.exception('error sending %r', message)


    def subscribe(self, callback=None):
        """ Begin receiving inbound messages from all channels. Returns a
            :class:`Subscription`; see that class for the difference
            between callback and queued subscriptions.
        """

        subscription = Subscription(self, callback)

        with self._state_lock:
            if self.state == CLOSED:
                subscription.finish()
                return subscription

            self.subscriptions.append(subscription)

        return subscription


    def _unsubscribe(self, subscription):

        with self._state_lock:
            try:
                self.subscriptions.remove(subscription)
            except ValueError:
                return

            last = len(self.subscriptions) == 0

        subscription.finish()

        if last:
            self.close()


    def _incoming(self, name, received):
        """ Listener for 'message' events from the socket for channel *name*.
            The message handed to subscribers is a copy tagged with the
            channel name, without the transport's identity frames.
        """

        fields = received.to_dict()
        fields.pop('idents', None)
        fields['channel'] = name
        message = Message(**fields)

        with self._delivery_lock:
            if self.state == CLOSED:
                return

            for subscription in list(self.subscriptions):
                if not subscription.active:
                    continue
                try:
                    subscription.deliver(message)
                except Exception:
                    log.exception('subscriber failed on %r', message)


    def close(self):
        """ Detach every listener from, and close, every socket. Only the
            first call has any effect. A socket that fails to close is
            logged; the remaining sockets are still closed.
        """

        # Waits out any delivery in progress, so no subscriber is called
        # once this returns.

        with self._delivery_lock, self._state_lock:
            if self.state == CLOSED:
                return

            self.state = CLOSED
            subscriptions = self.subscriptions
            self.subscriptions = list()

        for name, socket in self.sockets.items():
            try:
                socket.remove_all_listeners()
                socket.close()
            except Exception:
                log.exception('error closing %s socket', name)

        for subscription in subscriptions:
            subscription.finish()


# end of class Channel



def create_main_channel_from_sockets(sockets, header=None):
    """ Wrap already connected *sockets* in a :class:`Channel`.
    """

    return Channel(sockets, header)



def create_main_channel(config, subscription='', identity=None, header=None, transport=None, timeout=None):
    """ Create and connect the four kernel sockets described by *config*, a
        :class:`kernelmux.config.ConnectionConfig`, and return a
        :class:`Channel` multiplexing them. This blocks until every socket
        is connected; see :func:`kernelmux.sockets.create_sockets` for the
        *subscription*, *identity*, *transport* and *timeout* arguments.
    """

    sockets = create_sockets(config, subscription, identity, transport, timeout)
    return Channel(sockets, header)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
