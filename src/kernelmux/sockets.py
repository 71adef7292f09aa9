""" Construction of the four kernel channel sockets. Each socket is created
    with the pattern appropriate for its channel, connected, and only handed
    back once the transport confirms the connection.
"""

import concurrent.futures
import logging
import threading
import uuid

from . import address
from . import transport as transport_module
from .protocol import channels
from .transport import TransportConnectionError

log = logging.getLogger(__name__)

scheme_prefix = 'hmac-'


def digest_name(signature_scheme):
    """ Return the digest algorithm for a signature scheme; for example,
        'hmac-sha256' selects 'sha256'. Validating the result is left to
        the transport.
    """

    if signature_scheme.startswith(scheme_prefix):
        return signature_scheme[len(scheme_prefix):]

    return signature_scheme



def create_socket(channel, identity, config, transport=None, url=None):
    """ Create a socket for the named *channel* and begin connecting it. The
        return value is a :class:`concurrent.futures.Future` that resolves
        to the connected socket.

        A :class:`kernelmux.config.ConfigError` is raised immediately if the
        channel has no port; any error raised by the *transport* while
        constructing the socket propagates as well. The *url* may be passed
        in if it was already resolved.
    """

    if transport is None:
        transport = transport_module.backend

    if url is None:
        url = address.form_connection_string(config, channel)

    pattern = channels.patterns[channel]
    scheme = digest_name(config.signature_scheme)

    socket = transport.Socket(pattern, scheme, config.key)
    socket.identity = identity

    return verified_connect(socket, url)



def verified_connect(socket, url):
    """ Connect the *socket* to *url*, and return a
        :class:`concurrent.futures.Future` resolved with the same socket
        once the transport reports the connection. There is no timeout
        here; the future stays pending until the connection happens, or
        until the caller gives up on it.
    """

    future = concurrent.futures.Future()
    future.socket = socket
    lock = threading.Lock()

    def connected(*args):
        # Only the first connect event counts; reconnections after a
        # kernel restart would otherwise try to resolve the future again.

        with lock:
            if future.done():
                return
            socket.unmonitor()
            future.set_result(socket)

        log.debug('connected to %s', url)

    socket.on('connect', connected)
    socket.monitor()

    try:
        socket.connect(url)
    except Exception:
        socket.remove_all_listeners()
        socket.close()
        raise

    return future



def create_sockets(config, subscription='', identity=None, transport=None, timeout=None):
    """ Set up the sockets for each of the kernel channels, connecting them
        concurrently. The return value is a dictionary of connected sockets
        keyed by channel name.

        All addresses are resolved before any socket is created, so a
        missing port raises :class:`kernelmux.config.ConfigError` without
        side effects. If the transport rejects the construction of any
        socket, the sockets already created are closed and the error
        propagates.

        The *subscription* is the PUB/SUB topic filter applied to the iopub
        socket; the empty string subscribes to everything. The *identity*
        is shared by all four sockets, and defaults to a random UUID.

        If *timeout* is None this call waits indefinitely for the kernel.
        Otherwise, if the sockets are not all connected within *timeout*
        seconds, every socket is closed and
        :class:`kernelmux.transport.TransportConnectionError` is raised.
    """

    if identity is None:
        identity = str(uuid.uuid4())

    urls = dict()
    for channel in channels.names:
        urls[channel] = address.form_connection_string(config, channel)

    created = dict()
    futures = dict()

    try:
        for channel in channels.names:
            future = create_socket(channel, identity, config, transport, urls[channel])
            futures[channel] = future
    except Exception:
        for future in futures.values():
            _abandon(future)
        raise

    done, pending = concurrent.futures.wait(futures.values(), timeout)

    if pending:
        for future in futures.values():
            _abandon(future)

        waiting = [name for name, future in futures.items() if future in pending]
        waiting = ', '.join(waiting)
        raise TransportConnectionError('timed out after %ss waiting for: %s' % (timeout, waiting))

    for channel, future in futures.items():
        created[channel] = future.result()

    # This is a ZeroMQ PUB/SUB subscription, not a subscription to the
    # multiplexed channel.

    created[channels.IOPUB].subscribe(subscription)

    return created



def _abandon(future):
    """ Close the socket behind a pending or completed connection future.
        Closing a socket that has not connected yet is allowed.
    """

    future.cancel()
    socket = future.socket
    socket.remove_all_listeners()
    socket.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
