import pytest

import kernelmux


class StubSocket:
    """ Stand-in for a transport socket that records every call made to it.
        The 'connect' event fires as soon as :func:`connect` is called, if
        monitoring is enabled and *auto_connect* is set.
    """

    auto_connect = True

    def __init__(self, pattern, scheme, key):
        self.pattern = pattern
        self.scheme = scheme
        self.key = key
        self.identity = None
        self.url = None
        self.listeners = dict()
        self.monitoring = False
        self.monitor_calls = 0
        self.unmonitor_calls = 0
        self.sent = list()
        self.subscriptions = list()
        self.close_calls = 0
        self.remove_calls = 0
        self.send_error = None

    def on(self, event, callback):
        self.listeners.setdefault(event, list()).append(callback)

    def emit(self, event, *args):
        for callback in list(self.listeners.get(event, ())):
            callback(*args)

    def remove_all_listeners(self, event=None):
        self.remove_calls += 1
        if event is None:
            self.listeners.clear()
        else:
            self.listeners.pop(event, None)

    def monitor(self):
        self.monitoring = True
        self.monitor_calls += 1

    def unmonitor(self):
        self.monitoring = False
        self.unmonitor_calls += 1

    def connect(self, url):
        self.url = url
        if self.auto_connect and self.monitoring:
            self.emit('connect')

    def send(self, message):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(message)

    def subscribe(self, topic):
        self.subscriptions.append(topic)

    def close(self):
        self.close_calls += 1

    @property
    def closed(self):
        return self.close_calls > 0


class StubTransport:
    """ Module-like object handed to the socket factory in place of the
        ZeroMQ backend. Every socket created is remembered, in order.
    """

    def __init__(self, auto_connect=True, reject=None):
        self.created = list()
        self.auto_connect = auto_connect
        self.reject = reject

    def Socket(self, pattern, scheme, key):
        if self.reject is not None and self.reject(pattern, scheme, key):
            raise kernelmux.transport.TransportConstructionError('rejected ' + pattern)

        socket = StubSocket(pattern, scheme, key)
        socket.auto_connect = self.auto_connect
        self.created.append(socket)
        return socket


@pytest.fixture
def config():
    return kernelmux.ConnectionConfig(
        ip='127.0.0.1',
        transport='tcp',
        shell_port=9001,
        control_port=9002,
        stdin_port=9003,
        iopub_port=9004,
        signature_scheme='hmac-sha256',
        key='5ca1ab1e-c0da-4e44-b7d1-0123456789ab',
    )


@pytest.fixture
def stub_transport():
    return StubTransport()


@pytest.fixture
def header():
    return {'session': 'session-under-test', 'username': 'tester'}


@pytest.fixture
def main_channel(config, stub_transport, header):
    channel = kernelmux.create_main_channel(config, header=header, transport=stub_transport)
    yield channel
    channel.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
