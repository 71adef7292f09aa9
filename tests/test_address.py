import pytest

import kernelmux
from kernelmux.address import form_connection_string


def test_tcp():

    config = kernelmux.ConnectionConfig(ip='127.0.0.1', transport='tcp', shell_port=5555)
    assert form_connection_string(config, 'shell') == 'tcp://127.0.0.1:5555'


def test_ipc():

    config = kernelmux.ConnectionConfig(ip='/tmp/x', transport='ipc', iopub_port=5555)
    assert form_connection_string(config, 'iopub') == 'ipc:///tmp/x-5555'


def test_each_channel(config):

    assert form_connection_string(config, 'shell') == 'tcp://127.0.0.1:9001'
    assert form_connection_string(config, 'control') == 'tcp://127.0.0.1:9002'
    assert form_connection_string(config, 'stdin') == 'tcp://127.0.0.1:9003'
    assert form_connection_string(config, 'iopub') == 'tcp://127.0.0.1:9004'


@pytest.mark.parametrize('channel', ('shell', 'control', 'stdin', 'iopub'))
def test_missing_port(channel):

    ports = dict(shell_port=1, control_port=2, stdin_port=3, iopub_port=4)
    del ports[channel + '_port']
    config = kernelmux.ConnectionConfig(**ports)

    with pytest.raises(kernelmux.ConfigError):
        form_connection_string(config, channel)


@pytest.mark.parametrize('channel', ('shell', 'control', 'stdin', 'iopub'))
def test_zero_port(channel):

    ports = dict(shell_port=1, control_port=2, stdin_port=3, iopub_port=4)
    ports[channel + '_port'] = 0
    config = kernelmux.ConnectionConfig(**ports)

    with pytest.raises(kernelmux.ConfigError):
        form_connection_string(config, channel)


def test_unknown_channel(config):

    with pytest.raises(kernelmux.ConfigError):
        form_connection_string(config, 'hb')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
