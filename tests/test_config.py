import dataclasses

import pytest

import kernelmux


connection_file = b'''{
  "shell_port": 53794,
  "iopub_port": 53795,
  "stdin_port": 53796,
  "control_port": 53797,
  "hb_port": 53798,
  "ip": "127.0.0.1",
  "key": "a0436f6c-1916-498b-8eb9-e81ab9368e84",
  "transport": "tcp",
  "signature_scheme": "hmac-sha256",
  "kernel_name": "python3"
}'''


def test_from_file(tmp_path):

    filename = tmp_path / 'kernel-1234.json'
    filename.write_bytes(connection_file)

    config = kernelmux.ConnectionConfig.from_file(str(filename))

    assert config.shell_port == 53794
    assert config.iopub_port == 53795
    assert config.stdin_port == 53796
    assert config.control_port == 53797
    assert config.hb_port == 53798
    assert config.ip == '127.0.0.1'
    assert config.transport == 'tcp'
    assert config.signature_scheme == 'hmac-sha256'
    assert config.key == 'a0436f6c-1916-498b-8eb9-e81ab9368e84'


def test_from_file_garbage(tmp_path):

    filename = tmp_path / 'kernel-1234.json'
    filename.write_bytes(b'this is not JSON')

    with pytest.raises(kernelmux.ConfigError):
        kernelmux.ConnectionConfig.from_file(str(filename))


def test_from_dict_string_ports():

    config = kernelmux.ConnectionConfig.from_dict(dict(shell_port='5555'))
    assert config.shell_port == 5555
    assert config.iopub_port is None

    with pytest.raises(kernelmux.ConfigError):
        kernelmux.ConnectionConfig.from_dict(dict(shell_port='five'))


def test_immutable(config):

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.shell_port = 1


def test_port(config):

    assert config.port('shell') == 9001
    assert config.port('iopub') == 9004
    assert config.port('hb') is None
    assert config.port('nonsense') is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
