""" Connection parameters for a running kernel. The canonical source of these
    parameters is the JSON connection file written by whatever launched the
    kernel; :class:`ConnectionConfig` is the immutable, in-memory form of
    that file.
"""

import dataclasses
import os

from . import json
from .protocol import channels


class ConfigError(ValueError):
    """ The connection parameters cannot be used as requested, most commonly
        because the port for a channel is missing.
    """


@dataclasses.dataclass(frozen=True)
class ConnectionConfig:
    """ Immutable connection parameters for the four kernel channels. Port
        numbers are not checked here; a missing or zero port is only an
        error once a socket for that channel is requested, see
        :func:`kernelmux.address.form_connection_string`.
    """

    ip: str = '127.0.0.1'
    transport: str = 'tcp'
    shell_port: int = None
    control_port: int = None
    stdin_port: int = None
    iopub_port: int = None
    hb_port: int = None
    signature_scheme: str = 'hmac-sha256'
    key: str = ''
    version: int = None


    def port(self, channel):
        """ Return the port number for the named *channel*, or None if the
            channel is unknown or has no port.
        """

        if channel not in channels.names:
            return None

        return getattr(self, channel + '_port')


    @classmethod
    def from_dict(cls, mapping):
        """ Build a :class:`ConnectionConfig` from a dictionary shaped like a
            kernel connection file. Unrecognized keys are ignored, which
            allows connection files with launcher-specific extras (such as
            ``kernel_name``) to be used directly.
        """

        known = set(field.name for field in dataclasses.fields(cls))
        arguments = dict()

        for key, value in mapping.items():
            if key not in known:
                continue

            if key.endswith('_port') and value is not None:
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise ConfigError('invalid %s: %r' % (key, value))

            if key == 'key' and isinstance(value, bytes):
                value = value.decode()

            arguments[key] = value

        return cls(**arguments)


    @classmethod
    def from_file(cls, filename):
        """ Load a kernel connection file from disk.
        """

        filename = os.path.expanduser(filename)

        with open(filename, 'rb') as reader:
            raw_json = reader.read()

        try:
            loaded = json.loads(raw_json)
        except json.DecodeError as e:
            raise ConfigError('cannot parse connection file %s: %s' % (filename, e))

        if not isinstance(loaded, dict):
            raise ConfigError('connection file %s is not a JSON object' % (filename))

        return cls.from_dict(loaded)


# end of class ConnectionConfig


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
