""" Translation of connection parameters into ZeroMQ endpoint addresses.
"""

from .config import ConfigError


def form_connection_string(config, channel):
    """ Return the endpoint address for *channel* given a
        :class:`kernelmux.config.ConnectionConfig`. TCP endpoints separate
        the host and port with a colon; IPC endpoints are filesystem paths,
        and the port is appended with a dash::

            tcp://127.0.0.1:5555
            ipc:///tmp/kernel-5555

        A :class:`ConfigError` is raised if the port for *channel* is
        missing or zero.
    """

    port = config.port(channel)

    if not port:
        raise ConfigError('port not found for channel ' + repr(channel))

    if config.transport == 'tcp':
        delimiter = ':'
    else:
        delimiter = '-'

    return '%s://%s%s%s' % (config.transport, config.ip, delimiter, port)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
