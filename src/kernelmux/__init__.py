""" Python implementation of a kernel channel multiplexer. The four sockets
    used to talk to a running kernel (shell, control, stdin and iopub) are
    connected, verified, and presented as a single duplex channel.
"""

# Utility components.

from . import json

# Submodules used by multiple other components.

from . import protocol
from . import config
from . import session
from . import transport

# Primary public-facing interfaces.

from . import address
from . import sockets
from . import channel

from .config import ConfigError, ConnectionConfig
from .protocol import Message
from .channel import Channel, create_main_channel, create_main_channel_from_sockets

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
