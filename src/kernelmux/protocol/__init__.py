"""
kernelmux protocol layer
========================

Transport-agnostic description of kernel traffic: the channel vocabulary,
the :class:`Message` container, and helpers to construct new messages.

Nothing in this package may import a transport implementation; the
dependencies flow downward only::

    Channel multiplexer (channel.py)
        │
        ▼
    Protocol (message, channels, factory)
        │
        ▼
    Transport (framing, socket)
"""

from . import channels
from . import message
from . import factory

from .message import Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
