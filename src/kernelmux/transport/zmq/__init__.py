"""ZeroMQ transport backend."""

from . import framing
from .socket import Socket, patterns
