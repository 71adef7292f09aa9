"""Socket backends for the kernel channels.

The backend is picked once, at import time, from the ``KERNELMUX_TRANSPORT``
environment variable; ``zmq`` is the default and currently the only choice.
"""

import os

from .base import (
    TransportError,
    TransportConstructionError,
    TransportConnectionError,
    SendError,
)

_BACKEND = os.environ.get("KERNELMUX_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from . import zmq as backend
else:
    raise ImportError(f"unknown KERNELMUX_TRANSPORT backend: {_BACKEND!r}")
