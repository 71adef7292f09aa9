"""Convenience constructors for kernel messages."""

from __future__ import annotations

import uuid
from typing import Any, Optional

from jupyter_client.session import msg_header

from . import channels
from .message import Message


def header(msg_type: str, session: str = "", username: str = "") -> dict:
    """Return a fresh header dictionary with a unique msg_id.

    The *date* is a timezone-aware datetime and *version* is the messaging
    protocol version of the installed ``jupyter_client``.
    """

    return msg_header(uuid.uuid4().hex, msg_type, username, session)


def create(msg_type: str, content: Optional[dict] = None, *, channel: str = channels.SHELL,
           parent: Optional[Message] = None, metadata: Optional[dict] = None,
           buffers: Optional[list] = None, **header_kwargs: Any) -> Message:
    """Build a new outbound Message.

    The session and username in the header are placeholders; the channel
    multiplexer stamps its own values on every message it sends.
    """

    parent_header = dict(parent.header) if parent is not None else {}
    return Message(
        header=header(msg_type, **header_kwargs),
        parent_header=parent_header,
        metadata=metadata,
        content=content,
        buffers=buffers,
        channel=channel,
    )


def child(parent: Message, msg_type: str, content: Optional[dict] = None, *, channel: Optional[str] = None, **kwargs: Any) -> Message:
    """Create a message in response to *parent*, on the same channel by default."""

    if channel is None:
        channel = parent.channel
    return create(msg_type, content, channel=channel, parent=parent, **kwargs)
