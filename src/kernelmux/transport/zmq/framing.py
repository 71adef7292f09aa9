"""ZMQ multipart framing for kernel messages.

All four channels share one layout:

    (routing prefix...), b"<IDS|MSG>", signature, header, parent_header,
    metadata, content, (buffers...)

Packing, signing and verification are delegated to a
:class:`jupyter_client.session.Session` configured with the connection key
and signature scheme. This module only converts between that session's
dictionaries and :class:`Message` instances, and maps its errors onto the
transport exceptions.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from jupyter_client.session import DELIM, Session
from traitlets import TraitError

from ...protocol.message import Message
from ..base import SendError, TransportConstructionError


DELIMITER = DELIM


class FramingError(ValueError):
    """Received frames are malformed or carry a bad signature."""


def session_for(scheme: str, key: bytes) -> Session:
    """Return a Session signing with ``hmac-<scheme>`` and *key*.

    An empty key disables signing.
    """

    try:
        return Session(key=key, signature_scheme="hmac-" + scheme)
    except (TraitError, ValueError) as exc:
        raise TransportConstructionError(f"unsupported signature scheme: {scheme!r}") from exc


def buffer_frames(buffers: Optional[Sequence]) -> List[bytes]:
    """Copy each buffer into a frame; only bytes-like objects are accepted."""

    frames = []
    for buffer in buffers or ():
        try:
            frames.append(memoryview(buffer).tobytes())
        except TypeError as exc:
            raise SendError(f"buffers must be bytes-like, not {type(buffer).__name__}") from exc
    return frames


def to_frames(session: Session, msg: Message, idents: Optional[Sequence[bytes]] = None) -> List[bytes]:
    """Encode a Message into signed multipart frames."""

    if idents is None:
        idents = getattr(msg, "idents", None) or ()

    buffers = buffer_frames(msg.buffers)
    fields = {
        "header": msg.header,
        "parent_header": msg.parent_header,
        "metadata": msg.metadata,
        "content": msg.content,
    }

    try:
        frames = session.serialize(fields, ident=list(idents))
    except (TypeError, ValueError) as exc:
        raise SendError(f"cannot encode message: {exc}") from exc

    return frames + buffers


def from_frames(session: Session, parts: Sequence[bytes]) -> Message:
    """Decode and verify received multipart frames into a Message.

    The routing prefix, if any, is stored as ``msg.idents``. A replayed
    signature is rejected like a bad one.
    """

    try:
        idents, rest = session.feed_identities(list(parts), copy=True)
        decoded = session.deserialize(rest, content=True, copy=True)
    except (KeyError, TypeError, ValueError) as exc:
        raise FramingError(str(exc)) from exc

    return Message(
        header=decoded["header"],
        parent_header=decoded["parent_header"],
        metadata=decoded["metadata"],
        content=decoded["content"],
        buffers=[bytes(buffer) for buffer in decoded["buffers"]],
        idents=[bytes(ident) for ident in idents],
    )
