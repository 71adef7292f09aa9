""" A class representation of a kernel message, as exchanged on any of the
    four kernel channels.
"""


class Message:
    """ The :class:`Message` provides a very thin encapsulation of what it
        means to be a message in a kernel context. The fields are in order
        of how they are represented on the wire: the *header*, the
        *parent_header* identifying the message this one responds to, the
        *metadata*, the *content*, and an optional list of binary *buffers*.

        The *channel* is not part of the wire format. It is set on messages
        handed to callers so they can tell which socket a message arrived
        on, and it is required on outbound messages so that the multiplexer
        can route them.

        Messages decoded by a transport socket additionally carry an
        *idents* attribute holding the routing frames that preceded the
        message on the wire. That attribute is transport-internal and is
        removed before a message reaches a caller; note that it is not set
        at all unless a transport adds it.

        :ivar header: Dictionary with msg_id, msg_type, session, etc.
        :ivar parent_header: Header of the message this one is a reply to.
        :ivar metadata: Free-form dictionary.
        :ivar content: The message-type specific body.
        :ivar buffers: List of bytes-like objects, possibly empty.
        :ivar channel: Channel name, or None.
    """

    def __init__(self, header=None, parent_header=None, metadata=None, content=None, buffers=None, channel=None, **kwargs):

        if header is None:
            header = dict()
        if parent_header is None:
            parent_header = dict()
        if metadata is None:
            metadata = dict()
        if content is None:
            content = dict()
        if buffers is None:
            buffers = list()

        self.header = header
        self.parent_header = parent_header
        self.metadata = metadata
        self.content = content
        self.buffers = list(buffers)
        self.channel = channel

        # Allow additional arbitrary attributes, such as the identity frames
        # attached by a transport socket.

        for key,value in kwargs.items():
            setattr(self, key, value)


    def __repr__(self):
        return '<Message %s %s on %s>' % (self.msg_type, self.msg_id, self.channel)


    @property
    def msg_id(self):
        return self.header.get('msg_id')


    @property
    def msg_type(self):
        return self.header.get('msg_type')


    def to_dict(self):
        """ Return a shallow dictionary copy of every attribute of this
            message, including any extra attributes set at construction.
        """

        return dict(vars(self))


    @classmethod
    def from_dict(cls, mapping):
        """ Build a :class:`Message` from a dictionary shaped like a kernel
            message; this is the form most callers already have on hand.
            Top-level *msg_id* and *msg_type* keys duplicate the header and
            are ignored.
        """

        mapping = dict(mapping)
        mapping.pop('msg_id', None)
        mapping.pop('msg_type', None)
        return cls(**mapping)


# end of class Message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
