""" A class representation of a packet: one skeleton value plus the ordered
    list of binary attachments its placeholders refer to.
"""

from . import wire
from .fields import PacketType


class Packet:
    """ The :class:`Packet` provides a very thin encapsulation of what it
        means to be a packet on the wire.

        The fields are largely in order of how they are represented in the
        text frame: the packet *type*, the *namespace*, the acknowledgment
        *id*, and the *data*. On the sending side *data* is the skeleton; on
        the receiving side, once assembly is complete, it is the reconstructed
        value. The *attachments* are carried in separate binary frames that
        immediately follow the text frame.

        Iterating over a :class:`Packet` yields its frames in transmission
        order: the text frame as a str, then each attachment as bytes, in
        placeholder order.

        :ivar attachments: List of binary payloads, indexed by placeholder number.
        :ivar expected: Attachment count declared by a received text frame;
            None for packets constructed locally.
    """

    def __init__(self, type, data=None, namespace=None, id=None, attachments=None):

        self.type = PacketType(type)
        self.data = data
        self.namespace = namespace
        self.id = id

        if attachments is None:
            attachments = list()
        else:
            attachments = list(attachments)

        self.attachments = attachments
        self.expected = None

        self.parts = None


    def __eq__(self, other):

        if not isinstance(other, Packet):
            return NotImplemented

        return (self.type == other.type and self.namespace == other.namespace
                and self.id == other.id and self.data == other.data
                and self.attachments == other.attachments)


    def __iter__(self):
        self._finalize()
        return iter(self.parts)


    def __len__(self):
        self._finalize()
        return len(self.parts)


    def __repr__(self):
        return 'Packet(%s, namespace=%r, id=%r, data=%r, attachments=%d)' % (self.type.name, self.namespace, self.id, self.data, len(self.attachments))


    @property
    def count(self):
        """ The number of attachments this packet carries, or for a received
            packet still in assembly, the number declared by its text frame.
        """

        if self.expected is not None:
            return self.expected
        return len(self.attachments)


    def _finalize(self):
        """ Take the contents of this :class:`Packet` and prepare the tuple of
            frames that will be used for transmission on the wire. The result
            is cached; a packet is not expected to change once it is sent.
        """

        parts = self.parts

        if parts is None:
            text = wire.encode(self)
            parts = (text,) + tuple(bytes(blob) for blob in self.attachments)
            self.parts = parts


# end of class Packet


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
