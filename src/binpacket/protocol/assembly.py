""" Sequencing of packets on send, and buffering on receipt. A packet goes out
    as one text frame followed by its attachments as binary frames; on the
    receiving side an :class:`Assembler` collects those frames and hands a
    packet to the decoder only once every attachment has arrived.

    An :class:`Assembler` handles one ordered frame stream and expects a
    single consumer; it holds at most one in-flight packet at a time.
"""

import enum
import logging

from . import codec
from . import wire
from .errors import FrameOrderViolation, ProtocolError
from .fields import PROMOTE, PacketType
from .message import Packet
from .value import is_binary

logger = logging.getLogger(__name__)


class State(enum.Enum):
    AWAITING_SKELETON = 'awaiting skeleton'
    COLLECTING = 'collecting attachments'
    COMPLETE = 'complete'
    ERRORED = 'errored'


def encode_for_send(value, type=PacketType.EVENT, namespace=None, id=None):
    """ Encode *value* and return a :class:`Packet` ready to be sent;
        iterate over it to get the frames. EVENT and ACK packets are promoted
        to their binary variants if *value* contains any binary leaves.
    """

    skeleton, attachments = codec.encode(value)
    type = PacketType(type)

    if attachments:
        type = PROMOTE.get(type, type)

    if attachments and not type.binary:
        raise ValueError('a %s packet cannot carry binary data' % (type.name))

    return Packet(type, skeleton, namespace, id, attachments)


def on_packet_complete(skeleton, attachments, unused=None):
    """ Reconstruct the application value for a fully received packet. This
        is :func:`codec.decode`, exposed here as the receiving counterpart
        of :func:`encode_for_send`.
    """

    return codec.decode(skeleton, attachments, unused)


class PendingPacket:
    """ Receive-side state for a single packet. The skeleton is established
        first, via :func:`start`; attachments are then appended in arrival
        order until the declared count is reached.

        :ivar packet: The :class:`Packet` parsed from the text frame.
        :ivar expected: Number of attachments declared by the text frame.
        :ivar collected: Attachments received so far.
    """

    def __init__(self):
        self.state = State.AWAITING_SKELETON
        self.packet = None
        self.expected = None
        self.collected = list()


    def __repr__(self):
        return 'PendingPacket(%s, %s/%s)' % (self.state.name, len(self.collected), self.expected)


    @property
    def complete(self):
        return self.state is State.COMPLETE


    def start(self, packet):
        """ Establish the skeleton for this packet. A packet that declares no
            attachments is complete immediately.
        """

        if self.state is not State.AWAITING_SKELETON:
            self.state = State.ERRORED
            raise FrameOrderViolation('skeleton already received for this packet', packet)

        self.packet = packet
        self.expected = packet.count
        self.state = State.COLLECTING
        self._check()


    def add(self, blob):
        """ Append one attachment. Returns True if the packet is now complete.
        """

        if self.state is State.AWAITING_SKELETON:
            self.state = State.ERRORED
            raise FrameOrderViolation('binary frame received before any skeleton')

        if self.state is not State.COLLECTING:
            self.state = State.ERRORED
            raise FrameOrderViolation('binary frame beyond the %d declared attachments' % (self.expected), self.packet)

        self.collected.append(bytes(blob))
        return self._check()


    def fail(self):
        self.state = State.ERRORED


    def _check(self):

        if len(self.collected) == self.expected:
            self.state = State.COMPLETE
            return True

        return False


# end of class PendingPacket



class Assembler:
    """ Reassemble packets from an ordered stream of frames. Text frames
        (str) are skeleton frames; bytes-like frames are attachments.
        Feed each frame to :func:`add`; a fully reconstructed :class:`Packet`
        is returned once its last frame arrives.

        Any :class:`errors.ProtocolError` raised by :func:`add` concerns only
        the packet it names. That packet is discarded and the assembler
        carries on; a text frame that interrupts a packet still starts the
        next one.
    """

    def __init__(self, unused=None):
        self.unused = unused
        self.pending = None


    @property
    def state(self):

        if self.pending is None:
            return State.AWAITING_SKELETON

        return self.pending.state


    def add(self, frame):

        if isinstance(frame, str):
            return self._add_text(frame)

        if is_binary(frame):
            return self._add_binary(frame)

        raise TypeError('frames must be str or bytes-like, not ' + type(frame).__name__)


    def cancel(self):
        """ Release the in-flight packet, if any, without decoding it. Returns
            the released :class:`PendingPacket`, or None.
        """

        pending = self.pending
        self.pending = None

        if pending is not None:
            pending.fail()
            logger.warning('in-flight packet cancelled with %d of %d attachments', len(pending.collected), pending.expected)

        return pending


    def _add_text(self, frame):
        """ Start a new packet from a text frame. If another packet is still
            collecting, that packet alone is errored: the new packet takes
            its place, and :class:`FrameOrderViolation` is raised for the
            abandoned one. Should the new packet need no attachments, it is
            reconstructed anyway and handed back on the exception as
            *completed*.
        """

        abandoned = None
        if self.pending is not None:
            abandoned = self.cancel()

        packet = wire.decode(frame)

        pending = PendingPacket()
        pending.start(packet)
        self.pending = pending

        if abandoned is not None:
            outstanding = abandoned.expected - len(abandoned.collected)
            error = FrameOrderViolation('text frame received while %d of %d attachments are outstanding' % (outstanding, abandoned.expected), abandoned.packet)

            if pending.complete:
                try:
                    error.completed = self._finish()
                except ProtocolError as e:
                    raise error from e

            raise error

        if pending.complete:
            return self._finish()

        return None


    def _add_binary(self, frame):

        pending = self.pending

        if pending is None:
            pending = PendingPacket()

        try:
            done = pending.add(frame)
        except FrameOrderViolation:
            self.pending = None
            raise

        if done:
            return self._finish()

        return None


    def _finish(self):

        pending = self.pending
        self.pending = None

        packet = pending.packet

        try:
            packet.data = on_packet_complete(packet.data, pending.collected, self.unused)
        except ProtocolError as e:
            pending.fail()
            e.packet = packet
            raise

        packet.attachments = pending.collected
        packet.expected = None

        logger.debug('packet complete: %s with %d attachments', packet.type.name, len(packet.attachments))
        return packet


# end of class Assembler


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
