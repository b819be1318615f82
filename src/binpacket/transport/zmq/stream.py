""" Carry packets over a ZeroMQ socket. Every frame of a packet is sent as its
    own two-part ZeroMQ message: a one-byte kind, followed by the frame body.
    The kind is needed because ZeroMQ itself does not distinguish text from
    binary data::

        (b't', utf-8 text frame)
        (b'b', binary attachment)

    The socket must preserve message order, which any connected PAIR or
    DEALER socket does.
"""

import threading
import time
import zmq

from ... import config
from ...protocol.assembly import Assembler, encode_for_send
from ...protocol.errors import FrameOrderViolation, MalformedPacket
from ..base import Transport, TransportError, TransportTimeout

TEXT = b't'
BINARY = b'b'


class Stream(Transport):
    """ Send and receive packets over an already connected ZeroMQ *socket*.
        The *timeout*, in seconds, bounds how long :func:`recv` waits for a
        packet to complete; if it is None the value from
        :data:`binpacket.config.timeout` is used. The *unused* argument is
        the unused-attachment policy handed to the :class:`Assembler`.
    """

    def __init__(self, socket, timeout=None, unused=None):

        if timeout is None:
            timeout = config.timeout

        self.socket = socket
        self.timeout = timeout
        self.assembler = Assembler(unused)
        self.ready = list()

        self.socket_lock = threading.Lock()

        self.poller = zmq.Poller()
        self.poller.register(socket, zmq.POLLIN)


    def close(self):
        self.assembler.cancel()
        self.ready = list()
        self.socket.close(linger=0)


    def send(self, packet):
        """ Send every frame of *packet*. The frames of one packet are sent
            while holding a lock, so that concurrent senders cannot interleave
            attachments from different packets.
        """

        self.socket_lock.acquire()

        try:
            for frame in packet:
                if isinstance(frame, str):
                    self.socket.send_multipart((TEXT, frame.encode('utf-8')))
                else:
                    self.socket.send_multipart((BINARY, frame))
        finally:
            self.socket_lock.release()


    def send_value(self, value, **header):
        """ Encode *value* and send it. Any keyword arguments (type,
            namespace, id) are passed to :func:`encode_for_send`.
        """

        packet = encode_for_send(value, **header)
        self.send(packet)
        return packet


    def recv(self, timeout=None):
        """ Return the next complete :class:`Packet`. If no packet completes
            within *timeout* seconds, any partially received packet is
            discarded and :class:`TransportTimeout` is raised. Protocol errors
            from the assembler are raised as-is; the stream remains usable. A
            packet completed by the same frame that raised a
            :class:`FrameOrderViolation` is returned by the next call.
        """

        if self.ready:
            return self.ready.pop(0)

        if timeout is None:
            timeout = self.timeout

        deadline = time.monotonic() + timeout

        while True:
            remaining = deadline - time.monotonic()

            if remaining <= 0 or not self.poller.poll(int(remaining * 1000)):
                pending = self.assembler.cancel()
                if pending is None:
                    raise TransportTimeout('no packet received in %.2f sec' % (timeout))
                raise TransportTimeout('packet incomplete after %.2f sec: %d of %d attachments' % (timeout, len(pending.collected), pending.expected))

            parts = self.socket.recv_multipart()
            frame = self._frame(parts)

            try:
                packet = self.assembler.add(frame)
            except FrameOrderViolation as e:
                if e.completed is not None:
                    self.ready.append(e.completed)
                raise

            if packet is not None:
                return packet


    def _frame(self, parts):

        if len(parts) != 2:
            raise TransportError('expected a 2-part message, got %d parts' % (len(parts)))

        kind, body = parts

        if kind == TEXT:
            try:
                return body.decode('utf-8')
            except UnicodeDecodeError as e:
                raise MalformedPacket('text frame is not valid UTF-8: ' + str(e)) from e

        if kind == BINARY:
            return body

        raise TransportError('unknown frame kind: ' + repr(kind))


# end of class Stream


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
