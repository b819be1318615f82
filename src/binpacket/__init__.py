""" Python implementation of binpacket. This includes the codec that moves
    binary payloads out of nested values into numbered attachments, the
    packet assembly layer that frames and reassembles them, and a ZeroMQ
    transport adapter.
"""

# Utility components.

from . import json
from . import config

# Submodules used by multiple other components.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from .protocol.codec import encode, decode
from .protocol.assembly import Assembler, encode_for_send, on_packet_complete
from .protocol.errors import (
    ProtocolError,
    ReconstructionError,
    InvalidReference,
    UnusedAttachments,
    FrameOrderViolation,
    MalformedPacket,
)
from .protocol.fields import PacketType
from .protocol.message import Packet
from .protocol.value import Binary, Placeholder

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
