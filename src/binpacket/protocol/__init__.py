from . import fields
from . import errors
from . import value
from . import codec
from . import message
from . import wire
from . import assembly

from .errors import (
    ProtocolError,
    ReconstructionError,
    InvalidReference,
    UnusedAttachments,
    FrameOrderViolation,
    MalformedPacket,
)
from .fields import PacketType
from .message import Packet
from .value import Binary, Placeholder


"""
binpacket Protocol Layer
========================

This package defines the transport-agnostic codec for values that carry
binary payloads. It splits a value into a text skeleton plus binary
attachments, sequences them as frames, and puts them back together on
receipt.

The protocol layer MUST NOT depend on any transport implementation
(e.g. ZeroMQ, WebSocket, etc).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Packet Assembly (assembly.py)
    Application-facing API
    - encode_for_send()
    - on_packet_complete()
    - Assembler: buffers frames until a packet is complete

    │
    ▼
Packet Model (message.py, wire.py)
    One skeleton + ordered attachments
    - Packet iterates as frames: text first, then binary
    - wire.py maps the skeleton frame <-> text

    │
    ▼
Codec (codec.py)
    Pure tree transforms
    - encode(): binary leaves -> numbered placeholders
    - decode(): placeholders -> binary leaves

    │
    ▼
Value Model (value.py)
    Binary, Placeholder, tree traversal

    │
    ▼
Field Vocabulary (fields.py)
    Reserved placeholder keys, packet type codes

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport Layer
    Moves frames
    - ZeroMQ
    - anything else that can carry a text frame or a binary frame

---------------------------------------------------------------------

Design Principles
-----------------

1. Transport Agnostic
   Frames are plain str and bytes objects.

2. Packet-Scoped Failure
   Every protocol error concerns one packet; none of them requires
   closing the connection.

3. Layer Isolation
   Dependencies only flow downward:
       Protocol -> Transport
   Never upward.

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
