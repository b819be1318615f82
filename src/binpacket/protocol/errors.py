"""Exceptions raised while reconstructing or assembling packets.

Every error here is scoped to a single packet. None of them implies the
underlying transport connection is unusable; that decision belongs to the
caller.
"""

from __future__ import annotations

from typing import Any, Optional


class ProtocolError(Exception):
    """Base class for all packet-level errors.

    :ivar packet: The affected packet, if one had been identified.
    """

    def __init__(self, message: str, packet: Optional[Any] = None):
        Exception.__init__(self, message)
        self.packet = packet


class ReconstructionError(ProtocolError):
    """A skeleton and its attachments do not correspond."""


class InvalidReference(ReconstructionError):
    """A placeholder index is malformed, out of range, or repeated."""


class UnusedAttachments(ReconstructionError):
    """One or more attachments were never referenced by a placeholder.

    :ivar unused: Sorted list of the unreferenced attachment indices.
    """

    def __init__(self, message: str, unused=(), packet: Optional[Any] = None):
        ProtocolError.__init__(self, message, packet)
        self.unused = sorted(unused)


class FrameOrderViolation(ProtocolError):
    """A frame arrived that does not fit the current in-flight packet.

    :ivar completed: A packet that the offending frame itself completed, if any.
    """

    completed = None


class MalformedPacket(ProtocolError):
    """A skeleton frame could not be parsed."""
