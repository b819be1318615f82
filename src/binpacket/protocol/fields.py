"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

import enum


# Reserved shape of a placeholder in a serialized skeleton:
#     {"_placeholder": true, "num": <attachment index>}

PLACEHOLDER = "_placeholder"
NUM = "num"


class PacketType(enum.IntEnum):
    """Packet type codes; the code is the first character of a text frame."""

    CONNECT = 0
    DISCONNECT = 1
    EVENT = 2
    ACK = 3
    ERROR = 4
    BINARY_EVENT = 5
    BINARY_ACK = 6

    @property
    def binary(self):
        return self in BINARY_TYPES


BINARY_TYPES = frozenset((PacketType.BINARY_EVENT, PacketType.BINARY_ACK))

# Packet types that gain attachments are promoted to their binary variant.

PROMOTE = {
    PacketType.EVENT: PacketType.BINARY_EVENT,
    PacketType.ACK: PacketType.BINARY_ACK,
}

ATTACHMENT_SEPARATOR = "-"
NAMESPACE_PREFIX = "/"
NAMESPACE_SEPARATOR = ","
