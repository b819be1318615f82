from __future__ import annotations

import re
from typing import Optional

from .. import config
from .. import json
from . import message
from .errors import MalformedPacket
from .fields import (
    ATTACHMENT_SEPARATOR,
    NAMESPACE_PREFIX,
    NAMESPACE_SEPARATOR,
    PacketType,
)


_COUNT = re.compile(r"([0-9]+)" + re.escape(ATTACHMENT_SEPARATOR))
_ID = re.compile(r"[0-9]+")


def encode(packet: message.Packet) -> str:
    """
    Serialize Packet -> text frame

    Layout:
        <type>[<count>-][<namespace>,][<id>][<json data>]

    The attachment count is present for binary packet types only, so a
    receiver knows how many binary frames follow without having to look
    inside the data.
    """

    chunks = [str(int(packet.type))]

    if packet.type.binary:
        chunks.append(str(packet.count))
        chunks.append(ATTACHMENT_SEPARATOR)

    namespace = packet.namespace
    if namespace:
        if not namespace.startswith(NAMESPACE_PREFIX) or NAMESPACE_SEPARATOR in namespace:
            raise ValueError(f"invalid namespace: {namespace!r}")
        chunks.append(namespace)

    if packet.id is not None:
        if isinstance(packet.id, bool) or not isinstance(packet.id, int) or packet.id < 0:
            raise ValueError(f"packet id must be a non-negative integer, not {packet.id!r}")

    data = packet.data

    # A bare number would run into the id digits and be misread on receipt.
    if isinstance(data, (int, float)) and not isinstance(data, bool) and data >= 0:
        raise ValueError("top-level numeric data is ambiguous on the wire; wrap it in a list")

    if namespace and (packet.id is not None or data is not None):
        chunks.append(NAMESPACE_SEPARATOR)

    if packet.id is not None:
        chunks.append(str(packet.id))

    if data is not None:
        chunks.append(json.dumps(data).decode("utf-8"))

    return "".join(chunks)


def decode(text: str) -> message.Packet:
    """
    Deserialize text frame -> Packet

    The returned packet has no attachments yet; its *expected* attribute
    holds the count declared in the header.
    """

    if not text:
        raise MalformedPacket("empty text frame")

    code = text[0]
    if code not in "0123456789":
        raise MalformedPacket(f"invalid packet type: {code!r}")

    try:
        packet_type = PacketType(int(code))
    except ValueError:
        raise MalformedPacket(f"invalid packet type: {code!r}")

    position = 1
    expected = 0

    if packet_type.binary:
        match = _COUNT.match(text, position)
        if match is None:
            raise MalformedPacket("binary packet without an attachment count")

        expected = int(match.group(1))
        position = match.end()

        limit = config.max_attachments
        if limit is not None and expected > limit:
            raise MalformedPacket(f"packet declares {expected} attachments, limit is {limit}")

    namespace: Optional[str] = None

    if text.startswith(NAMESPACE_PREFIX, position):
        end = text.find(NAMESPACE_SEPARATOR, position)
        if end == -1:
            namespace = text[position:]
            position = len(text)
        else:
            namespace = text[position:end]
            position = end + 1

    packet_id: Optional[int] = None

    match = _ID.match(text, position)
    if match is not None:
        packet_id = int(match.group(0))
        position = match.end()

    data = None
    remainder = text[position:]

    if remainder:
        try:
            data = json.loads(remainder)
        except json.DecodeError as e:
            raise MalformedPacket(f"invalid JSON data: {e}")

    packet = message.Packet(packet_type, data, namespace, packet_id)
    packet.expected = expected
    return packet
