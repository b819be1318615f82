"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`binpacket.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..protocol.message import Packet


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A packet did not arrive, or did not complete, in time."""


class Transport(ABC):
    """Minimal contract for a frame-level transport."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def send(self, packet: Packet) -> None:
        """Send every frame of a Packet, in order."""

    @abstractmethod
    def recv(self, timeout: Optional[float] = None) -> Packet:
        """Receive the next complete Packet."""
