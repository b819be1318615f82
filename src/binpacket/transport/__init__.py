"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
)

from . import zmq
