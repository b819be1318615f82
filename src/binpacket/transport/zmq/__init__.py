"""ZeroMQ transport adapter."""

from .stream import Stream, TEXT, BINARY
