"""Public type definitions for agentstream."""

from agentstream.types.config import StreamConfig, StreamConfigError, StreamState
from agentstream.types.sink import Sink

__all__ = [
    "Sink",
    "StreamConfig",
    "StreamConfigError",
    "StreamState",
]
