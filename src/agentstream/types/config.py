"""Configuration and state types for agentstream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_TICK_INTERVAL_MS = 50
DEFAULT_REPLAY_CHUNK_SIZE = 16


class StreamConfigError(ValueError):
    """Raised when a stream configuration value is out of range."""


class StreamState(Enum):
    """Lifecycle state of one logical stream."""

    IDLE = "idle"  # No stream in flight
    ACTIVE = "active"  # Accepting deltas
    DRAINING = "draining"  # Finalized, still revealing queued lines


@dataclass(frozen=True, slots=True)
class StreamConfig:
    """Tunables for a StreamController."""

    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    replay_chunk_size: int = DEFAULT_REPLAY_CHUNK_SIZE  # Used by `agentstream replay`

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            raise StreamConfigError(
                f"tick_interval_ms must be positive, got {self.tick_interval_ms}"
            )
        if self.replay_chunk_size <= 0:
            raise StreamConfigError(
                f"replay_chunk_size must be positive, got {self.replay_chunk_size}"
            )

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000
