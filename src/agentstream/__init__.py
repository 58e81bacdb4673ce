"""agentstream — line-by-line reveal engine for streamed agent output.

Usage:
    from agentstream import StreamController
    from agentstream.ui.sinks import MessageSink

    controller = StreamController()
    controller.begin(MessageSink("msg-1", on_update=store.update))
    for delta in deltas:
        controller.push_and_maybe_commit(delta)
    controller.finalize(flush_immediately=False)
"""

from agentstream.core.collector import LineCollector
from agentstream.core.controller import StreamController
from agentstream.core.markdown import (
    is_inside_open_markdown_wrapper,
    is_inside_unclosed_fence,
    process_markdown_for_streaming,
    strip_empty_fenced_code_blocks,
    unwrap_markdown_language_fence,
)
from agentstream.core.streamer import AnimationStep, LineStreamer
from agentstream.core.timer import AsyncioScheduler, Scheduler, TimerHandle
from agentstream.types.config import StreamConfig, StreamConfigError, StreamState
from agentstream.types.sink import Sink

__version__ = "0.1.0"

__all__ = [
    # Engine
    "StreamController",
    "LineCollector",
    "LineStreamer",
    "AnimationStep",
    # Markdown helpers
    "is_inside_open_markdown_wrapper",
    "is_inside_unclosed_fence",
    "process_markdown_for_streaming",
    "strip_empty_fenced_code_blocks",
    "unwrap_markdown_language_fence",
    # Timers
    "AsyncioScheduler",
    "Scheduler",
    "TimerHandle",
    # Configuration
    "Sink",
    "StreamConfig",
    "StreamConfigError",
    "StreamState",
]
