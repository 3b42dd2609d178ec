"""
TubeRelay

Resolves a video link or free-text query into a playable download URL by
trying a fixed chain of third-party download providers until one succeeds.

Public API:
  VideoCommand / run_video_command - End-to-end request handling
  IdentityResolver - Query → canonical video identity
  FallbackOrchestrator - Sequential provider fallback
  execute_with_retry - Linear-backoff retry executor
  load_config / TubeRelayConfig - Configuration
"""

from .command import MessageSink, VideoCommand, extract_query, run_video_command
from .config import TubeRelayConfig, load_config
from .fallback import FallbackOrchestrator
from .identity import IdentityResolver
from .tenacity_retry import execute_with_retry

__version__ = "0.1.0"

__all__ = [
    "FallbackOrchestrator",
    "IdentityResolver",
    "MessageSink",
    "TubeRelayConfig",
    "VideoCommand",
    "execute_with_retry",
    "extract_query",
    "load_config",
    "run_video_command",
]
