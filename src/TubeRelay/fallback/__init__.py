"""
Provider fallback.

Public API:
  FallbackOrchestrator - Sequential first-success resolution over the chain
  failure_from_exception - Convert an adapter error into a ProviderFailure
"""

from .orchestrator import FallbackOrchestrator, failure_from_exception, has_download_url

__all__ = [
    "FallbackOrchestrator",
    "failure_from_exception",
    "has_download_url",
]
