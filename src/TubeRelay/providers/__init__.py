"""
Provider adapter registry.

The fallback chain is built here in its fixed priority order
(EliteProTech → Yupra → Okatsu). New providers are added by registering an
adapter class and appending its config key to ``PROVIDER_ORDER``.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type

import httpx

from TubeRelay.config import PROVIDER_ORDER, TubeRelayConfig
from TubeRelay.tenacity_retry import SleepFn
from TubeRelay.types import ProviderDescriptor

from .base import BaseProviderAdapter
from .eliteprotech import EliteProTechAdapter
from .okatsu import OkatsuAdapter
from .yupra import YupraAdapter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[BaseProviderAdapter]] = {
    "eliteprotech": EliteProTechAdapter,
    "yupra": YupraAdapter,
    "okatsu": OkatsuAdapter,
}


def build_adapters(
    config: TubeRelayConfig,
    client: httpx.AsyncClient,
    sleep: Optional[SleepFn] = None,
) -> List[BaseProviderAdapter]:
    """Instantiate enabled adapters in fallback order."""
    enabled = config.providers.enabled_names()
    adapters: List[BaseProviderAdapter] = []
    for key in PROVIDER_ORDER:
        if key not in enabled:
            logger.debug(f"Provider '{key}' disabled by config")
            continue
        provider_cfg = getattr(config.providers, key)
        adapters.append(
            ADAPTERS[key](client, provider_cfg.endpoint, retry=config.retry, sleep=sleep)
        )
    return adapters


def build_provider_chain(
    config: TubeRelayConfig,
    client: httpx.AsyncClient,
    sleep: Optional[SleepFn] = None,
) -> List[ProviderDescriptor]:
    """Return the ordered provider descriptors used by the orchestrator."""
    return [adapter.descriptor() for adapter in build_adapters(config, client, sleep)]


__all__ = [
    "ADAPTERS",
    "BaseProviderAdapter",
    "EliteProTechAdapter",
    "OkatsuAdapter",
    "YupraAdapter",
    "build_adapters",
    "build_provider_chain",
]
