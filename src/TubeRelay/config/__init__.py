"""
TubeRelay Configuration Package

Example:
    from TubeRelay.config import load_config

    config = load_config(
        path="tuberelay.yaml",
        cli_overrides={"retry": {"max_attempts": 2}},
    )
"""

from .loader import CONFIG_PATH_ENV, ENV_PREFIX, load_config
from .models import (
    DEFAULT_ACCEPT,
    DEFAULT_USER_AGENT,
    EliteProTechConfig,
    HttpConfig,
    MessagesConfig,
    OkatsuConfig,
    PROVIDER_ORDER,
    ProviderConfig,
    ProvidersConfig,
    RetryConfig,
    SearchConfig,
    TubeRelayConfig,
    YupraConfig,
)

__all__ = [
    # Models
    "TubeRelayConfig",
    "HttpConfig",
    "RetryConfig",
    "ProviderConfig",
    "EliteProTechConfig",
    "YupraConfig",
    "OkatsuConfig",
    "ProvidersConfig",
    "SearchConfig",
    "MessagesConfig",
    "PROVIDER_ORDER",
    "DEFAULT_ACCEPT",
    "DEFAULT_USER_AGENT",
    # Loading
    "CONFIG_PATH_ENV",
    "ENV_PREFIX",
    "load_config",
]
