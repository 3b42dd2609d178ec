"""
Pydantic v2 Configuration Models for TubeRelay

Provides strict, typed configuration for every pipeline stage:
- HTTP client settings (timeout, User-Agent, Accept)
- Retry policy (attempt count, linear backoff step)
- Per-provider endpoint and enable flag
- Search backend settings
- Outbound message wording
- Top-level TubeRelayConfig as single source of truth

All models use extra="forbid" for strict validation. Environment variables
and CLI overrides follow: file < env < CLI precedence.
"""

from __future__ import annotations

from typing import ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = "application/json, text/plain, */*"

# Fallback priority. Fixed at build time; config can only disable entries.
PROVIDER_ORDER: Tuple[str, ...] = ("eliteprotech", "yupra", "okatsu")

# ============================================================================
# Shared Policy Models
# ============================================================================


class HttpConfig(BaseModel):
    """Configuration for the shared HTTP client."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    timeout_s: float = Field(default=60.0, description="Per-request timeout in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")
    accept: str = Field(default=DEFAULT_ACCEPT, description="Accept header")

    @field_validator("timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_s must be > 0")
        return v

    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": self.accept}


class RetryConfig(BaseModel):
    """Configuration for the transient retry executor."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    max_attempts: int = Field(default=3, description="Total attempts per provider request")
    backoff_step_s: float = Field(
        default=1.0, description="Linear backoff step; attempt n waits n * step"
    )

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_attempts must be >= 1")
        return v

    @field_validator("backoff_step_s")
    @classmethod
    def validate_backoff(cls, v: float) -> float:
        if v < 0:
            raise ValueError("backoff_step_s must be >= 0")
        return v


# ============================================================================
# Provider Configuration
# ============================================================================


class ProviderConfig(BaseModel):
    """Common configuration for one download provider."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True, description="Include provider in the fallback chain")
    endpoint: str = Field(description="Provider API endpoint (without query string)")

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return v


class EliteProTechConfig(ProviderConfig):
    """EliteProTech ytdown (primary)."""

    endpoint: str = Field(default="https://eliteprotech-apis.zone.id/ytdown")


class YupraConfig(ProviderConfig):
    """Yupra ytmp4 (secondary)."""

    endpoint: str = Field(default="https://api.yupra.my.id/api/downloader/ytmp4")


class OkatsuConfig(ProviderConfig):
    """Okatsu ytmp4 (last resort)."""

    endpoint: str = Field(default="https://okatsu-rolezapiiz.vercel.app/downloader/ytmp4")


class ProvidersConfig(BaseModel):
    """Configuration for the provider fallback chain."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    eliteprotech: EliteProTechConfig = Field(default_factory=EliteProTechConfig)
    yupra: YupraConfig = Field(default_factory=YupraConfig)
    okatsu: OkatsuConfig = Field(default_factory=OkatsuConfig)

    def enabled_names(self) -> Tuple[str, ...]:
        return tuple(name for name in PROVIDER_ORDER if getattr(self, name).enabled)


class SearchConfig(BaseModel):
    """Configuration for the default search backend."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    max_results: int = Field(default=5, description="Hits requested per search")

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_results must be >= 1")
        return v


class MessagesConfig(BaseModel):
    """Wording of outbound messages."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    caption_footer: str = Field(
        default="> *_Downloaded by TubeRelay_*",
        description="Appended below the title in video captions (empty to omit)",
    )


# ============================================================================
# Top-Level Configuration
# ============================================================================


class TubeRelayConfig(BaseModel):
    """Top-level TubeRelay configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    http: HttpConfig = Field(default_factory=HttpConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)

    def config_hash(self) -> str:
        """
        Compute deterministic SHA256 hash of config for reproducibility.

        Returns:
            Hex-encoded SHA256 hash of normalized config JSON.
        """
        import hashlib
        import json

        normalized = json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(normalized.encode()).hexdigest()


__all__ = [
    "DEFAULT_ACCEPT",
    "DEFAULT_USER_AGENT",
    "EliteProTechConfig",
    "HttpConfig",
    "MessagesConfig",
    "OkatsuConfig",
    "PROVIDER_ORDER",
    "ProviderConfig",
    "ProvidersConfig",
    "RetryConfig",
    "SearchConfig",
    "TubeRelayConfig",
    "YupraConfig",
]
