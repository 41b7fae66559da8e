# src/quire/settings.py
"""Behavioral settings for Quire.

Settings control chunking, pacing, retry and retrieval behavior regardless of
which provider is used. They are passed programmatically; the library itself
does not read environment variables. The config module reads QUIRE_* env vars
and quire.yaml at the application layer and builds a Settings from them.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

# Pacing profiles for different API tiers
RATE_LIMIT_PROFILES: dict[str, dict[str, Any]] = {
    "aggressive": {
        "min_interval_seconds": 0.1,
        "max_attempts": 5,
    },
    "conservative": {
        "min_interval_seconds": 2.0,
        "max_attempts": 10,
        "embed_batch_size": 2,
    },
}

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful study assistant. Use the provided context to answer accurately."
)


class Settings(BaseModel):
    """Behavioral settings for Quire.

    Example:
        settings = Settings(chunk_size=800, chunk_overlap=100)

        # Or use a pacing profile for free API tiers
        settings = Settings.with_profile("conservative")
    """

    # Chunking
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)

    # Embedding batches (texts per provider call)
    embed_batch_size: int = Field(default=5, gt=0)

    # Pacing and retry
    min_interval_seconds: float = Field(default=0.8, ge=0)
    max_attempts: int = Field(default=10, gt=0)
    backoff_base_seconds: float = Field(default=3.0, ge=0)
    backoff_max_seconds: float = Field(default=30.0, ge=0)
    request_timeout: float = Field(default=60.0, gt=0)

    # Retrieval and answering
    default_k: int = Field(default=5, gt=0)
    system_prompt: str | None = None
    chat_temperature: float | None = 0.7

    @model_validator(mode="after")
    def _check_overlap(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @property
    def effective_system_prompt(self) -> str:
        return self.system_prompt or DEFAULT_SYSTEM_PROMPT

    @classmethod
    def with_profile(
        cls,
        profile: Literal["aggressive", "conservative"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings with a pacing profile.

        Profiles bundle pacing values for different API tier limits:
        - "aggressive": paid tiers with generous rate limits
        - "conservative": free tiers or APIs with strict rate limits

        Args:
            profile: The profile to use.
            **overrides: Additional settings to override profile defaults.

        Returns:
            Settings instance with profile values applied.
        """
        if profile not in RATE_LIMIT_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(RATE_LIMIT_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = RATE_LIMIT_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)
