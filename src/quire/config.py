# src/quire/config.py
"""Configuration loading utilities for Quire.

This module provides configuration loading that can be used by:
- CLI commands
- External applications using Quire as a library

It handles:
- Finding and loading quire.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating Quire instances from configuration
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from quire.quire import Quire
    from quire.settings import Settings
    from quire.stores import DocumentStore

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = "./quire_data"
CONFIG_FILES = ["quire.yaml", "quire.yml", ".quirerc"]
ENV_FILE = ".env"

SUPPORTED_PROVIDERS = ("openai", "litellm")

# provider -> (chat model, embedding model)
DEFAULT_MODELS = {
    "openai": ("gpt-4o-mini", "text-embedding-3-small"),
    "litellm": ("openai/gpt-4o-mini", "openai/text-embedding-3-small"),
}


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "provider",
    "chat_model",
    "embedding_model",
    "base_url",
    "data_dir",
    "settings",
}

# YAML key -> Settings field
SETTINGS_KEYS = {
    "chunk_size": "chunk_size",
    "chunk_overlap": "chunk_overlap",
    "embed_batch_size": "embed_batch_size",
    "batch_size": "embed_batch_size",  # alias
    "min_interval_seconds": "min_interval_seconds",
    "max_attempts": "max_attempts",
    "backoff_base_seconds": "backoff_base_seconds",
    "backoff_max_seconds": "backoff_max_seconds",
    "request_timeout": "request_timeout",
    "default_k": "default_k",
    "system_prompt": "system_prompt",
    "chat_temperature": "chat_temperature",
    "rate_limit_profile": "rate_limit_profile",
}

# QUIRE_* env var -> (Settings field, parser)
_ENV_SETTINGS: dict[str, tuple[str, type]] = {
    "QUIRE_CHUNK_SIZE": ("chunk_size", int),
    "QUIRE_CHUNK_OVERLAP": ("chunk_overlap", int),
    "QUIRE_EMBED_BATCH_SIZE": ("embed_batch_size", int),
    "QUIRE_MIN_INTERVAL_SECONDS": ("min_interval_seconds", float),
    "QUIRE_MAX_ATTEMPTS": ("max_attempts", int),
    "QUIRE_BACKOFF_BASE_SECONDS": ("backoff_base_seconds", float),
    "QUIRE_BACKOFF_MAX_SECONDS": ("backoff_max_seconds", float),
    "QUIRE_REQUEST_TIMEOUT": ("request_timeout", float),
    "QUIRE_DEFAULT_K": ("default_k", int),
    "QUIRE_CHAT_TEMPERATURE": ("chat_temperature", float),
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - set(SETTINGS_KEYS)
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None or not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        logger.warning("Ignoring %s: expected a mapping at the top level", config_path)
        return {}

    for warning in validate_config(config, config_path):
        logger.warning(warning)

    return config


def _parse_env_value(name: str, parser: type) -> Any:
    """Parse an env var, returning None (and logging) on invalid value."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return parser(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a valid %s", name, raw, parser.__name__)
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from QUIRE_* environment variables.

    Returns values that were explicitly set (not defaults), to allow proper
    precedence: YAML settings are used unless overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for env_name, (setting, parser) in _ENV_SETTINGS.items():
        if (val := _parse_env_value(env_name, parser)) is not None:
            result[setting] = val

    if "QUIRE_SYSTEM_PROMPT" in os.environ:
        result["system_prompt"] = os.environ["QUIRE_SYSTEM_PROMPT"] or None
    if os.environ.get("QUIRE_RATE_LIMIT_PROFILE"):
        result["rate_limit_profile"] = os.environ["QUIRE_RATE_LIMIT_PROFILE"]

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    yaml_settings = config.get("settings", {}) or {}
    return {
        settings_key: yaml_settings[yaml_key]
        for yaml_key, settings_key in SETTINGS_KEYS.items()
        if yaml_key in yaml_settings
    }


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Settings class defaults (or the rate limit profile, if one is named)

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance
    """
    from quire.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    merged = {**yaml_settings, **env_settings}
    rate_limit_profile = merged.pop("rate_limit_profile", None)

    if rate_limit_profile:
        return Settings.with_profile(rate_limit_profile, **merged)
    return Settings(**merged)


def get_store(data_dir: str | Path) -> DocumentStore:
    """Get the document store for read-only operations (list, show, status, delete).

    This doesn't require provider configuration since it only accesses storage.

    Args:
        data_dir: Path to data directory

    Returns:
        SQLite document store inside data_dir
    """
    from quire.configuration import LocalStorage

    return LocalStorage(str(data_dir)).build_store()


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Pick the data directory: explicit argument, then YAML, then QUIRE_DATA_DIR."""
    return (
        data_dir
        or config.get("data_dir")
        or os.environ.get("QUIRE_DATA_DIR")
        or DEFAULT_DATA_DIR
    )


@dataclass
class QuireConfig:
    """Configuration for creating a Quire instance."""

    provider: str
    chat_model: str
    embedding_model: str
    data_dir: str
    settings: Settings
    api_key: str | None = field(default=None, repr=False)
    base_url: str | None = None


def get_quire_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> QuireConfig | ConfigError:
    """Get configuration for creating a Quire instance.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        QuireConfig with all settings, or ConfigError if invalid
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)
    provider = config.get("provider") or os.environ.get("QUIRE_PROVIDER") or "openai"

    if provider not in SUPPORTED_PROVIDERS:
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion=f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}",
        )

    try:
        settings = build_settings(config)
    except ValueError as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Check the settings: section of quire.yaml and QUIRE_* env vars",
        )

    default_chat, default_embedding = DEFAULT_MODELS[provider]

    chat_model = config.get("chat_model") or os.environ.get("QUIRE_CHAT_MODEL") or default_chat
    embedding_model = (
        config.get("embedding_model")
        or os.environ.get("QUIRE_EMBEDDING_MODEL")
        or default_embedding
    )
    api_key = os.environ.get("QUIRE_API_KEY") or os.environ.get("OPENAI_API_KEY")
    base_url = config.get("base_url") or os.environ.get("QUIRE_BASE_URL")

    if provider == "openai" and not api_key:
        return ConfigError(
            message="OpenAI provider requires an API key.",
            suggestion="Set QUIRE_API_KEY or OPENAI_API_KEY (a .env file works too)",
        )

    return QuireConfig(
        provider=provider,
        chat_model=chat_model,
        embedding_model=embedding_model,
        data_dir=effective_data_dir,
        settings=settings,
        api_key=api_key,
        base_url=base_url,
    )


def create_quire(config: QuireConfig) -> Quire:
    """Create a Quire instance from configuration.

    Args:
        config: Configuration for the Quire instance

    Returns:
        Configured Quire instance
    """
    from quire.configuration import LiteLLMProvider, LocalStorage, OpenAIProvider
    from quire.configuration.base import ProviderConfig
    from quire.providers.openai import DEFAULT_BASE_URL
    from quire.quire import Quire

    provider: ProviderConfig
    if config.provider == "openai":
        provider = OpenAIProvider(
            chat=config.chat_model,
            embedding=config.embedding_model,
            api_key=config.api_key,
            base_url=config.base_url or DEFAULT_BASE_URL,
        )
    elif config.provider == "litellm":
        provider = LiteLLMProvider(
            llm=config.chat_model,
            embedding=config.embedding_model,
            llm_api_key=config.api_key,
            embedding_api_key=config.api_key,
            api_base=config.base_url,
        )
    else:
        raise ValueError(f"Unknown provider: {config.provider}")

    return Quire(
        provider=provider,
        storage=LocalStorage(config.data_dir),
        settings=config.settings,
    )


def get_quire(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> Quire | ConfigError:
    """Create a Quire instance based on configuration.

    This is a convenience function that combines get_quire_config and
    create_quire. For more control, use those functions separately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured Quire instance, or ConfigError if configuration is invalid
    """
    config = get_quire_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_quire(config)
