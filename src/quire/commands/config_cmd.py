# src/quire/commands/config_cmd.py
"""Config command - display current configuration."""

from __future__ import annotations

import os
from pathlib import Path

from quire.commands.base import ConfigResult, SettingInfo
from quire.config import (
    DEFAULT_MODELS,
    SUPPORTED_PROVIDERS,
    build_settings,
    find_config_file,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    resolve_data_dir,
)

# Settings shown by the config command, in display order
DISPLAYED_SETTINGS = (
    "chunk_size",
    "chunk_overlap",
    "embed_batch_size",
    "min_interval_seconds",
    "max_attempts",
    "backoff_base_seconds",
    "backoff_max_seconds",
    "request_timeout",
    "default_k",
    "chat_temperature",
)


def _get_setting_source(
    key: str,
    yaml_settings: dict,
    env_settings: dict,
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    if "rate_limit_profile" in env_settings or "rate_limit_profile" in yaml_settings:
        return "profile/default"
    return "default"


def config(
    config_path: str | Path | None = None,
) -> ConfigResult:
    """Get current configuration settings.

    Args:
        config_path: Override config file path

    Returns:
        ConfigResult with all settings and their sources
    """
    cli_config = load_config(config_path)
    env_settings = get_settings_from_env()
    yaml_settings = get_settings_from_yaml(cli_config)

    try:
        settings = build_settings(cli_config, env_settings)
    except ValueError as e:
        return ConfigResult(success=False, error=f"Invalid settings: {e}")

    found_config_path = Path(config_path) if config_path else find_config_file()

    result = ConfigResult(success=True)
    result.config_path = str(found_config_path) if found_config_path else None

    result.provider = cli_config.get("provider") or os.environ.get("QUIRE_PROVIDER") or "openai"
    if result.provider in SUPPORTED_PROVIDERS:
        default_chat, default_embedding = DEFAULT_MODELS[result.provider]
    else:
        default_chat = default_embedding = None
    result.chat_model = (
        cli_config.get("chat_model") or os.environ.get("QUIRE_CHAT_MODEL") or default_chat
    )
    result.embedding_model = (
        cli_config.get("embedding_model")
        or os.environ.get("QUIRE_EMBEDDING_MODEL")
        or default_embedding
    )
    result.base_url = cli_config.get("base_url") or os.environ.get("QUIRE_BASE_URL")
    result.api_key_set = bool(os.environ.get("QUIRE_API_KEY") or os.environ.get("OPENAI_API_KEY"))
    result.data_dir = resolve_data_dir(None, cli_config)

    for key in DISPLAYED_SETTINGS:
        result.settings.append(
            SettingInfo(
                name=key,
                value=str(getattr(settings, key)),
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )
    result.settings.append(
        SettingInfo(
            name="system_prompt",
            value="custom" if settings.system_prompt else "default",
            source=_get_setting_source("system_prompt", yaml_settings, env_settings),
        )
    )

    return result
