# tests/commands/test_config.py
"""Tests for the config command."""

import os

from quire.commands import config_cmd


def write_yaml(directory, text):
    path = os.path.join(directory, "quire.yaml")
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def settings_by_name(result):
    return {s.name: s for s in result.settings}


class TestConfigCommand:
    def test_defaults(self, temp_dir):
        result = config_cmd.config(config_path=os.path.join(temp_dir, "none.yaml"))

        assert result.success is True
        assert result.provider == "openai"
        assert result.chat_model == "gpt-4o-mini"
        assert result.embedding_model == "text-embedding-3-small"
        assert result.api_key_set is False
        settings = settings_by_name(result)
        assert settings["chunk_size"].value == "1000"
        assert settings["chunk_size"].source == "default"
        assert settings["system_prompt"].value == "default"

    def test_sources(self, temp_dir, monkeypatch):
        monkeypatch.setenv("QUIRE_DEFAULT_K", "7")
        monkeypatch.setenv("QUIRE_API_KEY", "sk-test")
        path = write_yaml(
            temp_dir,
            "provider: litellm\nsettings:\n  chunk_size: 600\n  system_prompt: Be brief.\n",
        )

        result = config_cmd.config(config_path=path)

        settings = settings_by_name(result)
        assert result.provider == "litellm"
        assert result.chat_model == "openai/gpt-4o-mini"
        assert result.api_key_set is True
        assert result.config_path == path
        assert (settings["chunk_size"].value, settings["chunk_size"].source) == ("600", "yaml")
        assert (settings["default_k"].value, settings["default_k"].source) == ("7", "env var")
        assert settings["system_prompt"].value == "custom"

    def test_profile_source(self, temp_dir):
        path = write_yaml(temp_dir, "settings:\n  rate_limit_profile: conservative\n")

        result = config_cmd.config(config_path=path)

        settings = settings_by_name(result)
        assert settings["min_interval_seconds"].value == "2.0"
        assert settings["min_interval_seconds"].source == "profile/default"

    def test_invalid_settings(self, temp_dir):
        path = write_yaml(temp_dir, "settings:\n  chunk_size: 10\n  chunk_overlap: 20\n")

        result = config_cmd.config(config_path=path)

        assert result.success is False
        assert result.error.startswith("Invalid settings")
