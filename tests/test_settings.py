# tests/test_settings.py
"""Tests for Settings.

Settings is a plain BaseModel (no env var reading); the config module reads
QUIRE_* variables at the application layer.
"""

import pydantic
import pytest

from quire.settings import DEFAULT_SYSTEM_PROMPT, RATE_LIMIT_PROFILES, Settings


class TestSettings:
    def test_default_settings(self):
        """Test Settings has correct defaults."""
        settings = Settings()
        assert settings.chunk_size == 1000
        assert settings.chunk_overlap == 200
        assert settings.embed_batch_size == 5
        assert settings.min_interval_seconds == 0.8
        assert settings.max_attempts == 10
        assert settings.backoff_base_seconds == 3.0
        assert settings.backoff_max_seconds == 30.0
        assert settings.default_k == 5
        assert settings.system_prompt is None
        assert settings.chat_temperature == 0.7

    def test_settings_with_custom_values(self):
        settings = Settings(chunk_size=500, chunk_overlap=0, default_k=2, system_prompt="Hi.")
        assert settings.chunk_size == 500
        assert settings.chunk_overlap == 0
        assert settings.default_k == 2
        assert settings.effective_system_prompt == "Hi."

    def test_effective_system_prompt_default(self):
        assert Settings().effective_system_prompt == DEFAULT_SYSTEM_PROMPT

    def test_overlap_must_be_smaller_than_size(self):
        """Test that an overlap equal to the chunk size is rejected."""
        with pytest.raises(pydantic.ValidationError, match="chunk_overlap"):
            Settings(chunk_size=100, chunk_overlap=100)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("chunk_size", 0),
            ("chunk_overlap", -1),
            ("embed_batch_size", 0),
            ("min_interval_seconds", -0.1),
            ("max_attempts", 0),
            ("default_k", 0),
        ],
    )
    def test_out_of_range_values(self, field, value):
        with pytest.raises(pydantic.ValidationError):
            Settings(**{field: value})

    def test_disabled_pacing(self):
        assert Settings(min_interval_seconds=0).min_interval_seconds == 0


class TestProfiles:
    def test_with_profile_conservative(self):
        """Test Settings.with_profile('conservative') applies correct values."""
        settings = Settings.with_profile("conservative")
        assert settings.min_interval_seconds == 2.0
        assert settings.max_attempts == 10
        assert settings.embed_batch_size == 2

    def test_with_profile_aggressive(self):
        settings = Settings.with_profile("aggressive")
        assert settings.min_interval_seconds == 0.1
        assert settings.max_attempts == 5
        assert settings.embed_batch_size == 5

    def test_with_profile_overrides(self):
        settings = Settings.with_profile("conservative", max_attempts=3, default_k=8)
        assert settings.max_attempts == 3
        assert settings.default_k == 8
        assert settings.min_interval_seconds == 2.0

    def test_with_profile_unknown(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            Settings.with_profile("turbo")  # type: ignore[arg-type]

    def test_profiles_are_not_mutated(self):
        Settings.with_profile("conservative", max_attempts=1)
        assert RATE_LIMIT_PROFILES["conservative"]["max_attempts"] == 10
