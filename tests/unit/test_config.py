"""
Unit tests for parser configuration.
"""

import pytest

from httpstream import ParserConfig, StreamParser


class TestParserConfig:
    """Tests for ParserConfig."""

    def test_defaults(self):
        config = ParserConfig()

        assert config.tolerant_mode is True
        assert config.strict_headers is False
        assert config.max_buffer_size is None
        assert config.compact_threshold == 64 * 1024
        config.validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTPSTREAM_TOLERANT", "false")
        monkeypatch.setenv("HTTPSTREAM_STRICT_HEADERS", "yes")
        monkeypatch.setenv("HTTPSTREAM_MAX_BUFFER", "4096")
        monkeypatch.setenv("HTTPSTREAM_COMPACT_THRESHOLD", "128")
        monkeypatch.setenv("HTTPSTREAM_LOG_LEVEL", "DEBUG")

        config = ParserConfig.from_env()

        assert config.tolerant_mode is False
        assert config.strict_headers is True
        assert config.max_buffer_size == 4096
        assert config.compact_threshold == 128
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in (
            "HTTPSTREAM_TOLERANT",
            "HTTPSTREAM_STRICT_HEADERS",
            "HTTPSTREAM_MAX_BUFFER",
            "HTTPSTREAM_COMPACT_THRESHOLD",
            "HTTPSTREAM_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        assert ParserConfig.from_env() == ParserConfig()

    @pytest.mark.parametrize("kwargs, message", [
        ({"max_buffer_size": 0}, "max_buffer_size must be >= 1 or None"),
        ({"compact_threshold": -1}, "compact_threshold must be >= 0"),
        ({"log_level": "LOUD"}, "Invalid log_level: LOUD"),
    ])
    def test_validate_rejects(self, kwargs, message):
        with pytest.raises(ValueError) as exc_info:
            ParserConfig(**kwargs).validate()

        assert str(exc_info.value) == message

    def test_parser_validates_config(self):
        """Test that a bad config fails at construction, not mid-stream."""
        with pytest.raises(ValueError):
            StreamParser(ParserConfig(max_buffer_size=-5))
