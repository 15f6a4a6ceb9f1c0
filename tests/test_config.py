"""Tests for configuration module."""

import pytest
from pydantic import ValidationError

from contract_fuzzer.config import FuzzerConfig, OutputMode


class TestFuzzerConfig:
    """Test FuzzerConfig validation and behavior."""

    def test_default_values(self):
        """Test default configuration values."""
        config = FuzzerConfig()

        assert config.base_url is None
        assert config.max_requests_per_minute == 10000
        assert config.serializer_max_depth == 5
        assert config.cyclic_max_repeats == 2
        assert config.request_timeout == 10.0
        assert config.verify_tls is True
        assert config.concurrency == 4
        assert config.output_mode == OutputMode.STANDARD

    def test_custom_values(self):
        """Test custom configuration values."""
        config = FuzzerConfig(
            base_url="http://localhost:8080",
            max_requests_per_minute=600,
            output_mode=OutputMode.VERBOSE,
        )

        assert config.base_url == "http://localhost:8080"
        assert config.max_requests_per_minute == 600
        assert config.output_mode == OutputMode.VERBOSE

    def test_zero_rate_rejected(self):
        """Test that a non-positive request rate is invalid."""
        with pytest.raises(ValidationError):
            FuzzerConfig(max_requests_per_minute=0)

    def test_negative_timeout_rejected(self):
        """Test that a non-positive timeout is invalid."""
        with pytest.raises(ValidationError):
            FuzzerConfig(request_timeout=-1)

    def test_parse_obj_from_dict(self):
        """Test creating config from dictionary."""
        config_dict = {
            "base_url": "https://api.example.com",
            "max_requests_per_minute": 120,
            "serializer_max_depth": 3,
            "verify_tls": False,
            "output_mode": "quiet",
        }

        config = FuzzerConfig.model_validate(config_dict)
        assert config.base_url == "https://api.example.com"
        assert config.max_requests_per_minute == 120
        assert config.serializer_max_depth == 3
        assert config.verify_tls is False
        assert config.output_mode == OutputMode.QUIET


class TestOutputMode:
    """Test OutputMode enum."""

    def test_enum_values(self):
        """Test all output mode values exist."""
        assert OutputMode.QUIET.value == "quiet"
        assert OutputMode.STANDARD.value == "standard"
        assert OutputMode.VERBOSE.value == "verbose"

    def test_from_string(self):
        """Test creating output mode from string."""
        assert OutputMode("quiet") == OutputMode.QUIET
        assert OutputMode("standard") == OutputMode.STANDARD
        assert OutputMode("verbose") == OutputMode.VERBOSE
