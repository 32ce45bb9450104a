"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from jsreq_cli.config.models import FilterConfig, JsreqConfig, ScanConfig


class TestFilterConfig:
    """Test FilterConfig model."""

    def test_default_values(self) -> None:
        """Test default filter configuration."""
        config = FilterConfig()
        assert config.exclude == []
        assert config.include == []

    def test_include_patterns(self) -> None:
        """Test include patterns alongside exclude."""
        config = FilterConfig(exclude=["vendor/"], include=["vendor/own/"])
        assert "vendor/" in config.exclude
        assert "vendor/own/" in config.include


class TestScanConfig:
    """Test ScanConfig model."""

    def test_defaults(self) -> None:
        config = ScanConfig()
        assert config.extensions == [".js", ".mjs", ".cjs"]
        assert config.encoding == "utf-8"
        assert config.fail_fast is False

    def test_extensions_are_normalized(self) -> None:
        config = ScanConfig(extensions=["JS", ".MJS", "jsx"])
        assert config.extensions == [".js", ".mjs", ".jsx"]

    def test_invalid_fail_fast(self) -> None:
        with pytest.raises(ValidationError):
            ScanConfig(fail_fast="sometimes")


class TestJsreqConfig:
    def test_nested_defaults(self) -> None:
        config = JsreqConfig()
        assert isinstance(config.filter, FilterConfig)
        assert isinstance(config.scan, ScanConfig)
