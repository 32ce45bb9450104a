"""Configuration management - Settings and TOML parsing."""

from jsreq_cli.config.loader import ConfigLoader
from jsreq_cli.config.models import FilterConfig, JsreqConfig, ScanConfig

__all__ = ["ConfigLoader", "FilterConfig", "JsreqConfig", "ScanConfig"]
