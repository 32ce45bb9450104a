"""Configuration loader with TOML parsing and priority system."""

import tomllib
from pathlib import Path
from typing import Any

from jsreq_cli.config.models import FilterConfig, JsreqConfig, ScanConfig


class ConfigLoader:
    """Load and merge configuration from multiple sources."""

    def __init__(
        self,
        user_config_path: Path | None = None,
        project_config_path: Path | None = None,
    ) -> None:
        """Initialize ConfigLoader.

        Args:
            user_config_path: Path to user config (~/.config/jsreq/jsreq.toml)
            project_config_path: Path to project config (.jsreq/jsreq.toml)
        """
        self.user_config_path = user_config_path or Path.home() / ".config" / "jsreq" / "jsreq.toml"
        self.project_config_path = project_config_path or Path(".jsreq") / "jsreq.toml"

    def load(self, overrides: dict[str, Any] | None = None) -> JsreqConfig:
        """Load configuration with priority: CLI > Project > User > Default.

        Args:
            overrides: structured dictionary of overrides (e.g. from CLI arguments)

        Returns:
            Merged JsreqConfig
        """
        config_dict: dict[str, Any] = {}

        if self.user_config_path.exists():
            config_dict = self._merge_dicts(config_dict, self._load_toml(self.user_config_path))

        if self.project_config_path.exists():
            config_dict = self._merge_dicts(config_dict, self._load_toml(self.project_config_path))

        if overrides:
            config_dict = self._merge_dicts(config_dict, overrides)

        return JsreqConfig(
            filter=FilterConfig(**config_dict.get("filter", {})),
            scan=ScanConfig(**config_dict.get("scan", {})),
        )

    def _load_toml(self, path: Path) -> dict[str, Any]:
        """Load TOML file.

        Raises:
            TOMLDecodeError: If TOML is invalid
        """
        with open(path, "rb") as f:
            return tomllib.load(f)

    def _merge_dicts(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge two dictionaries, values from ``override`` winning."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result


def _resolve_cli_overrides(
    extensions: list[str] | None = None,
    fail_fast: bool | None = None,
) -> dict[str, Any]:
    """Resolve CLI arguments into configuration overrides dictionary."""
    overrides: dict[str, Any] = {"scan": {}}
    if extensions:
        overrides["scan"]["extensions"] = extensions
    if fail_fast is not None:
        overrides["scan"]["fail_fast"] = fail_fast
    return overrides


def load_config(
    repo_path: Path,
    extensions: list[str] | None = None,
    fail_fast: bool | None = None,
) -> JsreqConfig:
    """Helper to load configuration for a given repository path with CLI overrides.

    Args:
        repo_path: Repository root path.
        extensions: Source suffix override.
        fail_fast: Fail-fast override.

    Returns:
        Loaded JsreqConfig.
    """
    loader = ConfigLoader(project_config_path=repo_path / ".jsreq" / "jsreq.toml")
    return loader.load(_resolve_cli_overrides(extensions, fail_fast))
