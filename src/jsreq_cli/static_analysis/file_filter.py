"""File filtering logic using pathspec."""
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Generator

import pathspec

from jsreq_cli.config.models import FilterConfig

logger = logging.getLogger(__name__)


class FileFilter:
    """Filter files based on .gitignore, default rules, and user config."""

    DEFAULT_EXCLUDES = [
        ".git/",
        "node_modules/",
        "bower_components/",
        "jspm_packages/",
        "build/",
        "dist/",
        "coverage/",
        "*.min.js",
        "*.map",
        ".DS_Store",
        ".jsreq/",
    ]

    def __init__(self, root_path: Path, config: FilterConfig) -> None:
        """Initialize FileFilter.

        Args:
            root_path: Root directory of the project.
            config: Filter configuration (exclude/include).
        """
        self.root_path = root_path
        self.config = config
        self.gitignore_spec = self._load_gitignore()
        self.default_spec = pathspec.GitIgnoreSpec.from_lines(self.DEFAULT_EXCLUDES)
        self.config_exclude_spec = pathspec.GitIgnoreSpec.from_lines(config.exclude)
        self.config_include_spec = pathspec.GitIgnoreSpec.from_lines(config.include)

    def _load_gitignore(self) -> pathspec.GitIgnoreSpec | None:
        gitignore_path = self.root_path / ".gitignore"
        if not gitignore_path.exists():
            return None
        try:
            with open(gitignore_path, "r", encoding="utf-8") as f:
                return pathspec.GitIgnoreSpec.from_lines(f)
        except OSError as exc:
            logger.warning("Could not read %s: %s", gitignore_path, exc)
            return None

    def should_ignore(self, file_path: Path) -> bool:
        """Check if a file should be ignored.

        Priority:
        1. Config Include (Force include) -> Returns False
        2. Config Exclude -> Returns True
        3. Default Exclude -> Returns True
        4. .gitignore -> Returns True

        Args:
            file_path: Path to the file (absolute or relative to root).

        Returns:
            True if file should be ignored, False otherwise.
        """
        if file_path.is_absolute():
            try:
                rel_path = file_path.relative_to(self.root_path)
            except ValueError:
                # Outside the project root
                return True
        else:
            rel_path = file_path

        rel_str = rel_path.as_posix()

        if self.config_include_spec.match_file(rel_str):
            return False
        if self.config_exclude_spec.match_file(rel_str):
            return True
        if self.default_spec.match_file(rel_str):
            return True
        if self.gitignore_spec and self.gitignore_spec.match_file(rel_str):
            return True
        return False

    def walk(self, extensions: Iterable[str] | None = None) -> Generator[Path, None, None]:
        """Walk the directory tree and yield valid files in sorted order.

        Args:
            extensions: Lower-case suffixes to keep (e.g. ``[".js"]``); all files if None.

        Yields:
            Path objects for valid files.
        """
        suffixes = {ext.lower() for ext in extensions} if extensions is not None else None
        for path in sorted(self.root_path.rglob("*")):
            if not path.is_file():
                continue
            if suffixes is not None and path.suffix.lower() not in suffixes:
                continue
            if not self.should_ignore(path):
                yield path
