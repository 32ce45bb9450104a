"""Project-wide specifier extraction."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsreq_cli.config.models import JsreqConfig
from jsreq_cli.static_analysis.extractor import ExtractionResult, RequiresAnalyzer
from jsreq_cli.static_analysis.file_filter import FileFilter
from jsreq_cli.static_analysis.grammar import FatalParseError

logger = logging.getLogger(__name__)


@dataclass
class ScanReport:
    """Extraction results for every source file under a project root."""

    root: Path
    results: dict[str, ExtractionResult] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "files": {path: result.to_dict() for path, result in self.results.items()},
            "failures": dict(self.failures),
        }


class ProjectScanner:
    """Run the extractor over every JavaScript file in a project."""

    def __init__(self, root_path: Path, config: JsreqConfig) -> None:
        """Initialize ProjectScanner.

        Args:
            root_path: Root directory of the project.
            config: Loaded configuration (filters and scan options).
        """
        self.root_path = root_path
        self.config = config
        self.file_filter = FileFilter(root_path, config.filter)
        self.analyzer = RequiresAnalyzer(encoding=config.scan.encoding)

    def iter_sources(self) -> Iterator[Path]:
        """Yield source files to analyze, in sorted order."""
        yield from self.file_filter.walk(self.config.scan.extensions)

    def scan(self) -> ScanReport:
        """Extract specifiers from every source file.

        Returns:
            ScanReport keyed by root-relative POSIX paths.

        Raises:
            FatalParseError: On the first unparsable file when ``fail_fast`` is set.
            OSError: On the first unreadable file when ``fail_fast`` is set.
            LookupError: If ``scan.encoding`` names no known codec and ``fail_fast`` is set.
            FileNotFoundError: If the root directory does not exist.
        """
        if not self.root_path.is_dir():
            raise FileNotFoundError(f"Not a directory: {self.root_path}")

        report = ScanReport(root=self.root_path)
        for path in self.iter_sources():
            rel = path.relative_to(self.root_path).as_posix()
            try:
                report.results[rel] = self.analyzer.analyze_file(path)
            except (FatalParseError, OSError, LookupError) as exc:
                if self.config.scan.fail_fast:
                    raise
                logger.warning("Skipping %s: %s", rel, exc)
                report.failures[rel] = str(exc)

        logger.info(
            "Scanned %d file(s) under %s, %d failed",
            len(report.results) + len(report.failures),
            self.root_path,
            len(report.failures),
        )
        return report
