"""Module specifier extraction for JavaScript sources."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsreq_cli.static_analysis.grammar import FatalParseError, ParseFn, parse_source, resolve
from jsreq_cli.static_analysis.rules import apply_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """Specifiers referenced by a source file, in source order.

    Duplicates are kept: each entry corresponds to one reference.
    """

    specifiers: tuple[str, ...] = ()
    is_module: bool = False

    def unique(self) -> list[str]:
        """Specifiers with repeats removed, in first-seen order."""
        return list(dict.fromkeys(self.specifiers))

    def to_dict(self) -> dict[str, Any]:
        return {"specifiers": list(self.specifiers), "isModule": self.is_module}


def extract_requires(text: str, parse: ParseFn = parse_source) -> ExtractionResult:
    """Extract every statically known module specifier from source text.

    Args:
        text: JavaScript source text.
        parse: Parser callable taking ``(text, mode)``; defaults to esprima.

    Returns:
        ExtractionResult with specifiers in traversal order and the module flag.

    Raises:
        FatalParseError: If the text is neither a valid script nor a valid module.
    """
    parsed = resolve(text, parse)
    acc = apply_rules(parsed.tree, parsed.forced_module)
    return ExtractionResult(specifiers=tuple(acc.specifiers), is_module=acc.is_module)


class RequiresAnalyzer:
    """Extract module specifiers from JavaScript files on disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize RequiresAnalyzer.

        Args:
            encoding: Text encoding of the source files.
        """
        self.encoding = encoding

    def analyze_file(self, file_path: Path) -> ExtractionResult:
        """Analyze a single JavaScript file.

        Args:
            file_path: Path to the file.

        Returns:
            ExtractionResult for the file contents.

        Raises:
            FileNotFoundError: If the file does not exist.
            FatalParseError: If the file cannot be parsed.
        """
        content = file_path.read_text(encoding=self.encoding, errors="replace")
        try:
            result = extract_requires(content)
        except FatalParseError as exc:
            exc.path = str(file_path)
            raise
        logger.debug(
            "Extracted %d specifier(s) from %s (module=%s)",
            len(result.specifiers),
            file_path,
            result.is_module,
        )
        return result
