"""Static Analysis Module."""

from jsreq_cli.static_analysis.extractor import (
    ExtractionResult,
    RequiresAnalyzer,
    extract_requires,
)
from jsreq_cli.static_analysis.file_filter import FileFilter
from jsreq_cli.static_analysis.grammar import FatalParseError, GrammarMode, resolve

__all__ = [
    "ExtractionResult",
    "FatalParseError",
    "FileFilter",
    "GrammarMode",
    "RequiresAnalyzer",
    "extract_requires",
    "resolve",
]
