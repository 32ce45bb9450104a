"""Grammar resolution for JavaScript sources.

A source text is tried under the Script grammar first and, if the parser
rejects it, under the Module grammar. Needing the Module grammar at all is
taken as evidence that the file is an ES module.

The resolution is modelled as a small state machine::

    Unresolved --script ok--> Parsed(SCRIPT, forced_module=False)
    Unresolved --script err--> ScriptRejected
    ScriptRejected --module ok--> Parsed(MODULE, forced_module=True)
    ScriptRejected --module err--> Failed(FatalParseError)
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

import esprima
from esprima.error_handler import Error as EsprimaError

logger = logging.getLogger(__name__)


class GrammarMode(str, Enum):
    """Top-level ECMAScript grammar used to parse a source text."""

    SCRIPT = "script"
    MODULE = "module"


class FatalParseError(Exception):
    """Source text could not be parsed as either a script or a module."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        description: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.description = description
        self.path = path

    @classmethod
    def from_parser_error(cls, exc: BaseException) -> "FatalParseError":
        """Build from the parser's syntax error, keeping its position."""
        return cls(
            str(exc),
            line=getattr(exc, "lineNumber", None),
            column=getattr(exc, "column", None),
            description=getattr(exc, "description", None),
        )

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


ParseFn = Callable[[str, GrammarMode], Any]

# Errors that mean "this grammar rejects the text"; anything else is a bug.
SYNTAX_ERRORS: tuple[type[BaseException], ...] = (EsprimaError,)

# A leading "#!" line, up to but not including the line terminator.
_HASHBANG = re.compile(r"#![^\n\r\u2028\u2029]*")


def strip_hashbang(text: str) -> str:
    """Blank out a leading hashbang line, keeping line numbers intact."""
    match = _HASHBANG.match(text)
    if match is None:
        return text
    return text[match.end():]


def parse_source(text: str, mode: GrammarMode) -> Any:
    """Parse text with esprima under the given grammar."""
    if mode is GrammarMode.MODULE:
        return esprima.parseModule(text)
    return esprima.parseScript(text)


@dataclass(frozen=True)
class Unresolved:
    text: str


@dataclass(frozen=True)
class ScriptRejected:
    text: str
    error: BaseException


@dataclass(frozen=True)
class Parsed:
    """A successfully parsed tree and the module flag seed it implies."""

    tree: Any
    mode: GrammarMode
    forced_module: bool


@dataclass(frozen=True)
class Failed:
    error: FatalParseError


ResolverState = Union[Unresolved, ScriptRejected, Parsed, Failed]


def _nesting_error(exc: RecursionError) -> FatalParseError:
    error = FatalParseError(
        "Source is nested too deeply to parse",
        description="maximum recursion depth exceeded",
    )
    error.__cause__ = exc
    return error


def advance(state: ResolverState, parse: ParseFn = parse_source) -> ResolverState:
    """Perform one transition of the resolver state machine.

    Terminal states (``Parsed`` and ``Failed``) are returned unchanged.
    """
    if isinstance(state, Unresolved):
        try:
            tree = parse(state.text, GrammarMode.SCRIPT)
        except SYNTAX_ERRORS as exc:
            logger.debug("Script grammar rejected source (%s), retrying as module", exc)
            return ScriptRejected(state.text, exc)
        except RecursionError as exc:
            return Failed(_nesting_error(exc))
        return Parsed(tree, GrammarMode.SCRIPT, forced_module=False)

    if isinstance(state, ScriptRejected):
        try:
            tree = parse(state.text, GrammarMode.MODULE)
        except SYNTAX_ERRORS as exc:
            error = FatalParseError.from_parser_error(exc)
            error.__cause__ = exc
            return Failed(error)
        except RecursionError as exc:
            return Failed(_nesting_error(exc))
        return Parsed(tree, GrammarMode.MODULE, forced_module=True)

    return state


def resolve(text: str, parse: ParseFn = parse_source) -> Parsed:
    """Parse text under the first grammar that accepts it.

    Args:
        text: JavaScript source text.
        parse: Parser callable taking ``(text, mode)``; defaults to esprima.

    Returns:
        The ``Parsed`` state holding the tree and module flag seed.

    Raises:
        FatalParseError: If neither grammar accepts the text.
    """
    state: ResolverState = Unresolved(strip_hashbang(text))
    while not isinstance(state, (Parsed, Failed)):
        state = advance(state, parse)

    if isinstance(state, Failed):
        raise state.error
    return state
