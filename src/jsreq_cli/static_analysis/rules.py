"""Extraction rules: which syntax nodes reference a module, and how."""

from dataclasses import dataclass, field as dataclass_field
from typing import Any

from jsreq_cli.static_analysis.walker import Handler, field, kind, visit


@dataclass
class Accumulator:
    """Specifiers and module flag collected during a single traversal."""

    specifiers: list[str] = dataclass_field(default_factory=list)
    is_module: bool = False


def string_literal(node: Any) -> str | None:
    """Return the value of a string ``Literal`` node, else None."""
    if kind(node) != "Literal":
        return None
    value = field(node, "value")
    return value if isinstance(value, str) else None


def static_template(node: Any) -> str | None:
    """Return the raw text of a template literal without interpolation."""
    if kind(node) != "TemplateLiteral":
        return None
    quasis = field(node, "quasis") or []
    if len(quasis) != 1 or field(node, "expressions"):
        return None
    raw = field(field(quasis[0], "value"), "raw")
    return raw if isinstance(raw, str) else None


def _module_source(node: Any, acc: Accumulator) -> None:
    acc.is_module = True
    specifier = string_literal(field(node, "source"))
    if specifier is not None:
        acc.specifiers.append(specifier)


def _is_require_callee(callee: Any) -> bool:
    callee_kind = kind(callee)
    if callee_kind == "Identifier":
        return field(callee, "name") == "require"
    if callee_kind == "Import":
        return True
    if callee_kind == "MemberExpression" and not field(callee, "computed"):
        target = field(callee, "object")
        prop = field(callee, "property")
        return (
            kind(target) == "Identifier"
            and field(target, "name") == "require"
            and kind(prop) == "Identifier"
            and field(prop, "name") == "resolve"
        )
    return False


def _call(node: Any, acc: Accumulator) -> None:
    # require() alone is legal in scripts, so the module flag is left alone.
    if not _is_require_callee(field(node, "callee")):
        return
    arguments = field(node, "arguments") or []
    if len(arguments) != 1:
        return
    argument = arguments[0]
    specifier = string_literal(argument)
    if specifier is None:
        specifier = static_template(argument)
    if specifier is not None:
        acc.specifiers.append(specifier)


RULES: dict[str, Handler] = {
    "ImportDeclaration": _module_source,
    "ImportExpression": _module_source,
    "ExportNamedDeclaration": _module_source,
    "ExportAllDeclaration": _module_source,
    "CallExpression": _call,
}


def apply_rules(
    tree: Any,
    module_seed: bool = False,
    *,
    adapt_import_calls: bool = True,
) -> Accumulator:
    """Run the rule table over a tree with a fresh accumulator.

    Args:
        tree: Root of an ESTree-shaped syntax tree.
        module_seed: Initial value of the module flag.
        adapt_import_calls: See ``walker.visit``.

    Returns:
        The populated accumulator.
    """
    acc = Accumulator(is_module=module_seed)
    visit(tree, RULES, acc, adapt_import_calls=adapt_import_calls)
    return acc
