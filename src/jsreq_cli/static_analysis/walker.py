"""Pre-order traversal over ESTree-shaped syntax trees.

Works on esprima node objects as well as plain ``dict`` trees (for example
ESTree JSON produced by another parser).
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

Handler = Callable[[Any, Any], None]


def field(node: Any, name: str) -> Any:
    """Read a field from a node, returning None when it is absent."""
    if node is None:
        return None
    if isinstance(node, Mapping):
        return node.get(name)
    return getattr(node, name, None)


def kind(value: Any) -> str | None:
    """Return the node kind tag of a value, or None if it is not a node."""
    tag = field(value, "type")
    return tag if isinstance(tag, str) else None


def _children(node: Any) -> Iterator[Any]:
    values = node.values() if isinstance(node, Mapping) else vars(node).values()
    for value in values:
        if isinstance(value, (list, tuple)):
            for item in value:
                if kind(item) is not None:
                    yield item
        elif kind(value) is not None:
            yield value


def iter_nodes(tree: Any) -> Iterator[Any]:
    """Yield every node of the tree in document (pre-)order.

    Children are taken from the node's fields in declaration order. The walk
    is iterative so deeply nested sources do not hit the recursion limit.
    """
    if kind(tree) is None:
        return
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(_children(node))))


def _as_import_expression(node: Any) -> dict[str, Any]:
    # esprima models import(x) as a call whose callee has type "Import".
    arguments = field(node, "arguments") or []
    return {
        "type": "ImportExpression",
        "source": arguments[0] if len(arguments) == 1 else None,
    }


def visit(
    tree: Any,
    table: Mapping[str, Handler],
    state: Any,
    *,
    adapt_import_calls: bool = True,
) -> None:
    """Invoke ``table[kind](node, state)`` for every node that has a handler.

    Args:
        tree: Root node.
        table: Mapping from node kind to handler.
        state: Value passed to every handler.
        adapt_import_calls: Present ``import(x)`` calls to the table as
            ``ImportExpression`` nodes instead of ``CallExpression``.
    """
    for node in iter_nodes(tree):
        node_kind = kind(node)
        if (
            adapt_import_calls
            and node_kind == "CallExpression"
            and kind(field(node, "callee")) == "Import"
        ):
            node = _as_import_expression(node)
            node_kind = "ImportExpression"

        handler = table.get(node_kind)
        if handler is not None:
            handler(node, state)
