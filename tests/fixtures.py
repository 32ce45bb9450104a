"""Shared test fixtures and factories for jsreq tests."""

from pathlib import Path
from typing import Any

import pytest
from esprima.error_handler import Error as EsprimaError

from jsreq_cli.static_analysis.grammar import GrammarMode


class FakeParserFactory:
    """Factory for parser callables that return canned ESTree dict trees."""

    @staticmethod
    def create(
        script: dict[str, Any] | None = None,
        module: dict[str, Any] | None = None,
    ):
        """Create a parser that accepts only the grammars given a tree.

        Args:
            script: Tree returned for the Script grammar, or None to reject it.
            module: Tree returned for the Module grammar, or None to reject it.

        Returns:
            Callable with the ``(text, mode)`` parser signature; its ``calls``
            attribute records the modes it was invoked with.
        """
        calls: list[GrammarMode] = []

        def parse(text: str, mode: GrammarMode) -> dict[str, Any]:
            calls.append(mode)
            tree = script if mode is GrammarMode.SCRIPT else module
            if tree is None:
                raise EsprimaError(f"Line 1: Unexpected token in {mode.value}")
            return tree

        parse.calls = calls
        return parse


def program(*body: dict[str, Any]) -> dict[str, Any]:
    """Build a Program node around the given statements."""
    return {"type": "Program", "body": list(body), "sourceType": "script"}


def literal(value: Any) -> dict[str, Any]:
    return {"type": "Literal", "value": value, "raw": repr(value)}


def identifier(name: str) -> dict[str, Any]:
    return {"type": "Identifier", "name": name}


def template(*chunks: str, expressions: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "type": "TemplateLiteral",
        "quasis": [
            {"type": "TemplateElement", "value": {"raw": chunk, "cooked": chunk}, "tail": i == len(chunks) - 1}
            for i, chunk in enumerate(chunks)
        ],
        "expressions": expressions or [],
    }


def call(callee: dict[str, Any], *arguments: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "ExpressionStatement",
        "expression": {"type": "CallExpression", "callee": callee, "arguments": list(arguments)},
    }


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Fixture: Create a small JavaScript project in tmp_path.

    Returns:
        Project root path.
    """
    src_dir = tmp_path / "src"
    src_dir.mkdir(parents=True, exist_ok=True)

    (src_dir / "index.mjs").write_text(
        'import React from "react";\nimport { helper } from "./utils.js";\nexport * from "./api.js";\n'
    )
    (src_dir / "utils.js").write_text('const path = require("path");\nmodule.exports = { helper() {} };\n')
    (src_dir / "plain.js").write_text("var answer = 42;\n")

    node_modules = tmp_path / "node_modules" / "react"
    node_modules.mkdir(parents=True, exist_ok=True)
    (node_modules / "index.js").write_text('module.exports = require("./cjs/react.js");\n')

    return tmp_path
