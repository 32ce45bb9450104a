"""Tests for module specifier extraction."""

from pathlib import Path

import pytest

from jsreq_cli.static_analysis.extractor import (
    ExtractionResult,
    RequiresAnalyzer,
    extract_requires,
)
from jsreq_cli.static_analysis.grammar import FatalParseError
from tests.fixtures import FakeParserFactory, program


class TestExtractRequires:
    """Test extract_requires() against the esprima parser."""

    def test_import_and_require(self) -> None:
        result = extract_requires('import a from "x"; const b = require("y");')
        assert result == ExtractionResult(specifiers=("x", "y"), is_module=True)

    def test_conditional_require_is_skipped(self) -> None:
        result = extract_requires('const x = require(cond ? "a" : "b");')
        assert result.specifiers == ()
        assert result.is_module is False

    def test_export_all(self) -> None:
        result = extract_requires('export * from "pkg";')
        assert result.specifiers == ("pkg",)
        assert result.is_module is True

    def test_template_require(self) -> None:
        result = extract_requires("require(`left-pad`)")
        assert result.specifiers == ("left-pad",)
        assert result.is_module is False

    def test_unparsable_source(self) -> None:
        with pytest.raises(FatalParseError):
            extract_requires("))) let let ((( {")

    def test_named_re_export(self) -> None:
        result = extract_requires('export { a, b as c } from "./lib";\nexport const d = 1;\n')
        assert result.specifiers == ("./lib",)
        assert result.is_module is True

    def test_export_without_source_marks_module(self) -> None:
        result = extract_requires("export default function main() {}\n")
        assert result.specifiers == ()
        assert result.is_module is True

    def test_side_effect_import(self) -> None:
        result = extract_requires('import "./styles.css";')
        assert result.specifiers == ("./styles.css",)

    def test_dynamic_import_in_script(self) -> None:
        result = extract_requires('const page = import("./page.js");')
        assert result.specifiers == ("./page.js",)
        assert result.is_module is True

    def test_dynamic_import_with_expression(self) -> None:
        result = extract_requires("const page = import(name);")
        assert result.specifiers == ()
        assert result.is_module is True

    def test_require_resolve(self) -> None:
        result = extract_requires('const p = require.resolve("lodash/package.json");')
        assert result.specifiers == ("lodash/package.json",)
        assert result.is_module is False

    def test_interpolated_template_is_skipped(self) -> None:
        result = extract_requires("require(`./locale/${lang}`);")
        assert result.specifiers == ()

    def test_wrong_argument_count_is_skipped(self) -> None:
        result = extract_requires('require(); require("a", "b");')
        assert result.specifiers == ()

    def test_computed_require_is_skipped(self) -> None:
        result = extract_requires('var name = "fs"; require(name); require("x" + name);')
        assert result.specifiers == ()
        assert result.is_module is False

    def test_plain_script(self) -> None:
        result = extract_requires("var answer = 42;\nfunction f(a) { return a * 2; }\n")
        assert result == ExtractionResult()

    def test_empty_source(self) -> None:
        assert extract_requires("") == ExtractionResult()

    def test_hashbang_cli_entry(self) -> None:
        source = '#!/usr/bin/env node\n"use strict";\nconst cli = require("./cli");\n'
        result = extract_requires(source)
        assert result == ExtractionResult(specifiers=("./cli",), is_module=False)

    def test_nested_requires_in_source_order(self) -> None:
        source = (
            'var a = require("a");\n'
            "function load() {\n"
            '  return [require("b"), import("c")];\n'
            "}\n"
            'if (process.env.X) { require("d"); }\n'
        )
        result = extract_requires(source)
        assert result.specifiers == ("a", "b", "c", "d")
        assert result.is_module is True

    def test_duplicates_are_kept(self) -> None:
        result = extract_requires('require("a"); require("b"); require("a");')
        assert result.specifiers == ("a", "b", "a")
        assert result.unique() == ["a", "b"]

    def test_deterministic(self) -> None:
        source = 'import x from "x"; import y from "y"; export * from "x";'
        assert extract_requires(source) == extract_requires(source)

    def test_module_fallback_seeds_flag(self) -> None:
        parse = FakeParserFactory.create(module=program())
        result = extract_requires("anything", parse)
        assert result == ExtractionResult(specifiers=(), is_module=True)


class TestExtractionResult:
    def test_to_dict(self) -> None:
        result = ExtractionResult(specifiers=("a", "a"), is_module=True)
        assert result.to_dict() == {"specifiers": ["a", "a"], "isModule": True}

    def test_frozen(self) -> None:
        result = ExtractionResult()
        with pytest.raises(AttributeError):
            result.is_module = True  # type: ignore[misc]


class TestRequiresAnalyzer:
    """Test RequiresAnalyzer."""

    @pytest.fixture
    def analyzer(self) -> RequiresAnalyzer:
        return RequiresAnalyzer()

    def test_commonjs_file(self, analyzer: RequiresAnalyzer, tmp_path: Path) -> None:
        f = tmp_path / "app.js"
        f.write_text("const fs = require('fs');\nconst utils = require('./utils');\n")
        result = analyzer.analyze_file(f)
        assert result.specifiers == ("fs", "./utils")
        assert result.is_module is False

    def test_module_file(self, analyzer: RequiresAnalyzer, tmp_path: Path) -> None:
        f = tmp_path / "app.mjs"
        f.write_text("import React from 'react';\nimport { useState } from 'react';\n")
        result = analyzer.analyze_file(f)
        assert result.specifiers == ("react", "react")
        assert result.is_module is True

    def test_nonexistent_file(self, analyzer: RequiresAnalyzer) -> None:
        with pytest.raises(FileNotFoundError):
            analyzer.analyze_file(Path("/nonexistent/file.js"))

    def test_parse_error_carries_path(self, analyzer: RequiresAnalyzer, tmp_path: Path) -> None:
        f = tmp_path / "broken.js"
        f.write_text("const x = {{{;\n")
        with pytest.raises(FatalParseError) as exc_info:
            analyzer.analyze_file(f)
        assert exc_info.value.path == str(f)
        assert str(f) in str(exc_info.value)

    def test_encoding(self, tmp_path: Path) -> None:
        f = tmp_path / "latin.js"
        f.write_bytes('// caf\xe9\nrequire("caf\xe9");\n'.encode("latin-1"))
        result = RequiresAnalyzer(encoding="latin-1").analyze_file(f)
        assert result.specifiers == ("caf\xe9",)
