"""
Tests for the tree-sitter backed module parser.
"""

import pytest

from cjs_interop.core.errors import ParseError
from cjs_interop.core.nodes import ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier
from cjs_interop.core.parser import decode_string, parse_module


def test_collects_top_level_imports_in_order():
  code = """import a from "a";
import * as ns from 'b';
import c, { d, e as f, default as g } from "c";
import "side-effect";
const x = 1;
"""
  program = parse_module(code, "/x.js")

  assert [d.source.value for d in program.imports] == ["a", "b", "c", "side-effect"]
  assert program.filename == "/x.js"

  a, b, c, side = program.imports
  assert isinstance(a.specifiers[0], ImportDefaultSpecifier)
  assert a.specifiers[0].local.name == "a"

  assert isinstance(b.specifiers[0], ImportNamespaceSpecifier)
  assert b.specifiers[0].local.name == "ns"
  assert b.source.raw == "'b'"

  kinds = [type(s) for s in c.specifiers]
  assert kinds == [ImportDefaultSpecifier, ImportSpecifier, ImportSpecifier, ImportSpecifier]
  pairs = [(s.imported_name, s.local.name) for s in c.specifiers[1:]]
  assert pairs == [("d", "d"), ("e", "f"), ("default", "g")]

  assert side.specifiers == []


def test_spans_cover_statements():
  code = 'import { a } from "m";\nrun(a);\n'
  program = parse_module(code)
  start, end = program.imports[0].span
  assert code.encode()[start:end] == b'import { a } from "m";'


def test_unmodified_program_round_trips():
  code = '// header\nimport { a } from "m"\nimport b from "n";\n\nexport default a + b;\n'
  assert str(parse_module(code)) == code


def test_scope_contains_file_identifiers():
  program = parse_module('import { a } from "m";\nconst _m = 1;\nobj.prop = function inner() {};\n')
  assert program.scope.has("_m")
  assert program.scope.has("a")
  assert program.scope.has("inner")
  assert program.scope.has("prop")


def test_syntax_error_raises():
  with pytest.raises(ParseError) as exc_info:
    parse_module("import { a from 'm';\n", "/broken.js")
  assert exc_info.value.filename == "/broken.js"
  assert "/broken.js" in str(exc_info.value)


@pytest.mark.parametrize(
  "body, value",
  [
    ("fs", "fs"),
    ("f\\x73", "fs"),
    ("a\\u0062", "ab"),
    ("\\u{1F600}", "\U0001f600"),
    ("\\uD83D\\uDE00", "\U0001f600"),
    ("tab\\there", "tab\there"),
    ("it\\'s", "it's"),
    ("back\\\\slash", "back\\slash"),
    ("line\\\ncontinued", "linecontinued"),
    ("line\\\r\ncontinued", "linecontinued"),
  ],
)
def test_decode_string(body, value):
  assert decode_string(body) == value


def test_string_values_are_decoded_and_raw_kept():
  program = parse_module('import { "a\\u0062" as x } from "f\\x73";\n')
  declaration = program.imports[0]

  assert declaration.source.value == "fs"
  assert declaration.source.raw == '"f\\x73"'
  assert declaration.specifiers[0].imported_name == "ab"
