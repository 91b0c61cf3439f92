"""
Tests for JavaScript node emission and source splicing.
"""

from cjs_interop.core.nodes import (
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  ObjectPattern,
  ObjectProperty,
  Program,
  StringLiteral,
  VariableDeclaration,
  VariableDeclarator,
)


def test_import_declaration_forms():
  src = StringLiteral("m", "'m'")

  assert str(ImportDeclaration([], src)) == "import 'm';"
  assert str(ImportDeclaration([ImportDefaultSpecifier(Identifier("d"))], src)) == "import d from 'm';"
  assert (
    str(ImportDeclaration([ImportDefaultSpecifier(Identifier("d")), ImportNamespaceSpecifier(Identifier("ns"))], src))
    == "import d, * as ns from 'm';"
  )
  decl = ImportDeclaration(
    [
      ImportSpecifier(Identifier("a"), Identifier("a")),
      ImportSpecifier(Identifier("b"), Identifier("c")),
    ],
    src,
  )
  assert str(decl) == "import { a, b as c } from 'm';"


def test_string_literal_without_raw_uses_double_quotes():
  assert str(StringLiteral("fs")) == '"fs"'


def test_attributes_are_kept():
  decl = ImportDeclaration([ImportDefaultSpecifier(Identifier("d"))], StringLiteral("./d.json"), attributes='with { type: "json" }')
  assert str(decl) == 'import d from "./d.json" with { type: "json" };'


def test_object_pattern_properties():
  pattern = ObjectPattern(
    [
      ObjectProperty("a", Identifier("a"), shorthand=True),
      ObjectProperty("b", Identifier("bb")),
      ObjectProperty("default", Identifier("D")),
      ObjectProperty("a-b", Identifier("ab")),
    ]
  )
  assert str(pattern) == '{ a, b: bb, default: D, "a-b": ab }'
  assert str(ObjectPattern()) == "{}"


def test_variable_declaration():
  decl = VariableDeclaration(
    "const",
    [VariableDeclarator(ObjectPattern([ObjectProperty("a", Identifier("a"), True)]), Identifier("_m"))],
  )
  assert str(decl) == "const { a } = _m;"


def test_program_splices_only_dirty_declarations():
  code = 'import a from "x"; // keep\nimport { b } from "y";\nfoo(a, b);\n'
  raw = code.encode("utf-8")
  first_end = raw.index(b";") + 1
  second_start = raw.index(b"import {")
  second_end = raw.index(b";", second_start) + 1

  untouched = ImportDeclaration([ImportDefaultSpecifier(Identifier("a"))], StringLiteral("x", '"x"'), span=(0, first_end))
  changed = ImportDeclaration(
    [ImportSpecifier(Identifier("b"), Identifier("b"))], StringLiteral("y", '"y"'), span=(second_start, second_end)
  )
  changed.replace_specifiers([ImportDefaultSpecifier(Identifier("_y"))])
  changed.insert_after(
    VariableDeclaration("const", [VariableDeclarator(ObjectPattern([ObjectProperty("b", Identifier("b"), True)]), Identifier("_y"))])
  )

  program = Program(source=raw, imports=[untouched, changed])

  assert str(program) == 'import a from "x"; // keep\nimport _y from "y";\nconst { b } = _y;\nfoo(a, b);\n'
  assert not untouched.is_dirty
  assert changed.is_dirty
