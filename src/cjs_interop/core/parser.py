"""
JavaScript Module Parser.

Builds a `Program` from module source using tree-sitter's JavaScript grammar.
Only top-level ``import`` statements are converted into AST nodes; every
identifier in the file is collected into the module `Scope` so generated names
never shadow or collide with existing ones.
"""

import re
from typing import Iterator, List, Optional, Tuple

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser

from cjs_interop.core.errors import ParseError
from cjs_interop.core.nodes import (
  AnyImportSpecifier,
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  Program,
  StringLiteral,
)
from cjs_interop.core.scope import Scope

JS_LANGUAGE = Language(tsjs.language())

IDENTIFIER_NODE_TYPES = frozenset(
  {
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "statement_identifier",
  }
)

ATTRIBUTE_NODE_TYPES = frozenset({"import_attribute", "import_assertion"})

SINGLE_CHAR_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v", "0": "\0"}
LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})
MAX_CODE_POINT = 0x10FFFF

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")


def _decode_escape(match: "re.Match[str]") -> str:
  body = match.group(1)
  if body in LINE_CONTINUATIONS:
    return ""
  if body.startswith("u{"):
    code_point = int(body[2:-1], 16)
    return chr(code_point) if code_point <= MAX_CODE_POINT else match.group(0)
  if len(body) > 1:
    return chr(int(body[1:], 16))
  return SINGLE_CHAR_ESCAPES.get(body, body)


def decode_string(body: str) -> str:
  """
  Decodes the escape sequences of a string literal body (quotes removed).

  Handles ``\\xHH``, ``\\uHHHH``, ``\\u{H...}``, single-character escapes and
  line continuations. Surrogate pairs written as two ``\\u`` escapes are joined
  into one code point; lone surrogates are kept as-is.

  Args:
      body: Literal text between the quotes.

  Returns:
      str: The string value.
  """
  if "\\" not in body:
    return body
  value = _ESCAPE_RE.sub(_decode_escape, body)
  return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def _text(node: Node, source: bytes) -> str:
  return source[node.start_byte : node.end_byte].decode("utf-8")


def _string_literal(node: Node, source: bytes) -> StringLiteral:
  raw = _text(node, source)
  return StringLiteral(value=decode_string(raw[1:-1]), raw=raw)


def _walk(root: Node) -> Iterator[Node]:
  stack = [root]
  while stack:
    node = stack.pop()
    yield node
    stack.extend(reversed(node.children))


def _first_error_position(root: Node) -> Optional[Tuple[int, int]]:
  for node in _walk(root):
    if node.type == "ERROR" or node.is_missing:
      return (node.start_point[0], node.start_point[1])
  return None


def _convert_named_imports(node: Node, source: bytes) -> Iterator[ImportSpecifier]:
  for spec in node.named_children:
    if spec.type != "import_specifier":
      continue

    name_node = spec.child_by_field_name("name")
    alias_node = spec.child_by_field_name("alias")

    if name_node.type == "string":
      imported = _string_literal(name_node, source)
    else:
      imported = Identifier(_text(name_node, source))

    local_node = alias_node if alias_node is not None else name_node
    yield ImportSpecifier(imported=imported, local=Identifier(_text(local_node, source)))


def _convert_clause(clause: Node, source: bytes) -> List[AnyImportSpecifier]:
  specifiers: List[AnyImportSpecifier] = []
  for child in clause.named_children:
    if child.type == "identifier":
      specifiers.append(ImportDefaultSpecifier(Identifier(_text(child, source))))
    elif child.type == "namespace_import":
      local = next(c for c in child.named_children if c.type == "identifier")
      specifiers.append(ImportNamespaceSpecifier(Identifier(_text(local, source))))
    elif child.type == "named_imports":
      specifiers.extend(_convert_named_imports(child, source))
  return specifiers


def _convert_import(node: Node, source: bytes) -> ImportDeclaration:
  specifiers: List[AnyImportSpecifier] = []
  attributes = None

  for child in node.named_children:
    if child.type == "import_clause":
      specifiers.extend(_convert_clause(child, source))
    elif child.type in ATTRIBUTE_NODE_TYPES:
      attributes = _text(child, source)

  return ImportDeclaration(
    specifiers=specifiers,
    source=_string_literal(node.child_by_field_name("source"), source),
    attributes=attributes,
    span=(node.start_byte, node.end_byte),
  )


def parse_module(code: str, filename: Optional[str] = None) -> Program:
  """
  Parses JavaScript module source.

  Args:
      code: Module source text.
      filename: File identifier used in error messages.

  Returns:
      Program: Import declarations, module scope and the original bytes.

  Raises:
      ParseError: If the source contains syntax errors.
  """
  source = code.encode("utf-8")
  tree = Parser(JS_LANGUAGE).parse(source)
  root = tree.root_node

  if root.has_error:
    raise ParseError(filename or "<no path>", _first_error_position(root))

  imports = [_convert_import(n, source) for n in root.named_children if n.type == "import_statement"]
  names = (_text(n, source) for n in _walk(root) if n.type in IDENTIFIER_NODE_TYPES)

  return Program(source=source, imports=imports, scope=Scope(names), filename=filename)
