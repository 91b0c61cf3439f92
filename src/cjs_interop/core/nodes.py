"""
JavaScript AST Nodes.

ESTree-shaped data structures for the parts of a module the import transform
reads or writes. Each node implements `__str__` to emit valid JavaScript.

`Program` keeps the original source bytes. Only import declarations that were
changed are re-emitted; everything else in the file is copied through verbatim.
"""

import abc
import json
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from cjs_interop.core.scope import Scope, is_identifier_name


class JsNode(abc.ABC):
  """Abstract base class for all JavaScript AST nodes."""

  @abc.abstractmethod
  def __str__(self) -> str:
    """Returns the JavaScript source representation of the node."""
    pass


@dataclass
class Identifier(JsNode):
  name: str

  def __str__(self) -> str:
    return self.name


@dataclass
class StringLiteral(JsNode):
  """
  A string literal.

  Attributes:
      value: The decoded string.
      raw: The literal as written (quotes included). Preserved on output.
  """

  value: str
  raw: Optional[str] = None

  def __str__(self) -> str:
    return self.raw if self.raw is not None else json.dumps(self.value)


ModuleExportName = Union[Identifier, StringLiteral]


@dataclass
class ImportDefaultSpecifier(JsNode):
  """``import local from "m"``"""

  local: Identifier

  def __str__(self) -> str:
    return str(self.local)


@dataclass
class ImportNamespaceSpecifier(JsNode):
  """``import * as local from "m"``"""

  local: Identifier

  def __str__(self) -> str:
    return f"* as {self.local}"


@dataclass
class ImportSpecifier(JsNode):
  """
  ``import { imported as local } from "m"``

  Attributes:
      imported: Exported name, an identifier or (ES2022) a string literal.
      local: Local binding.
  """

  imported: ModuleExportName
  local: Identifier

  @property
  def imported_name(self) -> str:
    if isinstance(self.imported, StringLiteral):
      return self.imported.value
    return self.imported.name

  def __str__(self) -> str:
    if isinstance(self.imported, Identifier) and self.imported.name == self.local.name:
      return str(self.local)
    return f"{self.imported} as {self.local}"


AnyImportSpecifier = Union[ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier]


@dataclass
class ObjectProperty(JsNode):
  """
  A property of an object pattern.

  Attributes:
      key: Property name read from the object.
      value: Binding that receives the property.
      shorthand: Emit ``{ key }`` instead of ``{ key: value }``.
  """

  key: str
  value: Identifier
  shorthand: bool = False

  def __str__(self) -> str:
    if self.shorthand:
      return str(self.value)
    key = self.key if is_identifier_name(self.key) else json.dumps(self.key)
    return f"{key}: {self.value}"


@dataclass
class ObjectPattern(JsNode):
  properties: List[ObjectProperty] = field(default_factory=list)

  def __str__(self) -> str:
    if not self.properties:
      return "{}"
    return "{ " + ", ".join(str(p) for p in self.properties) + " }"


@dataclass
class VariableDeclarator(JsNode):
  id: Union[Identifier, ObjectPattern]
  init: Optional[JsNode] = None

  def __str__(self) -> str:
    if self.init is None:
      return str(self.id)
    return f"{self.id} = {self.init}"


@dataclass
class VariableDeclaration(JsNode):
  """
  ``const``/``let``/``var`` statement.

  Attributes:
      kind: Declaration keyword.
      declarations: One or more declarators.
  """

  kind: str
  declarations: List[VariableDeclarator]

  def __str__(self) -> str:
    return f"{self.kind} " + ", ".join(str(d) for d in self.declarations) + ";"


@dataclass
class ImportDeclaration(JsNode):
  """
  An ``import`` statement.

  Attributes:
      specifiers: Bindings in written order. Empty for ``import "m"``.
      source: Module specifier literal.
      attributes: Raw import attributes clause (``with { type: "json" }``), if any.
      span: Byte range of the statement in the original file.
      inserted_after: Statements to emit directly after this declaration.
      modified: Set once the specifier list has been replaced.
  """

  specifiers: List[AnyImportSpecifier]
  source: StringLiteral
  attributes: Optional[str] = None
  span: Optional[Tuple[int, int]] = None
  inserted_after: List[JsNode] = field(default_factory=list)
  modified: bool = False

  def replace_specifiers(self, specifiers: List[AnyImportSpecifier]) -> None:
    self.specifiers = list(specifiers)
    self.modified = True

  def insert_after(self, statement: JsNode) -> None:
    self.inserted_after.append(statement)

  @property
  def is_dirty(self) -> bool:
    return self.modified or bool(self.inserted_after)

  def __str__(self) -> str:
    suffix = f" {self.attributes}" if self.attributes else ""
    if not self.specifiers:
      return f"import {self.source}{suffix};"

    parts: List[str] = []
    named: List[str] = []
    for spec in self.specifiers:
      if isinstance(spec, ImportSpecifier):
        named.append(str(spec))
      else:
        parts.append(str(spec))
    if named:
      parts.append("{ " + ", ".join(named) + " }")

    return f"import {', '.join(parts)} from {self.source}{suffix};"

  def emit(self) -> str:
    """Returns this declaration followed by its inserted statements, one per line."""
    return "\n".join([str(self), *(str(s) for s in self.inserted_after)])


@dataclass
class Program(JsNode):
  """
  A parsed module.

  Attributes:
      source: Original file contents (UTF-8).
      imports: Top-level import declarations in source order.
      scope: Names in use anywhere in the module.
      filename: File identifier, if known.
  """

  source: bytes
  imports: List[ImportDeclaration] = field(default_factory=list)
  scope: Scope = field(default_factory=Scope)
  filename: Optional[str] = None

  def __str__(self) -> str:
    out = bytearray()
    cursor = 0
    for decl in self.imports:
      if not decl.is_dirty or decl.span is None:
        continue
      start, end = decl.span
      out += self.source[cursor:start]
      out += decl.emit().encode("utf-8")
      cursor = end
    out += self.source[cursor:]
    return out.decode("utf-8")
