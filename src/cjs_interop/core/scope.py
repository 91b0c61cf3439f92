"""
Module scope and unique name generation.

`Scope.generate_uid` follows Babel's naming scheme so output matches what
JavaScript tooling produces: ``"cjs-pkg"`` becomes ``_cjsPkg``, then ``_cjsPkg2``,
``_cjsPkg3`` ... while the name is taken.
"""

import re
from typing import Iterable, Set

RESERVED_WORDS = frozenset(
  {
    "arguments",
    "await",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "eval",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
  }
)


def _is_identifier_char(char: str) -> bool:
  return char == "$" or f"a{char}".isidentifier()


def is_identifier_name(value: str) -> bool:
  """
  Checks for a syntactically valid IdentifierName (reserved words allowed).

  Args:
      value: Candidate name.

  Returns:
      bool: True if usable as an unquoted property key.
  """
  return bool(value) and value.replace("$", "_").isidentifier()


def is_valid_identifier(value: str) -> bool:
  """True if `value` can be used as a binding name."""
  return is_identifier_name(value) and value not in RESERVED_WORDS


def to_identifier(value: str) -> str:
  """
  Converts arbitrary text into a camelCased identifier.

  Args:
      value: Any string, typically a module specifier.

  Returns:
      str: A valid identifier, ``"_"`` at minimum.
  """
  name = "".join(c if _is_identifier_char(c) else "-" for c in value)
  name = re.sub(r"^[-0-9]+", "", name)
  name = re.sub(r"[-\s]+(.)?", lambda m: m.group(1).upper() if m.group(1) else "", name)
  if not is_valid_identifier(name):
    name = f"_{name}"
  return name or "_"


class Scope:
  """
  Set of names used in a module.

  Attributes:
      _names: Every identifier seen in the module plus generated names.
  """

  def __init__(self, names: Iterable[str] = ()):
    self._names: Set[str] = set(names)

  def has(self, name: str) -> bool:
    return name in self._names

  def reserve(self, name: str) -> None:
    self._names.add(name)

  def generate_uid(self, hint: str = "temp") -> str:
    """
    Produces a name that collides with nothing in the module and reserves it.

    Args:
        hint: Text the name is derived from.

    Returns:
        str: Fresh identifier starting with ``_``.
    """
    base = re.sub(r"\d+$", "", to_identifier(hint).lstrip("_"))
    i = 1
    while True:
      uid = f"_{base}{i}" if i > 1 else f"_{base}"
      if not self.has(uid):
        break
      i += 1

    self.reserve(uid)
    return uid
