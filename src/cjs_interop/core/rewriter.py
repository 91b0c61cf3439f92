"""
Import Rewriter.

Turns ``import D, { a, b as c } from "m"`` into::

    import D from "m";
    const { a, b: c } = D;

When the declaration has no default binding, a fresh name derived from the
source is generated (``import { a } from "cjs-pkg"`` binds ``_cjsPkg``).
"""

from cjs_interop.core.metadata import FileMetadata
from cjs_interop.core.nodes import (
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ObjectPattern,
  ObjectProperty,
  VariableDeclaration,
  VariableDeclarator,
)
from cjs_interop.core.scope import Scope
from cjs_interop.core.specifiers import ImportSpecifierSet


def build_destructure(specifier_set: ImportSpecifierSet, binding: str) -> VariableDeclaration:
  """
  Builds ``const { ... } = binding;`` for the named bucket.

  Args:
      specifier_set: Analysis result of the declaration.
      binding: Name the module object is bound to.

  Returns:
      VariableDeclaration: The destructuring statement.
  """
  properties = [
    ObjectProperty(key=b.actual, value=Identifier(b.alias or b.actual), shorthand=b.alias is None)
    for b in specifier_set.named
  ]
  return VariableDeclaration("const", [VariableDeclarator(ObjectPattern(properties), Identifier(binding))])


def rewrite_import(
  declaration: ImportDeclaration,
  specifier_set: ImportSpecifierSet,
  source: str,
  scope: Scope,
  metadata: FileMetadata,
) -> bool:
  """
  Rewrites a declaration in place into a default import plus destructure.

  Declarations with nothing to destructure are left untouched. Any namespace
  specifier is dropped from a rewritten declaration.

  Args:
      declaration: The import declaration to mutate.
      specifier_set: Analysis result for `declaration`.
      source: The import source string.
      scope: Module scope used for generating a binding name.
      metadata: File record; `source` is appended to its transformed list.

  Returns:
      bool: True if the declaration was rewritten.
  """
  if not specifier_set.named:
    return False

  binding = specifier_set.explicit_default or specifier_set.implicit_default or scope.generate_uid(source)

  declaration.replace_specifiers([ImportDefaultSpecifier(Identifier(binding))])
  declaration.insert_after(build_destructure(specifier_set, binding))

  metadata.transformed.append(source)
  return True
