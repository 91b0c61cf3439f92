"""
Specifier Analyzer.

Sorts the specifiers of one import declaration into default, namespace and
named buckets. The named bucket is what ends up destructured from the module
object by the rewriter.

Remap-default: when the source matches a ``remap_default_test`` pattern, the
module's ``default`` export is treated as an ordinary property of the module
object, so ``import D from "m"`` becomes the ``default: D`` entry of the
destructure rather than the binding of the module itself.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from cjs_interop.core.metadata import FileMetadata
from cjs_interop.core.nodes import (
  AnyImportSpecifier,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
)
from cjs_interop.core.patterns import any_match

DEFAULT_EXPORT = "default"


@dataclass
class NamedBinding:
  """
  One property to destructure.

  Attributes:
      actual: Property key on the module object.
      alias: Local binding name when it differs from `actual`.
  """

  actual: str
  alias: Optional[str] = None


@dataclass
class ImportSpecifierSet:
  """
  Analysis result for one declaration.

  Attributes:
      explicit_default: Local name of ``import X from``.
      implicit_default: Local name of ``import { default as X } from``.
      namespace: Local name of ``import * as X from``.
      named: Bindings to destructure, in written order.
  """

  explicit_default: str = ""
  implicit_default: str = ""
  namespace: str = ""
  named: List[NamedBinding] = field(default_factory=list)


def analyze_specifiers(
  specifiers: Iterable[AnyImportSpecifier],
  source: str,
  metadata: FileMetadata,
) -> ImportSpecifierSet:
  """
  Classifies a declaration's specifiers.

  Args:
      specifiers: The declaration's specifiers in written order.
      source: The import source string.
      metadata: Record of the file being processed (for remap-default tests).

  Returns:
      ImportSpecifierSet: The bucketed bindings.
  """
  result = ImportSpecifierSet()
  remapped = any_match(metadata.remap_default_tests, source)

  for specifier in specifiers:
    if isinstance(specifier, ImportSpecifier):
      name = specifier.imported_name
      local = specifier.local.name
      is_default = name == DEFAULT_EXPORT

      if is_default and not remapped:
        result.implicit_default = local

      if not is_default or remapped or result.explicit_default:
        result.named.append(NamedBinding(actual=name, alias=local if local != name else None))

    elif isinstance(specifier, ImportDefaultSpecifier):
      if remapped:
        result.named.append(NamedBinding(actual=DEFAULT_EXPORT, alias=specifier.local.name))
      else:
        result.explicit_default = specifier.local.name

    elif isinstance(specifier, ImportNamespaceSpecifier):
      result.namespace = specifier.local.name

    else:
      raise TypeError(f"Unsupported import specifier: {type(specifier).__name__}")

  return result
