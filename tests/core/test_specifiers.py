"""
Tests for the Specifier Analyzer.

Verifies default, implicit default, namespace and named bucketing, aliasing,
and the remap-default escape hatch.
"""

import pytest

from cjs_interop.config import TransformOptions
from cjs_interop.core.metadata import get_metadata
from cjs_interop.core.nodes import (
  Identifier,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  StringLiteral,
)
from cjs_interop.core.specifiers import NamedBinding, analyze_specifiers


def named(imported, local=None):
  return ImportSpecifier(imported=Identifier(imported), local=Identifier(local or imported))


def default(local):
  return ImportDefaultSpecifier(Identifier(local))


@pytest.fixture
def metadata():
  return get_metadata("/spec.js", TransformOptions(test=["m"], remap_default_test=["remapped"]))


def test_named_without_alias(metadata):
  result = analyze_specifiers([named("a")], "m", metadata)
  assert result.named == [NamedBinding("a", None)]
  assert result.explicit_default == ""


def test_named_with_alias(metadata):
  result = analyze_specifiers([named("a"), named("b", "bb")], "m", metadata)
  assert result.named == [NamedBinding("a"), NamedBinding("b", "bb")]


def test_explicit_default_with_named(metadata):
  result = analyze_specifiers([default("Default"), named("a")], "m", metadata)
  assert result.explicit_default == "Default"
  assert result.named == [NamedBinding("a")]


def test_implicit_default(metadata):
  result = analyze_specifiers([named("default", "D"), named("a")], "m", metadata)
  assert result.implicit_default == "D"
  assert result.named == [NamedBinding("a")]


def test_named_default_after_explicit_default_is_destructured(metadata):
  result = analyze_specifiers([default("D"), named("default", "E")], "m", metadata)
  assert result.explicit_default == "D"
  assert result.implicit_default == "E"
  assert result.named == [NamedBinding("default", "E")]


def test_remapped_default_specifier(metadata):
  result = analyze_specifiers([default("Default"), named("a")], "remapped", metadata)
  assert result.explicit_default == ""
  assert result.named == [NamedBinding("default", "Default"), NamedBinding("a")]


def test_remapped_named_default(metadata):
  result = analyze_specifiers([named("default", "D")], "remapped", metadata)
  assert result.implicit_default == ""
  assert result.named == [NamedBinding("default", "D")]


def test_namespace_is_recorded_not_destructured(metadata):
  spec = ImportNamespaceSpecifier(Identifier("ns"))
  result = analyze_specifiers([spec], "m", metadata)
  assert result.namespace == "ns"
  assert result.named == []


def test_string_export_name(metadata):
  spec = ImportSpecifier(imported=StringLiteral("a-b", '"a-b"'), local=Identifier("ab"))
  result = analyze_specifiers([spec], "m", metadata)
  assert result.named == [NamedBinding("a-b", "ab")]


def test_no_specifiers(metadata):
  result = analyze_specifiers([], "m", metadata)
  assert result.named == []
  assert result.explicit_default == result.implicit_default == result.namespace == ""
