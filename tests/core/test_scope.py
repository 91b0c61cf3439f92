"""
Tests for identifier helpers and unique name generation.
"""

import pytest

from cjs_interop.core.scope import Scope, is_identifier_name, is_valid_identifier, to_identifier


@pytest.mark.parametrize(
  "source, expected",
  [
    ("fs", "fs"),
    ("cjs-pkg", "cjsPkg"),
    ("lodash/get", "lodashGet"),
    ("@scope/pkg", "scopePkg"),
    ("./data.json", "dataJson"),
    ("node:test", "nodeTest"),
    ("3d-lib", "dLib"),
    ("default", "_default"),
    ("", "_"),
  ],
)
def test_to_identifier(source, expected):
  assert to_identifier(source) == expected


def test_identifier_checks():
  assert is_identifier_name("default")
  assert not is_valid_identifier("default")
  assert is_valid_identifier("$el")
  assert not is_identifier_name("a-b")
  assert not is_identifier_name("1a")
  assert not is_identifier_name("")


def test_generate_uid_prefixes_underscore():
  assert Scope().generate_uid("fs") == "_fs"
  assert Scope().generate_uid("cjs-pkg") == "_cjsPkg"


def test_generate_uid_avoids_existing_names():
  scope = Scope(["_fs", "_fs2"])
  assert scope.generate_uid("fs") == "_fs3"


def test_generate_uid_reserves_names():
  scope = Scope()
  assert scope.generate_uid("fs") == "_fs"
  assert scope.generate_uid("fs") == "_fs2"
  assert scope.has("_fs2")


def test_generate_uid_strips_trailing_digits_and_underscores():
  assert Scope().generate_uid("__http2") == "_http"
