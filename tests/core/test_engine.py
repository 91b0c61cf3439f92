"""
End-to-end tests for the TransformEngine.

Covers the documented scenarios:
1. Built-in named import is destructured from a generated binding.
2. Explicit default binding is reused for the destructure.
3. Remap-default pulls the default import into the destructure.
4. Non-CommonJS imports are left byte-for-byte unmodified but counted.
5. Side-effect imports of CommonJS modules are not rewritten.
"""

import re

import pytest

from cjs_interop.config import TransformOptions
from cjs_interop.core.engine import TransformEngine
from cjs_interop.core.metadata import get_metadata


def run(code, filename="/project/src/index.js", **options):
  options.setdefault("silent", True)
  return TransformEngine(TransformOptions(**options)).run(code, filename)


def test_scenario_builtin_named_import(fake_discovery):
  result = run('import { readFile } from "fs";\nreadFile("x");\n')

  assert result.success
  assert result.code == 'import _fs from "fs";\nconst { readFile } = _fs;\nreadFile("x");\n'
  assert result.total == 1
  assert result.transformed == ["fs"]


def test_scenario_explicit_default_kept():
  result = run('import Default, { a } from "cjs-pkg";\n', test=["cjs-pkg"])
  assert result.code == 'import Default from "cjs-pkg";\nconst { a } = Default;\n'


def test_scenario_remap_default():
  result = run('import Default, { a } from "cjs-pkg";\n', test=["cjs-pkg"], remap_default_test=["cjs-pkg"])
  assert result.code == 'import _cjsPkg from "cjs-pkg";\nconst { default: Default, a } = _cjsPkg;\n'


def test_scenario_non_cjs_untouched():
  code = "import   * as ns   from 'esm-pkg' ;\nns.run();\n"
  result = run(code, test=["cjs-pkg"])

  assert result.code == code
  assert result.total == 1
  assert result.transformed == []


def test_scenario_side_effect_import():
  code = 'import "side-effect-only-cjs-module";\n'
  result = run(code, test=["side-effect-only-cjs-module"])

  assert result.code == code
  assert result.transformed == []


def test_aliases_and_multiple_names():
  result = run('import { a, b as bb } from "m";\n', test=["m"])
  assert result.code == 'import _m from "m";\nconst { a, b: bb } = _m;\n'


def test_implicit_default_becomes_binding():
  result = run('import { default as D, a } from "m";\n', test=["m"])
  assert result.code == 'import D from "m";\nconst { a } = D;\n'


def test_pure_default_and_namespace_untouched():
  code = 'import fs from "fs";\nimport * as path from "path";\n'
  result = run(code, test=[])
  assert result.code == code
  assert result.total == 2


def test_generated_names_do_not_collide():
  code = 'const _fs = 1;\nimport { a } from "fs";\nimport { b } from "fs";\n'
  result = run(code, test=[])
  assert result.code == (
    'const _fs = 1;\nimport _fs2 from "fs";\nconst { a } = _fs2;\nimport _fs3 from "fs";\nconst { b } = _fs3;\n'
  )
  assert result.transformed == ["fs", "fs"]


def test_quote_style_preserved():
  result = run("import { a } from 'm';\n", test=["m"])
  assert result.code == "import _m from 'm';\nconst { a } = _m;\n"


def test_rewritten_output_is_stable():
  first = run('import { readFile } from "fs";\n', test=[])
  second = run(first.code, filename="/project/src/second.js", test=[])

  assert second.code == first.code
  assert second.transformed == []
  assert second.total == 1


def test_counts_accumulate_per_file_record():
  run('import { a } from "m";\n', filename="/same.js", test=["m"])
  run('import { b } from "m";\n', filename="/same.js", test=["m"])

  record = get_metadata("/same.js", TransformOptions())
  assert record.total == 2
  assert record.transformed == ["m", "m"]


def test_syntax_error_is_reported():
  result = run("import { from 'x';\n", test=[])

  assert not result.success
  assert result.has_errors
  assert result.code == "import { from 'x';\n"


def test_malformed_pattern_propagates():
  with pytest.raises(re.error):
    run('import { a } from "m";\n', test=["/(/"])


def test_escaped_source_is_classified_by_value():
  result = run('import { a } from "f\\x73";\n', test=[])

  assert result.code == 'import _fs from "f\\x73";\nconst { a } = _fs;\n'
  assert result.transformed == ["fs"]


def test_escaped_string_export_name_is_decoded():
  result = run('import { "a\\u0062" as x } from "fs";\n', test=[])
  assert result.code == 'import _fs from "fs";\nconst { ab: x } = _fs;\n'
