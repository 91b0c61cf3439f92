"""
Module Classifier.

Decides whether an import source refers to a CommonJS module. Inclusion tests
are assembled in a fixed order:

1.  Node.js built-in modules (open-ended), unless ``transform_builtins`` is off.
2.  The explicit ``test`` list, or, when it is absent, every CommonJS package found
    in ``node_modules`` (open-ended) plus relative ``.json`` files.
3.  The explicit ``include`` list.

A source is CommonJS if any inclusion test matches and no ``exclude`` test does.

The built-in and discovered-package matchers do not depend on the file being
processed, so they are compiled once per process and shared.
"""

import re
import threading
from typing import TYPE_CHECKING, Dict, List, Optional

from cjs_interop.config import TransformOptions
from cjs_interop.core.builtins import NODE_BUILTIN_MODULES
from cjs_interop.core.patterns import any_match, compile_patterns, none_match
from cjs_interop.discovery.module_types import determine_module_types
from cjs_interop.enums import SearchMode

if TYPE_CHECKING:
  from cjs_interop.core.metadata import FileMetadata

# Relative imports of JSON files ("./data.json", "../../x.json") load through require().
RELATIVE_JSON_TEST = re.compile(r"^(\.(\.)?/)+(.+)\.json\Z")

_cache_lock = threading.Lock()
_builtin_tests: Optional[List["re.Pattern[str]"]] = None
_cjs_package_tests: Dict[SearchMode, List["re.Pattern[str]"]] = {}


def get_builtin_inclusion_tests() -> List["re.Pattern[str]"]:
  """
  Returns open-ended matchers for every Node.js built-in module.

  Returns:
      List[re.Pattern]: Shared, compiled once per process.
  """
  global _builtin_tests
  with _cache_lock:
    if _builtin_tests is None:
      _builtin_tests = compile_patterns(NODE_BUILTIN_MODULES, open_ended=True)
    return _builtin_tests


def get_default_inclusion_tests(mode: SearchMode) -> List["re.Pattern[str]"]:
  """
  Returns matchers for auto-discovered CommonJS packages plus relative JSON files.

  The ``node_modules`` scan runs at most once per search mode per process.

  Args:
      mode: Discovery search mode.

  Returns:
      List[re.Pattern]: Shared matcher list.
  """
  with _cache_lock:
    if mode not in _cjs_package_tests:
      discovered = determine_module_types(root_mode=mode)
      _cjs_package_tests[mode] = [*compile_patterns(discovered.cjs, open_ended=True), RELATIVE_JSON_TEST]
    return _cjs_package_tests[mode]


def build_inclusion_tests(options: TransformOptions) -> List["re.Pattern[str]"]:
  """
  Assembles the ordered inclusion list for a file.

  Args:
      options: Active transform options.

  Returns:
      List[re.Pattern]: Inclusion matchers (OR semantics).
  """
  tests: List["re.Pattern[str]"] = []

  if options.transform_builtins:
    tests.extend(get_builtin_inclusion_tests())

  if options.test is not None:
    tests.extend(compile_patterns(options.test))
  else:
    tests.extend(get_default_inclusion_tests(options.search_mode))

  tests.extend(compile_patterns(options.include))
  return tests


def build_exclusion_tests(options: TransformOptions) -> List["re.Pattern[str]"]:
  return compile_patterns(options.exclude)


def build_remap_default_tests(options: TransformOptions) -> List["re.Pattern[str]"]:
  return compile_patterns(options.remap_default_test)


def is_commonjs(source: str, metadata: "FileMetadata") -> bool:
  """
  Classifies an import source using a file's compiled test lists.

  Args:
      source: The import source string, e.g. ``"lodash/get"``.
      metadata: Per-file record holding the compiled tests.

  Returns:
      bool: True if included and not excluded.
  """
  return any_match(metadata.inclusion_tests, source) and none_match(metadata.exclusion_tests, source)


def reset_classifier_caches() -> None:
  """Drops the shared built-in and discovered-package matchers."""
  global _builtin_tests
  with _cache_lock:
    _builtin_tests = None
    _cjs_package_tests.clear()
