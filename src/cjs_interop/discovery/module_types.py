"""
CommonJS Package Discovery.

Walks ``node_modules`` directories and classifies every installed package as
CommonJS or ES module by reading its ``package.json``. A package is an ES module
if any of these hold:

- ``"type": "module"``
- it declares a ``"module"`` entry point
- its ``"exports"`` map offers an ``"import"`` condition at any depth

Everything else is treated as CommonJS.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, Field
from rich.markup import escape

from cjs_interop.core.errors import ModuleDiscoveryError
from cjs_interop.enums import ModuleFormat, SearchMode
from cjs_interop.utils.console import log_warning

NODE_MODULES = "node_modules"


class ModuleTypes(BaseModel):
  """
  Package names grouped by module format.
  """

  cjs: List[str] = Field(default_factory=list, description="Packages published as CommonJS.")
  esm: List[str] = Field(default_factory=list, description="Packages published as ES modules.")


def _has_import_condition(exports: Any) -> bool:
  if isinstance(exports, dict):
    return any(key == "import" or _has_import_condition(value) for key, value in exports.items())
  if isinstance(exports, list):
    return any(_has_import_condition(item) for item in exports)
  return False


def classify_manifest(manifest: Dict[str, Any]) -> ModuleFormat:
  """
  Decides the module format of a package from its parsed ``package.json``.

  Args:
      manifest: The decoded manifest.

  Returns:
      ModuleFormat: ESM or CJS.
  """
  if manifest.get("type") == "module":
    return ModuleFormat.ESM
  if "module" in manifest:
    return ModuleFormat.ESM
  if _has_import_condition(manifest.get("exports")):
    return ModuleFormat.ESM
  return ModuleFormat.CJS


def _iter_package_dirs(node_modules: Path) -> Iterator[Path]:
  """Yields ``name`` and ``@scope/name`` package directories, skipping dot entries like ``.bin``."""
  for entry in sorted(node_modules.iterdir()):
    if entry.name.startswith(".") or not entry.is_dir():
      continue
    if entry.name.startswith("@"):
      for scoped in sorted(entry.iterdir()):
        if not scoped.name.startswith(".") and scoped.is_dir():
          yield scoped
    else:
      yield entry


def _candidate_roots(mode: SearchMode, cwd: Path) -> List[Path]:
  if mode == SearchMode.LOCAL:
    roots = [cwd / NODE_MODULES]
  else:
    roots = [parent / NODE_MODULES for parent in [cwd, *cwd.parents]]

  found = [r for r in roots if r.is_dir()]
  if not found and mode == SearchMode.UPWARD:
    raise ModuleDiscoveryError(f"No '{NODE_MODULES}' directory found in {cwd} or any of its parents.")
  return found


def determine_module_types(
  root_mode: Union[SearchMode, str] = SearchMode.LOCAL,
  cwd: Optional[Path] = None,
) -> ModuleTypes:
  """
  Classifies every installed package reachable under the given search mode.

  When several ``node_modules`` directories contain the same package, the one
  closest to `cwd` wins.

  Args:
      root_mode: Search mode (``local``, ``upward`` or ``upward-optional``).
      cwd: Directory to start from. Defaults to the process working directory.

  Returns:
      ModuleTypes: Sorted CJS and ESM package names.

  Raises:
      ModuleDiscoveryError: If `root_mode` is unknown, or ``upward`` finds nothing.
  """
  try:
    mode = SearchMode(root_mode)
  except ValueError:
    known = ", ".join(m.value for m in SearchMode)
    raise ModuleDiscoveryError(f"Unknown search mode '{root_mode}'. Expected one of: {known}")

  start = (cwd or Path.cwd()).resolve()
  formats: Dict[str, ModuleFormat] = {}

  for node_modules in _candidate_roots(mode, start):
    for pkg_dir in _iter_package_dirs(node_modules):
      name = pkg_dir.relative_to(node_modules).as_posix()
      if name in formats:
        continue

      manifest_path = pkg_dir / "package.json"
      if not manifest_path.is_file():
        continue

      try:
        with open(manifest_path, "r", encoding="utf-8") as f:
          manifest = json.load(f)
      except (OSError, json.JSONDecodeError) as e:
        log_warning(f"Skipping {name}: unreadable package.json ({escape(str(e))})")
        continue

      if not isinstance(manifest, dict):
        continue

      formats[name] = classify_manifest(manifest)

  return ModuleTypes(
    cjs=sorted(n for n, f in formats.items() if f == ModuleFormat.CJS),
    esm=sorted(n for n, f in formats.items() if f == ModuleFormat.ESM),
  )
