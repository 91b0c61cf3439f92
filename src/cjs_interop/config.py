"""
Runtime Configuration Store.

Defines `TransformOptions`, the option set that controls which imports are
treated as CommonJS and how the run is reported. Options can be written in
snake_case or in the camelCase form used by JavaScript tool configs
(``transformBuiltins``, ``remapDefaultTest``).
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cjs_interop.enums import SearchMode

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

CONFIG_FILENAME = "cjs-interop.toml"
PYPROJECT_SECTION = "cjs_interop"

Pattern = Union[str, re.Pattern]


class TransformOptions(BaseModel):
  """
  Options for the CommonJS import transform.
  """

  model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

  test: Optional[List[Pattern]] = Field(
    None, description="Explicit inclusion patterns. Replaces node_modules auto-discovery entirely."
  )
  include: Optional[List[Pattern]] = Field(None, description="Additional inclusion patterns, always appended.")
  exclude: Optional[List[Pattern]] = Field(None, description="Sources matching any of these are never transformed.")
  transform_builtins: bool = Field(True, description="Treat Node.js built-in modules as CommonJS.")
  monorepo: Union[bool, str] = Field(
    False, description="False = local node_modules only, True = search upward, or an explicit search mode."
  )
  remap_default_test: Optional[List[Pattern]] = Field(
    None, description="Sources whose default import is destructured as the 'default' key."
  )
  silent: bool = Field(False, description="Suppress the per-file report.")
  verbose: bool = Field(False, description="Always report, and list the transformed sources.")

  @field_validator("monorepo")
  @classmethod
  def validate_monorepo(cls, v: Union[bool, str]) -> Union[bool, str]:
    """
    Ensures a string search mode is one discovery understands.

    Args:
        v: The raw value.

    Returns:
        The value unchanged.

    Raises:
        ValueError: If the string is not a known search mode.
    """
    if isinstance(v, str):
      known = [m.value for m in SearchMode]
      if v not in known:
        raise ValueError(f"Unknown monorepo search mode: '{v}'. Supported modes: {known}")
    return v

  @property
  def search_mode(self) -> SearchMode:
    """
    Resolves `monorepo` to the discovery search mode.

    Returns:
        SearchMode: LOCAL for False, UPWARD for True, otherwise the named mode.
    """
    if isinstance(self.monorepo, str):
      return SearchMode(self.monorepo)
    return SearchMode.UPWARD if self.monorepo else SearchMode.LOCAL

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "TransformOptions":
    """
    Loads options from the nearest config file and applies overrides on top.

    Overrides whose value is ``None`` are ignored so that unset CLI flags do not
    mask file settings.

    Args:
        search_path: Directory to start searching for configuration.
        **overrides: Option values (snake_case) that take precedence.

    Returns:
        TransformOptions: The validated options.
    """
    file_config, _ = _load_toml_settings(search_path or Path.cwd())
    explicit = {k: v for k, v in overrides.items() if v is not None}
    return cls.model_validate({**file_config, **explicit})


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for configuration.

  In each directory, ``cjs-interop.toml`` is preferred over the
  ``[tool.cjs_interop]`` table of ``pyproject.toml``.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The option dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    dedicated = parent / CONFIG_FILENAME
    if dedicated.is_file():
      with open(dedicated, "rb") as f:
        return tomllib.load(f), parent

    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      section = data.get("tool", {}).get(PYPROJECT_SECTION)
      if section is not None:
        return section, parent

  return {}, None
