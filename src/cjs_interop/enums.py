"""
Enumerations for cjs-interop.
"""

from enum import Enum


class SearchMode(str, Enum):
  """
  How CommonJS package discovery looks for ``node_modules`` directories.

  ``monorepo=False`` selects LOCAL and ``monorepo=True`` selects UPWARD.
  """

  LOCAL = "local"  # only <cwd>/node_modules
  UPWARD = "upward"  # cwd and every ancestor, at least one must exist
  UPWARD_OPTIONAL = "upward-optional"  # like UPWARD, but none existing is fine


class ModuleFormat(str, Enum):
  """Module system a package is published for."""

  CJS = "cjs"
  ESM = "esm"
