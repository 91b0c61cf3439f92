"""
File Metadata Store.

Keeps one `FileMetadata` record per processed file: the compiled test lists and
the running import tallies used by the run report. Records are created on first
access and live for the rest of the process.
"""

import re
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from cjs_interop.config import TransformOptions
from cjs_interop.core.classifier import (
  build_exclusion_tests,
  build_inclusion_tests,
  build_remap_default_tests,
)

NO_PATH = "<no path>"


@dataclass
class FileMetadata:
  """
  Per-file classification state and counters.

  Attributes:
      total: Import declarations seen.
      transformed: Sources of rewritten declarations, in visiting order.
      inclusion_tests: Matchers that mark a source as CommonJS.
      exclusion_tests: Matchers that veto a source.
      remap_default_tests: Matchers selecting sources whose default import is destructured.
  """

  total: int = 0
  transformed: List[str] = field(default_factory=list)
  inclusion_tests: List["re.Pattern[str]"] = field(default_factory=list)
  exclusion_tests: List["re.Pattern[str]"] = field(default_factory=list)
  remap_default_tests: List["re.Pattern[str]"] = field(default_factory=list)


_store_lock = threading.Lock()
_metadata: Dict[str, FileMetadata] = {}


def get_metadata(filename: Optional[str], options: TransformOptions) -> FileMetadata:
  """
  Returns the record for `filename`, creating it on first access.

  Later calls for the same file return the existing record untouched, even if
  different options are passed.

  Args:
      filename: Absolute path of the file, or None for anonymous input.
      options: Options used to compile the test lists on creation.

  Returns:
      FileMetadata: The shared record.

  Raises:
      re.error: If a pattern option holds a malformed ``/regex/`` literal.
  """
  key = filename or NO_PATH
  with _store_lock:
    record = _metadata.get(key)
    if record is None:
      record = FileMetadata(
        inclusion_tests=build_inclusion_tests(options),
        exclusion_tests=build_exclusion_tests(options),
        remap_default_tests=build_remap_default_tests(options),
      )
      _metadata[key] = record
    return record


def reset_metadata() -> None:
  """Forgets every file record."""
  with _store_lock:
    _metadata.clear()


def forget_metadata(filename: Optional[str]) -> None:
  """Drops the record for `filename` (the anonymous record for None), if any."""
  with _store_lock:
    _metadata.pop(filename or NO_PATH, None)
