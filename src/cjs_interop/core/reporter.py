"""
Run Reporter.

Emits the end-of-file summary::

    target: src/index.js
    imports transformed: 2/5 [fs, lodash]
    ---

The bracketed list only appears in verbose mode.
"""

from typing import Optional

from cjs_interop.config import TransformOptions
from cjs_interop.core.metadata import NO_PATH, FileMetadata
from cjs_interop.utils.console import log_plain


def format_report(filename: Optional[str], metadata: FileMetadata, verbose: bool) -> str:
  details = f"{len(metadata.transformed)}/{metadata.total}"
  if verbose and metadata.transformed:
    details += f" [{', '.join(metadata.transformed)}]"
  return f"target: {filename or NO_PATH}\nimports transformed: {details}\n---"


def report_file(filename: Optional[str], metadata: FileMetadata, options: TransformOptions) -> Optional[str]:
  """
  Logs the summary for a finished file, if reporting applies.

  Nothing is emitted when `options.silent` is set, or when nothing was
  transformed outside verbose mode.

  Args:
      filename: File identifier.
      metadata: The file's record.
      options: Active options.

  Returns:
      Optional[str]: The emitted report, or None.
  """
  if options.silent:
    return None
  if not (options.verbose or metadata.transformed):
    return None

  report = format_report(filename, metadata, options.verbose)
  log_plain(report)
  return report
