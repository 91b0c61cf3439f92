"""
CLI Command Handlers Facade.

Re-exports handlers from `cjs_interop.cli.handlers` so the dispatcher (and test
patches) have a single import location.
"""

from cjs_interop.cli.handlers.discover import handle_discover
from cjs_interop.cli.handlers.transform import (
  handle_transform,
  _print_batch_summary,
  _transform_single_file,
)
