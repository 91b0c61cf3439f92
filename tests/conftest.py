"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Isolation of the process-wide metadata and matcher caches between tests.
- A recording console for asserting on log output.
"""

import sys
import pytest
from pathlib import Path

# Add src to path so we can import 'cjs_interop' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from rich.console import Console

from cjs_interop.core.engine import reset_caches
from cjs_interop.discovery.module_types import ModuleTypes
from cjs_interop.utils.console import reset_console, set_console


@pytest.fixture(autouse=True)
def isolate_caches():
  """
  Metadata records and compiled matchers are cached per process; clear them so
  counters and discovery results do not leak between tests.
  """
  reset_caches()
  yield
  reset_caches()


@pytest.fixture
def recorded_console():
  """Routes all console and log output into an in-memory recording console."""
  rec = Console(record=True, width=200, force_terminal=False, color_system=None)
  set_console(rec)
  yield rec
  reset_console()


@pytest.fixture
def fake_discovery(monkeypatch):
  """
  Replaces node_modules scanning with a fixed result.

  Returns the list of recorded calls (search modes) for assertions.
  """
  calls = []

  def _fake(root_mode="local", cwd=None):
    calls.append(root_mode)
    return ModuleTypes(cjs=["cjs-pkg", "lodash", "@scope/legacy"], esm=["esm-pkg"])

  monkeypatch.setattr("cjs_interop.core.classifier.determine_module_types", _fake)
  return calls
