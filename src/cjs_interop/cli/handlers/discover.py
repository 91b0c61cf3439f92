"""
Discover Command Handler.

Implements `cjs-interop discover`: prints which installed packages the
auto-discovery treats as CommonJS, for checking what the default inclusion
list will contain.
"""

from pathlib import Path
from typing import Optional

from rich.table import Table

from cjs_interop.core.errors import ModuleDiscoveryError
from cjs_interop.discovery.module_types import determine_module_types
from cjs_interop.utils.console import console, log_error


def handle_discover(path: Optional[Path], mode: str) -> int:
  """
  Lists discovered packages grouped by module format.

  Args:
      path: Directory to start from (defaults to the working directory).
      mode: Discovery search mode.

  Returns:
      int: Exit code.
  """
  try:
    types = determine_module_types(root_mode=mode, cwd=path)
  except ModuleDiscoveryError as e:
    log_error(str(e))
    return 1

  table = Table(title=f"Installed packages ({mode})")
  table.add_column("Package", style="cyan")
  table.add_column("Format", justify="center")

  for name in types.cjs:
    table.add_row(name, "[green]cjs[/green]")
  for name in types.esm:
    table.add_row(name, "[yellow]esm[/yellow]")

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {len(types.cjs)} CommonJS, {len(types.esm)} ES modules.")
  return 0
