"""
Transform Command Handler.

Implements `cjs-interop transform`:
1. Option loading (config file + CLI overrides).
2. File discovery for directory inputs.
3. Per-file transform via the Engine.
4. Output writing and the batch summary.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from cjs_interop.config import TransformOptions
from cjs_interop.core.engine import TransformEngine, TransformResult
from cjs_interop.utils.console import console, log_error, log_info, log_success, log_warning

JS_SUFFIXES = (".js", ".mjs", ".jsx")
SKIPPED_DIRS = frozenset({"node_modules", ".git"})


def find_js_files(root: Path) -> List[Path]:
  """
  Lists JavaScript module files under `root`, skipping ``node_modules`` and ``.git``.

  Args:
      root: Directory to search.

  Returns:
      List[Path]: Sorted file paths.
  """
  files = []
  for path in root.rglob("*"):
    if path.suffix not in JS_SUFFIXES or not path.is_file():
      continue
    if any(part in SKIPPED_DIRS for part in path.relative_to(root).parts):
      continue
    files.append(path)
  return sorted(files)


def handle_transform(
  input_path: Path,
  output_path: Optional[Path],
  overrides: Dict[str, Any],
) -> int:
  """
  Handles the 'transform' command execution.

  Args:
      input_path: Source file or directory.
      output_path: Destination file or directory. Single files print to stdout if None.
      overrides: Option values from CLI flags (None means unset).

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {escape(str(input_path))}")
    return 1

  try:
    options = TransformOptions.load(
      search_path=input_path if input_path.is_dir() else input_path.parent,
      **overrides,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  engine = TransformEngine(options)
  batch_results: Dict[str, TransformResult] = {}

  if input_path.is_file():
    result = _transform_single_file(input_path, output_path, engine)
    return 0 if result.success else 1

  if not output_path:
    log_error("Directory transform requires --out destination directory.")
    return 1

  js_files = find_js_files(input_path)
  if not js_files:
    log_warning(f"No JavaScript files found in {escape(str(input_path))}")
    return 0

  log_info(f"Processing {len(js_files)} files from [path]{escape(str(input_path))}[/path]...")

  for src_file in js_files:
    rel_path = src_file.relative_to(input_path)
    result = _transform_single_file(src_file, output_path / rel_path, engine)
    batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _transform_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: TransformEngine,
) -> TransformResult:
  """
  Transforms one file and writes (or prints) the result.

  Args:
      input_path: Source file path.
      output_path: Destination file path, or None for stdout.
      engine: Configured engine.

  Returns:
      TransformResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()

    result = engine.run(code, filename=str(input_path.resolve()))
    if not result.success:
      log_error("; ".join(escape(e) for e in result.errors))
      return result

    if output_path:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
      log_success(f"Transformed: [path]{escape(str(input_path))}[/path] -> [path]{escape(str(output_path))}[/path]")
    else:
      print(result.code, end="")

    return result
  except Exception as e:
    log_error(f"Failed to transform {escape(str(input_path))}: {escape(str(e))}")
    return TransformResult(success=False, errors=[str(e)])


def _print_batch_summary(results: Dict[str, TransformResult]) -> None:
  """
  Renders a summary of a directory run.

  Args:
      results: Mapping of relative file names to results.
  """
  total = len(results)
  failures = {name: r for name, r in results.items() if not r.success}
  rewritten = sum(len(r.transformed) for r in results.values())

  if not failures:
    log_success(f"Batch Complete: {total} files, {rewritten} imports transformed.")
    return

  table = Table(title="Transform Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in failures.items():
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), "❌ Failed", escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - len(failures)} Passed, {len(failures)} Failed.")
