"""
Main Entry Point for the cjs-interop CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `cjs_interop.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cjs_interop import __version__
from cjs_interop.cli import commands
from cjs_interop.enums import SearchMode


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="cjs-interop: CommonJS named import rewriter")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)
  modes = [m.value for m in SearchMode]

  # --- Command: TRANSFORM ---
  cmd_tf = subparsers.add_parser("transform", help="Rewrite CommonJS named imports in a file or directory")
  cmd_tf.add_argument("path", type=Path, help="Input source file or directory")
  cmd_tf.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_tf.add_argument(
    "--test", nargs="*", default=None, help="Explicit CommonJS patterns; replaces node_modules auto-discovery"
  )
  cmd_tf.add_argument("--include", nargs="+", default=None, help="Additional CommonJS patterns")
  cmd_tf.add_argument("--exclude", nargs="+", default=None, help="Patterns never treated as CommonJS")
  cmd_tf.add_argument(
    "--remap-default",
    nargs="+",
    default=None,
    dest="remap_default_test",
    help="Patterns whose default import is destructured as the 'default' key",
  )
  cmd_tf.add_argument(
    "--no-builtins",
    action="store_false",
    default=None,
    dest="transform_builtins",
    help="Do not treat Node.js built-in modules as CommonJS",
  )
  cmd_tf.add_argument(
    "--monorepo",
    nargs="?",
    const=True,
    default=None,
    help="Search parent directories for node_modules (optionally naming a search mode)",
  )
  cmd_tf.add_argument("--silent", action="store_true", default=None, help="Suppress per-file reports")
  cmd_tf.add_argument("--verbose", action="store_true", default=None, help="Always report and list transformed sources")

  # --- Command: DISCOVER ---
  cmd_disc = subparsers.add_parser("discover", help="Show which installed packages are CommonJS")
  cmd_disc.add_argument("path", type=Path, nargs="?", default=None, help="Directory to start from")
  cmd_disc.add_argument("--monorepo", choices=modes, default=SearchMode.LOCAL.value, help="Search mode")

  args = parser.parse_args(argv)

  if args.command == "transform":
    overrides = {
      "test": args.test,
      "include": args.include,
      "exclude": args.exclude,
      "remap_default_test": args.remap_default_test,
      "transform_builtins": args.transform_builtins,
      "monorepo": args.monorepo,
      "silent": args.silent,
      "verbose": args.verbose,
    }
    return commands.handle_transform(args.path, args.out, overrides)

  elif args.command == "discover":
    return commands.handle_discover(args.path, args.monorepo)

  return 0


if __name__ == "__main__":
  sys.exit(main())
