"""
Entry point for module execution (``python -m cjs_interop``).

This module delegates execution to the CLI handler in ``cjs_interop.cli.__main__``.
"""

import sys
from cjs_interop.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
