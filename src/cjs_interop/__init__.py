"""
cjs-interop Package.

Rewrites ECMAScript ``import`` declarations that target CommonJS modules into a
single default import followed by an explicit destructure, so bundlers and
runtimes that expose a CommonJS module only as its default export still
resolve named bindings.

Usage
-----

.. code-block:: python

    import cjs_interop
    code = 'import { readFile } from "fs";'
    print(cjs_interop.transform(code))
    # import _fs from "fs";
    # const { readFile } = _fs;

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from cjs_interop import TransformEngine, TransformOptions

    options = TransformOptions(test=["my-cjs-lib"], transform_builtins=False)
    res = TransformEngine(options).run(source, filename="/abs/path/index.js")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Any, Optional

from cjs_interop.config import TransformOptions
from cjs_interop.core.engine import TransformEngine, TransformResult, reset_caches
from cjs_interop.core.metadata import forget_metadata

__version__ = "0.1.0"


def transform(code: str, filename: Optional[str] = None, **options: Any) -> str:
  """
  Transforms a string of JavaScript module code.

  Convenience wrapper around `TransformEngine`.

  Records for named files persist across calls: the first call for a
  `filename` fixes its compiled tests and later calls keep adding to its
  counters. Anonymous input (no `filename`) starts from a fresh record on
  every call, so each call honours its own options.

  Args:
      code (str): Module source.
      filename (str, optional): File identifier for metadata and reporting.
      **options: `TransformOptions` fields (snake_case or camelCase).

  Returns:
      str: The transformed source code.

  Raises:
      ValueError: If the code cannot be parsed.
  """
  if filename is None:
    forget_metadata(None)

  engine = TransformEngine(TransformOptions.model_validate(options))
  result = engine.run(code, filename)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Transform failed:\n{error_msg}")

  return result.code


__all__ = [
  "TransformEngine",
  "TransformOptions",
  "TransformResult",
  "reset_caches",
  "transform",
  "__version__",
]
