"""
Orchestration Engine for the CommonJS import transform.

`TransformEngine.run` processes one file:

1.  **Enter**: the file's metadata record is created (test lists compiled).
2.  **Imports**: every top-level import declaration is visited in source order.
    Each one is counted; if its source is CommonJS, its specifiers are analyzed
    and the declaration is rewritten into a default import plus destructure.
3.  **Exit**: the run report is emitted.

Syntax errors are returned as a failed `TransformResult`. Any other exception
(such as a malformed ``/regex/`` option) propagates and aborts the file.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from cjs_interop.config import TransformOptions
from cjs_interop.core.classifier import is_commonjs, reset_classifier_caches
from cjs_interop.core.errors import ParseError
from cjs_interop.core.metadata import FileMetadata, get_metadata, reset_metadata
from cjs_interop.core.nodes import Program
from cjs_interop.core.parser import parse_module
from cjs_interop.core.reporter import report_file
from cjs_interop.core.rewriter import rewrite_import
from cjs_interop.core.specifiers import analyze_specifiers


class TransformResult(BaseModel):
  """
  Structured result of a single file transform.
  """

  code: str = Field(default="", description="The transformed source code.")
  errors: List[str] = Field(default_factory=list, description="Error messages encountered.")
  success: bool = Field(default=True, description="True if the file was processed to completion.")
  total: int = Field(default=0, description="Import declarations seen in the file.")
  transformed: List[str] = Field(default_factory=list, description="Sources of rewritten declarations.")
  report: Optional[str] = Field(default=None, description="The emitted run report, if any.")

  @property
  def has_errors(self) -> bool:
    """
    Returns True if any errors were recorded.

    Returns:
        bool: True if errors list is non-empty.
    """
    return len(self.errors) > 0


class TransformEngine:
  """
  Applies the transform to JavaScript modules using one set of options.
  """

  def __init__(self, options: Optional[TransformOptions] = None):
    """
    Initializes the Engine.

    Args:
        options (TransformOptions, optional): Transform options. Defaults apply if None.
    """
    self.options = options or TransformOptions()

  def transform_program(self, program: Program) -> FileMetadata:
    """
    Rewrites a parsed program in place.

    Args:
        program: The parsed module.

    Returns:
        FileMetadata: The file's record after processing.
    """
    metadata = get_metadata(program.filename, self.options)

    for declaration in program.imports:
      source = declaration.source.value
      metadata.total += 1

      if not is_commonjs(source, metadata):
        continue

      specifier_set = analyze_specifiers(declaration.specifiers, source, metadata)
      rewrite_import(declaration, specifier_set, source, program.scope, metadata)

    return metadata

  def run(self, code: str, filename: Optional[str] = None) -> TransformResult:
    """
    Executes the transform on module source.

    Args:
        code (str): JavaScript module source.
        filename (str, optional): File identifier; keys the metadata record.

    Returns:
        TransformResult: Output code, counters and status.
    """
    get_metadata(filename, self.options)

    try:
      program = parse_module(code, filename)
    except ParseError as e:
      return TransformResult(code=code, success=False, errors=[str(e)])

    metadata = self.transform_program(program)
    report = report_file(filename, metadata, self.options)

    return TransformResult(
      code=str(program),
      total=metadata.total,
      transformed=list(metadata.transformed),
      report=report,
    )


def reset_caches() -> None:
  """Clears the per-file metadata store and the shared matcher caches."""
  reset_metadata()
  reset_classifier_caches()
