"""
Exception types raised by the transform pipeline.
"""

from typing import Optional, Tuple


class CjsInteropError(Exception):
  """Base class for all package errors."""


class ParseError(CjsInteropError):
  """
  Raised when a JavaScript module cannot be parsed.

  Attributes:
      filename: Identifier of the file that failed to parse.
      position: Zero-based (row, column) of the first syntax error, if known.
  """

  def __init__(self, filename: str, position: Optional[Tuple[int, int]] = None):
    self.filename = filename
    self.position = position
    where = f" at line {position[0] + 1}, column {position[1] + 1}" if position else ""
    super().__init__(f"Syntax error in {filename}{where}")


class ModuleDiscoveryError(CjsInteropError):
  """Raised when CommonJS package discovery is misconfigured."""
