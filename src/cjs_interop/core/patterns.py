"""
Pattern Compiler.

Turns user supplied patterns into compiled, case-insensitive regular expressions.
A pattern is either a ready-made `re.Pattern`, a string wrapped in slashes
(``"/^lodash/"``) holding a literal regex source, or a plain module specifier
that is matched exactly.
"""

import re
from typing import Iterable, List, Optional, Union

PatternLike = Union[str, re.Pattern]

# Optional trailing sub-path, query or fragment: "foo" also matches "foo/bar", "foo?x", "foo#y".
OPEN_ENDED_SUFFIX = r"([/?#].+)?"


def compile_pattern(pattern: PatternLike, open_ended: bool = False) -> "re.Pattern[str]":
  """
  Compiles a single pattern into a matcher.

  Args:
      pattern: A compiled regex (returned unchanged), a ``/regex/`` literal or a
          plain string.
      open_ended: If True, a plain string also matches any sub-path, query or
          fragment extension of itself.

  Returns:
      re.Pattern: The case-insensitive matcher.

  Raises:
      re.error: If a ``/regex/`` literal is malformed.
  """
  if isinstance(pattern, re.Pattern):
    return pattern

  if len(pattern) >= 2 and pattern.startswith("/") and pattern.endswith("/"):
    return re.compile(pattern[1:-1], re.IGNORECASE)

  suffix = OPEN_ENDED_SUFFIX if open_ended else ""
  return re.compile(f"^{re.escape(pattern)}{suffix}\\Z", re.IGNORECASE)


def compile_patterns(patterns: Optional[Iterable[PatternLike]], open_ended: bool = False) -> List["re.Pattern[str]"]:
  """
  Compiles an ordered test list.

  Args:
      patterns: Patterns to compile. ``None`` yields an empty list.
      open_ended: Passed through to `compile_pattern`.

  Returns:
      List[re.Pattern]: Matchers in the input order.
  """
  if not patterns:
    return []
  return [compile_pattern(p, open_ended) for p in patterns]


def any_match(tests: Iterable["re.Pattern[str]"], value: str) -> bool:
  """Inclusion semantics: True if at least one matcher finds `value`."""
  return any(t.search(value) for t in tests)


def none_match(tests: Iterable["re.Pattern[str]"], value: str) -> bool:
  """Exclusion semantics: True if every matcher fails on `value`."""
  return not any_match(tests, value)
