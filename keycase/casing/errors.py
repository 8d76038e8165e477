"""
keycase/casing/errors.py

Errors raised by the casing package.

Only two conditions are errors:
- An unknown target case identifier (always checked)
- Input nested deeper than an explicit `max_depth` (opt-in)

Everything else (non-string keys, empty strings, None, opaque objects)
is passed through unchanged by design of the converters.
"""

from __future__ import annotations

from typing import Any, Sequence


class InvalidTargetCaseError(ValueError):
    """Raised when a target case is not one of the supported identifiers."""

    def __init__(self, target_case: Any, valid_cases: Sequence[str]) -> None:
        self.target_case = target_case
        self.valid_cases = list(valid_cases)
        super().__init__(
            f"Invalid target_case: {target_case!r}. "
            f"Must be one of {', '.join(self.valid_cases)}."
        )


# Name used by callers that think in terms of argument validation.
InvalidArgument = InvalidTargetCaseError


class NestingDepthExceededError(ValueError):
    """Raised when input nests deeper than the caller-supplied max_depth."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Input exceeds maximum nesting depth of {max_depth}.")
